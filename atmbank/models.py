"""Accounts, their transaction history and the in-memory bank."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional

MAX_HISTORY = 5
ACCOUNT_NUMBER_DIGITS = 5
OTP_DIGIT_THRESHOLD = 10


class BankError(Exception):
    """Base class for errors raised by bank operations."""


class AccountNotFound(BankError, LookupError):
    """No account matches the number, Aadhar number or card given."""


class InsufficientFunds(BankError):
    """A withdrawal or transfer asks for more than the balance holds."""


def is_digits(text: str) -> bool:
    """Return True when every character of ``text`` is an ASCII digit."""
    return all("0" <= ch <= "9" for ch in text)


def needs_otp(number: int) -> bool:
    """Return True when ``number`` has more than ten digits (an Aadhar number)."""
    return number > 0 and len(str(number)) > OTP_DIGIT_THRESHOLD


def _now() -> datetime:
    return datetime.now().replace(second=0, microsecond=0)


@dataclass
class Transaction:
    """One entry of an account's history."""

    kind: str
    amount: float
    account_number: int
    when: datetime
    transaction_id: int


@dataclass
class Account:
    """A customer account with its card, PIN and last few transactions."""

    name: str
    account_number: int
    pin: str
    rfid: str
    contact_number: int
    aadhar_number: int
    balance: float = 0.0
    transaction_count: int = 0
    blocked: bool = False
    history: list[Transaction] = field(default_factory=list)

    def record(
        self,
        kind: str,
        amount: float,
        when: Optional[datetime] = None,
        transaction_id: int = 0,
    ) -> Transaction:
        """Put a transaction at the head of the history, keeping the newest five."""
        transaction = Transaction(
            kind=kind,
            amount=amount,
            account_number=self.account_number,
            when=when if when is not None else _now(),
            transaction_id=transaction_id,
        )
        self.history.insert(0, transaction)
        del self.history[MAX_HISTORY:]
        self.transaction_count += 1
        return transaction

    def deposit(
        self,
        amount: float,
        kind: str = "DEPOSIT",
        when: Optional[datetime] = None,
        transaction_id: int = 0,
    ) -> Transaction:
        """Add ``amount`` to the balance and record it."""
        if amount < 0:
            raise ValueError(f"amount must not be negative: {amount}")
        self.balance += amount
        return self.record(kind, amount, when, transaction_id)

    def withdraw(
        self,
        amount: float,
        kind: str = "WITHDRAW",
        when: Optional[datetime] = None,
        transaction_id: int = 0,
    ) -> Transaction:
        """Take ``amount`` from the balance and record it."""
        if amount < 0:
            raise ValueError(f"amount must not be negative: {amount}")
        if amount > self.balance:
            raise InsufficientFunds(
                f"balance {self.balance:.3f} is less than {amount:.3f}"
            )
        self.balance -= amount
        return self.record(kind, amount, when, transaction_id)

    def recent(self, limit: int) -> list[Transaction]:
        """Return up to ``limit`` transactions, newest first."""
        return self.history[:limit]


class Bank:
    """An ordered collection of accounts; new accounts go to the front."""

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        rng: Optional[random.Random] = None,
    ) -> None:
        self._accounts: list[Account] = list(accounts)
        self._rng = rng if rng is not None else random.Random()

    def add(self, account: Account) -> Account:
        """Put ``account`` at the front of the bank."""
        self._accounts.insert(0, account)
        return account

    def insert_sorted(self, account: Account) -> Account:
        """Insert ``account`` so that names stay in ascending order."""
        name = account.name
        if not self._accounts or name < self._accounts[0].name:
            self._accounts.insert(0, account)
            return account
        position = next(
            (
                index
                for index, other in enumerate(self._accounts[1:], start=1)
                if not other.name < name
            ),
            len(self._accounts),
        )
        self._accounts.insert(position, account)
        return account

    def find(self, number: int) -> Account:
        """Find an account by account number or Aadhar number."""
        for account in self._accounts:
            if account.account_number == number or account.aadhar_number == number:
                return account
        raise AccountNotFound(f"no account with number {number}")

    def find_by_account_number(self, number: int) -> Account:
        """Find an account by its account number alone."""
        for account in self._accounts:
            if account.account_number == number:
                return account
        raise AccountNotFound(f"no account with account number {number}")

    def find_by_rfid(self, rfid: str) -> Account:
        """Find the account that owns card ``rfid``."""
        for account in self._accounts:
            if account.rfid == rfid:
                return account
        raise AccountNotFound(f"no account on card {rfid}")

    def has_aadhar(self, aadhar: int) -> bool:
        return any(account.aadhar_number == aadhar for account in self._accounts)

    def has_rfid(self, rfid: str) -> bool:
        return any(account.rfid == rfid for account in self._accounts)

    def new_account_number(self) -> int:
        """Draw a random account number of up to five digits."""
        return self._rng.randrange(10**ACCOUNT_NUMBER_DIGITS)

    def new_transaction_id(self, low: int, high: int) -> int:
        """Draw a random transaction id between ``low`` and ``high`` inclusive."""
        lo, hi = sorted((low, high))
        return self._rng.randint(lo, hi)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)