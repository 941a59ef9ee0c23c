"""The clerk's console: account creation, deposits, withdrawals and reports."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .models import (
    Account,
    AccountNotFound,
    Bank,
    Transaction,
    needs_otp,
)
from .validators import (
    InvalidInput,
    _scan_int,
    parse_aadhar,
    parse_amount,
    parse_card_number,
    parse_contact,
    parse_name,
    parse_pin,
    parse_rfid,
)

T = TypeVar("T")

OPENING_IDS = (23782548, 24748728)
DEPOSIT_IDS = (22548765, 23578432)
WITHDRAW_IDS = (26857429, 27835438)
TRANSFER_IDS = (23186489, 24753289)

_MENU = (
    "\033[34m\n"
    "         !__________________________BANK MENU__________________________!\n"
    "\033[0m\n"
    "\033[33m\n"
    "\t-->c/C---Create Account\t\t\tMini Statement---h/H<--\n"
    "\t-->w/W-------Withdrawal\t\t\tDeposit----------d/D<--\n"
    "\t-->b/B--Balance Enquiry\t\t\tTransfer---------t/T<--\n"
    "\t-->e/E----Show Accounts\t\t\tSave To File-----s/S<--\n"
    "\t-->f/F-----Find Account\t\t\tUpdate Account---u/U<--\n"
    "\t-->l/L-----Change Status\t\tExit-------------q/Q<--\n"
    "Select A Transaction->\033[0m"
)

_UPDATE_MENU = (
    "n/N:Update Name\n"
    "a/A:Update Aadhar number\n"
    "m/M:Update mobile number\n"
    "r/R:update RFID number\n"
    "p/P:Update PIN\n"
    "e/E:Exit"
)

_HISTORY_HEADER = (
    "No.of    Type of Trasnctions       D/M/Y    TIME Account Number      Amount"
)


class Teller:
    """Runs the clerk's operations, asking through ``prompt`` and writing to ``output``."""

    def __init__(
        self,
        bank: Bank,
        prompt: Callable[[str], str] = input,
        output: Callable[[str], object] = print,
    ) -> None:
        self.bank = bank
        self._prompt = prompt
        self._output = output

    def _say(self, text: str = "") -> None:
        self._output(text)

    def _ask(self, message: str, parser: Callable[[str], T]) -> T:
        while True:
            try:
                return parser(self._prompt(message))
            except InvalidInput as exc:
                self._say(str(exc))

    def _read_number(self, message: str) -> Optional[int]:
        try:
            return _scan_int(self._prompt(message), "not a number")
        except InvalidInput:
            return None

    def _lookup(
        self, message: str, finder: Callable[[int], Account]
    ) -> Optional[tuple[Account, int]]:
        number = self._read_number(message)
        if number is None:
            return None
        try:
            return finder(number), number
        except AccountNotFound:
            return None

    def _confirm_otp(self, number: int) -> None:
        if not needs_otp(number):
            return
        while True:
            code = self._read_number("Enter OTP sent to your phone number:")
            if code is not None and code >= 0:
                return
            self._say("Invalid OTP!")

    def _read_amount(self, minimum_balance: bool = False) -> float:
        return self._ask(
            "ENTER AMOUNT:", lambda text: parse_amount(text, minimum_balance)
        )

    def print_menu(self) -> None:
        """Show the main menu."""
        self._say(_MENU)

    def create_account(self) -> Account:
        """Ask for a new customer's details and open an account for them."""
        name = self._ask("Enter Account Holder Name: ", parse_name)
        rfid = self._ask("ENTER 8 DIGIT RFID:", lambda t: parse_rfid(t, self.bank))
        pin = self._ask("ENTER PIN:", parse_pin)
        account_number = self.bank.new_account_number()
        contact = self._ask("ENTER 10 DIGIT CONTACT NUMBER:", parse_contact)
        aadhar = self._ask(
            "ENTER 12 DIGIT AADHAR NUMBER:", lambda t: parse_aadhar(t, self.bank)
        )
        opening = self._read_amount(minimum_balance=True)
        account = Account(
            name=name,
            account_number=account_number,
            pin=pin,
            rfid=rfid,
            contact_number=contact,
            aadhar_number=aadhar,
        )
        account.deposit(
            opening,
            "DEPOSIT",
            transaction_id=self.bank.new_transaction_id(*OPENING_IDS),
        )
        return self.bank.add(account)

    def deposit(self) -> Optional[Transaction]:
        """Pay money into an account found by account or Aadhar number."""
        found = self._lookup("Enter account number/Aadhar Number:", self.bank.find)
        if found is None:
            self._say("Invalid account number !")
            return None
        account, number = found
        self._confirm_otp(number)
        amount = self._read_amount()
        transaction = account.deposit(
            amount, "DEPOSIT", transaction_id=self.bank.new_transaction_id(*DEPOSIT_IDS)
        )
        self._say("DEPOSIT SUCCESSFUL")
        return transaction

    def withdraw(self) -> Optional[Transaction]:
        """Take money out of an account, asking again while the balance is short."""
        found = self._lookup("Enter Account Number/Aadhar Number:", self.bank.find)
        if found is None:
            self._say("Invalid Account Number!")
            return None
        account, number = found
        self._confirm_otp(number)
        while True:
            amount = self._read_amount()
            if amount <= account.balance:
                break
            self._say("Insufficient balance!")
        transaction = account.withdraw(
            amount,
            "WITHDRAW",
            transaction_id=self.bank.new_transaction_id(*WITHDRAW_IDS),
        )
        self._say("WITHDRAWAL SUCCESSFUL")
        return transaction

    def balance_enquiry(self) -> Optional[float]:
        """Show and return the balance of an account."""
        if not len(self.bank):
            self._say("no Account created upto now")
        found = self._lookup("Enter Account Number/Aadhar Number:", self.bank.find)
        if found is None:
            self._say("Invalid Account Number!")
            return None
        account, number = found
        self._confirm_otp(number)
        self._say(f"Amount is:{account.balance:.3f}")
        return account.balance

    def transfer(self) -> Optional[tuple[Transaction, Transaction]]:
        """Move money from one account to another, both given by account number."""
        found = self._lookup(
            "Enter your Account Number:", self.bank.find_by_account_number
        )
        if found is None:
            self._say("Invalid Account Number!")
            return None
        source, _ = found
        found = self._lookup(
            "Enter account number to transfer to:", self.bank.find_by_account_number
        )
        if found is None:
            self._say("Invalid account number!")
            return None
        target, _ = found
        while True:
            amount = self._read_amount()
            if amount <= source.balance:
                break
            self._say("Insufficient Balance!")
        outgoing = source.withdraw(
            amount,
            "Transfer Out",
            transaction_id=self.bank.new_transaction_id(*TRANSFER_IDS),
        )
        incoming = target.deposit(
            amount,
            "Transfer In",
            transaction_id=self.bank.new_transaction_id(*TRANSFER_IDS),
        )
        self._say("TRANSFER SUCCESSFUL")
        return outgoing, incoming

    def display_all(self) -> None:
        """List every account with its card and PIN."""
        if not len(self.bank):
            self._say("list is empty")
            return
        self._say()
        self._say("       ACCOUNT MEMBERS LIST\n")
        for account in self.bank:
            self._say(f"Name:              {account.name}")
            self._say(f"Contact Number:    +91 {account.contact_number}")
            self._say(f"Account Number:    {account.account_number}")
            self._say(f"Aadhar Number:     {account.aadhar_number}")
            self._say(f"No.of Trasnctions: {account.transaction_count}")
            self._say(f"RFID:              {account.rfid}")
            self._say(f"PIN:               {account.pin}")
            self._say()

    def find_account(self) -> Optional[Account]:
        """Show one account found by account or Aadhar number."""
        text = self._prompt("Enter Account Number/Aadhar Number:").split("\n", 1)[0]
        if not text or not "0" <= text[0] <= "9":
            self._say(
                "Account Details Should BE Displayed Only on Account/Aadhar Number"
            )
            return None
        try:
            account = self.bank.find(int(text))
        except (ValueError, AccountNotFound):
            self._say("Invalid account/Contact Number!")
            return None
        self._say(f"name:{account.name}")
        self._say(f"Account Number:{account.account_number}")
        self._say(f"Contact Number: +91 {account.contact_number}")
        self._say(f"Aadhar Number:{account.aadhar_number}")
        self._say(f"No.of Trasnctions:{account.transaction_count}")
        return account

    def history(self) -> Optional[list[Transaction]]:
        """Show the last transactions of an account, newest first."""
        if not len(self.bank):
            self._say("no account is created up to now")
            return None
        found = self._lookup("enter account number/Aadhar number:", self.bank.find)
        if found is None:
            self._say("no account found on this number\n")
            self._say()
            return None
        account, _ = found
        self._say()
        self._say(_HISTORY_HEADER)
        for position, item in enumerate(account.history, start=1):
            when = item.when
            self._say(
                f"{position} \t{item.kind}\t\t\t{when.day}/{when.month}/{when.year}"
                f"    {when.hour}:{when.minute}  {item.account_number}"
                f"\t\t{item.amount:.3f}"
            )
        self._say()
        return list(account.history)

    def update_account(self) -> Optional[Account]:
        """Change an account's details until the clerk chooses to exit."""
        if not len(self.bank):
            self._say("no account details")
            return None
        text = self._prompt("ENTER ACCOUNT NUMBER:")
        try:
            account = self.bank.find_by_account_number(_scan_int(text, text))
        except (InvalidInput, AccountNotFound):
            self._say(f"NO ACCOUNT FOUND ON THIS NUMBER :{text.strip()}")
            return None
        while True:
            self._say(_UPDATE_MENU)
            choice = self._prompt("enter your option:\n")[:1].lower()
            if choice == "a":
                account.aadhar_number = self._ask(
                    "ENTER 12 DIGIT AADHAR NUMBER:",
                    lambda t: parse_aadhar(t, self.bank),
                )
                self._say("UPDATED AADHAR NUMBER SUCCESSFULLY")
            elif choice == "m":
                account.contact_number = self._ask(
                    "ENTER 10 DIGIT CONTACT NUMBER:", parse_contact
                )
                self._say("UPDATED MOBILE NUMBER SUCCESSFULLY")
            elif choice == "r":
                account.rfid = self._ask(
                    "ENTER 8 DIGIT RFID:", lambda t: parse_rfid(t, self.bank)
                )
                self._say("UPDATED RFID SUCCESSFULLY")
            elif choice == "p":
                account.pin = self._ask("ENTER PIN:", parse_pin)
                self._say("UPDATED PIN SUCCESSFULLY")
            elif choice == "n":
                account.name = self._ask("Enter Account Holder Name: ", parse_name)
                self._say("UPDATED NAME SUCCESSFULLY")
            elif choice == "e":
                self._say("EXITED FROM UPDATION")
                return account

    def change_status(self) -> Optional[Account]:
        """Unblock the card whose number is entered."""
        card = self._ask("Enter 8 digit Card Number:", parse_card_number)
        try:
            account = self.bank.find_by_rfid(card)
        except AccountNotFound:
            self._say(f"No Account Found on this Card:{card}")
            return None
        if account.blocked:
            self._say("blocked status is changed")
            self._say("Card Is Unblocked Now")
            account.blocked = False
        else:
            self._say("account is not blocked")
        return account