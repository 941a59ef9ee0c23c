"""Saving the bank to CSV files and loading it back."""

from __future__ import annotations

import csv
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .models import MAX_HISTORY, Account, Bank, Transaction

BANK_FILE = "Bank_Details.csv"

PathLike = Union[str, "os.PathLike[str]"]


def _history_path(directory: Path, account_number: int) -> Path:
    return directory / f"{account_number}.csv"


def _account_row(account: Account) -> list[str]:
    wrapped = len(account.history) >= MAX_HISTORY
    return [
        account.name,
        str(account.account_number),
        str(int(wrapped)),
        "0",
        str(int(account.blocked)),
        account.pin,
        account.rfid,
        str(account.contact_number),
        f"{account.balance:.6f}",
        str(account.transaction_count),
        str(account.aadhar_number),
        str(len(account.history)),
    ]


def _transaction_row(transaction: Transaction) -> list[str]:
    when = transaction.when
    return [
        transaction.kind,
        f"{transaction.amount:.6f}",
        str(transaction.account_number),
        str(when.month),
        str(when.day),
        str(when.year),
        str(when.hour),
        str(when.minute),
        str(transaction.transaction_id),
    ]


def save_bank(bank: Bank, directory: PathLike = ".") -> None:
    """Write the account list and one history file per account into ``directory``."""
    base = Path(directory)
    with open(base / BANK_FILE, "w", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        for account in bank:
            writer.writerow(_account_row(account))
            with open(
                _history_path(base, account.account_number), "w", newline=""
            ) as history_handle:
                history_writer = csv.writer(history_handle, lineterminator="\n")
                history_writer.writerows(
                    _transaction_row(t) for t in account.history
                )


def _parse_account(row: list[str]) -> Optional[tuple[Account, bool]]:
    if len(row) != 12:
        return None
    try:
        account = Account(
            name=row[0],
            account_number=int(row[1]),
            pin=row[5],
            rfid=row[6],
            contact_number=int(row[7]),
            aadhar_number=int(row[10]),
            balance=float(row[8]),
            transaction_count=int(row[9]),
            blocked=bool(int(row[4])),
        )
        wrapped = bool(int(row[2]))
    except ValueError:
        return None
    return account, wrapped


def _parse_transaction(row: list[str]) -> Optional[Transaction]:
    if len(row) != 9:
        return None
    try:
        month, day, year, hour, minute = (int(v) for v in row[3:8])
        return Transaction(
            kind=row[0],
            amount=float(row[1]),
            account_number=int(row[2]),
            when=datetime(year, month, day, hour, minute),
            transaction_id=int(row[8]),
        )
    except ValueError:
        return None


def _load_history(path: Path, expected: int) -> list[Transaction]:
    if not path.exists():
        return []
    history: list[Transaction] = []
    with open(path, newline="") as handle:
        for row in csv.reader(handle):
            if len(history) >= expected:
                break
            transaction = _parse_transaction(row)
            if transaction is None:
                break
            history.append(transaction)
    return history


def load_bank(directory: PathLike = ".") -> Bank:
    """Read a bank written by :func:`save_bank`.

    Reading stops at the first malformed account line. Each account read is
    put at the front of the bank, so the order comes back reversed.
    """
    base = Path(directory)
    bank = Bank()
    path = base / BANK_FILE
    if not path.exists():
        return bank
    with open(path, newline="") as handle:
        for row in csv.reader(handle):
            parsed = _parse_account(row)
            if parsed is None:
                break
            account, wrapped = parsed
            expected = MAX_HISTORY if wrapped else min(
                account.transaction_count, MAX_HISTORY
            )
            account.history = _load_history(
                _history_path(base, account.account_number), expected
            )
            bank.add(account)
    return bank