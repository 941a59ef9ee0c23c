"""Checks and conversions for what a clerk types in."""

from __future__ import annotations

import re
import string

from .models import Bank, is_digits

NAME_LIMIT = 49
PIN_LENGTH = 4
CARD_LENGTH = 8
AADHAR_DIGITS = 12
CONTACT_DIGITS = 10
CONTACT_LOWEST = 6_000_000_000
CONTACT_HIGHEST = 9_999_999_999
MINIMUM_OPENING_BALANCE = 500
SMALLEST_AMOUNT = 10

_LETTERS = frozenset(string.ascii_letters)
_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_WORD_START = re.compile(r"(?:^|(?<= ))[A-Za-z]")


class InvalidInput(ValueError):
    """The text typed in does not hold an acceptable value."""


def _scan_int(text: str, message: str) -> int:
    """Read a leading integer the way a numeric field is read, ignoring the rest."""
    match = _INT.match(text)
    if match is None:
        raise InvalidInput(message)
    return int(match.group(1))


def _scan_float(text: str, message: str) -> float:
    match = _FLOAT.match(text)
    if match is None:
        raise InvalidInput(message)
    return float(match.group(1))


def _first_word(text: str) -> str:
    words = text.split()
    return words[0] if words else ""


def _digit_count(number: int) -> int:
    return len(str(abs(number))) if number else 0


def parse_name(text: str) -> str:
    """Return the account holder's name with each word capitalised."""
    name = text[:NAME_LIMIT].split("\n", 1)[0].lstrip(" ")
    if not name:
        raise InvalidInput("Invalid Name! Please enter again.")
    if any(ch not in _LETTERS and ch != " " for ch in name):
        raise InvalidInput("Invalid Name! Please enter again.")
    return _WORD_START.sub(lambda match: match.group().upper(), name)


def parse_pin(text: str) -> str:
    """Return a four digit PIN."""
    pin = _first_word(text)
    if not is_digits(pin):
        raise InvalidInput("ENTER NUMERIC CHARACTERS ONLY")
    if len(pin) != PIN_LENGTH:
        raise InvalidInput("ENTER 4 DIGIT PIN")
    return pin


def parse_card_number(text: str) -> str:
    """Return an eight digit card number, whether or not any account holds it."""
    card = _first_word(text)
    if not is_digits(card):
        raise InvalidInput("enter integers only")
    if len(card) != CARD_LENGTH:
        raise InvalidInput("Enter 8 Digit Card Number")
    return card


def parse_rfid(text: str, bank: Bank) -> str:
    """Return an eight digit card number that no account in ``bank`` holds yet."""
    rfid = _first_word(text)
    if bank.has_rfid(rfid):
        raise InvalidInput("RFID IS ALREADY EXISTED")
    if not is_digits(rfid):
        raise InvalidInput("ENTER NUMERIC CHARACTERS ONLY")
    if len(rfid) != CARD_LENGTH:
        raise InvalidInput("RFID MUST & SHOULD CONTAIN 8 DIGITS !")
    return rfid


def parse_aadhar(text: str, bank: Bank) -> int:
    """Return a twelve digit Aadhar number not yet used in ``bank``."""
    aadhar = _scan_int(text, "ENTER NUMERIC CHARACTERS ONLY")
    if aadhar <= 0 or _digit_count(aadhar) != AADHAR_DIGITS:
        raise InvalidInput("INVALID AADHAR NUMBER!")
    if bank.has_aadhar(aadhar):
        raise InvalidInput("ACCOUNT DETECTED WITH THIS AADHAR NUMBER")
    return aadhar


def parse_contact(text: str) -> int:
    """Return a ten digit mobile number starting with 6, 7, 8 or 9."""
    contact = _scan_int(text, "YOU HAVE ENTERED NON NUMERIC CHARACTERS ONLY")
    digits = _digit_count(contact)
    if digits > CONTACT_DIGITS:
        raise InvalidInput(
            "INVALID CONTACT NUMBER!\nYOU HAVE ENTERED MORE THAN 10 NUMERICS"
        )
    if digits < CONTACT_DIGITS:
        raise InvalidInput(
            "INVALID CONTACT NUMBER!\nYOU HAVE ENTERED LESS THAN 10 NUMERICS"
        )
    if not CONTACT_LOWEST <= contact <= CONTACT_HIGHEST:
        raise InvalidInput("ENTER VALID CONTACT NUMBER")
    return contact


def parse_amount(text: str, minimum_balance: bool = False) -> float:
    """Return an amount of money; an opening balance must be at least 500."""
    amount = _scan_float(text, "ENTER NUMERIC CHARACTERS ONLY")
    if minimum_balance and amount < MINIMUM_OPENING_BALANCE:
        raise InvalidInput("MINIMUM BALANCE SHOULD BE 500/-")
    if amount < SMALLEST_AMOUNT:
        raise InvalidInput("AMOUNT SHOULD BE IN MULTIPLES OF 10'S,100'S etc...")
    return amount