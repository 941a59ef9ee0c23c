import random
from datetime import datetime

import pytest

from atmbank.models import Account, Bank
from atmbank.teller import Teller


class Script:
    """Feeds prepared answers to the teller and collects what it writes."""

    def __init__(self, answers):
        self._answers = iter(answers)
        self.prompts = []
        self.lines = []

    def prompt(self, message):
        self.prompts.append(message)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError from None

    def output(self, text=""):
        self.lines.append(text)


def make_account(number=42, rfid="00000042", aadhar=111122223333, balance=500.0):
    return Account(
        name="Test User",
        account_number=number,
        pin="1111",
        rfid=rfid,
        contact_number=9000000000,
        aadhar_number=aadhar,
        balance=balance,
    )


def teller_for(bank, answers):
    script = Script(answers)
    return Teller(bank, script.prompt, script.output), script


def test_print_menu():
    teller, script = teller_for(Bank(), [])
    teller.print_menu()
    assert "Select A Transaction->" in script.lines[0]


def test_create_account_with_retries():
    bank = Bank(rng=random.Random(1))
    answers = [
        "alice", "abc", "00000007", "12", "2468",
        "9000000001", "111122223333", "100", "1000",
    ]
    teller, script = teller_for(bank, answers)
    account = teller.create_account()
    assert len(bank) == 1
    assert account.name == "Alice"
    assert account.rfid == "00000007"
    assert account.pin == "2468"
    assert account.aadhar_number == 111122223333
    assert account.balance == 1000.0
    assert account.transaction_count == 1
    assert account.history[0].kind == "DEPOSIT"
    assert 0 <= account.account_number < 100000
    assert "ENTER NUMERIC CHARACTERS ONLY" in script.lines
    assert "ENTER 4 DIGIT PIN" in script.lines


def test_deposit_by_account_number():
    account = make_account()
    start = account.balance
    teller, script = teller_for(Bank([account]), ["42", "100"])
    transaction = teller.deposit()
    assert account.balance == start + 100.0
    assert transaction.kind == "DEPOSIT"
    assert account.history[0] is transaction
    assert "DEPOSIT SUCCESSFUL" in script.lines


def test_deposit_by_aadhar_asks_for_otp():
    account = make_account()
    teller, script = teller_for(Bank([account]), ["111122223333", "-1", "7", "50"])
    teller.deposit()
    assert "Invalid OTP!" in script.lines
    assert account.history[0].amount == 50.0


def test_deposit_unknown_account():
    teller, script = teller_for(Bank([make_account()]), ["77"])
    assert teller.deposit() is None
    assert script.lines == ["Invalid account number !"]


def test_withdraw_retries_on_insufficient_balance():
    account = make_account()
    start = account.balance
    teller, script = teller_for(Bank([account]), ["42", "10000", "100"])
    transaction = teller.withdraw()
    assert "Insufficient balance!" in script.lines
    assert account.balance == start - 100.0
    assert transaction.kind == "WITHDRAW"


def test_balance_enquiry():
    account = make_account()
    teller, script = teller_for(Bank([account]), ["42"])
    assert teller.balance_enquiry() == account.balance
    assert script.lines[-1].startswith("Amount is:")


def test_balance_enquiry_unknown():
    teller, script = teller_for(Bank(), ["42"])
    assert teller.balance_enquiry() is None
    assert script.lines == ["no Account created upto now", "Invalid Account Number!"]


def test_transfer_moves_money():
    source = make_account()
    target = make_account(number=7, rfid="00000007", aadhar=222233334444, balance=0.0)
    total = source.balance + target.balance
    teller, script = teller_for(Bank([source, target]), ["42", "7", "900", "200"])
    outgoing, incoming = teller.transfer()
    assert source.balance + target.balance == total
    assert target.balance == 200.0
    assert outgoing.kind == "Transfer Out"
    assert incoming.kind == "Transfer In"
    assert "Insufficient Balance!" in script.lines


def test_transfer_unknown_target():
    teller, script = teller_for(Bank([make_account()]), ["42", "8"])
    assert teller.transfer() is None
    assert script.lines == ["Invalid account number!"]


def test_display_all_empty_and_full():
    teller, script = teller_for(Bank(), [])
    teller.display_all()
    assert script.lines == ["list is empty"]
    teller, script = teller_for(Bank([make_account()]), [])
    teller.display_all()
    assert "RFID:              00000042" in script.lines
    assert "Contact Number:    +91 9000000000" in script.lines


def test_find_account():
    account = make_account()
    teller, script = teller_for(Bank([account]), ["42\n"])
    assert teller.find_account() is account
    assert "name:Test User" in script.lines


def test_find_account_needs_number():
    teller, script = teller_for(Bank([make_account()]), ["Test User"])
    assert teller.find_account() is None
    assert len(script.lines) == 1


def test_history_lists_newest_first():
    account = make_account()
    when = datetime(2024, 1, 2, 3, 4)
    account.deposit(10.0, when=when)
    account.deposit(20.0, when=when)
    teller, script = teller_for(Bank([account]), ["42"])
    history = teller.history()
    assert [t.amount for t in history] == [20.0, 10.0]
    rows = [line for line in script.lines if "2/1/2024" in line]
    assert len(rows) == 2
    assert rows[0].startswith("1 \tDEPOSIT")


def test_history_empty_bank():
    teller, script = teller_for(Bank(), [])
    assert teller.history() is None
    assert script.lines == ["no account is created up to now"]


def test_update_account_pin_and_name():
    account = make_account()
    answers = ["42", "p", "4321", "x", "N", "jane doe", "e"]
    teller, script = teller_for(Bank([account]), answers)
    assert teller.update_account() is account
    assert account.pin == "4321"
    assert account.name == "Jane Doe"
    assert "UPDATED PIN SUCCESSFULLY" in script.lines
    assert script.lines[-1] == "EXITED FROM UPDATION"


def test_update_account_unknown():
    teller, script = teller_for(Bank([make_account()]), ["99"])
    assert teller.update_account() is None
    assert script.lines == ["NO ACCOUNT FOUND ON THIS NUMBER :99"]


def test_change_status_unblocks():
    account = make_account()
    account.blocked = True
    teller, script = teller_for(Bank([account]), ["12ab", "123", "00000042"])
    assert teller.change_status() is account
    assert account.blocked is False
    assert "enter integers only" in script.lines
    assert "Enter 8 Digit Card Number" in script.lines
    assert "Card Is Unblocked Now" in script.lines


def test_change_status_not_blocked_and_unknown():
    account = make_account()
    teller, script = teller_for(Bank([account]), ["00000042", "00000099"])
    teller.change_status()
    assert script.lines == ["account is not blocked"]
    assert teller.change_status() is None
    assert script.lines[-1] == "No Account Found on this Card:00000099"


def test_running_out_of_input_raises_eof():
    teller, _ = teller_for(Bank([make_account(balance=0.0)]), ["42", "100"])
    with pytest.raises(EOFError):
        teller.withdraw()