import pytest

from atmbank.models import Account, Bank
from atmbank.validators import (
    InvalidInput,
    parse_aadhar,
    parse_amount,
    parse_card_number,
    parse_contact,
    parse_name,
    parse_pin,
    parse_rfid,
)


@pytest.fixture
def bank():
    account = Account(
        name="Test User",
        account_number=42,
        pin="1111",
        rfid="00000042",
        contact_number=9000000000,
        aadhar_number=111122223333,
        balance=500.0,
    )
    return Bank([account])


def test_name_is_capitalised_and_leading_spaces_dropped():
    assert parse_name("  john  smith\n") == "John  Smith"


def test_name_already_capitalised_is_unchanged():
    assert parse_name("Ada Lovelace") == "Ada Lovelace"


@pytest.mark.parametrize("text", ["", "\n", "    ", "mary-ann", "r2d2"])
def test_bad_names_are_rejected(text):
    with pytest.raises(InvalidInput, match="Invalid Name!"):
        parse_name(text)


def test_pin_round_trip():
    assert parse_pin(" 1234 \n") == "1234"


def test_pin_must_be_numeric():
    with pytest.raises(InvalidInput, match="ENTER NUMERIC CHARACTERS ONLY"):
        parse_pin("12a4")


@pytest.mark.parametrize("text", ["123", "12345", ""])
def test_pin_must_have_four_digits(text):
    with pytest.raises(InvalidInput, match="ENTER 4 DIGIT PIN"):
        parse_pin(text)


def test_card_number_round_trip():
    assert parse_card_number("00000042") == "00000042"


def test_card_number_errors():
    with pytest.raises(InvalidInput, match="enter integers only"):
        parse_card_number("0000004x")
    with pytest.raises(InvalidInput, match="Enter 8 Digit Card Number"):
        parse_card_number("1234")


def test_rfid_round_trip(bank):
    assert parse_rfid("00000007", bank) == "00000007"


def test_rfid_already_used(bank):
    with pytest.raises(InvalidInput, match="RFID IS ALREADY EXISTED"):
        parse_rfid("00000042", bank)


def test_rfid_errors(bank):
    with pytest.raises(InvalidInput, match="ENTER NUMERIC CHARACTERS ONLY"):
        parse_rfid("abcdefgh", bank)
    with pytest.raises(InvalidInput, match="8 DIGITS"):
        parse_rfid("1234567", bank)


def test_aadhar_round_trip(bank):
    assert parse_aadhar("222233334444", bank) == 222233334444


@pytest.mark.parametrize("text", ["12345", "1111222233334", "-222233334444", "0"])
def test_aadhar_wrong_length(bank, text):
    with pytest.raises(InvalidInput, match="INVALID AADHAR NUMBER!"):
        parse_aadhar(text, bank)


def test_aadhar_already_used(bank):
    with pytest.raises(InvalidInput, match="ACCOUNT DETECTED"):
        parse_aadhar("111122223333", bank)


def test_aadhar_not_numeric(bank):
    with pytest.raises(InvalidInput, match="ENTER NUMERIC CHARACTERS ONLY"):
        parse_aadhar("abc", bank)


def test_contact_bounds():
    assert parse_contact("6000000000") == 6000000000
    assert parse_contact("9999999999") == 9999999999


def test_contact_errors():
    with pytest.raises(InvalidInput, match="MORE THAN 10"):
        parse_contact("90000000001")
    with pytest.raises(InvalidInput, match="LESS THAN 10"):
        parse_contact("900000000")
    with pytest.raises(InvalidInput, match="ENTER VALID CONTACT NUMBER"):
        parse_contact("5999999999")
    with pytest.raises(InvalidInput, match="NON NUMERIC"):
        parse_contact("phone")


def test_amount_round_trip():
    assert parse_amount("499") == 499.0
    assert parse_amount("500.5", True) == 500.5


def test_amount_opening_minimum():
    with pytest.raises(InvalidInput, match="500"):
        parse_amount("499", True)


def test_amount_too_small_and_not_numeric():
    with pytest.raises(InvalidInput, match="MULTIPLES OF 10"):
        parse_amount("9")
    with pytest.raises(InvalidInput, match="ENTER NUMERIC CHARACTERS ONLY"):
        parse_amount("ten")