"""The ATM terminal's serial protocol: card, PIN and account requests."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

from .models import Account, AccountNotFound, Bank, InsufficientFunds
from .storage import PathLike, load_bank, save_bank

log = logging.getLogger(__name__)

DEFAULT_PORT = "/dev/ttyUSB0"
DEFAULT_BAUD = 9600
FRAME_LIMIT = 30
MINI_STATEMENT_SIZE = 3
TERMINAL_IDS = (26857429, 27835438)

HANDSHAKE = "#OK:CNTD$"
HANDSHAKE_REPLY = "@OK:CNTD$"
CARD_ACTIVE = "@OK#ACTV$"
CARD_BLOCKED = "@BLKD$"
CARD_INVALID = "@ERR#CARD$"
# The terminal's PIN replies are sent with their trailing NUL byte.
PIN_OK = "@OK$\0"
PIN_INVALID = "@ERR#INVLD$\0"
WITHDRAW_REFUSED = "@ERR$"
PIN_CHANGED = "@CGD$"
CARD_NOW_BLOCKED = "@BLK$"
STATEMENT_PREFIX = "@OK#STMT:"
EXIT_FRAME = "#EXIT$"
NO_ACCOUNTS = "@ERR#INVALID_CARD$"

_DIGIT_RUNS = re.compile(r"[0-9]+")


def extract_digits(text: str) -> Optional[str]:
    """Return the last run of ASCII digits in ``text``, or None if it has none."""
    runs = _DIGIT_RUNS.findall(text)
    return runs[-1] if runs else None


def extract_amount(text: str) -> float:
    """Return the last run of digits in ``text`` as a number, 0.0 if there is none."""
    digits = extract_digits(text)
    return float(digits) if digits is not None else 0.0


def read_frame(stream: BinaryIO, limit: int = FRAME_LIMIT, terminator: str = "$") -> str:
    """Read one frame of at most ``limit - 1`` characters from ``stream``.

    With ``"$"`` as terminator the terminator is kept in the frame; with a
    newline it is dropped and carriage returns are skipped. Raises EOFError
    when the stream ends before any character arrives.
    """
    line_mode = terminator == "\n"
    chars: list[str] = []
    while len(chars) < limit - 1:
        chunk = stream.read(1)
        if not chunk:
            if chars:
                break
            raise EOFError("stream closed")
        ch = chunk.decode("latin-1") if isinstance(chunk, bytes) else chunk
        if ch == terminator:
            if not line_mode:
                chars.append(ch)
            break
        if line_mode and ch == "\r":
            continue
        chars.append(ch)
    return "".join(chars)


def _write(writer, text: str) -> None:
    writer.write(text.encode("latin-1"))
    flush = getattr(writer, "flush", None)
    if flush is not None:
        flush()


class AtmServer:
    """Answers the terminal's requests for the card currently presented."""

    def __init__(self, bank: Bank, directory: PathLike = ".") -> None:
        self.bank = bank
        self.directory = Path(directory)
        self.account: Optional[Account] = None
        self.pin = ""
        self._commands: dict[str, Callable[[str], str]] = {
            "r": self.verify_rfid,
            "p": self.verify_pin,
            "B": lambda frame: self.block_card(),
            "R": lambda frame: self.balance(),
            "D": self.deposit,
            "W": self.withdraw,
            "P": self.change_pin,
            "M": lambda frame: self.mini_statement(),
        }

    def _current(self) -> Account:
        if self.account is None:
            raise AccountNotFound("no card has been presented")
        return self.account

    def _save(self) -> None:
        save_bank(self.bank, self.directory)

    @staticmethod
    def _balance_reply(account: Account) -> str:
        return f"@BAL:{account.balance:.1f}$"

    def handle(self, frame: str) -> Optional[str]:
        """Answer one frame; return the reply, or None if there is nothing to send."""
        log.debug("frame %r", frame)
        if frame == HANDSHAKE:
            return HANDSHAKE_REPLY
        if len(frame) < 2:
            return None
        command = self._commands.get(frame[1])
        if command is None:
            return None
        try:
            return command(frame)
        except AccountNotFound:
            return CARD_INVALID

    def verify_rfid(self, frame: str) -> str:
        """Select the account whose card number is in ``frame``."""
        card = extract_digits(frame) or ""
        try:
            account = self.bank.find_by_rfid(card)
        except AccountNotFound:
            log.info("invalid card %s", card)
            return CARD_INVALID
        self.account = account
        self.pin = account.pin
        return CARD_BLOCKED if account.blocked else CARD_ACTIVE

    def verify_pin(self, frame: str) -> str:
        """Check the PIN in ``frame`` against the selected card's PIN."""
        self._current()
        given = extract_digits(frame) or ""
        return PIN_OK if given == self.pin else PIN_INVALID

    def balance(self) -> str:
        """Report the selected account's balance."""
        return self._balance_reply(self._current())

    def deposit(self, frame: str) -> str:
        """Pay in the amount in ``frame`` and report the new balance."""
        account = self._current()
        amount = extract_amount(frame)
        account.deposit(
            amount, "DEPOSIT", transaction_id=self.bank.new_transaction_id(*TERMINAL_IDS)
        )
        self._save()
        return self._balance_reply(account)

    def withdraw(self, frame: str) -> str:
        """Pay out the amount in ``frame`` if the balance covers it."""
        account = self._current()
        amount = extract_amount(frame)
        try:
            account.withdraw(
                amount,
                "WITHDRAW",
                transaction_id=self.bank.new_transaction_id(*TERMINAL_IDS),
            )
        except InsufficientFunds:
            log.info("insufficient balance")
            return WITHDRAW_REFUSED
        self._save()
        return self._balance_reply(account)

    def change_pin(self, frame: str) -> str:
        """Replace the selected card's PIN with the one in ``frame``."""
        account = self._current()
        account.pin = extract_digits(frame) or ""
        self.pin = account.pin
        self._save()
        return PIN_CHANGED

    def block_card(self) -> str:
        """Block the selected card."""
        account = self._current()
        account.blocked = True
        self._save()
        return CARD_NOW_BLOCKED

    def mini_statement(self) -> str:
        """List the last three transactions of the selected account."""
        account = self._current()
        count = min(account.transaction_count, MINI_STATEMENT_SIZE)
        entries = "".join(
            f"{item.kind}-{item.amount:.2f}|" for item in account.recent(count)
        )
        return f"{STATEMENT_PREFIX}{entries}$"

    def serve(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Answer frames from ``reader`` on ``writer`` until the reader closes."""
        while True:
            try:
                frame = read_frame(reader)
            except EOFError:
                return
            reply = self.handle(frame)
            if reply is not None:
                _write(writer, reply)


def _serve_console(server: AtmServer, reader: BinaryIO, writer: BinaryIO) -> None:
    while True:
        try:
            frame = read_frame(reader, terminator="\n")
        except EOFError:
            return
        if frame == EXIT_FRAME:
            _write(writer, "exited")
            return
        if not len(server.bank):
            _write(writer, NO_ACCOUNTS)
            return
        reply = server.handle(frame)
        if reply is not None:
            _write(writer, reply)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Serve the ATM terminal over a serial line, or over the console."""
    parser = argparse.ArgumentParser(description="Serve an ATM terminal.")
    parser.add_argument("--port", default=DEFAULT_PORT, help="serial device")
    parser.add_argument("--baud", type=int, default=DEFAULT_BAUD, help="baud rate")
    parser.add_argument("--directory", default=".", help="where the bank files live")
    parser.add_argument(
        "--console",
        action="store_true",
        help="read newline-ended frames from standard input instead",
    )
    args = parser.parse_args(argv)

    server = AtmServer(load_bank(args.directory), args.directory)
    if args.console:
        _serve_console(server, sys.stdin.buffer, sys.stdout.buffer)
        return 0

    import serial

    try:
        port = serial.Serial(
            args.port,
            baudrate=args.baud,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
        )
    except serial.SerialException as exc:
        print(f"unable to open UART: {exc}", file=sys.stderr)
        return 1
    with port:
        server.serve(port, port)
    return 0


if __name__ == "__main__":
    sys.exit(main())