# atmbank

A small in-memory bank ledger with CSV storage, a set of teller operations
for a clerk's console, and a server that answers an ATM terminal over a
serial line.

## What it does

- **Accounts** (`atmbank.models.Account`) hold a name, an account number, an
  eight-digit card (RFID) number, a four-digit PIN, a contact number, an
  Aadhar number, a balance, a transaction count, a blocked flag and the last
  five transactions, newest first.
- **The bank** (`atmbank.models.Bank`) keeps accounts in order, newest at the
  front, and draws random account numbers and transaction ids.
- **Storage** (`atmbank.storage`) writes the whole bank to
  `Bank_Details.csv` plus one `<account number>.csv` file of transactions per
  account, and reads them back with `load_bank`. Loading stops at the first
  malformed account line, and the accounts come back in reverse order.
- **Validators** (`atmbank.validators`) check what a clerk types: names,
  PINs, card numbers, Aadhar numbers, contact numbers and amounts.
- **Teller operations** (`atmbank.teller.Teller`) create accounts, take
  deposits and withdrawals, move money between accounts, show balances,
  account details and transaction histories, update account fields and
  unblock cards.
- **ATM server** (`atmbank.protocol.AtmServer`) reads frames from a terminal
  and answers them, saving every change straight back to disk.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running the ATM server

```
atmbank-server --help
```

Options:

- `--port` serial device, default `/dev/ttyUSB0`
- `--baud` baud rate, default `9600`
- `--directory` where the bank files live, default `.`
- `--console` read newline-ended frames from standard input and write
  replies to standard output instead of using the serial line

The server loads the bank from its directory and then answers frames one at
a time until the line closes. On the serial line a frame ends at `$` and is
at most 29 characters long. In console mode the frame `#EXIT$` prints
`exited` and stops; if the bank has no accounts the server replies
`@ERR#INVALID_CARD$` and stops.

### Frames

Requests start with `#` and end with `$`; replies start with `@` and end
with `$`. The character after `#` picks the request:

| Request              | Meaning                     | Replies                                  |
|----------------------|-----------------------------|------------------------------------------|
| `#OK:CNTD$`          | handshake                   | `@OK:CNTD$`                              |
| `#r<card>$`          | card presented              | `@OK#ACTV$`, `@BLKD$`, `@ERR#CARD$`      |
| `#p<pin>$`           | PIN entered                 | `@OK$`, `@ERR#INVLD$`                    |
| `#REQ$`              | balance enquiry             | `@BAL:<balance>$`                        |
| `#DEP:<amount>$`     | deposit                     | `@BAL:<balance>$`                        |
| `#WTHD:<amount>$`    | withdrawal                  | `@BAL:<balance>$`, `@ERR$`               |
| `#PINCHG:<pin>$`     | PIN change                  | `@CGD$`                                  |
| `#BLK$`              | block the card              | `@BLK$`                                  |
| `#MINI#REQ$`         | mini statement              | `@OK#STMT:<type>-<amount>\|...$`         |

The two PIN replies are sent followed by a NUL byte. Card numbers, PINs and
amounts are taken from the last run of digits in the frame. Balances are
sent with one decimal place; a mini statement lists up to three of the most
recent transactions with two decimal places. Any request other than the
handshake and `#r` made before a card has been presented is answered with
`@ERR#CARD$`. Frames with an unknown request character get no reply.

## Using it from Python

```python
from atmbank.storage import load_bank, save_bank
from atmbank.teller import Teller
from atmbank.protocol import AtmServer

bank = load_bank("data")

teller = Teller(bank, input, print)
teller.print_menu()
teller.create_account()
save_bank(bank, "data")

server = AtmServer(bank, "data")
reply = server.handle("#OK:CNTD$")   # "@OK:CNTD$"
```

`Teller` takes a `prompt` callable that is given a message and returns the
text typed, and an `output` callable that is given each line to show; they
default to `input` and `print`. Its operations ask again until the input is
valid, and a missing account is reported through `output`.

Lookups go through `Bank.find` (by account or Aadhar number),
`Bank.find_by_account_number` and `Bank.find_by_rfid`. A missing account
raises `AccountNotFound`; a withdrawal larger than the balance raises
`InsufficientFunds`. Both are `BankError`s. Input that fails the rules in
`atmbank.validators` raises `InvalidInput`, a `ValueError`.

## What it does not do

There is no command that runs the teller console. `Teller.print_menu` shows
the menu, but choosing an entry and calling the matching `Teller` method, and
saving with `save_bank`, is left to the program that uses it. Nothing here
drives the terminal side of the serial line (its keypad, display or card
reader); `atmbank-server` only answers the frames the terminal sends.