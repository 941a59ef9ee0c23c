"""A bank ledger with CSV storage, teller operations and a serial-line ATM server."""

__version__ = "0.1.0"

__all__ = ["models", "storage", "validators", "teller", "protocol"]