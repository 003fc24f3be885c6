"""Wallet ledger service: funded accounts and atomic transfers between them."""

__version__ = "0.1.0"
