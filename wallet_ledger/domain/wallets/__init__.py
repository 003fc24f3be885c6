"""Wallet domain exports"""

from .addresses import AddressGenerator, normalize_address
from .initializer import WalletInitializer
from .models import TransactionRecord, Wallet
from .service import WalletService

__all__ = [
    "AddressGenerator",
    "normalize_address",
    "TransactionRecord",
    "Wallet",
    "WalletInitializer",
    "WalletService",
]
