"""Reusable FastAPI dependencies."""

from .wallets import get_wallet_initializer, get_wallet_service

__all__ = [
    "get_wallet_initializer",
    "get_wallet_service",
]
