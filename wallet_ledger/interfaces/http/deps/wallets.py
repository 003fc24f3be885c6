"""Wallet ledger dependency providers."""

from fastapi import Request

from wallet_ledger.domain.wallets import WalletInitializer, WalletService


def get_wallet_service(request: Request) -> WalletService:
    return request.app.state.wallet_service


def get_wallet_initializer(request: Request) -> WalletInitializer:
    return request.app.state.wallet_initializer
