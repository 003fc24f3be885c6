"""Repository protocol for wallet ledger persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol, Sequence

from wallet_ledger.db.models import Transaction as TransactionModel, Wallet as WalletModel


class WalletRepository(Protocol):
    async def get_wallet(self, address: str) -> WalletModel | None:
        ...

    async def create_wallet(self, address: str, balance_cents: int) -> WalletModel:
        ...

    async def lock_wallets(self, addresses: Iterable[str]) -> dict[str, WalletModel]:
        ...

    async def debit(self, address: str, amount_cents: int) -> int | None:
        ...

    async def credit(self, address: str, amount_cents: int) -> int | None:
        ...

    async def add_transaction(
        self,
        *,
        from_address: str,
        to_address: str,
        amount_cents: int,
        created_at: datetime,
    ) -> TransactionModel:
        ...

    async def list_recent(self, limit: int) -> Sequence[TransactionModel]:
        ...

    async def count_wallets(self) -> int:
        ...
