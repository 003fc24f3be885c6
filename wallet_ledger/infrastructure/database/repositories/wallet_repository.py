"""SQLAlchemy implementation for the wallet ledger"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wallet_ledger.db.models import Transaction, Wallet
from wallet_ledger.exceptions import DuplicateAddressError

# Largest value a BIGINT balance column holds.
BALANCE_CEILING = 2**63 - 1


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, address: str) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.address == address)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create_wallet(self, address: str, balance_cents: int) -> Wallet:
        if await self.get_wallet(address) is not None:
            raise DuplicateAddressError(f"wallet {address} already exists")
        wallet = Wallet(address=address, balance_cents=balance_cents)
        self.session.add(wallet)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Another writer committed the same address since the check above.
            raise DuplicateAddressError(f"wallet {address} already exists") from exc
        return wallet

    async def lock_wallets(self, addresses: Iterable[str]) -> dict[str, Wallet]:
        """Load the given wallets, locking their rows in ascending address order."""
        stmt = (
            select(Wallet)
            .where(Wallet.address.in_(sorted(set(addresses))))
            .order_by(Wallet.address)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return {wallet.address: wallet for wallet in result.scalars().all()}

    async def debit(self, address: str, amount_cents: int) -> int | None:
        """Subtract ``amount_cents`` unless that would make the balance negative."""
        stmt = (
            update(Wallet)
            .where(Wallet.address == address, Wallet.balance_cents >= amount_cents)
            .values(balance_cents=Wallet.balance_cents - amount_cents)
            .execution_options(synchronize_session="fetch")
            .returning(Wallet.balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(self, address: str, amount_cents: int) -> int | None:
        """Add ``amount_cents`` unless the balance would leave the 64-bit range."""
        stmt = (
            update(Wallet)
            .where(
                Wallet.address == address,
                Wallet.balance_cents <= BALANCE_CEILING - amount_cents,
            )
            .values(balance_cents=Wallet.balance_cents + amount_cents)
            .execution_options(synchronize_session="fetch")
            .returning(Wallet.balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_transaction(
        self,
        *,
        from_address: str,
        to_address: str,
        amount_cents: int,
        created_at: datetime,
    ) -> Transaction:
        tx = Transaction(
            from_address=from_address,
            to_address=to_address,
            amount_cents=amount_cents,
            created_at=created_at,
        )
        self.session.add(tx)
        await self.session.flush()
        return tx

    async def list_recent(self, limit: int) -> list[Transaction]:
        stmt = (
            select(Transaction)
            .order_by(desc(Transaction.created_at), desc(Transaction.id))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_wallets(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Wallet))
        return result.scalar_one()
