"""Wallet domain service"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncIterator, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wallet_ledger.core.config import get_settings
from wallet_ledger.db.models import Transaction as TransactionModel, Wallet as WalletModel
from wallet_ledger.exceptions import (
    AddressNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    OperationCancelledError,
    SelfTransferError,
)
from wallet_ledger.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from wallet_ledger.infrastructure.database.session import get_session_factory, session_scope

from .addresses import normalize_address
from .models import TransactionRecord, Wallet
from .money import MAX_MINOR_UNITS, from_minor_units, to_minor_units
from .repository import WalletRepository

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; every stored timestamp is UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class WalletService:
    """Wallet store, transaction log and transfers over one shared database.

    Every mutating call runs in its own transaction; nothing is held between calls,
    so one service instance can be shared by any number of concurrent callers.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        repository_factory: Callable[[AsyncSession], WalletRepository] = SqlWalletRepository,
        lock_timeout: Optional[float] = None,
    ) -> None:
        self._session_factory = session_factory
        self._repository_factory = repository_factory
        self._lock_timeout = lock_timeout

    @classmethod
    def default(cls) -> "WalletService":
        return cls(get_session_factory(), lock_timeout=get_settings().database.busy_timeout)

    @asynccontextmanager
    async def _scope(self, *, write: bool) -> AsyncIterator[WalletRepository]:
        async with session_scope(
            self._session_factory, write=write, lock_timeout=self._lock_timeout
        ) as session:
            yield self._repository_factory(session)

    async def create_wallet(self, address: str, initial_balance: Decimal | int | str) -> Wallet:
        address = normalize_address(address)
        balance_cents = to_minor_units(initial_balance)

        async with self._scope(write=True) as repository:
            model = await repository.create_wallet(address, balance_cents)
            wallet = self._to_wallet(model)
        logger.debug("Wallet %s created with balance %s", address, wallet.balance)
        return wallet

    async def get_balance(self, address: str) -> Decimal:
        address = normalize_address(address)
        async with self._scope(write=False) as repository:
            model = await repository.get_wallet(address)
            if model is None:
                raise AddressNotFoundError(f"wallet {address} does not exist")
            return from_minor_units(model.balance_cents)

    async def transfer(
        self,
        from_address: str,
        to_address: str,
        amount: Decimal | int | str,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> TransactionRecord:
        """Move ``amount`` from one wallet to another as a single transaction.

        Both balance updates and the log entry commit together or not at all.
        Rows are locked in ascending address order, so opposite-direction
        transfers between the same pair cannot deadlock.
        """
        source = normalize_address(from_address)
        target = normalize_address(to_address)
        amount_cents = to_minor_units(amount)
        if source == target:
            raise SelfTransferError(f"cannot transfer from a wallet to itself: {source}")
        self._check_cancelled(cancel_event)

        try:
            async with self._scope(write=True) as repository:
                wallets = await repository.lock_wallets((source, target))
                payer = wallets.get(source)
                if payer is None:
                    raise AddressNotFoundError(f"wallet {source} does not exist")
                if payer.balance_cents < amount_cents:
                    raise InsufficientFundsError(
                        f"balance {from_minor_units(payer.balance_cents)} "
                        f"cannot cover {from_minor_units(amount_cents)}"
                    )
                if target not in wallets:
                    raise AddressNotFoundError(f"wallet {target} does not exist")

                if await repository.debit(source, amount_cents) is None:
                    raise InsufficientFundsError(
                        f"balance cannot cover {from_minor_units(amount_cents)}"
                    )
                if await repository.credit(target, amount_cents) is None:
                    raise InvalidAmountError(
                        f"crediting {from_minor_units(amount_cents)} would exceed the maximum balance"
                    )

                model = await repository.add_transaction(
                    from_address=source,
                    to_address=target,
                    amount_cents=amount_cents,
                    created_at=datetime.now(timezone.utc),
                )
                record = self._to_record(model)
                self._check_cancelled(cancel_event)
        except (
            AddressNotFoundError,
            InsufficientFundsError,
            InvalidAmountError,
            OperationCancelledError,
        ) as exc:
            logger.warning("Transfer %s -> %s rejected: %s", source, target, exc)
            raise

        logger.info(
            "Transfer %s committed: %s -> %s amount=%s",
            record.id,
            source,
            target,
            record.amount,
        )
        return record

    async def get_last(self, count: int) -> list[TransactionRecord]:
        if count <= 0:
            return []
        # LIMIT is bound as a signed 64-bit integer.
        count = min(count, MAX_MINOR_UNITS)
        async with self._scope(write=False) as repository:
            rows = await repository.list_recent(count)
            return [self._to_record(row) for row in rows]

    async def is_empty(self) -> bool:
        async with self._scope(write=False) as repository:
            return await repository.count_wallets() == 0

    @staticmethod
    def _check_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError("transfer cancelled before commit")

    @staticmethod
    def _to_wallet(model: WalletModel) -> Wallet:
        return Wallet(
            address=model.address,
            balance=from_minor_units(model.balance_cents),
            created_at=_as_utc(model.created_at),
        )

    @staticmethod
    def _to_record(model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            from_address=model.from_address,
            to_address=model.to_address,
            amount=from_minor_units(model.amount_cents),
            created_at=_as_utc(model.created_at),
        )
