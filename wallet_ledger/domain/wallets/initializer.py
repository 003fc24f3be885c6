"""Bulk provisioning of freshly funded wallets."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Optional

from wallet_ledger.exceptions import InvalidCountError

from .addresses import AddressGenerator
from .service import WalletService

logger = logging.getLogger(__name__)

DEFAULT_SEED_BALANCE = Decimal("100.00")
DEFAULT_CONCURRENCY = 8


class WalletInitializer:
    """Creates many wallets through a bounded pool of async workers.

    Each wallet is committed in its own transaction. Creation is best effort:
    when a worker fails, wallets committed by the other workers stay in place and
    the first error recorded is raised once every worker has finished. Callers
    must therefore be prepared for a partially provisioned store.
    """

    def __init__(
        self,
        service: WalletService,
        *,
        seed_balance: Decimal = DEFAULT_SEED_BALANCE,
        concurrency: int = DEFAULT_CONCURRENCY,
        generator: Optional[AddressGenerator] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._service = service
        self._seed_balance = seed_balance
        self._concurrency = concurrency
        self._generator = generator or AddressGenerator()

    async def init_wall(self, count: int) -> list[str]:
        """Create ``count`` wallets funded with the seed balance; return their addresses."""
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise InvalidCountError(f"count must be a positive integer, got {count!r}")

        jobs: asyncio.Queue[int] = asyncio.Queue()
        for index in range(count):
            jobs.put_nowait(index)

        created: list[str] = []
        errors: list[Exception] = []
        errors_lock = asyncio.Lock()

        async def worker() -> None:
            while True:
                try:
                    jobs.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    address = self._generator.generate()
                    await self._service.create_wallet(address, self._seed_balance)
                except Exception as exc:
                    async with errors_lock:
                        errors.append(exc)
                    continue
                created.append(address)

        workers = min(self._concurrency, count)
        await asyncio.gather(*(worker() for _ in range(workers)))

        if errors:
            logger.error(
                "Wallet initialization finished with %d error(s); %d of %d wallets created",
                len(errors),
                len(created),
                count,
            )
            raise errors[0]

        logger.info("Initialized %d wallets with seed balance %s", count, self._seed_balance)
        return created
