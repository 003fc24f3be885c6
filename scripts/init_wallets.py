#!/usr/bin/env python3
"""
Provision freshly funded wallets in the configured database.

Example:
    python scripts/init_wallets.py --count 10 --concurrency 4
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from decimal import Decimal
from typing import Optional

from wallet_ledger.core.config import get_settings
from wallet_ledger.core.logging import configure_logging
from wallet_ledger.domain.wallets import WalletInitializer, WalletService
from wallet_ledger.exceptions import LedgerError
from wallet_ledger.infrastructure.database import get_engine, init_db


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create funded wallets")
    parser.add_argument("--count", type=int, default=settings.ledger.initial_wallets, help="number of wallets")
    parser.add_argument(
        "--seed-balance",
        type=Decimal,
        default=settings.ledger.seed_balance,
        help="balance minted into every new wallet",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=settings.ledger.init_concurrency,
        help="number of concurrent workers (1 creates wallets sequentially)",
    )
    return parser.parse_args(argv)


async def create_wallets(args: argparse.Namespace) -> int:
    configure_logging(get_settings())
    await init_db()

    initializer = WalletInitializer(
        WalletService.default(),
        seed_balance=args.seed_balance,
        concurrency=args.concurrency,
    )
    try:
        addresses = await initializer.init_wall(args.count)
    except LedgerError as exc:
        print(f"wallet provisioning failed ({exc.code}): {exc}", file=sys.stderr)
        return 1
    finally:
        await get_engine().dispose()

    for address in addresses:
        print(address)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    return asyncio.run(create_wallets(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
