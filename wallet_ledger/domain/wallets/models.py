"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True, frozen=True)
class Wallet:
    address: str
    balance: Decimal
    created_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class TransactionRecord:
    id: int
    from_address: str
    to_address: str
    amount: Decimal
    created_at: datetime
