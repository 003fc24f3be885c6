"""Pydantic schemas used by the HTTP interface."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WalletCreateRequest(BaseModel):
    address: Optional[str] = None
    balance: Decimal


class WalletResponse(BaseModel):
    address: str
    balance: Decimal
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
    address: str
    balance: Decimal


class TransferRequest(BaseModel):
    from_address: str = Field(..., alias="from")
    to_address: str = Field(..., alias="to")
    amount: Decimal

    model_config = ConfigDict(populate_by_name=True)


class TransactionResponse(BaseModel):
    id: int
    from_address: str = Field(..., serialization_alias="from")
    to_address: str = Field(..., serialization_alias="to")
    amount: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    total: int
    transactions: list[TransactionResponse]


class WalletInitRequest(BaseModel):
    count: int


class WalletInitResponse(BaseModel):
    total: int
    addresses: list[str]


class ErrorResponse(BaseModel):
    detail: str
    code: str
