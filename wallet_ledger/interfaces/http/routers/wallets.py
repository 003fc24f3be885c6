"""Wallet balance, transfer and history endpoints."""

from fastapi import APIRouter, Depends, Query

from wallet_ledger.domain.wallets import WalletInitializer, WalletService
from wallet_ledger.domain.wallets.addresses import AddressGenerator
from wallet_ledger.interfaces.http.deps import get_wallet_initializer, get_wallet_service
from wallet_ledger.schemas import (
    BalanceResponse,
    TransactionListResponse,
    TransactionResponse,
    TransferRequest,
    WalletCreateRequest,
    WalletInitRequest,
    WalletInitResponse,
    WalletResponse,
)

router = APIRouter()


@router.get("/wallet/{address}/balance", response_model=BalanceResponse, summary="Get wallet balance")
async def get_balance(address: str, service: WalletService = Depends(get_wallet_service)):
    balance = await service.get_balance(address)
    return BalanceResponse(address=address.lower(), balance=balance)


@router.post("/wallet", response_model=WalletResponse, status_code=201, summary="Create a wallet")
async def create_wallet(
    payload: WalletCreateRequest,
    service: WalletService = Depends(get_wallet_service),
):
    address = payload.address if payload.address is not None else AddressGenerator().generate()
    wallet = await service.create_wallet(address, payload.balance)
    return WalletResponse.model_validate(wallet)


@router.post("/send", response_model=TransactionResponse, summary="Transfer funds between wallets")
async def send(payload: TransferRequest, service: WalletService = Depends(get_wallet_service)):
    record = await service.transfer(payload.from_address, payload.to_address, payload.amount)
    return TransactionResponse.model_validate(record)


@router.get("/transactions", response_model=TransactionListResponse, summary="List recent transfers")
async def get_last(
    count: int = Query(10, description="Number of most recent transfers"),
    service: WalletService = Depends(get_wallet_service),
):
    records = await service.get_last(count)
    return TransactionListResponse(
        total=len(records),
        transactions=[TransactionResponse.model_validate(record) for record in records],
    )


@router.post("/wallets/init", response_model=WalletInitResponse, status_code=201, summary="Provision funded wallets")
async def init_wallets(
    payload: WalletInitRequest,
    initializer: WalletInitializer = Depends(get_wallet_initializer),
):
    addresses = await initializer.init_wall(payload.count)
    return WalletInitResponse(total=len(addresses), addresses=addresses)
