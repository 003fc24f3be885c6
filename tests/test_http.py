# tests/test_http.py
from decimal import Decimal

import httpx
import pytest

from tests.conftest import make_settings
from wallet_ledger.infrastructure.database import init_db
from wallet_ledger.interfaces.http.errors import status_for
from wallet_ledger.exceptions import (
    AddressNotFoundError,
    InsufficientFundsError,
    InvalidAddressError,
    SelfTransferError,
    StorageBusyError,
    StorageFailureError,
)
from wallet_ledger.main import create_app


@pytest.fixture
async def app(tmp_path):
    app = create_app(make_settings(tmp_path / "http.db"))
    await init_db(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create(client, balance="100.00", address=None) -> str:
    payload = {"balance": balance}
    if address is not None:
        payload["address"] = address
    response = await client.post("/api/wallet", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["address"]


async def test_create_wallet_and_get_balance(client):
    address = await create(client, "12.34")
    response = await client.get(f"/api/wallet/{address}/balance")
    assert response.status_code == 200
    assert response.json() == {"address": address, "balance": "12.34"}


async def test_get_balance_errors(client):
    response = await client.get("/api/wallet/short_address/balance")
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_address"

    response = await client.get(f"/api/wallet/{'a' * 64}/balance")
    assert response.status_code == 404
    assert response.json()["code"] == "address_not_found"


async def test_create_duplicate_wallet_conflicts(client):
    address = await create(client)
    response = await client.post("/api/wallet", json={"address": address, "balance": "1"})
    assert response.status_code == 409


async def test_send_and_list_transactions(client):
    a = await create(client, "100.00")
    b = await create(client, "50.00")

    response = await client.post("/api/send", json={"from": a, "to": b, "amount": "30.00"})
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["from"] == a
    assert body["to"] == b
    assert Decimal(body["amount"]) == Decimal("30.00")

    balances = [
        (await client.get(f"/api/wallet/{addr}/balance")).json()["balance"] for addr in (a, b)
    ]
    assert balances == ["70.00", "80.00"]

    response = await client.get("/api/transactions", params={"count": 5})
    assert response.status_code == 200
    listing = response.json()
    assert listing["total"] == 1
    assert listing["transactions"][0]["id"] == body["id"]


async def test_send_rejections(client):
    a = await create(client, "20.00")
    b = await create(client, "50.00")

    response = await client.post("/api/send", json={"from": a, "to": b, "amount": "30.00"})
    assert response.status_code == 400
    assert response.json()["code"] == "insufficient_funds"

    response = await client.post("/api/send", json={"from": a, "to": b, "amount": "-1"})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_amount"

    response = await client.post("/api/send", json={"from": a, "to": "f" * 64, "amount": "1"})
    assert response.status_code == 404

    response = await client.post("/api/send", content=b"invalid json")
    assert response.status_code == 422


async def test_transactions_non_positive_count_is_empty(client):
    response = await client.get("/api/transactions", params={"count": 0})
    assert response.status_code == 200
    assert response.json() == {"total": 0, "transactions": []}

    response = await client.get("/api/transactions", params={"count": "invalid"})
    assert response.status_code == 422

    response = await client.get("/api/transactions", params={"count": 10**20})
    assert response.status_code == 200
    assert response.json() == {"total": 0, "transactions": []}


async def test_oversized_balance_is_rejected(client):
    response = await client.post("/api/wallet", json={"address": "a" * 64, "balance": "1e20"})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_amount"


async def test_init_wallets(client):
    response = await client.post("/api/wallets/init", json={"count": 3})
    assert response.status_code == 201
    addresses = response.json()["addresses"]
    assert len(set(addresses)) == 3

    response = await client.post("/api/wallets/init", json={"count": 0})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_count"


async def test_startup_provisions_wallets_into_empty_store(tmp_path):
    settings = make_settings(tmp_path / "startup.db")
    settings.ledger.initial_wallets = 4
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        service = app.state.wallet_service
        assert not await service.is_empty()
        async with service._scope(write=False) as repository:
            assert await repository.count_wallets() == 4


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidAddressError("x"), 400),
        (SelfTransferError("x"), 400),
        (InsufficientFundsError("x"), 400),
        (AddressNotFoundError("x"), 404),
        (StorageBusyError("x"), 503),
        (StorageFailureError("x"), 500),
    ],
)
def test_status_mapping(error, status_code):
    assert status_for(error) == status_code
