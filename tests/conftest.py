# tests/conftest.py
from decimal import Decimal
from pathlib import Path

import pytest

from wallet_ledger.core.config import DatabaseSettings, LedgerSettings, Settings
from wallet_ledger.domain.wallets import AddressGenerator, WalletInitializer, WalletService
from wallet_ledger.infrastructure.database import build_engine, build_session_factory, init_db


def make_settings(db_path: Path, **database) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{db_path}", **database),
        ledger=LedgerSettings(seed_balance=Decimal("100.00"), initial_wallets=0, init_concurrency=4),
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path / "ledger.db")


@pytest.fixture
async def engine(settings: Settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def service(session_factory, settings: Settings) -> WalletService:
    return WalletService(session_factory, lock_timeout=settings.database.busy_timeout)


@pytest.fixture
def initializer(service: WalletService) -> WalletInitializer:
    return WalletInitializer(service, seed_balance=Decimal("100.00"), concurrency=4)


@pytest.fixture
def new_address():
    generator = AddressGenerator()
    return generator.generate


@pytest.fixture
def make_wallet(service: WalletService, new_address):
    async def _make(balance) -> str:
        address = new_address()
        await service.create_wallet(address, balance)
        return address

    return _make
