"""FastAPI application factory and start-up wiring for the wallet ledger."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from wallet_ledger import __version__
from wallet_ledger.core.config import Settings, get_settings
from wallet_ledger.core.logging import configure_logging
from wallet_ledger.domain.wallets import WalletInitializer, WalletService
from wallet_ledger.exceptions import LedgerError
from wallet_ledger.infrastructure.database import build_engine, build_session_factory, init_db
from wallet_ledger.interfaces.http import create_api_router
from wallet_ledger.interfaces.http.errors import ledger_error_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    await init_db(app.state.engine)

    wanted = settings.ledger.initial_wallets
    if wanted and await app.state.wallet_service.is_empty():
        logger.info("Wallet store is empty, provisioning %d wallets", wanted)
        try:
            await app.state.wallet_initializer.init_wall(wanted)
        except LedgerError as exc:
            # Seeding is best effort; whatever was committed stays.
            logger.error("Start-up wallet provisioning incomplete: %s", exc)
    yield
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Wallet ledger with atomic transfers",
        version=__version__,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    service = WalletService(
        build_session_factory(engine),
        lock_timeout=settings.database.busy_timeout,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.wallet_service = service
    app.state.wallet_initializer = WalletInitializer(
        service,
        seed_balance=settings.ledger.seed_balance,
        concurrency=settings.ledger.init_concurrency,
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", summary="Liveness check")
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
