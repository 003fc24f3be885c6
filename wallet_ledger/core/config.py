"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./wallet.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # Seconds a write waits on a held lock before surfacing StorageBusy.
    busy_timeout: float = Field(default=5.0, gt=0)


class LedgerSettings(BaseModel):
    seed_balance: Decimal = Field(default=Decimal("100.00"), gt=0)
    initial_wallets: int = Field(default=10, ge=0)
    init_concurrency: int = Field(default=8, ge=1)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["local", "development", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Wallet Ledger"
    api_prefix: str = "/api"

    database: DatabaseSettings = DatabaseSettings()
    ledger: LedgerSettings = LedgerSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def seed_balance(self) -> Decimal:
        return self.ledger.seed_balance

    @property
    def log_level(self) -> str:
        if self.debug or self.environment == "local":
            return "DEBUG"
        return self.logging.level


@lru_cache()
def get_settings() -> Settings:
    return Settings()
