"""Application settings, read from BOND_LEDGER_* environment variables or a .env file."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.core.recovery import DEFAULT_PAGE_SIZE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOND_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Front-end origins allowed to call /api/*",
    )
    log_level: str = Field("INFO", description="Root logging level name")
    currency_unit: str = Field("원", description="Suffix appended to formatted amounts")
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=200, description="Default assignment rows per page")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
