"""Mini README: Runtime settings for the wallet ledger.

Structure:
    * WalletSettings - pydantic-settings model read from ``WALLET_*`` variables.
    * get_settings - cached accessor used by the command line wrapper.

The service itself takes explicit paths; only the CLI consults these
settings to decide where dumps live and how chatty logging should be.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WalletSettings(BaseSettings):
    """Runtime configuration for the wallet ledger."""

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label, informational only.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding accounts.dump, payments.dump and favorites.dump.",
    )
    legacy_export_filename: str = Field(
        "accounts.txt",
        description="File name used by the single-file account export inside data_directory.",
        min_length=1,
    )
    log_level: str = Field(
        "INFO",
        description="Root logger level name, e.g. DEBUG or WARNING.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        """Expand user directories; the directory is created on first export."""

        return Path(value).expanduser().resolve()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalised = value.strip().upper()
        if not isinstance(logging.getLevelName(normalised), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> WalletSettings:
    """Return cached settings, ensuring consistent configuration across commands."""

    return WalletSettings()
