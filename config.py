"""Runtime configuration, read once from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

SUPPORTED_CURRENCIES = ("EGP", "USD", "EUR", "GBP", "SAR", "AED")
SUPPORTED_LANGUAGES = ("en", "ar")


def _env_list(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str
    default_currency: str
    default_language: str
    cors_origins: Tuple[str, ...]
    log_level: str
    api_url: str


def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("FARAID_DATABASE_URL", "sqlite:///./faraid.db"),
        default_currency=os.getenv("FARAID_DEFAULT_CURRENCY", "USD").strip().upper(),
        default_language=os.getenv("FARAID_DEFAULT_LANGUAGE", "en").strip().lower(),
        cors_origins=_env_list("FARAID_CORS_ORIGINS", "http://localhost,http://localhost:3000"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        api_url=os.getenv("FARAID_API_URL", "http://127.0.0.1:8000"),
    )


SETTINGS = get_settings()
