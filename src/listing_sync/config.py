"""Application settings loaded from environment variables (and an optional .env file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from listing_sync.catalog import PUBLIC_COLLECTION_KEYS
from listing_sync.errors import ConfigError

API_KEY_ENV = "NOTION_API_KEY"
MASTER_COLLECTION_ENV = "NOTION_MASTER_DB_ID"


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _int_env(key: str, default: int) -> int:
    raw = _env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(invalid={key: f"{raw!r} is not an integer"}) from None


def collection_env_var(key: str) -> str:
    """Return the env var holding the collection id for a public collection key."""
    return f"NOTION_{key.upper()}_DB_ID"


@dataclass(frozen=True)
class NotionConfig:
    api_key: str = field(default_factory=lambda: _env(API_KEY_ENV))
    timeout_ms: int = field(default_factory=lambda: _int_env("NOTION_TIMEOUT_MS", 60000))


@dataclass(frozen=True)
class CollectionConfig:
    """Identifiers of the master collection and the six public collections."""

    master: str = field(default_factory=lambda: _env(MASTER_COLLECTION_ENV))
    public: dict[str, str] = field(
        default_factory=lambda: {key: _env(collection_env_var(key)) for key in PUBLIC_COLLECTION_KEYS}
    )

    def missing(self) -> list[str]:
        """Return the env var names of every unset collection id, master first."""
        names = [] if self.master else [MASTER_COLLECTION_ENV]
        names.extend(collection_env_var(key) for key in PUBLIC_COLLECTION_KEYS if not self.public.get(key))
        return names


@dataclass(frozen=True)
class AppConfig:
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE"))
    catalog_path: str = field(default_factory=lambda: _env("CATALOG_SCHEMA_PATH"))


@dataclass(frozen=True)
class Settings:
    notion: NotionConfig = field(default_factory=NotionConfig)
    collections: CollectionConfig = field(default_factory=CollectionConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def missing(self) -> list[str]:
        """Return the names of all required env vars that are unset."""
        names = [] if self.notion.api_key else [API_KEY_ENV]
        names.extend(self.collections.missing())
        return names

    def require_complete(self) -> None:
        """Raise ``ConfigError`` naming every missing credential or collection id."""
        missing = self.missing()
        if missing:
            raise ConfigError(missing)


def load_settings() -> Settings:
    """Load settings, reading a .env file from the working directory first when one exists.

    Raises ``ConfigError`` when an optional setting holds a value that cannot be used.
    """
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings()
    level = settings.app.log_level
    if level.upper() not in logging.getLevelNamesMapping():
        raise ConfigError(invalid={"LOG_LEVEL": f"unknown level {level!r}"})
    return settings
