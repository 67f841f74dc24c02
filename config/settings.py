from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Data source
    data_source: str
    data_base_url: str
    data_path: str
    data_file: str
    request_timeout_seconds: int

    # Cache
    cache_db_path: str
    cache_key: str
    cache_ttl_seconds: int

    # Query behaviour
    search_debounce_ms: int
    strict_enums: bool

    log_level: str
    run_env: str

    @property
    def data_url(self) -> str:
        return self.data_base_url.rstrip("/") + "/" + self.data_path.lstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    ttl = int(os.getenv("CACHE_TTL_SECONDS", "300"))
    if ttl < 0:
        raise ValueError("CACHE_TTL_SECONDS must be >= 0")
    debounce_ms = int(os.getenv("SEARCH_DEBOUNCE_MS", "300"))
    if debounce_ms < 0:
        raise ValueError("SEARCH_DEBOUNCE_MS must be >= 0")
    return Settings(
        data_source=os.getenv("DATA_SOURCE", "http_csv"),
        data_base_url=os.getenv("DATA_BASE_URL", "http://localhost:3000"),
        data_path=os.getenv("DATA_PATH", "/data.csv"),
        data_file=os.getenv("DATA_FILE", "public/data.csv"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "30")),
        cache_db_path=os.getenv("CACHE_DB_PATH", "agency_cache.db"),
        cache_key=os.getenv("CACHE_KEY", "creators_cache"),
        cache_ttl_seconds=ttl,
        search_debounce_ms=debounce_ms,
        strict_enums=_as_bool(os.getenv("STRICT_ENUMS"), default=True),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
    )
