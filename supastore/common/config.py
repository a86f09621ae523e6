from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

SUPABASE_URL_TEMPLATE = "https://{reference_id}.supabase.co/storage/v1"


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def storage_url_for(reference_id: str) -> str:
    return SUPABASE_URL_TEMPLATE.format(reference_id=reference_id)


@dataclass
class Settings:
    SUPABASE_API_KEY: str | None = None
    SUPABASE_REFERENCE_ID: str | None = None
    STORAGE_URL: str | None = None
    STORAGE_TRACE_HTTP: bool = False
    STORAGE_ENABLE_METRICS: bool = True

    def __post_init__(self) -> None:
        if self.STORAGE_URL:
            scheme = self.STORAGE_URL.split(":", 1)[0].lower()
            if scheme not in {"http", "https"}:
                raise ValueError("STORAGE_URL must be an http(s) URL.")
            self.STORAGE_URL = self.STORAGE_URL.rstrip("/")

    @property
    def storage_url(self) -> str | None:
        """Explicit STORAGE_URL first, otherwise the hosted project URL."""
        if self.STORAGE_URL:
            return self.STORAGE_URL
        if self.SUPABASE_REFERENCE_ID:
            return storage_url_for(self.SUPABASE_REFERENCE_ID)
        return None

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            SUPABASE_API_KEY=_blank_to_none(os.environ.get("SUPABASE_API_KEY")),
            SUPABASE_REFERENCE_ID=_blank_to_none(
                os.environ.get("SUPABASE_REFERENCE_ID")
            ),
            STORAGE_URL=_blank_to_none(os.environ.get("STORAGE_URL")),
            STORAGE_TRACE_HTTP=_as_bool(
                os.environ.get("STORAGE_TRACE_HTTP"), cls.STORAGE_TRACE_HTTP
            ),
            STORAGE_ENABLE_METRICS=_as_bool(
                os.environ.get("STORAGE_ENABLE_METRICS"), cls.STORAGE_ENABLE_METRICS
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
