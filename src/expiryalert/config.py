"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))
ENV_PREFIX = "EXPIRYALERT_"


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/expiryalert.db"),
        description="SQLite database holding the persisted item lists.",
    )
    storage_backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Key-value backend used for persistence (sqlite/memory).",
    )
    shelf_life_path: Optional[Path] = Field(
        default=None,
        description="Optional JSON file of name -> days entries merged over the built-in table.",
    )
    near_expiry_days: int = Field(
        default=3,
        ge=0,
        description="Items expiring within this many days (inclusive) are flagged as near.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for mutating endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip().strip("\"'")
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(name: str) -> Optional[str]:
        key = ENV_PREFIX + name
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (backend := _env("STORAGE_BACKEND")):
        normalized = backend.strip().lower()
        if normalized in {"sqlite", "memory"}:
            payload["storage_backend"] = normalized
    if (shelf_life_path := _env("SHELF_LIFE_PATH")):
        payload["shelf_life_path"] = Path(shelf_life_path)
    if (near_days := _env("NEAR_EXPIRY_DAYS")):
        try:
            parsed = int(near_days)
        except ValueError:
            parsed = -1
        if parsed >= 0:
            payload["near_expiry_days"] = parsed
    if (api_token := _env("API_TOKEN")):
        payload["api_token"] = api_token
    if (log_level := _env("LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
