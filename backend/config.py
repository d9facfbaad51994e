"""
Runtime settings for the product service, read from the environment.

Every setting has a default so the service runs with no environment at all.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from backend.corpus import DEFAULT_PRODUCTS_FILE

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _read_env_int(name: str, default: int) -> int:
    """Read env var as int; return default if unset or invalid."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _read_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


@dataclass(frozen=True)
class AppConfig:
    """Service settings. Overridable via env vars."""

    products_file: Path = DEFAULT_PRODUCTS_FILE
    serialize_writes: bool = False
    static_dir: Path = Path("public")
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build config from env vars, falling back to defaults."""
        return cls(
            products_file=Path(os.getenv("PRODUCTS_DATA_FILE", str(DEFAULT_PRODUCTS_FILE))),
            serialize_writes=_read_env_bool("PRODUCTS_SERIALIZE_WRITES", False),
            static_dir=Path(os.getenv("STATIC_DIR", "public")),
            host=os.getenv("HOST", "127.0.0.1"),
            port=_read_env_int("PORT", 3001),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
