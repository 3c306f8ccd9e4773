"""Load server settings from the environment and an optional TOML file.

Values are resolved in order (first found wins):
  1. Environment variables (a ``.env`` file in the working directory is loaded first)
  2. The TOML file named by ELIGIBILITY_CONFIG, else eligibility.toml in the working directory
  3. Built-in defaults

The TOML file may contain ``[database]``, ``[server]`` and ``[lookup]`` tables, e.g.::

    [database]
    url = "postgresql://user:pass@db/eligibility"
    pool_size = 10

    [server]
    port = 9000
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_DATABASE_URL = "sqlite:///./contracts.db"
DEFAULT_IDENTITY_MAX_LENGTH = 256

# (setting name, env var, toml table, toml key, type)
_SOURCES: list[tuple[str, str, str, str, type]] = [
    ("database_url", "DATABASE_URL", "database", "url", str),
    ("pool_size", "DB_POOL_SIZE", "database", "pool_size", int),
    ("max_overflow", "DB_MAX_OVERFLOW", "database", "max_overflow", int),
    ("pool_timeout", "DB_POOL_TIMEOUT", "database", "pool_timeout", float),
    ("pool_recycle", "DB_POOL_RECYCLE", "database", "pool_recycle", int),
    ("identity_max_length", "IDENTITY_MAX_LENGTH", "lookup", "identity_max_length", int),
    ("log_level", "LOG_LEVEL", "server", "log_level", str),
    ("host", "HOST", "server", "host", str),
    ("port", "PORT", "server", "port", int),
]


class Settings(BaseModel):
    """Runtime configuration for the eligibility server."""

    database_url: str = Field(default=DEFAULT_DATABASE_URL, description="SQLAlchemy database URL")
    pool_size: int = Field(default=5, ge=1, description="Connections kept open in the pool")
    max_overflow: int = Field(default=10, ge=0, description="Extra connections allowed beyond pool_size")
    pool_timeout: float = Field(default=30.0, gt=0, description="Seconds to wait for a free connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a pooled connection is replaced (-1 disables)")
    identity_max_length: int = Field(default=DEFAULT_IDENTITY_MAX_LENGTH, ge=1, description="Longest identity accepted by the lookup")
    log_level: str = Field(default="INFO", description="Root log level name")
    host: str = Field(default="127.0.0.1", description="Bind address for the HTTP server")
    port: int = Field(default=8080, ge=1, le=65535, description="Bind port for the HTTP server")


def _default_config_paths() -> list[Path]:
    """Return paths to check for eligibility.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get("ELIGIBILITY_CONFIG"):
        paths.append(Path(os.environ["ELIGIBILITY_CONFIG"]))
    paths.append(Path.cwd() / "eligibility.toml")
    return paths


def _load_toml() -> dict[str, Any]:
    for path in _default_config_paths():
        if path.is_file():
            with open(path, "rb") as f:
                return tomllib.load(f)
    return {}


def _coerce(source: str, raw: Any, kind: type) -> Any:
    try:
        return kind(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{source} must be {kind.__name__}, got {raw!r}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings loaded once per process; call ``get_settings.cache_clear()`` to reload."""
    return load_settings()


def load_settings() -> Settings:
    """Build Settings from environment variables, the TOML file and defaults.

    Raises:
        ValueError: If a value cannot be converted to the setting's type,
            naming the offending variable or TOML key.
    """
    load_dotenv(Path.cwd() / ".env")
    file_config = _load_toml()
    values: dict[str, Any] = {}
    for name, env_var, table, key, kind in _SOURCES:
        raw_env = os.getenv(env_var)
        if raw_env:
            values[name] = _coerce(env_var, raw_env, kind)
            continue
        section = file_config.get(table)
        if isinstance(section, dict) and key in section:
            values[name] = _coerce(f"[{table}].{key}", section[key], kind)
    return Settings(**values)
