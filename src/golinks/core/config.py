"""Nested pydantic-settings configuration for golinks.

Each sub-config reads its own ``GOLINKS_<GROUP>_*`` env vars::

    export GOLINKS_STORE_PATH=/var/lib/golinks/links.txt
    export GOLINKS_STORE_FUZZY=true
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class StoreConfig(BaseSettings):
    """Link store configuration.

    Env vars use ``GOLINKS_STORE_`` prefix.
    """

    model_config = {"env_prefix": "GOLINKS_STORE_"}

    backend: Literal["file", "memory"] = "file"
    path: Path = Path("./links.txt")
    fuzzy: bool = False
    compact_on_open: bool = False
    sync_writes: bool = False


class ServerConfig(BaseSettings):
    """HTTP server configuration.

    Env vars use ``GOLINKS_SERVER_`` prefix.
    """

    model_config = {"env_prefix": "GOLINKS_SERVER_"}

    host: str = "127.0.0.1"
    port: int = Field(default=8968, ge=1, le=65535)
    title: str = "golinks"


class AuthConfig(BaseSettings):
    """API key authentication for link writes.

    Env vars use ``GOLINKS_AUTH_`` prefix::

        export GOLINKS_AUTH_ENABLED=true
        export GOLINKS_AUTH_API_KEYS='["secret"]'
    """

    model_config = {"env_prefix": "GOLINKS_AUTH_"}

    enabled: bool = False
    api_keys: list[str] = Field(default_factory=list)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``GOLINKS_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "GOLINKS_OBSERVABILITY_"}

    service_name: str = "golinks"
    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
