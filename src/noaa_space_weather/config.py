"""Configuracao centralizada via variaveis de ambiente."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

VERSION = "0.1.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

USER_AGENT = f"NOAA-Space-Weather-MCP/{VERSION} (Amateur Radio Propagation Tool)"


@dataclass(frozen=True)
class CacheConfig:
    ttl_seconds: float = field(
        default_factory=lambda: float(os.getenv("CACHE_TTL_SECONDS", "300"))
    )
    max_entries: int = field(
        default_factory=lambda: int(os.getenv("CACHE_MAX_ENTRIES", "100"))
    )

    def __post_init__(self) -> None:
        import logging

        if self.ttl_seconds <= 0 or self.max_entries <= 0:
            logging.getLogger("noaa_space_weather.config").warning(
                "CacheConfig com valores nao positivos (ttl=%s, max=%s). "
                "O cache pode descartar todas as entradas.",
                self.ttl_seconds,
                self.max_entries,
            )


@dataclass(frozen=True)
class HttpConfig:
    user_agent: str = field(
        default_factory=lambda: os.getenv("NOAA_USER_AGENT", USER_AGENT)
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("NOAA_HTTP_TIMEOUT", "30"))
    )


@dataclass(frozen=True)
class ServerConfig:
    host: str = field(default_factory=lambda: os.getenv("MCP_HOST", "0.0.0.0"))
    port: int = field(
        default_factory=lambda: int(os.getenv("MCP_PORT", "3000"))
    )


@dataclass(frozen=True)
class Settings:
    cache: CacheConfig = field(default_factory=CacheConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_settings() -> Settings:
    """Carrega settings a partir de variaveis de ambiente."""
    return Settings()
