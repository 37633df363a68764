"""Tests para config.py: leitura de env vars e guardrails."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

from noaa_space_weather.config import CacheConfig, HttpConfig, ServerConfig, load_settings

_ENV_KEYS = [
    "CACHE_TTL_SECONDS", "CACHE_MAX_ENTRIES", "NOAA_USER_AGENT",
    "NOAA_HTTP_TIMEOUT", "MCP_HOST", "MCP_PORT",
]


def _sem_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}


class TestCacheConfig:
    def test_le_de_env_vars(self):
        env = {"CACHE_TTL_SECONDS": "60", "CACHE_MAX_ENTRIES": "200"}
        with patch.dict(os.environ, env, clear=False):
            cfg = CacheConfig()
            assert cfg.ttl_seconds == 60.0
            assert cfg.max_entries == 200

    def test_defaults_quando_env_ausente(self):
        with patch.dict(os.environ, _sem_env(), clear=True):
            cfg = CacheConfig()
            assert cfg.ttl_seconds == 300
            assert cfg.max_entries == 100

    def test_frozen(self):
        cfg = CacheConfig()
        try:
            cfg.max_entries = 1  # type: ignore[misc]
            assert False, "Deveria ser frozen"
        except AttributeError:
            pass

    def test_warning_com_valores_invalidos(self, caplog):
        with caplog.at_level(logging.WARNING, logger="noaa_space_weather.config"):
            CacheConfig(ttl_seconds=0, max_entries=10)
        assert "nao positivos" in caplog.text

    def test_sem_warning_com_valores_validos(self, caplog):
        with caplog.at_level(logging.WARNING, logger="noaa_space_weather.config"):
            CacheConfig(ttl_seconds=0.1, max_entries=1)
        assert "nao positivos" not in caplog.text


class TestSettings:
    def test_defaults(self):
        with patch.dict(os.environ, _sem_env(), clear=True):
            settings = load_settings()
            assert settings.server == ServerConfig(host="0.0.0.0", port=3000)
            assert settings.http.timeout_seconds == 30
            assert settings.http.user_agent.startswith("NOAA-Space-Weather-MCP/")

    def test_http_de_env(self):
        env = {"NOAA_USER_AGENT": "ham/1.0", "NOAA_HTTP_TIMEOUT": "2.5"}
        with patch.dict(os.environ, env, clear=False):
            cfg = HttpConfig()
            assert cfg.user_agent == "ham/1.0"
            assert cfg.timeout_seconds == 2.5
