"""Cache em memoria com TTL, limite de entradas e leitura de dados expirados."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from ..config import CacheConfig
from ..shared.log import get_logger

log = get_logger("noaa.cache")


def now_ms() -> int:
    """Relogio de parede em milissegundos."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    fetched_at: int
    expires_at: int

    def is_expired(self, now: int) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    size: int
    max_entries: int
    ttl_seconds: float


class CacheStore:
    """Cache simples baseado em dict, sem persistencia em disco.

    - Expiracao preguicosa: entradas vencidas so saem no ``get`` ou no
      ``invalidate_all``, entao ``size`` pode incluir entradas vencidas.
    - Despejo por capacidade remove a entrada com menor ``fetched_at``
      (leituras nao renovam a entrada; nao e LRU).
    - ``get_stale`` ignora a validade, usado como fallback quando a API falha.
    """

    def __init__(
        self,
        config: CacheConfig,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or now_ms
        self._entries: dict[str, CacheEntry] = {}

    @property
    def config(self) -> CacheConfig:
        return self._config

    def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            log.debug("Entrada expirada removida: %s", key)
            return None
        return entry

    def set(
        self, key: str, data: Any, ttl_override_seconds: float | None = None
    ) -> None:
        ttl = (
            ttl_override_seconds
            if ttl_override_seconds is not None
            else self._config.ttl_seconds
        )
        now = self._clock()
        entry = CacheEntry(
            data=data, fetched_at=now, expires_at=now + int(ttl * 1000)
        )

        # Sobrescrita de chave existente tambem despeja quando no limite.
        if len(self._entries) >= self._config.max_entries:
            self._evict_oldest()

        self._entries[key] = entry

    def _evict_oldest(self) -> None:
        oldest_key: str | None = None
        oldest_time = float("inf")

        for key, entry in self._entries.items():
            if entry.fetched_at < oldest_time:
                oldest_time = entry.fetched_at
                oldest_key = key

        if oldest_key is not None:
            del self._entries[oldest_key]
            log.debug("Despejada entrada mais antiga: %s", oldest_key)

    def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def invalidate_all(self) -> None:
        self._entries.clear()

    def get_stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._entries),
            max_entries=self._config.max_entries,
            ttl_seconds=self._config.ttl_seconds,
        )

    def get_stale(self, key: str) -> CacheEntry | None:
        """Retorna a entrada mesmo vencida, sem remove-la."""
        return self._entries.get(key)

    def peek(self, key: str) -> CacheEntry | None:
        """Como ``get``, mas mantem a entrada vencida para um ``get_stale`` posterior."""
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry
