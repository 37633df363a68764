"""Metrics collector para buscas na API NOAA."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EndpointMetrics:
    fetch_count: int = 0
    total_time_ms: float = 0.0


@dataclass
class FetchMetrics:
    total_fetches: int = 0
    total_time_ms: float = 0.0
    by_endpoint: dict[str, EndpointMetrics] = field(default_factory=dict)
    cache_hits: int = 0
    cache_misses: int = 0
    stale_fallbacks: int = 0
    failures: int = 0


class MetricsCollector:
    """Coleta metricas de cache e de latencia das buscas NOAA."""

    def __init__(self) -> None:
        self._total_fetches = 0
        self._total_time_ms = 0.0
        self._by_endpoint: dict[str, EndpointMetrics] = {}
        self._cache_hits = 0
        self._cache_misses = 0
        self._stale_fallbacks = 0
        self._failures = 0

    def record_fetch(self, endpoint: str, time_ms: float) -> None:
        self._total_fetches += 1
        self._total_time_ms += time_ms
        m = self._by_endpoint.get(endpoint)
        if m:
            m.fetch_count += 1
            m.total_time_ms += time_ms
        else:
            self._by_endpoint[endpoint] = EndpointMetrics(1, time_ms)

    def record_cache(self, hit: bool) -> None:
        if hit:
            self._cache_hits += 1
        else:
            self._cache_misses += 1

    def record_stale(self) -> None:
        self._stale_fallbacks += 1

    def record_failure(self) -> None:
        self._failures += 1

    @property
    def snapshot(self) -> FetchMetrics:
        return FetchMetrics(
            total_fetches=self._total_fetches,
            total_time_ms=self._total_time_ms,
            by_endpoint={
                k: EndpointMetrics(v.fetch_count, v.total_time_ms)
                for k, v in self._by_endpoint.items()
            },
            cache_hits=self._cache_hits,
            cache_misses=self._cache_misses,
            stale_fallbacks=self._stale_fallbacks,
            failures=self._failures,
        )
