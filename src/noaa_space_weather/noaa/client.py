"""NoaaClient: ponto de entrada para dados de clima espacial NOAA SWPC.

- DI via construtor (cache, http, metrics)
- Busca com cache e fallback em FetchOrchestrator
- Converte payloads NOAA em registros e aplica QueryOptions
"""

from __future__ import annotations

import asyncio
import math
from typing import Any

import httpx

from ..config import HttpConfig, Settings
from ..shared.log import get_logger
from .cache import CacheStats, CacheStore, now_ms
from .endpoints import cache_key
from .fetcher import FetchOrchestrator
from .metrics import FetchMetrics, MetricsCollector
from .query import query_data
from .types import (
    Alert,
    FetchResult,
    KpIndex,
    QueryOptions,
    SolarWind,
    SpaceWeatherSummary,
)

log = get_logger("noaa.client")

_ULTIMO = QueryOptions(limit=1, sort_by="time_tag", sort_order="desc")


def _float(value: Any) -> float:
    """parseFloat tolerante: vazio, None ou texto invalido viram NaN."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _float_or_zero(value: Any) -> float:
    num = _float(value)
    return 0.0 if math.isnan(num) else num


def _int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _rows(payload: Any) -> list[list[Any]]:
    """Payload tabular NOAA: lista de listas, primeira linha e cabecalho."""
    if not isinstance(payload, list) or not payload:
        return []
    return [row for row in payload[1:] if isinstance(row, list) and row]


def _apply(records: list[Any], options: QueryOptions | None) -> list[Any]:
    return query_data(records, options) if options else records


class NoaaClient:
    """Cliente para a API NOAA de clima espacial.

    Uso:
        from noaa_space_weather.config import load_settings
        from noaa_space_weather.noaa import NoaaClient

        client = NoaaClient.from_settings(load_settings())
        kp = await client.get_kp_index(QueryOptions(limit=8))
    """

    def __init__(
        self,
        cache: CacheStore,
        http: httpx.AsyncClient | None = None,
        http_config: HttpConfig | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._cache = cache
        self._http = http or httpx.AsyncClient()
        self._metrics = metrics or MetricsCollector()
        self._fetcher = FetchOrchestrator(
            cache, self._http, http_config, self._metrics
        )
        log.info("NoaaClient inicializado")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        cache: CacheStore | None = None,
        metrics: MetricsCollector | None = None,
    ) -> NoaaClient:
        """Cria NoaaClient a partir de Settings."""
        return cls(
            cache or CacheStore(settings.cache),
            httpx.AsyncClient(),
            settings.http,
            metrics or MetricsCollector(),
        )

    @property
    def closed(self) -> bool:
        return self._http.is_closed

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def metrics(self) -> FetchMetrics:
        return self._metrics.snapshot

    async def fetch_endpoint(
        self,
        endpoint: str,
        force_refresh: bool = False,
        ttl_override: float | None = None,
    ) -> FetchResult:
        return await self._fetcher.fetch(endpoint, force_refresh, ttl_override)

    async def get_xray_flux(
        self, options: QueryOptions | None = None, force_refresh: bool = False
    ) -> FetchResult:
        """Fluxo de raios X do GOES (flares solares)."""
        result = await self.fetch_endpoint("XRAY_FLUX", force_refresh)
        if not result.success or not isinstance(result.data, list):
            return result
        # registros sem fluxo numerico sao descartados
        xray = [
            item
            for item in result.data
            if isinstance(item, dict)
            and isinstance(item.get("flux"), (int, float))
            and not isinstance(item.get("flux"), bool)
        ]
        result.data = _apply(xray, options)
        return result

    async def get_kp_index(
        self, options: QueryOptions | None = None, force_refresh: bool = False
    ) -> FetchResult:
        """Indice Kp planetario; payload tabular convertido em registros."""
        result = await self.fetch_endpoint("KP_INDEX", force_refresh)
        if not result.success or result.data is None:
            result.data = None
            return result

        kp_data: list[KpIndex] = [
            {
                "time_tag": row[0],
                "kp": _float(row[1] if len(row) > 1 else None),
                "a_running": _float(row[2] if len(row) > 2 else None),
                "station_count": _int(row[3] if len(row) > 3 else None),
            }
            for row in _rows(result.data)
        ]
        result.data = _apply(kp_data, options)
        return result

    async def get_solar_wind(
        self, options: QueryOptions | None = None, force_refresh: bool = False
    ) -> FetchResult:
        """Vento solar: plasma + campo magnetico, unidos por time_tag."""
        plasma, mag = await asyncio.gather(
            self.fetch_endpoint("SOLAR_WIND_REALTIME", force_refresh),
            self.fetch_endpoint("SOLAR_WIND_MAG", force_refresh),
        )

        if not (plasma.success and plasma.data and mag.success and mag.data):
            return FetchResult(
                success=False,
                error="Falha ao obter dados de vento solar",
                source="fetch",
            )

        mag_map = {row[0]: row for row in _rows(mag.data)}

        def campo(row: list[Any] | None, idx: int) -> float:
            if row is None or len(row) <= idx:
                return 0.0
            return _float_or_zero(row[idx])

        solar_wind: list[SolarWind] = []
        for row in _rows(plasma.data):
            mag_row = mag_map.get(row[0])
            solar_wind.append({
                "time_tag": row[0],
                "density": campo(row, 1),
                "speed": campo(row, 2),
                "temperature": campo(row, 3),
                "bx": campo(mag_row, 1),
                "by": campo(mag_row, 2),
                "bz": campo(mag_row, 3),
                "bt": campo(mag_row, 6),
            })

        return FetchResult(
            success=True,
            data=_apply(solar_wind, options),
            source=plasma.source,
            cached_at=plasma.cached_at,
            error=plasma.error or mag.error,
            stale=plasma.stale or mag.stale,
        )

    async def get_alerts(
        self, options: QueryOptions | None = None, force_refresh: bool = False
    ) -> FetchResult:
        """Alertas, watches e warnings SWPC."""
        result = await self.fetch_endpoint("ALERTS", force_refresh)
        if not result.success or not isinstance(result.data, list):
            return result

        alerts: list[Alert] = [
            {
                "time_tag": item.get("issue_datetime") or "",
                "product_id": item.get("product_id") or "",
                "issue_datetime": item.get("issue_datetime") or "",
                "message": item.get("message") or "",
            }
            for item in result.data
            if isinstance(item, dict)
        ]
        result.data = _apply(alerts, options)
        return result

    async def get_summary(self) -> FetchResult:
        """Ultimo registro de Kp, raios X e vento solar."""
        kp, xray, solar_wind = await asyncio.gather(
            self.get_kp_index(_ULTIMO),
            self.get_xray_flux(_ULTIMO),
            self.get_solar_wind(_ULTIMO),
        )

        def primeiro(result: FetchResult) -> Any:
            return result.data[0] if result.success and result.data else None

        summary: SpaceWeatherSummary = {
            "latest_kp": primeiro(kp),
            "latest_xray": primeiro(xray),
            "latest_solar_wind": primeiro(solar_wind),
            "fetched_at": now_ms(),
        }
        return FetchResult(success=True, data=summary, source="fetch")

    def get_cache_stats(self) -> CacheStats:
        return self._cache.get_stats()

    def invalidate(self, endpoint: str) -> bool:
        """Remove do cache os dados de um endpoint."""
        return self._cache.invalidate(cache_key(endpoint))

    def clear_cache(self) -> None:
        self._cache.invalidate_all()
        log.info("Cache limpo")

    async def aclose(self) -> None:
        await self._http.aclose()
