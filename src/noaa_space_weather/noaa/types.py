"""Tipos dos registros NOAA SWPC e dos resultados de busca.

Registros seguem os nomes de campo da API (``time_tag`` em todos).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

Source = Literal["cache", "fetch"]
SortOrder = Literal["asc", "desc"]


# ── Registros ───────────────────────────────────────────────────


class XrayFlux(TypedDict):
    time_tag: str
    satellite: int
    flux: float
    observed_flux: float
    electron_correction: float
    electron_contaminaton: bool  # grafia da propria NOAA
    energy: str  # "0.05-0.4nm" ou "0.1-0.8nm"


class KpIndex(TypedDict):
    time_tag: str
    kp: float
    a_running: float
    station_count: int


class SolarWind(TypedDict):
    time_tag: str
    speed: float
    density: float
    temperature: float
    bx: float
    by: float
    bz: float
    bt: float


class Alert(TypedDict):
    time_tag: str
    product_id: str
    issue_datetime: str
    message: str


class SpaceWeatherSummary(TypedDict):
    latest_kp: KpIndex | None
    latest_xray: XrayFlux | None
    latest_solar_wind: SolarWind | None
    fetched_at: int


# ── Consulta e resultado ────────────────────────────────────────


@dataclass
class QueryOptions:
    start_time: str | None = None
    end_time: str | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    filter: dict[str, Any] = field(default_factory=dict)


@dataclass
class FetchResult:
    """Resultado de uma busca; ``stale`` indica fallback para cache vencido."""

    success: bool
    source: Source
    data: Any | None = None
    error: str | None = None
    cached_at: int | None = None
    stale: bool = False
