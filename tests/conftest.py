"""Shared fixtures for noaa-space-weather-mcp tests."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from noaa_space_weather.config import CacheConfig, HttpConfig
from noaa_space_weather.noaa.endpoints import NOAA_ENDPOINTS

Handler = Callable[[httpx.Request], httpx.Response]


class FakeClock:
    """Relogio controlado em milissegundos para o CacheStore."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeMCP:
    """Captura as funcoes registradas com @mcp.tool(), sem servidor real."""

    def __init__(self) -> None:
        self.tools: dict[str, Callable[..., Any]] = {}

    def tool(self):
        def deco(fn):
            self.tools[fn.__name__] = fn
            return fn
        return deco


def endpoint_of(request: httpx.Request) -> str:
    """Nome do endpoint NOAA a partir da URL requisitada."""
    url = str(request.url)
    for name, endpoint_url in NOAA_ENDPOINTS.items():
        if url == endpoint_url:
            return name
    raise AssertionError(f"URL inesperada: {url}")


def routes(payloads: dict[str, Any], calls: list[str] | None = None) -> Handler:
    """Handler que responde 200 com o payload do endpoint (ou 404)."""

    def handler(request: httpx.Request) -> httpx.Response:
        name = endpoint_of(request)
        if calls is not None:
            calls.append(name)
        if name not in payloads:
            return httpx.Response(404)
        return httpx.Response(200, json=payloads[name])

    return handler


def mock_http(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache_config() -> CacheConfig:
    return CacheConfig(ttl_seconds=60, max_entries=10)


@pytest.fixture()
def http_config() -> HttpConfig:
    return HttpConfig(user_agent="test-agent/1.0", timeout_seconds=5)


# ── Payloads NOAA ────────────────────────────────────────────────


@pytest.fixture()
def xray_payload() -> list[dict[str, Any]]:
    return [
        {"time_tag": "2024-05-10T10:00:00Z", "satellite": 16, "flux": 2.3e-6,
         "observed_flux": 2.3e-6, "electron_correction": 0.0,
         "electron_contaminaton": False, "energy": "0.1-0.8nm"},
        {"time_tag": "2024-05-10T10:01:00Z", "satellite": 16, "flux": 4.5e-5,
         "observed_flux": 4.5e-5, "electron_correction": 0.0,
         "electron_contaminaton": False, "energy": "0.1-0.8nm"},
        {"time_tag": "2024-05-10T10:02:00Z", "satellite": 16, "flux": 1.2e-4,
         "observed_flux": 1.2e-4, "electron_correction": 0.0,
         "electron_contaminaton": False, "energy": "0.1-0.8nm"},
    ]


@pytest.fixture()
def kp_payload() -> list[list[str]]:
    return [
        ["time_tag", "Kp", "a_running", "station_count"],
        ["2024-05-10 00:00:00.000", "2.33", "9", "8"],
        ["2024-05-10 03:00:00.000", "4.00", "27", "8"],
        ["2024-05-10 06:00:00.000", "6.67", "111", "7"],
    ]


@pytest.fixture()
def plasma_payload() -> list[list[str]]:
    return [
        ["time_tag", "density", "speed", "temperature"],
        ["2024-05-10 10:00:00.000", "5.1", "420.5", "90000"],
        ["2024-05-10 10:01:00.000", "6.2", "610.0", "120000"],
        ["2024-05-10 10:02:00.000", None, "", "80000"],
    ]


@pytest.fixture()
def mag_payload() -> list[list[str]]:
    return [
        ["time_tag", "bx_gsm", "by_gsm", "bz_gsm", "lon_gsm", "lat_gsm", "bt"],
        ["2024-05-10 10:00:00.000", "1.5", "-2.0", "-3.1", "120", "-10", "4.2"],
        ["2024-05-10 10:01:00.000", "2.0", "3.0", "-12.5", "80", "-60", "13.0"],
    ]


@pytest.fixture()
def alerts_payload() -> list[dict[str, str]]:
    return [
        {"product_id": "K04A", "issue_datetime": "2024-05-10 09:00:00.000",
         "message": "ALERT: Geomagnetic K-index of 4"},
        {"product_id": "K05W", "issue_datetime": "2024-05-10 11:30:00.000",
         "message": "WARNING: Geomagnetic K-index of 5 expected"},
    ]


@pytest.fixture()
def all_payloads(
    xray_payload, kp_payload, plasma_payload, mag_payload, alerts_payload
) -> dict[str, Any]:
    return {
        "XRAY_FLUX": xray_payload,
        "KP_INDEX": kp_payload,
        "SOLAR_WIND_REALTIME": plasma_payload,
        "SOLAR_WIND_MAG": mag_payload,
        "ALERTS": alerts_payload,
    }
