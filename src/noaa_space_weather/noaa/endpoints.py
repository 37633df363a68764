"""Endpoints da API NOAA SWPC e TTL por tipo de dado.

https://services.swpc.noaa.gov/
"""

from __future__ import annotations

_SWPC = "https://services.swpc.noaa.gov"

NOAA_ENDPOINTS: dict[str, str] = {
    # Tempo real
    "XRAY_FLUX": f"{_SWPC}/json/goes/primary/xrays-7-day.json",
    "KP_INDEX": f"{_SWPC}/products/noaa-planetary-k-index.json",
    "SOLAR_WIND_REALTIME": f"{_SWPC}/products/solar-wind/plasma-7-day.json",
    "SOLAR_WIND_MAG": f"{_SWPC}/products/solar-wind/mag-7-day.json",
    # Historico / previsao
    "PREDICTED_SFI": f"{_SWPC}/json/f107_cm_flux.json",
    "FORECAST_27DAY": f"{_SWPC}/products/27-day-outlook.json",
    "SUNSPOT_NUMBER": f"{_SWPC}/json/solar-cycle/observed-solar-cycle-indices.json",
    # Alertas
    "ALERTS": f"{_SWPC}/products/alerts.json",
    # Protons
    "PROTON_FLUX": f"{_SWPC}/json/goes/primary/integral-protons-7-day.json",
    # Geomagnetico
    "DST_INDEX": f"{_SWPC}/products/kyoto-dst.json",
    # Aurora
    "AURORA_FORECAST": f"{_SWPC}/products/animations/ovation_north_24h.json",
}

# TTL em segundos por tipo de dado
DATA_TTL: dict[str, int] = {
    "XRAY_FLUX": 60,  # atualiza a cada minuto
    "KP_INDEX": 180,  # indice de 3h, checado com mais frequencia
    "SOLAR_WIND": 60,
    "FORECAST": 3600,
    "HISTORICAL": 86400,
    "ALERTS": 60,
}

_KIND_BY_ENDPOINT: dict[str, str] = {
    "XRAY_FLUX": "XRAY_FLUX",
    "PROTON_FLUX": "XRAY_FLUX",
    "KP_INDEX": "KP_INDEX",
    "SOLAR_WIND_REALTIME": "SOLAR_WIND",
    "SOLAR_WIND_MAG": "SOLAR_WIND",
    "FORECAST_27DAY": "FORECAST",
    "PREDICTED_SFI": "FORECAST",
    "SUNSPOT_NUMBER": "HISTORICAL",
    "ALERTS": "ALERTS",
}


def ttl_for_endpoint(endpoint: str) -> int:
    """TTL padrao do endpoint; desconhecidos usam o TTL do Kp."""
    kind = _KIND_BY_ENDPOINT.get(endpoint, "KP_INDEX")
    return DATA_TTL[kind]


def cache_key(endpoint: str) -> str:
    return f"noaa_{endpoint}"
