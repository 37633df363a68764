"""Tools MCP de health check, diagnostico e metricas do servidor."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable

from ..noaa.types import QueryOptions
from ..shared.errors import safe_tool
from . import _json

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..noaa.client import NoaaClient

TOOL_MODULES = [
    "weather_tools (6)",
    "cache_tools (3)",
    "health_tools (2)",
]


def register(mcp: "FastMCP", get_client: Callable[[], "NoaaClient"]) -> None:
    """Registra 2 tools de diagnostico e saude do servidor."""

    @mcp.tool()
    @safe_tool
    async def health_check() -> str:
        """Verifica a saude do servidor MCP.

        Testa o acesso a API NOAA (indice Kp) e o estado do cache.
        Use para diagnosticar problemas de conectividade.
        """
        checks: dict[str, dict] = {}
        client = get_client()

        # 1. NOAA (usa o cache quando valido)
        start = time.monotonic()
        result = await client.get_kp_index(
            QueryOptions(limit=1, sort_by="time_tag", sort_order="desc")
        )
        elapsed = round((time.monotonic() - start) * 1000)
        if result.success:
            checks["noaa"] = {
                "status": "degradado" if result.stale else "ok",
                "fonte": result.source,
                "ultimo_kp": result.data[0] if result.data else None,
                "tempo_ms": elapsed,
            }
            if result.stale:
                checks["noaa"]["mensagem"] = result.error
        else:
            checks["noaa"] = {"status": "erro", "mensagem": result.error}

        # 2. Cache
        stats = client.get_cache_stats()
        checks["cache"] = {
            "status": "ok",
            "size": stats.size,
            "max_entries": stats.max_entries,
            "ttl_seconds": stats.ttl_seconds,
        }

        all_ok = all(c.get("status") == "ok" for c in checks.values())
        return _json({
            "status": "ok" if all_ok else "degradado",
            "checks": checks,
        })

    @mcp.tool()
    @safe_tool
    def info_servidor() -> str:
        """Retorna informacoes completas sobre o servidor MCP.

        Inclui versao, tools disponiveis, estado do cache e metricas de busca.
        """
        from noaa_space_weather.config import VERSION

        client = get_client()
        stats = client.get_cache_stats()
        m = client.metrics

        top = sorted(
            m.by_endpoint.items(),
            key=lambda x: x[1].fetch_count,
            reverse=True,
        )[:10]

        info: dict[str, Any] = {
            "versao": VERSION,
            "descricao": "Dados de clima espacial NOAA SWPC para propagacao HF",
            "modulos_tools": TOOL_MODULES,
            "cache": {
                "size": stats.size,
                "max_entries": stats.max_entries,
                "ttl_seconds": stats.ttl_seconds,
            },
            "metricas": {
                "total_fetches": m.total_fetches,
                "total_time_ms": round(m.total_time_ms, 1),
                "avg_time_ms": (
                    round(m.total_time_ms / m.total_fetches, 1)
                    if m.total_fetches > 0 else 0
                ),
                "cache_hits": m.cache_hits,
                "cache_misses": m.cache_misses,
                "stale_fallbacks": m.stale_fallbacks,
                "failures": m.failures,
                "top_endpoints": [
                    {"endpoint": name, "count": e.fetch_count,
                     "avg_ms": round(e.total_time_ms / e.fetch_count, 1)}
                    for name, e in top
                ],
            },
        }
        return _json(info)
