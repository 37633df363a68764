"""Tools MCP de administracao do cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..noaa.endpoints import NOAA_ENDPOINTS
from ..shared.errors import safe_tool
from . import _erro

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..noaa.client import NoaaClient


def register(mcp: "FastMCP", get_client: Callable[[], "NoaaClient"]) -> None:
    """Registra 3 tools de cache no servidor MCP."""

    @mcp.tool()
    @safe_tool
    def get_cache_stats() -> str:
        """Estatisticas do cache: entradas atuais, limite e TTL padrao."""
        stats = get_client().get_cache_stats()
        return (
            "# Estatisticas do Cache\n\n"
            f"- Entradas: {stats.size}/{stats.max_entries}\n"
            f"- TTL padrao: {stats.ttl_seconds:g} segundos\n"
        )

    @mcp.tool()
    @safe_tool
    def invalidate_cache(endpoint: str) -> str:
        """Remove do cache os dados de um endpoint NOAA.

        Args:
            endpoint: Nome do endpoint. Ex: 'KP_INDEX', 'XRAY_FLUX', 'ALERTS'.
        """
        nome = endpoint.strip().upper()
        if nome not in NOAA_ENDPOINTS:
            validos = ", ".join(sorted(NOAA_ENDPOINTS))
            return _erro(f"Endpoint '{endpoint}' desconhecido. Validos: {validos}")
        if get_client().invalidate(nome):
            return f"Cache de {nome} removido."
        return f"{nome} nao estava em cache."

    @mcp.tool()
    @safe_tool
    def clear_cache() -> str:
        """Limpa todo o cache. Use para forcar nova busca na NOAA."""
        get_client().clear_cache()
        return "Cache limpo com sucesso."
