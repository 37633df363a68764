"""Montagem do servidor MCP: cache, cliente NOAA, tools e rotas HTTP auxiliares."""

from __future__ import annotations

import argparse
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from .config import VERSION, Settings, load_settings
from .noaa.cache import CacheStore
from .noaa.client import NoaaClient
from .noaa.metrics import MetricsCollector
from .shared.log import get_logger
from .tools import cache_tools, health_tools, weather_tools

log = get_logger("server")

INSTRUCTIONS = (
    "Servidor de clima espacial NOAA SWPC para radioamadores. "
    "Use get_space_weather_summary para uma visao geral das condicoes atuais. "
    "Use analyze_propagation para recomendar bandas HF. "
    "get_kp_index, get_xray_flux e get_solar_wind aceitam query "
    "(startTime, endTime, limit, sortBy, sortOrder e filtros campo=valor). "
    "Dados vem de cache com TTL; use force_refresh ou clear_cache para forcar nova busca."
)


class ClientHolder:
    """NoaaClient preguicoso compartilhado pelas tools.

    O cliente HTTP e fechado quando a ultima sessao MCP termina; a proxima
    chamada a ``get`` cria outro. Cache e metricas sobrevivem a troca.
    """

    def __init__(self, settings: Settings, cache: CacheStore) -> None:
        self._settings = settings
        self._cache = cache
        self._metrics = MetricsCollector()
        self._client: NoaaClient | None = None
        self._sessions = 0

    def get(self) -> NoaaClient:
        if self._client is None:
            self._client = NoaaClient.from_settings(
                self._settings, self._cache, self._metrics
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
            log.info("Cliente HTTP NOAA fechado")

    @asynccontextmanager
    async def lifespan(self, server: FastMCP) -> AsyncIterator[None]:
        self._sessions += 1
        try:
            yield
        finally:
            self._sessions -= 1
            if self._sessions == 0:
                await self.aclose()


def create_server(settings: Settings | None = None) -> tuple[FastMCP, CacheStore]:
    """Cria o FastMCP com um unico CacheStore compartilhado por todas as tools."""
    settings = settings or load_settings()
    cache = CacheStore(settings.cache)
    holder = ClientHolder(settings, cache)

    mcp = FastMCP(
        "noaa-space-weather",
        host=settings.server.host,
        port=settings.server.port,
        instructions=INSTRUCTIONS,
        lifespan=holder.lifespan,
    )

    weather_tools.register(mcp, holder.get)
    cache_tools.register(mcp, holder.get)
    health_tools.register(mcp, holder.get)

    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @mcp.custom_route("/stats", methods=["GET"])
    async def stats(request: Request) -> JSONResponse:
        s = cache.get_stats()
        return JSONResponse({
            "size": s.size,
            "maxEntries": s.max_entries,
            "ttlSeconds": s.ttl_seconds,
        })

    log.info(
        "Servidor criado (cache ttl=%ss, max=%d)",
        settings.cache.ttl_seconds,
        settings.cache.max_entries,
    )
    return mcp, cache


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noaa-space-weather-mcp",
        description="MCP Server de clima espacial NOAA para propagacao HF",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transporte MCP (default: stdio)",
    )
    parser.add_argument("--host", help="Host HTTP (default: MCP_HOST ou 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Porta HTTP (default: MCP_PORT ou 3000)")
    parser.add_argument(
        "--cache-ttl", type=float, help="TTL padrao do cache em segundos (default: 300)"
    )
    parser.add_argument(
        "--cache-max", type=int, help="Maximo de entradas no cache (default: 100)"
    )
    parser.add_argument(
        "--version", action="version", version=f"noaa-space-weather-mcp v{VERSION}"
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Aplica os argumentos de linha de comando sobre as settings do ambiente."""
    settings = load_settings()
    cache = settings.cache
    if args.cache_ttl is not None:
        cache = replace(cache, ttl_seconds=args.cache_ttl)
    if args.cache_max is not None:
        cache = replace(cache, max_entries=args.cache_max)
    server = settings.server
    if args.host:
        server = replace(server, host=args.host)
    if args.port is not None:
        server = replace(server, port=args.port)
    return replace(settings, cache=cache, server=server)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    mcp, _ = create_server(settings_from_args(args))
    mcp.run(transport=args.transport)
