"""Tests para shared/errors.py: taxonomia de erros e safe_tool."""

from __future__ import annotations

import pytest

from noaa_space_weather.shared.errors import (
    RetrievalError,
    SpaceWeatherError,
    UpstreamHttpError,
    safe_tool,
)


class TestTaxonomia:
    def test_upstream_http_error(self):
        e = UpstreamHttpError(503, "Service Unavailable")
        assert isinstance(e, SpaceWeatherError)
        assert e.status_code == 503
        assert str(e) == "HTTP 503: Service Unavailable"

    def test_upstream_sem_reason(self):
        assert str(UpstreamHttpError(599)) == "HTTP 599"

    def test_retrieval_error(self):
        e = RetrievalError("connection reset")
        assert e.cause == "connection reset"
        assert str(e) == "connection reset"


class TestSafeTool:
    def test_sync_sem_erro(self):
        @safe_tool
        def ok() -> str:
            return "ok"

        assert ok() == "ok"

    def test_sync_erro_de_dominio(self):
        @safe_tool
        def falha() -> str:
            raise RetrievalError("sem rede")

        assert falha() == "Erro: sem rede"

    def test_sync_erro_inesperado(self):
        @safe_tool
        def quebra() -> str:
            raise KeyError("kp")

        assert quebra() == "Erro ao executar quebra: KeyError: 'kp'"

    @pytest.mark.asyncio
    async def test_async(self):
        @safe_tool
        async def falha() -> str:
            raise UpstreamHttpError(500, "Internal Server Error")

        assert await falha() == "Erro: HTTP 500: Internal Server Error"

    def test_preserva_nome_e_docstring(self):
        @safe_tool
        async def minha_tool(query: str = "") -> str:
            """Doc."""
            return query

        assert minha_tool.__name__ == "minha_tool"
        assert minha_tool.__doc__ == "Doc."
