"""Tratamento padronizado de erros para tools MCP e para a busca NOAA."""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable

log = logging.getLogger("noaa_space_weather.errors")


class SpaceWeatherError(Exception):
    """Erro base do servidor de clima espacial."""


class UpstreamHttpError(SpaceWeatherError):
    """A API NOAA respondeu, mas com status fora da faixa 2xx."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}".rstrip(": "))


class RetrievalError(SpaceWeatherError):
    """Falha de transporte ou de decodificacao do payload."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(cause)


def _mensagem(fn: Callable[..., Any], e: Exception) -> str:
    if isinstance(e, SpaceWeatherError):
        log.warning("Erro de clima espacial em %s: %s", fn.__name__, e)
        return f"Erro: {e}"
    log.exception("Erro inesperado em %s", fn.__name__)
    return f"Erro ao executar {fn.__name__}: {type(e).__name__}: {e}"


def safe_tool(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator que captura excecoes e retorna texto de erro legivel.

    Aceita tools sincronas e corrotinas.

    Uso:
        @mcp.tool()
        @safe_tool
        async def minha_tool(...) -> str:
            ...
    """
    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_wrapper(*args: Any, **kwargs: Any) -> str:
            try:
                return await fn(*args, **kwargs)
            except Exception as e:
                return _mensagem(fn, e)

        return async_wrapper

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            return _mensagem(fn, e)

    return wrapper
