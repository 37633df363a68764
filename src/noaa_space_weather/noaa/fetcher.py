"""FetchOrchestrator: busca na API NOAA com cache e fallback para cache vencido.

Fluxo de ``fetch``:
- cache valido (sem ``force_refresh``) → retorna direto, ``source="cache"``
- senao uma unica requisicao HTTP, sem retry
- status fora de 2xx ou excecao → tenta ``get_stale``; sem entrada, falha
  estruturada (``success=False``). Nada e propagado ao chamador.

A checagem inicial usa ``CacheStore.peek``: ``get`` apagaria a entrada
vencida antes da requisicao e o fallback nunca a encontraria.

Buscas concorrentes da mesma chave nao sao agrupadas: cada uma faz sua
requisicao e seu ``set``.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from ..config import HttpConfig
from ..shared.errors import RetrievalError, UpstreamHttpError
from ..shared.log import get_logger
from .cache import CacheStore, now_ms
from .endpoints import NOAA_ENDPOINTS, cache_key, ttl_for_endpoint
from .metrics import MetricsCollector
from .types import FetchResult

log = get_logger("noaa.fetcher")


class FetchOrchestrator:
    """Consulta o CacheStore antes e depois de cada busca HTTP."""

    def __init__(
        self,
        cache: CacheStore,
        http: httpx.AsyncClient,
        http_config: HttpConfig | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._cache = cache
        self._http = http
        self._http_config = http_config or HttpConfig()
        self._metrics = metrics or MetricsCollector()

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._http_config.user_agent,
            "Accept": "application/json",
        }

    def _stale(self, key: str, advisory: str) -> FetchResult | None:
        stale = self._cache.get_stale(key)
        if stale is None:
            return None
        self._metrics.record_stale()
        log.warning("%s (%s)", advisory, key)
        return FetchResult(
            success=True,
            data=stale.data,
            cached_at=stale.fetched_at,
            source="cache",
            error=advisory,
            stale=True,
        )

    async def _retrieve(self, endpoint: str) -> Any:
        """Faz a requisicao e decodifica o JSON.

        Levanta UpstreamHttpError para status fora de 2xx.
        """
        url = NOAA_ENDPOINTS.get(endpoint)
        if url is None:
            raise RetrievalError(f"Endpoint desconhecido: {endpoint}")

        start = time.monotonic()
        try:
            response = await self._http.get(
                url,
                headers=self._headers(),
                timeout=self._http_config.timeout_seconds,
            )
        finally:
            self._metrics.record_fetch(
                endpoint, (time.monotonic() - start) * 1000
            )

        if not response.is_success:
            raise UpstreamHttpError(response.status_code, response.reason_phrase)

        data = response.json()
        if not isinstance(data, (list, dict)):
            raise RetrievalError(
                f"Payload inesperado de {endpoint}: {type(data).__name__}"
            )
        return data

    async def fetch(
        self,
        endpoint: str,
        force_refresh: bool = False,
        ttl_override: float | None = None,
    ) -> FetchResult:
        key = cache_key(endpoint)

        if not force_refresh:
            # peek: a entrada vencida precisa sobreviver ate o fallback
            cached = self._cache.peek(key)
            self._metrics.record_cache(cached is not None)
            if cached is not None:
                log.debug("Cache hit: %s", key)
                return FetchResult(
                    success=True,
                    data=cached.data,
                    cached_at=cached.fetched_at,
                    source="cache",
                )

        try:
            data = await self._retrieve(endpoint)
        except UpstreamHttpError as e:
            fallback = self._stale(
                key, f"API retornou {e.status_code}, usando cache expirado"
            )
            if fallback:
                return fallback
            self._metrics.record_failure()
            log.warning("Falha em %s: %s", endpoint, e)
            return FetchResult(success=False, error=str(e), source="fetch")
        except Exception as e:
            cause = str(e) or type(e).__name__
            fallback = self._stale(
                key, f"Falha na busca: {cause}, usando cache expirado"
            )
            if fallback:
                return fallback
            self._metrics.record_failure()
            log.warning("Falha em %s: %s", endpoint, cause)
            return FetchResult(success=False, error=cause, source="fetch")

        ttl = (
            ttl_override if ttl_override is not None else ttl_for_endpoint(endpoint)
        )
        self._cache.set(key, data, ttl)
        log.debug("Buscado %s (ttl=%ss)", endpoint, ttl)
        return FetchResult(
            success=True, data=data, cached_at=now_ms(), source="fetch"
        )
