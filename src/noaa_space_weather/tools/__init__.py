"""MCP tools para clima espacial e propagacao HF."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..noaa.query import parse_query_string
from ..noaa.types import FetchResult, QueryOptions


# ── Rótulos legíveis para campos comuns ──────────────────────────

_ROTULOS: dict[str, str] = {
    # Status
    "status": "Status",
    "mensagem": "Mensagem",
    "erro": "Erro",
    # Cache
    "size": "Entradas",
    "max_entries": "Máx. Entradas",
    "ttl_seconds": "TTL Padrão (s)",
    "cache": "Cache",
    "cache_hits": "Cache Hits",
    "cache_misses": "Cache Misses",
    "stale_fallbacks": "Fallbacks p/ Cache Expirado",
    "failures": "Falhas",
    # Busca
    "total_fetches": "Total de Buscas",
    "total_time_ms": "Tempo Total (ms)",
    "avg_time_ms": "Tempo Médio (ms)",
    "top_endpoints": "Endpoints Mais Buscados",
    "endpoint": "Endpoint",
    "count": "Buscas",
    "avg_ms": "Média (ms)",
    "tempo_ms": "Tempo (ms)",
    "fonte": "Fonte",
    # Servidor
    "versao": "Versão",
    "descricao": "Descrição",
    "total_tools": "Total de Tools",
    "modulos_tools": "Módulos de Tools",
    "metricas": "Métricas",
    "checks": "Verificações",
    "ultimo_kp": "Último Kp",
}


def _formatar(dados: Any, nivel: int = 0) -> str:
    """Formata dados estruturados como texto legível."""
    prefixo = "  " * nivel

    if isinstance(dados, dict):
        linhas: list[str] = []
        for chave, valor in dados.items():
            rotulo = _ROTULOS.get(chave, chave)

            if isinstance(valor, bool):
                linhas.append(f"{prefixo}{rotulo}: {'Sim' if valor else 'Não'}")
            elif valor is None:
                linhas.append(f"{prefixo}{rotulo}: -")
            elif isinstance(valor, dict):
                linhas.append(f"{prefixo}{rotulo}:")
                linhas.append(_formatar(valor, nivel + 1))
            elif isinstance(valor, list):
                if not valor:
                    linhas.append(f"{prefixo}{rotulo}: (nenhum)")
                elif all(isinstance(v, dict) for v in valor):
                    linhas.append(f"{prefixo}{rotulo} ({len(valor)}):")
                    for i, item in enumerate(valor, 1):
                        linhas.append(f"{prefixo}  [{i}]")
                        linhas.append(_formatar(item, nivel + 2))
                else:
                    linhas.append(f"{prefixo}{rotulo}:")
                    for item in valor:
                        linhas.append(f"{prefixo}  - {item}")
            else:
                linhas.append(f"{prefixo}{rotulo}: {valor}")
        return "\n".join(linhas)

    elif isinstance(dados, list):
        return _formatar({"resultados": dados}, nivel)

    return f"{prefixo}{dados}"


def _json(data: Any) -> str:
    """Formata dados como texto legível para consumo por LLM."""
    return _formatar(data)


def _erro(msg: str | None) -> str:
    return f"Erro: {msg}"


def _iso(ms: int) -> str:
    """Timestamp em ms → ISO 8601 UTC."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _fonte(result: FetchResult, com_horario: bool = True) -> str:
    """Linha 'Fonte: ...' com horario do cache e aviso de dado expirado."""
    linha = f"Fonte: {result.source}"
    if com_horario and result.cached_at:
        linha += f", em cache desde {_iso(result.cached_at)}"
    if result.stale and result.error:
        linha += f"\nAviso: {result.error}"
    return linha


def _opcoes(query: str = "", limit: int = 0) -> QueryOptions:
    """QueryOptions a partir da query string e do limite explicito."""
    options = parse_query_string(query) if query else QueryOptions()
    if limit:
        options.limit = limit
    return options
