"""Filtros sobre colecoes ja buscadas: reduzem o contexto enviado ao LLM.

Operam somente sobre os registros retornados, nunca sobre o cache.
"""

from __future__ import annotations

import functools
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence, TypeVar

from .types import QueryOptions

R = TypeVar("R", bound=Mapping[str, Any])

_NUMERO = re.compile(r"^-?\d*\.?\d+$")
_INTEIRO = re.compile(r"^\s*(-?\d+)")


def parse_time(value: str) -> datetime | None:
    """Converte time_tag NOAA em datetime UTC.

    Aceita '2024-01-01T00:00:00Z', '2024-01-01 00:00:00.000' e '2024-01-01'.
    Sem fuso explicito, assume UTC.
    """
    texto = value.strip()
    if texto.endswith("Z"):
        texto = texto[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(texto)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _no_intervalo(
    item: Mapping[str, Any], start: datetime | None, end: datetime | None
) -> bool:
    time_tag = item.get("time_tag")
    if not time_tag:
        return True
    item_time = parse_time(str(time_tag))
    if item_time is None:
        return False
    if start is not None and item_time < start:
        return False
    if end is not None and item_time > end:
        return False
    return True


def _comparar(sort_key: str, order: int, a: Mapping[str, Any], b: Mapping[str, Any]) -> int:
    a_val = a.get(sort_key)
    b_val = b.get(sort_key)
    if a_val == b_val:
        return 0
    # None sempre no fim, independente da ordem
    if a_val is None:
        return 1
    if b_val is None:
        return -1
    try:
        menor = a_val < b_val
    except TypeError:
        menor = str(a_val) < str(b_val)
    return -order if menor else order


def query_data(data: Sequence[R], options: QueryOptions) -> list[R]:
    """Aplica intervalo de tempo, filtro por igualdade, ordenacao e limite."""
    result = list(data)

    if options.start_time or options.end_time:
        start = parse_time(options.start_time) if options.start_time else None
        end = parse_time(options.end_time) if options.end_time else None
        invalido = (options.start_time and start is None) or (
            options.end_time and end is None
        )
        if invalido:
            # Limite ilegivel nao casa com nenhum registro datado
            result = [item for item in result if not item.get("time_tag")]
        else:
            result = [item for item in result if _no_intervalo(item, start, end)]

    if options.filter:
        result = [
            item
            for item in result
            if all(item.get(k) == v for k, v in options.filter.items())
        ]

    if options.sort_by:
        order = 1 if options.sort_order == "asc" else -1
        result.sort(
            key=functools.cmp_to_key(
                functools.partial(_comparar, options.sort_by, order)
            )
        )

    if options.limit and options.limit > 0:
        result = result[: options.limit]

    return result


def parse_value(value: str) -> Any:
    """Converte valor textual para bool, None, numero ou string."""
    lower = value.lower()
    if lower == "true":
        return True
    if lower == "false":
        return False
    if lower == "null":
        return None
    if _NUMERO.match(value):
        num = float(value)
        return int(num) if num.is_integer() and "." not in value else num
    return value


def parse_query_string(query: str) -> QueryOptions:
    """Converte 'startTime=...&limit=10&kp=5' em QueryOptions.

    Chaves desconhecidas viram filtros de igualdade.
    """
    options = QueryOptions()

    for part in filter(None, query.split("&")):
        pieces = [s.strip() for s in part.split("=")]
        if len(pieces) < 2:
            continue
        key, value = pieces[0], pieces[1]
        if not key or not value:
            continue

        chave = key.lower()
        if chave in ("start", "starttime", "from"):
            options.start_time = value
        elif chave in ("end", "endtime", "to"):
            options.end_time = value
        elif chave in ("limit", "count"):
            m = _INTEIRO.match(value)
            if m:
                options.limit = int(m.group(1))
        elif chave in ("sort", "sortby"):
            options.sort_by = value
        elif chave in ("order", "sortorder"):
            options.sort_order = "asc" if value.lower() == "asc" else "desc"
        else:
            options.filter[key] = parse_value(value)

    return options
