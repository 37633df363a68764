"""Tools MCP de clima espacial: resumo, raios X, Kp, vento solar, alertas e propagacao."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable

from ..interpret import interpret_kp, interpret_xray_flux, time_ago
from ..shared.errors import safe_tool
from . import _erro, _fonte, _opcoes

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ..noaa.client import NoaaClient

MAX_LINHAS = 50
MAX_LINHAS_TABELA = 30

_BANDAS_ALTAS = ("10m", "12m", "15m", "17m")
_BANDAS_MEDIAS = ("20m", "30m", "40m")


def _restantes(total: int, mostrados: int, dica: str = "") -> str:
    if total <= mostrados:
        return ""
    return f"\n... e mais {total - mostrados} registros{dica}\n"


def formatar_resumo(data: dict[str, Any]) -> str:
    """Markdown do resumo atual de clima espacial."""
    kp = data.get("latest_kp")
    xray = data.get("latest_xray")
    wind = data.get("latest_solar_wind")

    out = "# Resumo do Clima Espacial\n\n"

    if kp:
        k = interpret_kp(kp["kp"])
        out += "## Atividade Geomagnetica (Indice Kp)\n"
        out += f"- **Valor**: {kp['kp']} ({k.level})\n"
        out += f"- **Horario**: {kp['time_tag']} ({time_ago(kp['time_tag'])})\n"
        out += f"- **Impacto HF**: {k.hf_impact}\n\n"

    if xray:
        x = interpret_xray_flux(xray["flux"])
        out += "## Fluxo de Raios X Solar\n"
        out += f"- **Classe Atual**: {x.flare_class} ({x.category})\n"
        out += f"- **Fluxo**: {xray['flux']:.2e} W/m² ({xray.get('energy', '')})\n"
        out += f"- **Horario**: {xray['time_tag']} ({time_ago(xray['time_tag'])})\n"
        out += f"- **Impacto no Radio**: {x.radio_impact}\n\n"

    if wind:
        direcao = (
            "(Sul - pode intensificar tempestades)" if wind["bz"] < 0 else "(Norte)"
        )
        out += "## Vento Solar\n"
        out += f"- **Velocidade**: {wind['speed']:.0f} km/s\n"
        out += f"- **Densidade**: {wind['density']:.1f} p/cm³\n"
        out += f"- **Bz**: {wind['bz']:.1f} nT {direcao}\n"
        out += f"- **Horario**: {wind['time_tag']} ({time_ago(wind['time_tag'])})\n\n"

    return out


def avaliar_propagacao(data: dict[str, Any], target_band: str = "") -> str:
    """Markdown da analise de propagacao HF a partir do resumo."""
    kp = data.get("latest_kp")
    xray = data.get("latest_xray")
    wind = data.get("latest_solar_wind")

    out = "# Analise de Propagacao HF\n\n"
    condicao = "excellent"

    if kp:
        k = interpret_kp(kp["kp"])
        out += "## Condicoes Geomagneticas\n"
        out += f"Kp atual: {kp['kp']} ({k.level})\n"
        out += f"{k.hf_impact}\n\n"

        if kp["kp"] >= 5:
            condicao = "poor"
        elif kp["kp"] >= 4:
            condicao = "fair"
        elif kp["kp"] >= 2:
            condicao = "good"

    if xray:
        x = interpret_xray_flux(xray["flux"])
        out += "## Atividade de Flares Solares\n"
        out += f"Atual: classe {x.flare_class} ({x.category})\n"
        out += f"{x.radio_impact}\n\n"

        if x.flare_class.startswith("X"):
            condicao = "poor"
        elif x.flare_class.startswith("M") and condicao != "poor":
            condicao = "fair"
        elif x.flare_class.startswith("C") and condicao == "excellent":
            condicao = "good"

    if wind:
        out += "## Condicoes do Vento Solar\n"
        out += f"Velocidade: {wind['speed']:.0f} km/s\n"
        out += f"Bz: {wind['bz']:.1f} nT\n"
        if wind["bz"] < -10:
            out += (
                "⚠️ Bz fortemente para o sul indica potencial de atividade "
                "geomagnetica elevada\n"
            )
            if condicao in ("good", "excellent"):
                condicao = "fair"
        out += "\n"

    if condicao in ("excellent", "good"):
        bandas = ["10m", "12m", "15m", "17m", "20m"]
    elif condicao == "fair":
        bandas = ["20m", "30m", "40m"]
    else:
        bandas = ["40m", "80m", "160m"]

    out += "## Avaliacao Geral\n"
    out += f"**Condicoes: {condicao.upper()}**\n\n"
    out += f"Bandas recomendadas: {', '.join(bandas)}\n\n"

    if target_band:
        alvo = target_band.lower()
        out += f"### Analise da Banda {target_band}\n"
        if alvo in _BANDAS_ALTAS:
            if condicao == "poor":
                out += (
                    f"A propagacao em {target_band} deve estar bastante degradada. "
                    "Considere bandas mais baixas.\n"
                )
            else:
                out += (
                    f"{target_band} deve ter propagacao razoavel durante o dia.\n"
                )
        elif alvo in _BANDAS_MEDIAS:
            out += (
                f"{target_band} deve oferecer propagacao confiavel nas "
                "condicoes atuais.\n"
            )
        else:
            out += (
                f"{target_band} (banda baixa) deve ser menos afetada pelo "
                "clima espacial atual.\n"
            )

    return out


def register(mcp: "FastMCP", get_client: Callable[[], "NoaaClient"]) -> None:
    """Registra 6 tools de clima espacial no servidor MCP."""

    @mcp.tool()
    @safe_tool
    async def get_space_weather_summary() -> str:
        """Resumo das condicoes atuais de clima espacial.

        Inclui o ultimo indice Kp, fluxo de raios X e vento solar.
        Melhor opcao para uma visao geral rapida.
        """
        result = await get_client().get_summary()
        if not result.success or not result.data:
            return _erro(result.error)
        return formatar_resumo(result.data)

    @mcp.tool()
    @safe_tool
    async def get_xray_flux(
        query: str = "", limit: int = 0, force_refresh: bool = False
    ) -> str:
        """Fluxo de raios X (flares solares) do satelite GOES.

        Flares podem causar blackouts de radio HF no lado iluminado.

        Args:
            query: Filtro. Ex: 'startTime=2024-01-01&limit=10&sortBy=time_tag&sortOrder=desc'.
            limit: Maximo de registros. Default: todos.
            force_refresh: Ignora o cache e busca na NOAA.
        """
        result = await get_client().get_xray_flux(_opcoes(query, limit), force_refresh)
        if not result.success or result.data is None:
            return _erro(result.error)

        data = result.data
        out = f"# Fluxo de Raios X ({len(data)} registros)\n\n"
        out += _fonte(result) + "\n\n"
        for item in data[:MAX_LINHAS]:
            x = interpret_xray_flux(item["flux"])
            out += (
                f"- **{item.get('time_tag', '-')}**: {x.flare_class} ({x.category})"
                f" - {item.get('energy', '')}\n"
            )
        out += _restantes(
            len(data), MAX_LINHAS, " (use o parametro limit para controlar a saida)"
        )
        return out

    @mcp.tool()
    @safe_tool
    async def get_kp_index(
        query: str = "", limit: int = 0, hours: int = 0, force_refresh: bool = False
    ) -> str:
        """Indice Kp (atividade geomagnetica).

        Kp vai de 0 a 9: 0-2 calmo, 3-4 instavel, 5+ tempestade.
        Kp alto prejudica a propagacao HF, principalmente em altas latitudes.

        Args:
            query: Filtro. Ex: 'startTime=2024-01-01&kp=5'.
            limit: Maximo de registros.
            hours: Somente as ultimas N horas.
            force_refresh: Ignora o cache e busca na NOAA.
        """
        options = _opcoes(query, limit)
        if hours:
            inicio = datetime.now(timezone.utc) - timedelta(hours=hours)
            options.start_time = inicio.isoformat()

        result = await get_client().get_kp_index(options, force_refresh)
        if not result.success or result.data is None:
            return _erro(result.error)

        data = result.data
        out = f"# Indice Kp ({len(data)} registros)\n\n"
        out += _fonte(result) + "\n\n"
        for item in data[:MAX_LINHAS]:
            k = interpret_kp(item["kp"])
            out += f"- **{item['time_tag']}**: Kp={item['kp']:.2f} ({k.level})\n"
        out += _restantes(len(data), MAX_LINHAS)
        return out

    @mcp.tool()
    @safe_tool
    async def get_solar_wind(
        query: str = "", limit: int = 0, force_refresh: bool = False
    ) -> str:
        """Vento solar em tempo real: velocidade, densidade, temperatura e campo (Bx, By, Bz, Bt).

        Bz negativo (IMF para o sul) pode disparar tempestades geomagneticas.

        Args:
            query: Filtro. Ex: 'sortBy=speed&sortOrder=desc'.
            limit: Maximo de registros.
            force_refresh: Ignora o cache e busca na NOAA.
        """
        result = await get_client().get_solar_wind(_opcoes(query, limit), force_refresh)
        if not result.success or result.data is None:
            return _erro(result.error)

        data = result.data
        out = f"# Vento Solar ({len(data)} registros)\n\n"
        out += _fonte(result, com_horario=False) + "\n\n"
        out += "| Horario | Velocidade (km/s) | Densidade (p/cm³) | Bz (nT) | Bt (nT) |\n"
        out += "|---------|-------------------|-------------------|---------|---------|\n"
        for item in data[:MAX_LINHAS_TABELA]:
            out += (
                f"| {item['time_tag']} | {item['speed']:.0f} | {item['density']:.1f}"
                f" | {item['bz']:.1f} | {item['bt']:.1f} |\n"
            )
        out += _restantes(len(data), MAX_LINHAS_TABELA)
        return out

    @mcp.tool()
    @safe_tool
    async def get_alerts(query: str = "", limit: int = 10) -> str:
        """Alertas, watches e warnings emitidos pelo SWPC.

        Args:
            query: Filtro. Ex: 'product_id=K04A'.
            limit: Maximo de alertas (mais recentes primeiro). Default: 10.
        """
        options = _opcoes(query, limit)
        if not options.sort_by:
            options.sort_by = "time_tag"
            options.sort_order = "desc"

        result = await get_client().get_alerts(options)
        if not result.success or result.data is None:
            return _erro(result.error)

        data = result.data
        out = f"# Alertas SWPC ({len(data)} registros)\n\n"
        out += _fonte(result) + "\n\n"
        if not data:
            out += "Nenhum alerta ativo.\n"
        for item in data[:MAX_LINHAS]:
            out += f"## {item['product_id']} - {item['issue_datetime']}\n"
            out += f"{item['message'].strip()}\n\n"
        out += _restantes(len(data), MAX_LINHAS)
        return out

    @mcp.tool()
    @safe_tool
    async def analyze_propagation(target_band: str = "") -> str:
        """Analisa as condicoes de propagacao HF a partir do clima espacial atual.

        Retorna avaliacao geral e bandas recomendadas para radioamador.

        Args:
            target_band: Banda alvo opcional. Ex: '20m', '40m', '10m'.
        """
        result = await get_client().get_summary()
        if not result.success or not result.data:
            return _erro(result.error)
        return avaliar_propagacao(result.data, target_band)
