"""Interpretacao de indices NOAA para propagacao HF.

Escalas G (Kp), faixas de SFI e classes de flare (A/B/C/M/X).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .noaa.query import parse_time


@dataclass(frozen=True)
class KpInterpretation:
    level: str
    description: str
    hf_impact: str


@dataclass(frozen=True)
class SfiInterpretation:
    level: str
    description: str
    bands: tuple[str, ...]


@dataclass(frozen=True)
class XrayInterpretation:
    flare_class: str
    category: str
    description: str
    radio_impact: str


# (limite superior exclusivo, nivel, descricao, impacto HF)
_KP_ESCALA: list[tuple[float, str, str, str]] = [
    (2, "Quiet", "Campo geomagnetico calmo", "Boas condicoes de propagacao HF"),
    (4, "Unsettled", "Campo geomagnetico instavel",
     "Condicoes HF geralmente boas, pequenas perturbacoes possiveis"),
    (5, "Active", "Campo geomagnetico ativo",
     "Propagacao HF pode ser afetada, principalmente em altas latitudes"),
    (6, "Minor Storm (G1)", "Tempestade geomagnetica menor",
     "Radio HF pode sofrer fading em latitudes mais altas"),
    (7, "Moderate Storm (G2)", "Tempestade geomagnetica moderada",
     "Fadeouts de radio HF provaveis em altas latitudes, possiveis em medias"),
    (8, "Strong Storm (G3)", "Tempestade geomagnetica forte",
     "Blackouts de radio HF podem alcancar medias latitudes"),
    (9, "Severe Storm (G4)", "Tempestade geomagnetica severa",
     "Comunicacoes de radio HF significativamente degradadas"),
]

_KP_EXTREMO = KpInterpretation(
    "Extreme Storm (G5)",
    "Tempestade geomagnetica extrema",
    "Comunicacoes de radio HF podem ser impossiveis na maioria das frequencias",
)

_SFI_ESCALA: list[tuple[float, str, str, tuple[str, ...]]] = [
    (70, "Very Low", "Atividade solar muito baixa", ("40m", "80m", "160m")),
    (90, "Low", "Atividade solar baixa", ("20m", "40m", "80m")),
    (120, "Moderate", "Atividade solar moderada", ("15m", "20m", "40m")),
    (150, "High", "Atividade solar alta", ("10m", "15m", "20m")),
]

_SFI_MUITO_ALTO = SfiInterpretation(
    "Very High", "Atividade solar muito alta", ("10m", "12m", "15m", "17m")
)

# (limite superior exclusivo W/m², letra, base da classe)
_FLARE_ESCALA: list[tuple[float, str, float]] = [
    (1e-7, "A", 1e-8),
    (1e-6, "B", 1e-7),
    (1e-5, "C", 1e-6),
    (1e-4, "M", 1e-5),
]

_FLARE_CATEGORIAS: dict[str, tuple[str, str, str]] = {
    "A": ("Background", "Fluxo de raios X em nivel de fundo", "Sem impacto no radio HF"),
    "B": ("Background", "Fluxo de raios X em nivel de fundo", "Sem impacto no radio HF"),
    "C": ("Small", "Flare solar pequeno",
          "Impacto menor no radio HF em frequencias baixas"),
    "M": ("Medium", "Flare solar medio",
          "Fadeouts de radio HF moderados a fortes no lado iluminado"),
    "X": ("Major", "Flare solar maior",
          "Blackouts de radio HF fortes a completos no lado iluminado"),
}


def interpret_kp(kp: float) -> KpInterpretation:
    for limite, level, description, hf_impact in _KP_ESCALA:
        if kp < limite:
            return KpInterpretation(level, description, hf_impact)
    return _KP_EXTREMO


def interpret_sfi(sfi: float) -> SfiInterpretation:
    for limite, level, description, bands in _SFI_ESCALA:
        if sfi < limite:
            return SfiInterpretation(level, description, bands)
    return _SFI_MUITO_ALTO


def flux_to_class(flux: float) -> str:
    """Converte fluxo de raios X (W/m²) em classe de flare. Ex: 2.3e-6 → 'C2.3'."""
    for limite, letra, base in _FLARE_ESCALA:
        if flux < limite:
            return f"{letra}{flux / base:.1f}"
    return f"X{flux / 1e-4:.1f}"


def interpret_xray_flux(flux_or_class: float | str) -> XrayInterpretation:
    """Interpreta fluxo (W/m²) ou classe textual ('M5.0')."""
    flare_class = (
        flux_to_class(flux_or_class)
        if isinstance(flux_or_class, (int, float))
        else flux_or_class
    )
    letra = flare_class[:1].upper()
    categoria = _FLARE_CATEGORIAS.get(letra)
    if categoria is None:
        return XrayInterpretation(
            flare_class, "Unknown", "Classificacao de flare desconhecida", "Desconhecido"
        )
    return XrayInterpretation(flare_class, *categoria)


def time_ago(time_tag: str, now: datetime | None = None) -> str:
    """Tempo decorrido legivel: 'agora mesmo', '5 minutos atras', '2 horas atras'."""
    momento = parse_time(time_tag)
    if momento is None:
        return time_tag
    agora = now or datetime.now(timezone.utc)
    diff_mins = int((agora - momento).total_seconds() // 60)
    diff_hours = diff_mins // 60
    diff_days = diff_hours // 24

    if diff_mins < 1:
        return "agora mesmo"
    if diff_mins < 60:
        return f"{diff_mins} minuto{'s' if diff_mins > 1 else ''} atras"
    if diff_hours < 24:
        return f"{diff_hours} hora{'s' if diff_hours > 1 else ''} atras"
    return f"{diff_days} dia{'s' if diff_days > 1 else ''} atras"
