"""NOAA SWPC data access layer: cache com TTL + busca HTTP com fallback."""

__all__ = ["NoaaClient"]


def __getattr__(name: str):
    if name == "NoaaClient":
        from .client import NoaaClient
        return NoaaClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
