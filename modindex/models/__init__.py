"""Data models for modindex."""

from .entry import Entry, Kind, KindTag, Lazy, Location
from .results import LocateResult, ResolveResult

__all__ = [
    "Entry",
    "Kind",
    "KindTag",
    "Lazy",
    "Location",
    "LocateResult",
    "ResolveResult",
]
