"""Query result types."""

from dataclasses import dataclass
from typing import NamedTuple

from .entry import Entry


@dataclass
class ResolveResult:
    """Result of symbol resolution."""

    query: str
    candidates: list[Entry]

    @property
    def found(self) -> bool:
        return len(self.candidates) > 0

    @property
    def unique(self) -> bool:
        return len(self.candidates) == 1


class LocateResult(NamedTuple):
    """Entries carrying the requested location kind.

    ``interface`` is the location kind actually used, which differs from
    the requested one when the lookup fell back.
    """

    entries: list[Entry]
    interface: bool

    @property
    def found(self) -> bool:
        return len(self.entries) > 0
