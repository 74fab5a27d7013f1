"""Prefix completion query."""

from typing import Optional

from ..index import IndexProvider
from ..models import Entry, KindTag
from .base import Query


class CompleteQuery(Query[list[Entry]]):
    """List entries completing a prefix, optionally restricted to some kinds."""

    def __init__(self, index: IndexProvider, kinds: Optional[frozenset[KindTag]] = None):
        super().__init__(index)
        self.kinds = kinds

    def execute(self, prefix: str) -> list[Entry]:
        """Execute completion.

        Args:
            prefix: Identifier prefix, possibly dotted ("List.ma").

        Returns:
            Matching entries in provider order; may be empty.
        """
        entries = self.index.complete(prefix)
        if self.kinds is None:
            return list(entries)
        return [e for e in entries if e.kind.tag in self.kinds]
