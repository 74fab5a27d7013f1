"""Query resolver: the lookup operations used by commands."""

from ..config import QueryOptions
from ..index import IndexProvider
from ..models import Entry, LocateResult
from .complete import CompleteQuery
from .locate import LocateQuery
from .resolve import ResolveQuery


class QueryResolver:
    """Wrap an index provider with the disambiguation and fallback policies."""

    def __init__(self, index: IndexProvider, options: QueryOptions = QueryOptions()):
        self.index = index
        self.options = options

    def complete(self, prefix: str) -> list[Entry]:
        return CompleteQuery(self.index, kinds=self.options.kinds).execute(prefix)

    def resolve_all(self, query: str) -> list[Entry]:
        """Return every match; an empty list signals not found."""
        return ResolveQuery(self.index).execute(query).candidates

    def resolve_unique(self, query: str) -> Entry:
        """Return one match, chosen by ``options.tie_break``.

        Raises:
            NotFound: If nothing matches.
        """
        return ResolveQuery(self.index).execute_unique(query, self.options.tie_break)

    def resolve_location(self, query: str, prefer_interface: bool) -> LocateResult:
        return LocateQuery(self.index).execute(query, prefer_interface=prefer_interface)
