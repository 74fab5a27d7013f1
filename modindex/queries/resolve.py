"""Symbol resolution query."""

import logging

from ..config import TieBreak
from ..errors import NotFound
from ..models import Entry, KindTag, ResolveResult
from .base import Query

logger = logging.getLogger(__name__)

# Rank used by TieBreak.KIND; lower wins.
KIND_PRIORITY: dict[KindTag, int] = {
    tag: rank
    for rank, tag in enumerate([
        KindTag.VALUE,
        KindTag.CONSTRUCTOR,
        KindTag.EXCEPTION,
        KindTag.FIELD,
        KindTag.METHOD,
        KindTag.TYPE,
        KindTag.CLASS,
        KindTag.CLASS_TYPE,
        KindTag.MODULE,
        KindTag.MODULE_TYPE,
        KindTag.KEYWORD,
    ])
}


def select_entry(candidates: list[Entry], tie_break: TieBreak = TieBreak.FIRST) -> Entry:
    """Pick one entry among ambiguous candidates.

    Args:
        candidates: Non-empty list in provider order.
        tie_break: Selection policy.

    Returns:
        The selected entry. The choice depends only on the list contents and
        order, so repeated calls agree.
    """
    if tie_break is TieBreak.KIND:
        ranked = min(
            enumerate(candidates),
            key=lambda item: (KIND_PRIORITY[item[1].kind.tag], item[0]),
        )
        return ranked[1]
    return candidates[0]


class ResolveQuery(Query[ResolveResult]):
    """Resolve a query to every matching entry."""

    def execute(self, symbol: str) -> ResolveResult:
        """Execute symbol resolution.

        Args:
            symbol: Dotted identifier path, as written in source.

        Returns:
            ResolveResult with every matching candidate, ambiguity preserved.
        """
        return ResolveResult(query=symbol, candidates=self.lookup(symbol))

    def execute_unique(self, symbol: str, tie_break: TieBreak = TieBreak.FIRST) -> Entry:
        """Resolve to exactly one entry.

        Raises:
            NotFound: If nothing matches.
        """
        result = self.execute(symbol)
        if not result.found:
            raise NotFound(symbol)
        entry = select_entry(result.candidates, tie_break)
        if not result.unique:
            logger.debug(
                "%d candidates for %r, picked %s by %s",
                len(result.candidates), symbol, entry.full_path, tie_break.value,
            )
        return entry
