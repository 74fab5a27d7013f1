"""Location query with interface/implementation fallback."""

import logging

from ..models import LocateResult
from .base import Query

logger = logging.getLogger(__name__)


class LocateQuery(Query[LocateResult]):
    """Find entries that carry a source location of the preferred kind."""

    def execute(self, symbol: str, prefer_interface: bool = False) -> LocateResult:
        """Execute location lookup.

        Entries are filtered on the preferred location kind first, then on
        the other one. The first non-empty filter wins and its kind is
        reported in ``LocateResult.interface``.

        Args:
            symbol: Dotted identifier path.
            prefer_interface: Look for signature locations first.

        Returns:
            LocateResult; ``entries`` is empty when neither kind exists.
        """
        candidates = self.lookup(symbol)
        for interface in (prefer_interface, not prefer_interface):
            entries = [e for e in candidates if e.location(interface) is not None]
            if entries:
                if interface != prefer_interface:
                    logger.debug(
                        "No %s location for %r, using %s location",
                        _label(prefer_interface), symbol, _label(interface),
                    )
                return LocateResult(entries, interface)
        return LocateResult([], prefer_interface)


def _label(interface: bool) -> str:
    return "interface" if interface else "implementation"
