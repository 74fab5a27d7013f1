"""Runtime configuration for queries and rendering.

Options are immutable values built once by the CLI callback and passed
explicitly to the resolver and the output layer.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .models import KindTag

ENV_INDEX = "MODINDEX_INDEX"
ENV_ROOT = "MODINDEX_ROOT"

DEFAULT_SUMMARY_FORMAT = "%i"
DEFAULT_TYPE_WIDTH = 60

_LOGGER_NAME = "modindex"


class TieBreak(str, Enum):
    """How ``resolve_unique`` picks one entry among several matches."""

    FIRST = "first"  # provider order: innermost scope, first declaration
    KIND = "kind"    # lowest kind rank, then provider order


@dataclass(frozen=True)
class RenderOptions:
    """Options shared by the format engine and the output encoder."""

    color: bool = False
    project_root: Optional[Path] = None
    type_width: int = DEFAULT_TYPE_WIDTH


@dataclass(frozen=True)
class QueryOptions:
    """Options applied by the query resolver."""

    opened: tuple[str, ...] = ()
    kinds: Optional[frozenset[KindTag]] = None
    tie_break: TieBreak = TieBreak.FIRST


def parse_kinds(spec: Optional[str]) -> Optional[frozenset[KindTag]]:
    """Parse a comma-separated list of kind names (``val,type,module``).

    Returns None (no filtering) for an empty spec.

    Raises:
        ValueError: If a name is not a known kind.
    """
    if not spec:
        return None
    kinds = set()
    for name in spec.split(","):
        name = name.strip()
        if name:
            kinds.add(KindTag(name))
    return frozenset(kinds) or None


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger to write to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One handler per process, even when called again.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[modindex] %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
