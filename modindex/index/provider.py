"""Index providers: the read-only source of entries."""

import logging
import re
import textwrap
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Optional, Protocol

from .loader import EntrySpec, IndexSpec, LocationSpec, load_index
from .trie import NameTrie
from ..models import Entry, Kind, KindTag, Lazy, Location

logger = logging.getLogger(__name__)

_RE_WHITESPACE = re.compile(r"\s+")
_DOC_OPEN = "(**"
_DOC_CLOSE = "*)"

KEYWORD_ARTIFACT = "<keywords>"

Scope = tuple[str, ...]


class IndexProvider(Protocol):
    """Read-only lookups consumed by the query layer."""

    def complete(self, prefix: str) -> list[Entry]:
        ...

    def lookup_all(self, query: str) -> list[Entry]:
        ...


def split_path(query: str) -> list[str]:
    """Split a dotted identifier path into segments."""
    return query.strip().split(".")


def normalize_type(raw: Optional[str]) -> str:
    """Collapse a raw type rendering onto a single line."""
    if not raw:
        return ""
    return _RE_WHITESPACE.sub(" ", raw).strip()


def clean_doc(raw: Optional[str]) -> Optional[str]:
    """Strip doc-comment delimiters and common indentation.

    Returns None when nothing but whitespace remains.
    """
    if raw is None:
        return None
    text = raw.strip()
    if text.startswith(_DOC_OPEN):
        text = text[len(_DOC_OPEN):]
    if text.endswith(_DOC_CLOSE):
        text = text[: -len(_DOC_CLOSE)]
    lines = text.split("\n")
    # The first line follows the delimiter, so it has no indentation to share.
    head, rest = lines[0].strip(), textwrap.dedent("\n".join(lines[1:]))
    text = "\n".join(part for part in (head, rest) if part).strip()
    return text or None


def _to_location(spec: Optional[LocationSpec]) -> Optional[Location]:
    if spec is None:
        return None
    return Location(file=spec.file, line=spec.line, col=spec.col)


class JsonIndex:
    """In-memory index over an index JSON file.

    Entries are grouped by the module that declares them; each module gets
    a name trie for prefix completion and a name table for exact lookups.
    """

    def __init__(self, index_path: str | Path, opened: Iterable[str] = ()):
        """Initialize the index.

        Args:
            index_path: Path to the index JSON file.
            opened: Modules opened in addition to the index defaults, the
                last one shadowing the others.
        """
        self.index_path = Path(index_path)
        spec = load_index(self.index_path)
        logger.debug("Loaded %d entries from %s", len(spec.entries), self.index_path)
        self._build(spec, opened)

    @classmethod
    def from_spec(cls, spec: IndexSpec, opened: Iterable[str] = ()) -> "JsonIndex":
        """Build an index from an already decoded spec."""
        index = cls.__new__(cls)
        index.index_path = None
        index._build(spec, opened)
        return index

    def _build(self, spec: IndexSpec, opened: Iterable[str]):
        self.version = spec.version
        self.metadata = spec.metadata
        self.specs: list[EntrySpec] = list(spec.entries)
        self.keywords: list[str] = list(spec.keywords)

        # Module path to trie of member names
        self.members: dict[Scope, NameTrie] = defaultdict(NameTrie)
        # (module path, name) to entry ordinals
        self.by_name: dict[tuple[Scope, str], list[int]] = defaultdict(list)
        self.kinds: list[Kind] = []

        for ordinal, entry_spec in enumerate(self.specs):
            if not entry_spec.path:
                raise ValueError(f"entry #{ordinal} has an empty path")
            self.kinds.append(Kind.parse(entry_spec.kind, entry_spec.owner))
            module = tuple(entry_spec.path[:-1])
            name = entry_spec.path[-1]
            self.members[module].add(name, ordinal)
            self.by_name[(module, name)].append(ordinal)

        self.keyword_trie = NameTrie()
        for ordinal, keyword in enumerate(self.keywords):
            self.keyword_trie.add(keyword, ordinal)

        opened_paths = [tuple(split_path(m)) for m in [*spec.opened, *opened] if m.strip()]
        # Later opens shadow earlier ones; the root scope comes last.
        self.scopes: list[Scope] = []
        for scope in reversed(opened_paths):
            if scope not in self.scopes:
                self.scopes.append(scope)
        self.scopes.append(())

    def make_entry(self, ordinal: int, scope: Scope = ()) -> Entry:
        """Build a fresh entry for the spec at ``ordinal``, seen from ``scope``."""
        spec = self.specs[ordinal]
        kind = self.kinds[ordinal]
        path = tuple(spec.path)
        if kind.tag is KindTag.KEYWORD:
            loc_sig, loc_impl = None, Lazy.of(None)
        else:
            loc_sig = _to_location(spec.loc_sig)
            loc_impl = Lazy(lambda: _to_location(spec.loc_impl))
        return Entry(
            path=path,
            kind=kind,
            source_artifact=spec.artifact,
            location_sig=loc_sig,
            access_path=path[len(scope):],
            type_cell=Lazy(lambda: normalize_type(spec.type)),
            doc_cell=Lazy(lambda: clean_doc(spec.doc)),
            loc_impl_cell=loc_impl,
        )

    def make_keyword(self, ordinal: int) -> Entry:
        return Entry(
            path=(self.keywords[ordinal],),
            kind=Kind(KindTag.KEYWORD),
            source_artifact=KEYWORD_ARTIFACT,
        )

    def lookup_all(self, query: str) -> list[Entry]:
        """Return every entry whose path equals ``scope + query`` for some scope.

        Scopes are searched innermost first; an entry reachable from several
        scopes is returned once, with the access path of the first.
        """
        segments = split_path(query)
        if not all(segments):
            return []
        results = []
        seen: set[int] = set()
        for scope in self.scopes:
            module = scope + tuple(segments[:-1])
            for ordinal in self.by_name.get((module, segments[-1]), []):
                if ordinal not in seen:
                    seen.add(ordinal)
                    results.append(self.make_entry(ordinal, scope))
        logger.debug("lookup %r: %d match(es)", query, len(results))
        return results

    def complete(self, prefix: str) -> list[Entry]:
        """Return entries whose path completes ``prefix`` in some scope.

        The last segment of ``prefix`` is a name prefix; the leading
        segments must name modules exactly.
        """
        segments = split_path(prefix)
        if not all(segments[:-1]):
            return []
        name_prefix = segments[-1]
        results = []
        seen: set[int] = set()
        for scope in self.scopes:
            module = scope + tuple(segments[:-1])
            trie = self.members.get(module)
            if trie is None:
                continue
            for ordinal in trie.search_prefix(name_prefix):
                if ordinal not in seen:
                    seen.add(ordinal)
                    results.append(self.make_entry(ordinal, scope))
        if len(segments) == 1:
            for ordinal in self.keyword_trie.search_prefix(name_prefix):
                results.append(self.make_keyword(ordinal))
        logger.debug("complete %r: %d match(es)", prefix, len(results))
        return results
