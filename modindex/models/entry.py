"""Entry data model."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """Value computed on first access and cached afterwards.

    The cell starts uncomputed; ``force()`` runs the supplied function once
    and every later call returns the same value.
    """

    __slots__ = ("_compute", "_value")

    def __init__(self, compute: Callable[[], T]):
        self._compute = compute
        self._value = _UNSET

    @classmethod
    def of(cls, value: T) -> "Lazy[T]":
        """Build an already computed cell."""
        cell = cls(lambda: value)
        cell._value = value
        return cell

    @property
    def forced(self) -> bool:
        return self._value is not _UNSET

    def force(self) -> T:
        if self._value is _UNSET:
            self._value = self._compute()
            self._compute = None
        return self._value

    def __repr__(self) -> str:
        if self.forced:
            return f"Lazy({self._value!r})"
        return "Lazy(<uncomputed>)"


class KindTag(str, Enum):
    """Kinds of indexed symbols, valued by their rendered name."""

    TYPE = "type"
    VALUE = "val"
    EXCEPTION = "exception"
    FIELD = "field"
    CONSTRUCTOR = "constr"
    METHOD = "method"
    MODULE = "module"
    MODULE_TYPE = "modtype"
    CLASS = "class"
    CLASS_TYPE = "classtype"
    KEYWORD = "keyword"

    @property
    def has_owner(self) -> bool:
        return self in _OWNED_KINDS


_OWNED_KINDS = frozenset({KindTag.FIELD, KindTag.CONSTRUCTOR, KindTag.METHOD})


@dataclass(frozen=True)
class Kind:
    """Kind tag plus the owning type or class for fields, constructors and methods."""

    tag: KindTag
    owner: Optional[str] = None

    def __post_init__(self):
        if self.tag.has_owner and not self.owner:
            raise ValueError(f"kind {self.tag.value} requires an owner")
        if not self.tag.has_owner and self.owner is not None:
            raise ValueError(f"kind {self.tag.value} takes no owner")

    @classmethod
    def parse(cls, name: str, owner: Optional[str] = None) -> "Kind":
        return cls(KindTag(name), owner)

    def __str__(self) -> str:
        if self.owner is not None:
            return f"{self.tag.value}({self.owner})"
        return self.tag.value


@dataclass(frozen=True)
class Location:
    """Source position. ``line`` is 1-based, ``col`` 0-based."""

    file: str
    line: int
    col: int = 0

    def display_file(self, root: Optional[Path] = None) -> str:
        """Return the file path, relative to ``root`` when it lies under it."""
        if root is None:
            return self.file
        path = Path(self.file)
        if not path.is_absolute():
            return self.file
        try:
            return os.fspath(path.relative_to(root))
        except ValueError:
            return self.file

    def render(self, root: Optional[Path] = None) -> str:
        """Return ``file:line:col``."""
        return f"{self.display_file(root)}:{self.line}:{self.col}"


def _no_value():
    return None


@dataclass(frozen=True)
class Entry:
    """One symbol occurrence produced by an index provider.

    ``type_cell``, ``doc_cell`` and ``loc_impl_cell`` hold lazily computed
    fields; read them through ``type_signature``, ``doc`` and
    ``location_impl``.
    """

    path: tuple[str, ...]
    kind: Kind
    source_artifact: str = ""
    location_sig: Optional[Location] = None
    access_path: Optional[tuple[str, ...]] = None
    type_cell: Lazy[str] = field(default_factory=lambda: Lazy.of(""), compare=False, repr=False)
    doc_cell: Lazy[Optional[str]] = field(default_factory=lambda: Lazy(_no_value), compare=False, repr=False)
    loc_impl_cell: Lazy[Optional[Location]] = field(
        default_factory=lambda: Lazy(_no_value), compare=False, repr=False
    )

    def __post_init__(self):
        if not self.path:
            raise ValueError("entry path must not be empty")
        if self.kind.tag is KindTag.KEYWORD and self.location_sig is not None:
            raise ValueError("keyword entries have no location")
        if self.access_path is None:
            object.__setattr__(self, "access_path", self.path)

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def full_path(self) -> str:
        return ".".join(self.path)

    @property
    def qualified(self) -> str:
        return ".".join(self.access_path)

    @property
    def type_signature(self) -> str:
        return self.type_cell.force()

    @property
    def doc(self) -> Optional[str]:
        return self.doc_cell.force()

    @property
    def location_impl(self) -> Optional[Location]:
        if self.kind.tag is KindTag.KEYWORD:
            return None
        return self.loc_impl_cell.force()

    def location(self, interface: bool) -> Optional[Location]:
        """Return the signature location if ``interface`` else the implementation one."""
        if interface:
            return self.location_sig
        return self.location_impl
