"""Base query interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..index import IndexProvider
from ..models import Entry

T = TypeVar("T")


class Query(ABC, Generic[T]):
    """A read-only query against an index provider.

    Queries never mutate the provider; each ``execute`` call is an
    independent lookup producing fresh entries.
    """

    def __init__(self, index: IndexProvider):
        self.index = index

    def lookup(self, symbol: str) -> list[Entry]:
        """Return every entry matching ``symbol``, empty if none."""
        return list(self.index.lookup_all(symbol))

    @abstractmethod
    def execute(self, *args, **kwargs) -> T:
        ...
