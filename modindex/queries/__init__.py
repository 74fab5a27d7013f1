"""Query classes for modindex."""

from .base import Query
from .complete import CompleteQuery
from .resolve import ResolveQuery, select_entry
from .locate import LocateQuery
from .resolver import QueryResolver

__all__ = [
    "Query",
    "CompleteQuery",
    "ResolveQuery",
    "LocateQuery",
    "QueryResolver",
    "select_entry",
]
