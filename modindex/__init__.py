"""modindex - look up types, locations and docs in a precomputed module index."""

__version__ = "0.3.0"

from .index import JsonIndex, IndexProvider
from .models import Entry, Kind, KindTag, Location
from .queries import QueryResolver
from .output import FormatEngine, OutputEncoder, render

__all__ = [
    "JsonIndex",
    "IndexProvider",
    "Entry",
    "Kind",
    "KindTag",
    "Location",
    "QueryResolver",
    "FormatEngine",
    "OutputEncoder",
    "render",
]
