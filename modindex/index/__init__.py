"""Index module for loading and searching precomputed symbol indexes."""

from .loader import IndexSpec, EntrySpec, LocationSpec, load_index, decode_index
from .provider import IndexProvider, JsonIndex
from .trie import NameTrie

__all__ = [
    "IndexSpec",
    "EntrySpec",
    "LocationSpec",
    "load_index",
    "decode_index",
    "IndexProvider",
    "JsonIndex",
    "NameTrie",
]
