"""JSON loading utilities for index files.

Uses msgspec typed structs for fast, validated decoding.
"""

from pathlib import Path
from typing import Optional

import msgspec


class LocationSpec(msgspec.Struct, omit_defaults=True):
    """Location specification in the index JSON."""

    file: str
    line: int
    col: int = 0


class EntrySpec(msgspec.Struct, omit_defaults=True):
    """Entry specification in the index JSON.

    ``type`` and ``doc`` hold the raw text as extracted from the compiled
    artifact; they are normalized lazily when an entry is rendered.
    """

    path: list[str]
    kind: str
    owner: Optional[str] = None
    type: Optional[str] = None
    doc: Optional[str] = None
    loc_impl: Optional[LocationSpec] = None
    loc_sig: Optional[LocationSpec] = None
    artifact: str = ""


class IndexSpec(msgspec.Struct, omit_defaults=True):
    """Full index JSON specification."""

    version: str = "1.0"
    metadata: dict = {}
    opened: list[str] = []
    keywords: list[str] = []
    entries: list[EntrySpec] = []


# Create reusable decoder for performance
_decoder = msgspec.json.Decoder(IndexSpec)


def load_index(path: str | Path) -> IndexSpec:
    """Load an index JSON file.

    Args:
        path: Path to the index JSON file.

    Returns:
        Parsed IndexSpec struct.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON or does not match
            the index schema.
    """
    with open(path, "rb") as f:
        return _decoder.decode(f.read())


def decode_index(data: bytes | str) -> IndexSpec:
    """Decode index JSON already held in memory."""
    return _decoder.decode(data)
