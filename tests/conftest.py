"""Shared fixtures: a small index of list and string functions."""

import json

import pytest

from modindex.index import JsonIndex, decode_index


SAMPLE_INDEX = {
    "version": "1.0",
    "metadata": {"generator": "tests"},
    "keywords": ["match", "module"],
    "entries": [
        {
            "path": ["List"],
            "kind": "module",
            "artifact": "list.cmti",
            "loc_impl": {"file": "/proj/stdlib/list.ml", "line": 1, "col": 0},
            "loc_sig": {"file": "/proj/stdlib/list.mli", "line": 1, "col": 0},
        },
        {
            "path": ["List", "length"],
            "kind": "val",
            "type": "'a list -> int",
            "artifact": "list.cmti",
            "loc_impl": {"file": "/proj/stdlib/list.ml", "line": 20, "col": 4},
            "loc_sig": {"file": "/proj/stdlib/list.mli", "line": 60, "col": 0},
        },
        {
            "path": ["List", "map"],
            "kind": "val",
            "type": "('a -> 'b) ->\n    'a list -> 'b list",
            "doc": "(** [map f [a1; ...; an]] applies function [f] to [a1, ..., an]. *)",
            "artifact": "list.cmt",
            "loc_impl": {"file": "/proj/stdlib/list.ml", "line": 80, "col": 4},
        },
        {
            "path": ["List", "mapi"],
            "kind": "val",
            "type": "(int -> 'a -> 'b) -> 'a list -> 'b list",
            "artifact": "list.cmti",
            "loc_impl": {"file": "/proj/stdlib/list.ml", "line": 90, "col": 4},
            "loc_sig": {"file": "/proj/stdlib/list.mli", "line": 130, "col": 0},
        },
        {
            "path": ["String"],
            "kind": "module",
            "artifact": "string.cmi",
        },
        {
            "path": ["String", "t"],
            "kind": "type",
            "type": "string",
            "artifact": "string.cmi",
        },
        {
            "path": ["String", "concat"],
            "kind": "val",
            "type": "string -> string list -> string",
            "doc": "(** [concat sep sl] joins with \"sep\", e.g. a path \\ separator. *)",
            "artifact": "string.cmti",
            "loc_sig": {"file": "/proj/stdlib/string.mli", "line": 132, "col": 0},
        },
        {
            "path": ["Option"],
            "kind": "module",
            "artifact": "option.cmi",
        },
        {
            "path": ["Option", "map"],
            "kind": "val",
            "type": "('a -> 'b) -> 'a option -> 'b option",
            "artifact": "option.cmi",
        },
        {
            "path": ["Option", "none"],
            "kind": "constr",
            "owner": "option",
            "type": "'a option",
            "artifact": "option.cmi",
        },
        {
            "path": ["Not_found"],
            "kind": "exception",
            "artifact": "stdlib.cmi",
        },
    ],
}


@pytest.fixture
def sample_data():
    return json.loads(json.dumps(SAMPLE_INDEX))


@pytest.fixture
def index_file(tmp_path, sample_data):
    """Write the sample index to a temporary JSON file."""
    path = tmp_path / "index.json"
    path.write_text(json.dumps(sample_data))
    return path


@pytest.fixture
def index(index_file):
    return JsonIndex(index_file)


@pytest.fixture
def make_index(sample_data):
    """Build an in-memory index with extra opened modules."""

    def build(open_modules=(), **overrides):
        data = dict(sample_data, **overrides)
        return JsonIndex.from_spec(decode_index(json.dumps(data)), opened=open_modules)

    return build
