"""S-expression encoding of entries, for editor integrations.

Output shape::

    (
      ("map" (:path . "List.map") (:type . "...") (:kind . "val") (:doc . "..."))
    )

``loads`` reads this format back into a list of dicts.
"""

from typing import Iterable, Iterator

from ..models import Entry

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}
_UNESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "r": "\r"}


class SexpDecodeError(ValueError):
    """Malformed s-expression text."""


def quote(value: str) -> str:
    """Return ``value`` as a double-quoted string literal."""
    out = ['"']
    for char in value:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            out.append(escaped)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\{ord(char):03o}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


def _is_octal(digits: str) -> bool:
    return len(digits) == 3 and all(d in "01234567" for d in digits)


def _read_string(text: str, start: int) -> tuple[str, int]:
    """Read the string literal opening at ``start``; return it and the next index."""
    out = []
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == '"':
            return "".join(out), i + 1
        if char != "\\":
            out.append(char)
            i += 1
            continue
        if i + 1 >= len(text):
            break
        nxt = text[i + 1]
        if nxt in _UNESCAPES:
            out.append(_UNESCAPES[nxt])
            i += 2
        elif _is_octal(text[i + 1:i + 4]):
            out.append(chr(int(text[i + 1:i + 4], 8)))
            i += 4
        else:
            raise SexpDecodeError(f"bad escape \\{nxt} at offset {i}")
    raise SexpDecodeError(f"unterminated string at offset {start}")


def unquote(literal: str) -> str:
    """Decode a single string literal produced by ``quote``."""
    literal = literal.strip()
    if not literal.startswith('"'):
        raise SexpDecodeError("string literal must start with '\"'")
    value, end = _read_string(literal, 0)
    if end != len(literal):
        raise SexpDecodeError(f"trailing data after string at offset {end}")
    return value


def encode_entry(entry: Entry) -> str:
    """Encode one entry as a record; ``:doc`` only when documented."""
    parts = [
        quote(entry.qualified),
        f"(:path . {quote(entry.full_path)})",
        f"(:type . {quote(entry.type_signature)})",
        f"(:kind . {quote(str(entry.kind))})",
    ]
    doc = entry.doc
    if doc is not None:
        parts.append(f"(:doc . {quote(doc)})")
    return "(" + " ".join(parts) + ")"


def iter_encode(entries: Iterable[Entry]) -> Iterator[str]:
    """Yield the output lines for a list of entries."""
    yield "("
    for entry in entries:
        yield "  " + encode_entry(entry)
    yield ")"


def dumps(entries: Iterable[Entry]) -> str:
    return "\n".join(iter_encode(entries)) + "\n"


def _tokenize(text: str) -> Iterator[str | tuple[str]]:
    """Yield punctuation and atoms as str, string literals as 1-tuples."""
    i = 0
    while i < len(text):
        char = text[i]
        if char.isspace():
            i += 1
        elif char in "().":
            yield char
            i += 1
        elif char == '"':
            value, i = _read_string(text, i)
            yield (value,)
        else:
            start = i
            while i < len(text) and not text[i].isspace() and text[i] not in '()"':
                i += 1
            yield text[start:i]


def _parse(tokens: list, pos: int):
    if pos >= len(tokens):
        raise SexpDecodeError("unexpected end of input")
    token = tokens[pos]
    if isinstance(token, tuple):
        return token[0], pos + 1
    if token != "(":
        if token in (")", "."):
            raise SexpDecodeError(f"unexpected {token!r}")
        return token, pos + 1
    items = []
    pos += 1
    while pos < len(tokens) and tokens[pos] != ")":
        if tokens[pos] == ".":
            if len(items) != 1:
                raise SexpDecodeError("dotted pair needs exactly one head")
            tail, pos = _parse(tokens, pos + 1)
            items = (items[0], tail)
            if pos >= len(tokens) or tokens[pos] != ")":
                raise SexpDecodeError("dotted pair must end with ')'")
            return items, pos + 1
        item, pos = _parse(tokens, pos)
        items.append(item)
    if pos >= len(tokens):
        raise SexpDecodeError("unbalanced parentheses")
    return items, pos + 1


def loads(text: str) -> list[dict[str, str]]:
    """Decode ``dumps`` output into records.

    Each record maps ``name`` to the qualified name and every tagged field
    (``path``, ``type``, ``kind``, ``doc``) to its value.
    """
    tokens = list(_tokenize(text))
    if not tokens:
        raise SexpDecodeError("empty input")
    tree, pos = _parse(tokens, 0)
    if pos != len(tokens):
        raise SexpDecodeError("trailing data after list")
    if not isinstance(tree, list):
        raise SexpDecodeError("top-level value must be a list")
    records = []
    for item in tree:
        if not isinstance(item, list) or not item:
            raise SexpDecodeError("record must be a non-empty list")
        record = {"name": item[0]}
        for pair in item[1:]:
            if not isinstance(pair, tuple):
                raise SexpDecodeError("record field must be a dotted pair")
            key, value = pair
            record[key.lstrip(":")] = value
        records.append(record)
    return records
