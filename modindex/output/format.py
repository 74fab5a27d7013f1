"""Format strings: ``%``-directives projected from an entry.

Directives:

    %n  short name, e.g. "map"
    %q  qualified name as seen from the opened scopes, e.g. "List.map" or "map"
    %p  full path, e.g. "List.map"
    %k  kind: type, val, exception, field(<type>), constr(<type>),
        method(<class>), module, modtype, class, classtype, keyword
    %t  type signature
    %d  documentation, empty when there is none
    %l  implementation location
    %s  signature (interface) location
    %f  artifact the entry was read from
    %i  short summary: qualified name, kind and truncated type
    %%  a literal '%'

A '%' followed by any other character is copied unchanged. Only the
directives present in a template are evaluated, so templates without %t,
%d or %l never compute those fields.
"""

import re
from enum import Enum
from typing import Callable, NamedTuple, Optional, Union

from rich.text import Text

from ..config import RenderOptions
from ..models import Entry, Kind, Location

NO_LOCATION = "<no location>"

_RE_WHITESPACE = re.compile(r"\s+")


class Directive(str, Enum):
    NAME = "n"
    QUALIFIED = "q"
    FULL_PATH = "p"
    KIND = "k"
    TYPE = "t"
    DOC = "d"
    LOC_IMPL = "l"
    LOC_SIG = "s"
    SOURCE_FILE = "f"
    SUMMARY = "i"
    PERCENT = "%"


class Segment(NamedTuple):
    """A piece of rendered text; ``kind`` is set on kind tokens."""

    text: str
    kind: Optional[Kind] = None


Token = Union[str, Directive]
Colorise = Callable[[Kind], Optional[str]]

_DIRECTIVES = {d.value: d for d in Directive}


def parse_template(template: str) -> list[Token]:
    """Split a template into literal strings and directives."""
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    while i < len(template):
        char = template[i]
        if char == "%" and i + 1 < len(template) and template[i + 1] in _DIRECTIVES:
            if literal:
                tokens.append("".join(literal))
                literal = []
            tokens.append(_DIRECTIVES[template[i + 1]])
            i += 2
            continue
        literal.append(char)
        i += 1
    if literal:
        tokens.append("".join(literal))
    return tokens


def truncate(text: str, width: int) -> str:
    """Collapse ``text`` to one line of at most ``width`` characters."""
    text = _RE_WHITESPACE.sub(" ", text).strip()
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."


def _location(loc: Optional[Location], options: RenderOptions) -> str:
    if loc is None:
        return NO_LOCATION
    return loc.render(options.project_root)


def _summary(entry: Entry, options: RenderOptions) -> list[Segment]:
    segments = [Segment(entry.qualified), Segment(" "), Segment(str(entry.kind), entry.kind)]
    ty = truncate(entry.type_signature, options.type_width)
    if ty:
        segments.append(Segment(" " + ty))
    return segments


_PROJECTIONS: dict[Directive, Callable[[Entry, RenderOptions], list[Segment]]] = {
    Directive.NAME: lambda e, o: [Segment(e.name)],
    Directive.QUALIFIED: lambda e, o: [Segment(e.qualified)],
    Directive.FULL_PATH: lambda e, o: [Segment(e.full_path)],
    Directive.KIND: lambda e, o: [Segment(str(e.kind), e.kind)],
    Directive.TYPE: lambda e, o: [Segment(e.type_signature)],
    Directive.DOC: lambda e, o: [Segment(e.doc or "")],
    Directive.LOC_IMPL: lambda e, o: [Segment(_location(e.location_impl, o))],
    Directive.LOC_SIG: lambda e, o: [Segment(_location(e.location_sig, o))],
    Directive.SOURCE_FILE: lambda e, o: [Segment(e.source_artifact)],
    Directive.SUMMARY: _summary,
    Directive.PERCENT: lambda e, o: [Segment("%")],
}


def no_color(kind: Kind) -> Optional[str]:
    return None


class FormatEngine:
    """A parsed template that renders entries."""

    def __init__(self, template: str, options: RenderOptions = RenderOptions()):
        self.template = template
        self.options = options
        self.tokens = parse_template(template)

    def segments(self, entry: Entry) -> list[Segment]:
        result: list[Segment] = []
        for token in self.tokens:
            if isinstance(token, Directive):
                result.extend(_PROJECTIONS[token](entry, self.options))
            else:
                result.append(Segment(token))
        return result

    def render(self, entry: Entry) -> str:
        return "".join(segment.text for segment in self.segments(entry))

    def render_text(self, entry: Entry, colorise: Colorise = no_color) -> Text:
        """Render to rich text, styling kind tokens with ``colorise``."""
        text = Text()
        for segment in self.segments(entry):
            style = colorise(segment.kind) if segment.kind is not None else None
            text.append(segment.text, style=style)
        return text


def render(template: str, entry: Entry, options: RenderOptions = RenderOptions()) -> str:
    """Render one entry through a format string."""
    return FormatEngine(template, options).render(entry)
