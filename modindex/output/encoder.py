"""Output encoders: plain format strings, colored summaries, s-expressions."""

from enum import Enum
from typing import Iterable, Iterator, Optional, Union

import typer
from rich.console import Console
from rich.text import Text

from . import sexp
from .format import Colorise, FormatEngine, no_color
from ..config import DEFAULT_SUMMARY_FORMAT, RenderOptions
from ..errors import UsageError
from ..models import Entry, Kind, KindTag

KIND_STYLES: dict[KindTag, str] = {
    KindTag.TYPE: "cyan",
    KindTag.VALUE: "green",
    KindTag.EXCEPTION: "red",
    KindTag.FIELD: "yellow",
    KindTag.CONSTRUCTOR: "yellow",
    KindTag.METHOD: "green",
    KindTag.MODULE: "bold blue",
    KindTag.MODULE_TYPE: "blue",
    KindTag.CLASS: "magenta",
    KindTag.CLASS_TYPE: "magenta",
    KindTag.KEYWORD: "bold",
}


def color(kind: Kind) -> Optional[str]:
    return KIND_STYLES[kind.tag]


class OutputMode(Enum):
    PLAIN = "plain"
    SUMMARY = "summary"
    SEXP = "sexp"


def select_mode(sexp_output: bool, format_string: Optional[str]) -> OutputMode:
    """Choose the output mode from command flags.

    Raises:
        UsageError: If both an s-expression output and a format string are
            requested.
    """
    if sexp_output:
        if format_string is not None:
            raise UsageError("options --format and --sexp are incompatible")
        return OutputMode.SEXP
    if format_string is not None:
        return OutputMode.PLAIN
    return OutputMode.SUMMARY


class OutputEncoder:
    """Render a list of entries in one of the output modes."""

    def __init__(
        self,
        mode: OutputMode,
        options: RenderOptions = RenderOptions(),
        format_string: Optional[str] = None,
    ):
        self.mode = mode
        self.options = options
        if mode is OutputMode.PLAIN:
            if format_string is None:
                raise UsageError("plain output needs a format string")
            self.engine = FormatEngine(format_string, options)
        else:
            self.engine = FormatEngine(DEFAULT_SUMMARY_FORMAT, options)

    @classmethod
    def from_flags(
        cls,
        sexp_output: bool,
        format_string: Optional[str],
        options: RenderOptions = RenderOptions(),
    ) -> "OutputEncoder":
        return cls(select_mode(sexp_output, format_string), options, format_string)

    @property
    def colorise(self) -> Colorise:
        return color if self.options.color else no_color

    def encode(self, entries: Iterable[Entry]) -> Iterator[Union[str, Text]]:
        """Yield one output line per entry (plus brackets for s-expressions)."""
        if self.mode is OutputMode.SEXP:
            yield from sexp.iter_encode(entries)
        elif self.mode is OutputMode.PLAIN:
            for entry in entries:
                yield self.engine.render(entry)
        elif self.options.color:
            for entry in entries:
                yield self.engine.render_text(entry, self.colorise)
        else:
            for entry in entries:
                yield self.engine.render(entry)

    def emit(self, entries: Iterable[Entry], console: Console):
        """Write the encoded entries to stdout.

        Plain strings are echoed as rendered; only colored summaries go
        through the rich console.
        """
        if self.mode is OutputMode.SEXP:
            typer.echo(sexp.dumps(entries), nl=False)
            return
        for line in self.encode(entries):
            if isinstance(line, Text):
                console.print(line)
            else:
                typer.echo(line)


def make_console(options: RenderOptions, stderr: bool = False) -> Console:
    """Build a console that prints lines verbatim (no markup, no wrapping)."""
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        force_terminal=True if options.color else None,
        no_color=not options.color,
    )
