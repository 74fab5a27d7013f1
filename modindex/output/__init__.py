"""Output formatting module."""

from .format import Directive, FormatEngine, parse_template, render
from .encoder import OutputEncoder, OutputMode, make_console, select_mode
from .sexp import dumps as sexp_dumps, loads as sexp_loads

__all__ = [
    "Directive",
    "FormatEngine",
    "parse_template",
    "render",
    "OutputEncoder",
    "OutputMode",
    "make_console",
    "select_mode",
    "sexp_dumps",
    "sexp_loads",
]
