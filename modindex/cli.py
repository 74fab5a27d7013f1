"""Main CLI application."""

import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import NoReturn, Optional

import click
import msgspec
import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import (
    DEFAULT_SUMMARY_FORMAT,
    ENV_INDEX,
    ENV_ROOT,
    QueryOptions,
    RenderOptions,
    TieBreak,
    configure_logging,
    parse_kinds,
)
from .errors import EXIT_USAGE, ModIndexError, NotFound
from .index import JsonIndex
from .output import FormatEngine, OutputEncoder, make_console
from .queries import QueryResolver

FORMAT_HELP = """Format strings are printed for every match, with these sequences
interpreted:

\b
  %n  name of the ident, e.g. "map"
  %q  qualified ident, e.g. "List.map", or "map" if accessed through an open
  %p  full path of the ident, e.g. "List.map"
  %k  kind: type, val, exception, field(<type>), constr(<type>),
      method(<class>), module, modtype, class, classtype, keyword
  %t  type of the ident
  %d  documentation of the ident
  %l  location of the definition
  %s  location of the signature (interface)
  %f  file the ident was found in
  %i  short summary of the above
  %%  a single '%' character
"""

app = typer.Typer(
    name="modindex",
    help="Explore the interfaces of indexed modules: completion, types, locations, docs.",
    add_completion=False,
)
err_console = Console(stderr=True)


@dataclass(frozen=True)
class AppState:
    """Options collected by the top-level callback."""

    index_path: Optional[Path]
    query: QueryOptions
    render: RenderOptions


def get_index(index_path: Optional[Path], opened: tuple[str, ...] = ()) -> JsonIndex:
    """Load the index file, exiting with a usage error if it can't be read."""
    if index_path is None:
        err_console.print(f"[red]Error: no index given (use --index or ${ENV_INDEX})[/red]")
        raise typer.Exit(EXIT_USAGE)
    if not index_path.exists():
        err_console.print(f"[red]Error: index file not found: {escape(str(index_path))}[/red]")
        raise typer.Exit(EXIT_USAGE)
    try:
        return JsonIndex(index_path, opened=opened)
    except (OSError, msgspec.DecodeError, ValueError) as e:
        err_console.print(f"[red]Error: cannot read index {escape(str(index_path))}: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_USAGE)


def _state(ctx: typer.Context) -> AppState:
    return ctx.find_root().obj


def _resolver(state: AppState) -> QueryResolver:
    return QueryResolver(get_index(state.index_path, state.query.opened), state.query)


def _fail(error: ModIndexError) -> NoReturn:
    err_console.print(f"[red]{escape(str(error))}[/red]")
    raise typer.Exit(error.exit_code)


def _version_callback(value: bool):
    if value:
        typer.echo(f"modindex {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def common(
    ctx: typer.Context,
    index: Optional[Path] = typer.Option(
        None, "--index", "-x", envvar=ENV_INDEX, help="Path to the index JSON"
    ),
    open_modules: Optional[list[str]] = typer.Option(
        None, "--open", "-O", help="Consider MODULE opened (repeatable)", metavar="MODULE"
    ),
    show: Optional[str] = typer.Option(
        None, "--show", help="Comma-separated kinds to complete, e.g. val,type,module"
    ),
    color: Optional[bool] = typer.Option(
        None, "--color/--no-color", help="Colorize summaries (default: when on a terminal)"
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", envvar=ENV_ROOT, help="Project root; locations below it are shown relative"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log lookups to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Explore the interfaces of indexed modules."""
    configure_logging(verbose)
    try:
        kinds = parse_kinds(show)
    except ValueError as e:
        err_console.print(f"[red]Error: invalid --show value: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_USAGE)

    if color is None:
        color = sys.stdout.isatty()

    ctx.obj = AppState(
        index_path=index,
        query=QueryOptions(opened=tuple(open_modules or ()), kinds=kinds),
        render=RenderOptions(color=color, project_root=root.resolve() if root else None),
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# =============================================================================
# Query Commands
# =============================================================================


@app.command(epilog=FORMAT_HELP)
def complete(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Identifier prefix, e.g. List.ma"),
    sexp_output: bool = typer.Option(False, "--sexp", help="Output the result as an s-expression"),
    format_string: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format, see FORMAT STRINGS below"
    ),
):
    """Output completions for a given prefix."""
    state = _state(ctx)
    try:
        encoder = OutputEncoder.from_flags(sexp_output, format_string, state.render)
    except ModIndexError as e:
        _fail(e)

    entries = _resolver(state).complete(prefix)
    encoder.emit(entries, make_console(state.render))


@app.command("type")
def type_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Identifier to look up, e.g. List.map"),
    tie_break: TieBreak = typer.Option(
        TieBreak.FIRST, "--tie-break", help="How to pick among ambiguous matches"
    ),
):
    """Print the type of an identifier."""
    state = _state(ctx)
    resolver = _resolver(replace(state, query=replace(state.query, tie_break=tie_break)))
    try:
        entry = resolver.resolve_unique(query)
    except NotFound as e:
        _fail(e)

    typer.echo(entry.type_signature)


@app.command()
def locate(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Identifier to look up"),
    interface: bool = typer.Option(
        False, "--interface", "-i", help="Look up the interface instead of the implementation, if it exists"
    ),
):
    """Get the location where an identifier was defined."""
    state = _state(ctx)
    result = _resolver(state).resolve_location(query, prefer_interface=interface)
    if not result.found:
        _fail(NotFound(query))

    for entry in result.entries:
        typer.echo(entry.location(result.interface).render(state.render.project_root))


@app.command("print", epilog=FORMAT_HELP)
def print_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="The identifier to look up"),
    format_string: str = typer.Argument(
        DEFAULT_SUMMARY_FORMAT, metavar="FORMAT", help="Output format, see FORMAT STRINGS below"
    ),
):
    """Print information about an identifier with a custom format."""
    state = _state(ctx)
    entries = _resolver(state).resolve_all(query)
    if not entries:
        _fail(NotFound(query))

    engine = FormatEngine(format_string, state.render)
    for entry in entries:
        typer.echo(engine.render(entry))


def main():
    """Entry point.

    Click reports malformed arguments with status 2, which is reserved here
    for lookups that found nothing; map them to the usage status.
    """
    try:
        status = app(standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(EXIT_USAGE)
    except click.Abort:
        sys.exit(EXIT_USAGE)
    sys.exit(status or 0)


if __name__ == "__main__":
    main()
