"""CLI entry point: parse flags, format the sources, and set the exit status."""

from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .diagnostics import Diagnostic, DiagnosticSink
from .driver import fail_if_diagnostics_emitted, format_sources
from .errors import DiagnosticsEmittedError, OutputWriteError
from .formatter import DebugOption

app = typer.Typer(add_completion=False)


def _print_diagnostic(diagnostic: Diagnostic) -> None:
    typer.echo(str(diagnostic), err=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cstfmt {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files or directories to format; reads stdin when omitted"
    ),
    in_place: bool = typer.Option(
        False, "--in-place", "-i", help="Overwrite the current file when formatting."
    ),
    assume_filename: Optional[str] = typer.Option(
        None,
        "--assume-filename",
        help="Filename used in diagnostics and configuration lookup for stdin.",
    ),
    ignore_unparsable_files: bool = typer.Option(
        False,
        "--ignore-unparsable-files",
        help="Ignore files that contain invalid syntax; print them unchanged.",
    ),
    configuration: Optional[Path] = typer.Option(
        None, "--configuration", help="Path to a TOML configuration file."
    ),
    debug_disable_rules: bool = typer.Option(
        False, "--debug-disable-rules", hidden=True
    ),
    debug_dump_tree: bool = typer.Option(False, "--debug-dump-tree", hidden=True),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True
    ),
) -> None:
    """Format Python source code.

    When no files are specified, it expects the source from standard input.
    """
    paths = paths or []
    if in_place and not paths:
        raise typer.BadParameter(
            "'--in-place' is only valid when formatting files", param_hint="'--in-place'"
        )

    debug_options = set()
    if debug_disable_rules:
        debug_options.add(DebugOption.DISABLE_RULES)
    if debug_dump_tree:
        debug_options.add(DebugOption.DUMP_TREE)

    sink = DiagnosticSink(consumers=[_print_diagnostic])
    try:
        format_sources(
            paths,
            sink,
            assumed_filename=assume_filename,
            in_place=in_place,
            ignore_unparsable=ignore_unparsable_files,
            debug_options=frozenset(debug_options),
            config_path=configuration,
        )
    except OutputWriteError as exc:
        typer.echo(f"cstfmt: {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        fail_if_diagnostics_emitted(sink)
    except DiagnosticsEmittedError:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
