"""Drive the formatter over a batch of sources and report what went wrong."""

from pathlib import Path
from typing import FrozenSet, Iterable, Optional

from .config import load_config
from .diagnostics import DiagnosticSink, Severity, location_for_offset
from .errors import ConfigurationError, DiagnosticsEmittedError, UnreadableSourceError
from .formatter import CstFormatter, DebugOption
from .outcome import (
    FormatOutcome,
    FormatRequest,
    FormatterFactory,
    OtherFailure,
    Success,
    UnparsableSyntax,
    UnreadableFile,
    classify,
)
from .source import iter_source_paths, read_source
from .writer import InPlace, Stdout, write_output


def handle_outcome(
    request: FormatRequest, outcome: FormatOutcome, sink: DiagnosticSink
) -> None:
    """Write or report the *outcome* of formatting *request*.

    Only a Success (or an ignored syntax error outside in-place mode) ever
    reaches the writer, so a file that failed to format is never touched.
    """
    name = request.display_name
    if isinstance(outcome, Success):
        if request.in_place:
            write_output(outcome.formatted, InPlace(name))
        else:
            write_output(outcome.formatted, Stdout())
    elif isinstance(outcome, UnreadableFile):
        sink.error(f"Unable to format {name}: file is not readable or does not exist.")
    elif isinstance(outcome, UnparsableSyntax):
        if request.ignore_unparsable:
            # In-place: nothing goes to stdout and the file is left as is.
            if not request.in_place:
                write_output(request.source, Stdout())
            return
        location = location_for_offset(name, request.source, outcome.position)
        sink.error("file contains invalid or unrecognized Python syntax.", location)
    elif isinstance(outcome, OtherFailure):
        sink.error(f"Unable to format {name}: {outcome.message}")
    else:  # pragma: no cover
        raise TypeError(f"unexpected format outcome: {outcome!r}")


def format_main(
    path: Optional[str],
    sink: DiagnosticSink,
    assumed_filename: Optional[str] = None,
    in_place: bool = False,
    ignore_unparsable: bool = False,
    debug_options: FrozenSet[DebugOption] = frozenset(),
    config_path: Optional[Path] = None,
    formatter_factory: FormatterFactory = CstFormatter,
) -> None:
    """Format one source: the file at *path*, or stdin when *path* is None.

    Diagnostics are named after *assumed_filename*, which defaults to *path*.
    """
    if assumed_filename is None:
        assumed_filename = path
    name = assumed_filename or "<stdin>"

    try:
        source = read_source(path)
    except UnreadableSourceError:
        sink.error(f"Unable to read source for formatting from {name}.")
        return

    try:
        configuration = load_config(for_file=assumed_filename, config_path=config_path)
    except ConfigurationError as exc:
        sink.error(f"Unable to load configuration for {name}: {exc}")
        return

    request = FormatRequest(
        source=source,
        assumed_filename=assumed_filename,
        configuration=configuration,
        in_place=in_place,
        ignore_unparsable=ignore_unparsable,
        debug_options=frozenset(debug_options),
    )
    handle_outcome(request, classify(request, formatter_factory), sink)


def format_sources(
    paths: Iterable[str],
    sink: DiagnosticSink,
    assumed_filename: Optional[str] = None,
    in_place: bool = False,
    ignore_unparsable: bool = False,
    debug_options: FrozenSet[DebugOption] = frozenset(),
    config_path: Optional[Path] = None,
    formatter_factory: FormatterFactory = CstFormatter,
) -> None:
    """Format every source in order, continuing past per-source failures.

    With no *paths* a single source is read from stdin and *in_place* is
    ignored. OutputWriteError propagates and ends the batch.
    """
    paths = list(paths)
    if not paths:
        format_main(
            None,
            sink,
            assumed_filename=assumed_filename,
            in_place=False,
            ignore_unparsable=ignore_unparsable,
            debug_options=debug_options,
            config_path=config_path,
            formatter_factory=formatter_factory,
        )
        return

    for path in iter_source_paths(paths):
        format_main(
            path,
            sink,
            in_place=in_place,
            ignore_unparsable=ignore_unparsable,
            debug_options=debug_options,
            config_path=config_path,
            formatter_factory=formatter_factory,
        )


def fail_if_diagnostics_emitted(sink: DiagnosticSink) -> None:
    """Raise DiagnosticsEmittedError if the run recorded any error."""
    if sink.has_errors:
        count = sum(1 for d in sink.diagnostics if d.severity is Severity.ERROR)
        raise DiagnosticsEmittedError(f"{count} error(s) emitted")
