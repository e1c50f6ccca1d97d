"""Run-scoped diagnostics: severities, locations, and the collecting sink."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


@dataclass(frozen=True)
class SourceLocation:
    """A position in a source file; line and column are 1-based."""

    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        if self.location is None:
            return f"{self.severity.value}: {self.message}"
        return f"{self.location}: {self.severity.value}: {self.message}"


Consumer = Callable[[Diagnostic], None]


class DiagnosticSink:
    """Append-only collector of the diagnostics emitted during one run.

    Every consumer is called with each diagnostic as it arrives, so the CLI
    can print them immediately while the sink keeps the full record used to
    decide the exit status.
    """

    def __init__(self, consumers: Iterable[Consumer] = ()) -> None:
        self._consumers: List[Consumer] = list(consumers)
        self._diagnostics: List[Diagnostic] = []

    def diagnose(
        self,
        severity: Severity,
        message: str,
        location: Optional[SourceLocation] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(severity, message, location)
        self._diagnostics.append(diagnostic)
        for consumer in self._consumers:
            consumer(diagnostic)
        return diagnostic

    def error(self, message: str, location: Optional[SourceLocation] = None) -> Diagnostic:
        return self.diagnose(Severity.ERROR, message, location)

    def note(self, message: str, location: Optional[SourceLocation] = None) -> Diagnostic:
        return self.diagnose(Severity.NOTE, message, location)

    @property
    def diagnostics(self) -> Sequence[Diagnostic]:
        return tuple(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._diagnostics)

    @property
    def has_warnings(self) -> bool:
        return any(d.severity is Severity.WARNING for d in self._diagnostics)


def location_for_offset(file: str, source: bytes, offset: int) -> SourceLocation:
    """Convert a 0-based byte *offset* in *source* to a 1-based line and column.

    Columns count bytes. Offsets outside the source are clamped to its bounds.
    """
    offset = max(0, min(offset, len(source)))
    prefix = source[:offset]
    line = prefix.count(b"\n") + 1
    column = offset - (prefix.rfind(b"\n") + 1) + 1
    return SourceLocation(file, line, column)
