"""cstfmt-specific exceptions."""


class CstfmtError(Exception):
    """Base class for every error raised by cstfmt."""


class ConfigurationError(CstfmtError):
    """Raised when a configuration file is missing, unparseable, or invalid."""


class UnreadableSourceError(CstfmtError):
    """Raised when source bytes cannot be read from a file or stdin."""


class FormatterError(CstfmtError):
    """Base class for failures reported by the formatter."""


class FileNotReadableError(FormatterError):
    """Raised when the source cannot be decoded into text."""


class InvalidSyntaxError(FormatterError):
    """Raised when the source fails to parse.

    ``position`` is the 0-based byte offset of the failure in the source.
    """

    def __init__(self, position: int, message: str = "") -> None:
        super().__init__(message or f"invalid syntax at byte {position}")
        self.position = position


class OutputWriteError(CstfmtError):
    """Raised when formatted output could not be written.

    This aborts the whole run: the caller asked for a write that did not
    happen.
    """


class DiagnosticsEmittedError(CstfmtError):
    """Raised after a run in which at least one error diagnostic was emitted."""
