"""Run the formatter once per request and classify what happened."""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Union

from .config import FormatConfig
from .errors import FileNotReadableError, InvalidSyntaxError
from .formatter import CstFormatter, DebugOption


@dataclass(frozen=True)
class FormatRequest:
    """Everything needed to format one source unit."""

    source: bytes
    assumed_filename: Optional[str]
    configuration: FormatConfig
    in_place: bool = False
    ignore_unparsable: bool = False
    debug_options: FrozenSet[DebugOption] = field(default_factory=frozenset)

    @property
    def display_name(self) -> str:
        return self.assumed_filename or "<stdin>"


@dataclass(frozen=True)
class Success:
    formatted: bytes


@dataclass(frozen=True)
class UnreadableFile:
    pass


@dataclass(frozen=True)
class UnparsableSyntax:
    # 0-based byte offset into FormatRequest.source
    position: int


@dataclass(frozen=True)
class OtherFailure:
    message: str


FormatOutcome = Union[Success, UnreadableFile, UnparsableSyntax, OtherFailure]

FormatterFactory = Callable[..., CstFormatter]


def classify(
    request: FormatRequest, formatter_factory: FormatterFactory = CstFormatter
) -> FormatOutcome:
    """Format *request* and return exactly one outcome.

    The formatter runs without a diagnostic sink: any problem is returned as
    an outcome for the caller to report.
    """
    formatter = formatter_factory(
        request.configuration, request.debug_options, diagnostics=None
    )
    try:
        formatted = formatter.format(request.source, request.assumed_filename)
    except FileNotReadableError:
        return UnreadableFile()
    except InvalidSyntaxError as exc:
        return UnparsableSyntax(exc.position)
    except Exception as exc:
        return OtherFailure(str(exc))
    return Success(formatted)
