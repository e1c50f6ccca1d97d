"""Parse Python source with libcst, apply the formatting rules, and re-emit it."""

import ast
import io
import sys
import tokenize
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple, Type

import libcst as cst

from .config import FormatConfig
from .diagnostics import DiagnosticSink
from .errors import FileNotReadableError, InvalidSyntaxError
from .rules import RULES, FormatRule


class DebugOption(Enum):
    """Debugging switches forwarded from the command line."""

    # Parse and re-emit the source without running any rule
    DISABLE_RULES = "disable-rules"
    # Print the parsed tree to stderr before formatting
    DUMP_TREE = "dump-tree"


def _decode(source: bytes) -> Tuple[str, str]:
    """Return (text, encoding) using the PEP 263 declaration, if any."""
    try:
        encoding, _ = tokenize.detect_encoding(io.BytesIO(source).readline)
        return source.decode(encoding), encoding
    except (SyntaxError, LookupError, UnicodeDecodeError) as exc:
        raise FileNotReadableError(str(exc)) from exc


def _byte_offset(text: str, encoding: str, line: int, column: int) -> int:
    """Convert a 1-based *line* and 0-based character *column* to a byte offset."""
    lines = io.StringIO(text, newline="").readlines()
    if line > len(lines):
        return len(text.encode(encoding))
    char_offset = sum(len(lines[i]) for i in range(line - 1))
    char_offset += min(column, len(lines[line - 1]))
    return len(text[:char_offset].encode(encoding))


def _syntax_error_position(
    text: str, encoding: str, filename: str, exc: cst.ParserSyntaxError
) -> int:
    """Return the byte offset of a syntax error.

    The compiler pinpoints the offending token more precisely than libcst,
    which often reports the start of the following line; libcst's position is
    used when the compiler accepts the source or gives no location.
    """
    try:
        compile(text, filename, "exec", flags=ast.PyCF_ONLY_AST, dont_inherit=True)
    except SyntaxError as err:
        if err.lineno is not None and err.offset is not None:
            return _byte_offset(text, encoding, err.lineno, max(err.offset - 1, 0))
    except ValueError:
        pass
    return _byte_offset(text, encoding, exc.raw_line, exc.raw_column)


class CstFormatter:
    """Formats Python source by running each enabled rule over its CST.

    When *diagnostics* is given, every change a rule makes is reported to it as
    a note; pass None to keep the formatter silent.
    """

    def __init__(
        self,
        configuration: FormatConfig,
        debug_options: Iterable[DebugOption] = (),
        diagnostics: Optional[DiagnosticSink] = None,
        rules: Optional[List[Type[FormatRule]]] = None,
    ) -> None:
        self.configuration = configuration
        self.debug_options: FrozenSet[DebugOption] = frozenset(debug_options)
        self.diagnostics = diagnostics
        self.rules = RULES if rules is None else rules

    def _enabled_rules(self) -> List[Type[FormatRule]]:
        if DebugOption.DISABLE_RULES in self.debug_options:
            return []
        return [r for r in self.rules if self.configuration.should_run(r.key)]

    def format(self, source: bytes, assumed_filename: Optional[str] = None) -> bytes:
        """Return the formatted form of *source*.

        Raises FileNotReadableError if the bytes cannot be decoded and
        InvalidSyntaxError if they do not parse.
        """
        filename = assumed_filename or "<stdin>"
        text, encoding = _decode(source)
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            position = _syntax_error_position(text, encoding, filename, exc)
            raise InvalidSyntaxError(position, exc.message) from exc

        if DebugOption.DUMP_TREE in self.debug_options:
            print(repr(module), file=sys.stderr)

        for RuleClass in self._enabled_rules():
            rule = RuleClass(self.configuration)
            module = module.visit(rule)
            if self.diagnostics is not None:
                for change in rule.get_changes():
                    self.diagnostics.note(f"{filename}: {change}")

        return module.bytes
