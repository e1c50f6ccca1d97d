"""Rule: prefer one quote character for simple string literals."""

import libcst as cst

from ..config import FormatConfig
from .base import FormatRule

_QUOTE_CHARS = {"double": '"', "single": "'"}


class Quotes(FormatRule):
    """Switch single-line string literals to the configured quote character.

    A literal is only rewritten when its body contains neither the target
    quote nor a backslash, so the value of the string never changes. Triple
    quoted strings and strings nested in f-strings are left alone.
    """

    key = "quotes"

    def __init__(self, config: FormatConfig) -> None:
        super().__init__(config)
        self._fstring_depth = 0

    def visit_FormattedString(self, node: cst.FormattedString) -> None:
        self._fstring_depth += 1

    def leave_FormattedString(
        self, original_node: cst.FormattedString, updated_node: cst.FormattedString
    ) -> cst.FormattedString:
        self._fstring_depth -= 1
        return updated_node

    def leave_SimpleString(
        self, original_node: cst.SimpleString, updated_node: cst.SimpleString
    ) -> cst.SimpleString:
        target = _QUOTE_CHARS.get(self.config.quote_style)
        if target is None or self._fstring_depth:
            return updated_node
        quote = updated_node.quote
        if len(quote) == 3 or quote == target:
            return updated_node
        body = updated_node.raw_value
        if target in body or "\\" in body:
            return updated_node
        value = updated_node.value
        prefix = value[: len(value) - len(body) - 2]
        self._record(f"changed quotes of {value}")
        return updated_node.with_changes(value=f"{prefix}{target}{body}{target}")
