"""Rule: strip spaces and tabs at the end of lines."""

import libcst as cst

from .base import FormatRule

_EMPTY = cst.SimpleWhitespace("")


class TrailingWhitespace(FormatRule):
    """Remove whitespace between the last token (or comment) and the newline.

    Whitespace inside string literals is never part of these nodes and is
    left alone.
    """

    key = "trailing_whitespace"

    def leave_TrailingWhitespace(
        self, original_node: cst.TrailingWhitespace, updated_node: cst.TrailingWhitespace
    ) -> cst.TrailingWhitespace:
        if updated_node.comment is not None or not updated_node.whitespace.value:
            return updated_node
        self._record("removed trailing whitespace")
        return updated_node.with_changes(whitespace=_EMPTY)

    def leave_EmptyLine(
        self, original_node: cst.EmptyLine, updated_node: cst.EmptyLine
    ) -> cst.EmptyLine:
        if updated_node.comment is not None:
            return updated_node
        if not updated_node.indent and not updated_node.whitespace.value:
            return updated_node
        self._record("removed whitespace on blank line")
        return updated_node.with_changes(indent=False, whitespace=_EMPTY)

    def leave_Comment(
        self, original_node: cst.Comment, updated_node: cst.Comment
    ) -> cst.Comment:
        stripped = updated_node.value.rstrip(" \t\f")
        if stripped == updated_node.value:
            return updated_node
        self._record("removed trailing whitespace after comment")
        return updated_node.with_changes(value=stripped)
