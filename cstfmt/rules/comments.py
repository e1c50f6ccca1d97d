"""Rule: put a single space between ``#`` and the comment text."""

import libcst as cst

from .base import FormatRule


class Comments(FormatRule):
    """Rewrite ``#comment`` as ``# comment``.

    Shebangs and the ``#!``, ``#:`` and ``##`` forms are left alone, as are
    empty comments.
    """

    key = "comments"

    def leave_Comment(
        self, original_node: cst.Comment, updated_node: cst.Comment
    ) -> cst.Comment:
        value = updated_node.value
        if len(value) < 2 or value[1] in " \t!:#":
            return updated_node
        self._record(f"added space in comment {value!r}")
        return updated_node.with_changes(value=f"# {value[1:]}")
