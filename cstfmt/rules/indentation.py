"""Rule: re-indent every block with a fixed number of spaces."""

import libcst as cst

from .base import FormatRule


class Indentation(FormatRule):
    """Make each indented block use ``config.indent_width`` spaces.

    Blocks that carry their own indentation string are reset so they inherit
    the module default, which is then set to the configured width.
    Continuation lines inside brackets keep their original alignment.
    """

    key = "indentation"

    def leave_IndentedBlock(
        self, original_node: cst.IndentedBlock, updated_node: cst.IndentedBlock
    ) -> cst.IndentedBlock:
        if updated_node.indent is None:
            return updated_node
        if updated_node.indent != " " * self.config.indent_width:
            self._record("re-indented block")
        return updated_node.with_changes(indent=None)

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        indent = " " * self.config.indent_width
        if updated_node.default_indent == indent:
            return updated_node
        self._record(f"set indentation to {self.config.indent_width} spaces")
        return updated_node.with_changes(default_indent=indent)
