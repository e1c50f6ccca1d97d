"""Rule: limit runs of blank lines and end the file with exactly one newline."""

from typing import List, Sequence, Union

import libcst as cst

from .base import FormatRule


def _is_blank(line: cst.EmptyLine) -> bool:
    return line.comment is None


class BlankLines(FormatRule):
    """Collapse consecutive blank lines to ``config.max_blank_lines``.

    Blank lines at the very start and end of the module are dropped, and a
    missing final newline is added. Comment lines are always kept.
    """

    key = "blank_lines"

    def _collapse(self, lines: Sequence[cst.EmptyLine]) -> List[cst.EmptyLine]:
        limit = self.config.max_blank_lines
        kept: List[cst.EmptyLine] = []
        run = 0
        for line in lines:
            if _is_blank(line):
                run += 1
                if run > limit:
                    continue
            else:
                run = 0
            kept.append(line)
        if len(kept) != len(lines):
            self._record(f"removed {len(lines) - len(kept)} blank line(s)")
        return kept

    def on_leave(
        self, original_node: cst.CSTNode, updated_node: cst.CSTNode
    ) -> Union[cst.CSTNode, cst.RemovalSentinel, cst.FlattenSentinel]:
        updated_node = super().on_leave(original_node, updated_node)
        if not isinstance(updated_node, cst.CSTNode) or isinstance(updated_node, cst.Module):
            return updated_node
        changes = {}
        for attr in ("leading_lines", "lines_after_decorators"):
            lines = getattr(updated_node, attr, None)
            if lines:
                collapsed = self._collapse(lines)
                if len(collapsed) != len(lines):
                    changes[attr] = collapsed
        if isinstance(updated_node, cst.IndentedBlock) and updated_node.footer:
            footer = self._collapse(updated_node.footer)
            if len(footer) != len(updated_node.footer):
                changes["footer"] = footer
        return updated_node.with_changes(**changes) if changes else updated_node

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        if not updated_node.body and not updated_node.header and not updated_node.footer:
            return updated_node

        header = list(self._collapse(updated_node.header))
        while header and _is_blank(header[0]):
            header.pop(0)
            self._record("removed blank line at start of file")

        body = list(updated_node.body)
        if not header and body:
            leading = list(body[0].leading_lines)
            while leading and _is_blank(leading[0]):
                leading.pop(0)
                self._record("removed blank line at start of file")
            if len(leading) != len(body[0].leading_lines):
                body[0] = body[0].with_changes(leading_lines=leading)

        footer = list(self._collapse(updated_node.footer))
        while footer and _is_blank(footer[-1]):
            footer.pop()
            self._record("removed blank line at end of file")

        if not updated_node.has_trailing_newline:
            self._record("added final newline")

        return updated_node.with_changes(
            header=header, body=body, footer=footer, has_trailing_newline=True
        )
