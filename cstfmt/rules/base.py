"""Abstract base class for CST-based formatting rules."""

from typing import List, Sequence

import libcst as cst

from ..config import FormatConfig


class FormatRule(cst.CSTTransformer):
    """Base class for all cstfmt rules.

    Subclasses rewrite whitespace-bearing nodes only, so the module they
    produce always has the same syntax tree shape as the input.
    """

    #: Snake-case name used in the enabled_rules / disabled_rules lists.
    key: str = ""

    def __init__(self, config: FormatConfig) -> None:
        super().__init__()
        self.config = config
        self.changes_made: List[str] = []

    @classmethod
    def name(cls) -> str:
        return cls.__name__

    def get_changes(self) -> Sequence[str]:
        return self.changes_made

    def _record(self, message: str) -> None:
        self.changes_made.append(f"{self.name()}: {message}")
