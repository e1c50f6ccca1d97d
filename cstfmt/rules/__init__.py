"""Formatting rules, in the order the formatter applies them."""

from .base import FormatRule
from .blank_lines import BlankLines
from .comments import Comments
from .indentation import Indentation
from .quotes import Quotes
from .trailing_whitespace import TrailingWhitespace

RULES = [TrailingWhitespace, Comments, BlankLines, Indentation, Quotes]
