"""Tests for the individual formatting rules."""

import libcst as cst

from cstfmt.config import FormatConfig
from cstfmt.rules import RULES, FormatRule
from cstfmt.rules.blank_lines import BlankLines
from cstfmt.rules.comments import Comments
from cstfmt.rules.indentation import Indentation
from cstfmt.rules.quotes import Quotes
from cstfmt.rules.trailing_whitespace import TrailingWhitespace


def _create_rule(rule_cls, **config):
    return rule_cls(FormatConfig(**config))


def _apply(rule_cls, source: str, **config) -> str:
    rule = _create_rule(rule_cls, **config)
    return cst.parse_module(source).visit(rule).code


def _changes(rule_cls, source: str, **config) -> list:
    rule = _create_rule(rule_cls, **config)
    cst.parse_module(source).visit(rule)
    return list(rule.get_changes())


def test_rule_keys_are_unique_and_set():
    keys = [r.key for r in RULES]
    assert all(keys)
    assert len(set(keys)) == len(keys)
    assert all(issubclass(r, FormatRule) for r in RULES)


# ---------------------------------------------------------------------------
# TrailingWhitespace
# ---------------------------------------------------------------------------


def test_trailing_whitespace_after_statement():
    assert _apply(TrailingWhitespace, "x = 1   \n") == "x = 1\n"


def test_trailing_whitespace_after_comment():
    assert _apply(TrailingWhitespace, "x = 1  # hi  \n") == "x = 1  # hi\n"


def test_trailing_whitespace_on_blank_line_in_block():
    source = "def f():\n    x = 1\n    \n    y = 2\n"
    assert _apply(TrailingWhitespace, source) == "def f():\n    x = 1\n\n    y = 2\n"


def test_trailing_whitespace_inside_string_kept():
    source = 's = """a   \nb"""\n'
    assert _apply(TrailingWhitespace, source) == source


def test_trailing_whitespace_reports_changes():
    changes = _changes(TrailingWhitespace, "x = 1 \n")
    assert len(changes) == 1
    assert changes[0].startswith("TrailingWhitespace:")


def test_trailing_whitespace_clean_source_no_changes():
    assert _changes(TrailingWhitespace, "x = 1\n") == []


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def test_comment_gets_space():
    assert _apply(Comments, "#hello\nx = 1\n") == "# hello\nx = 1\n"


def test_inline_comment_gets_space():
    assert _apply(Comments, "x = 1  #note\n") == "x = 1  # note\n"


def test_shebang_kept():
    source = "#!/usr/bin/env python\nx = 1\n"
    assert _apply(Comments, source) == source


def test_special_comment_forms_kept():
    source = "x = 1  #: doc\n##\n#\ny = 2  # ok\n"
    assert _apply(Comments, source) == source


# ---------------------------------------------------------------------------
# BlankLines
# ---------------------------------------------------------------------------


def test_blank_lines_collapsed_to_limit():
    source = "x = 1\n\n\n\n\ny = 2\n"
    assert _apply(BlankLines, source) == "x = 1\n\n\ny = 2\n"


def test_blank_lines_custom_limit():
    source = "x = 1\n\n\n\ny = 2\n"
    assert _apply(BlankLines, source, max_blank_lines=1) == "x = 1\n\ny = 2\n"


def test_blank_lines_in_block_collapsed():
    source = "def f():\n    x = 1\n\n\n\n    y = 2\n"
    assert _apply(BlankLines, source, max_blank_lines=1) == "def f():\n    x = 1\n\n    y = 2\n"


def test_blank_lines_comments_kept():
    source = "x = 1\n\n# a\n\n# b\n\ny = 2\n"
    assert _apply(BlankLines, source, max_blank_lines=1) == source


def test_blank_lines_at_start_removed():
    assert _apply(BlankLines, "\n\nx = 1\n") == "x = 1\n"


def test_blank_lines_at_end_removed():
    assert _apply(BlankLines, "x = 1\n\n\n") == "x = 1\n"


def test_final_newline_added():
    assert _apply(BlankLines, "x = 1") == "x = 1\n"


def test_empty_module_unchanged():
    assert _apply(BlankLines, "") == ""


def test_blank_lines_clean_source_no_changes():
    assert _changes(BlankLines, "x = 1\n\n\ny = 2\n") == []


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------


def test_two_space_indent_widened():
    assert _apply(Indentation, "if x:\n  y = 1\n") == "if x:\n    y = 1\n"


def test_nested_blocks_reindented():
    source = "def f():\n  if x:\n    y = 1\n  return y\n"
    expected = "def f():\n    if x:\n        y = 1\n    return y\n"
    assert _apply(Indentation, source) == expected


def test_mixed_block_indents_unified():
    source = "if a:\n  b = 1\nif c:\n        d = 1\n"
    assert _apply(Indentation, source) == "if a:\n    b = 1\nif c:\n    d = 1\n"


def test_custom_indent_width():
    source = "if x:\n    y = 1\n"
    assert _apply(Indentation, source, indent_width=2) == "if x:\n  y = 1\n"


def test_already_indented_no_changes():
    assert _changes(Indentation, "if x:\n    y = 1\n") == []


# ---------------------------------------------------------------------------
# Quotes
# ---------------------------------------------------------------------------


def test_single_quotes_become_double():
    assert _apply(Quotes, "x = 'a'\n") == 'x = "a"\n'


def test_prefix_kept():
    assert _apply(Quotes, "x = b'a'\ny = R'b'\n") == 'x = b"a"\ny = R"b"\n'


def test_string_containing_target_quote_kept():
    source = "x = 'say \"hi\"'\n"
    assert _apply(Quotes, source) == source


def test_string_with_backslash_kept():
    source = "x = 'a\\n'\n"
    assert _apply(Quotes, source) == source


def test_triple_quoted_string_kept():
    source = "x = '''doc'''\n"
    assert _apply(Quotes, source) == source


def test_string_inside_fstring_kept():
    source = "x = f\"{d['k']}\"\n"
    assert _apply(Quotes, source) == source


def test_single_quote_style():
    assert _apply(Quotes, 'x = "a"\n', quote_style="single") == "x = 'a'\n"


def test_preserve_quote_style():
    source = "x = 'a'\ny = \"b\"\n"
    assert _apply(Quotes, source, quote_style="preserve") == source
