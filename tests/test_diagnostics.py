"""Tests for cstfmt.diagnostics."""

from cstfmt.diagnostics import (
    Diagnostic,
    DiagnosticSink,
    Severity,
    SourceLocation,
    location_for_offset,
)


def test_sink_starts_empty():
    sink = DiagnosticSink()
    assert sink.diagnostics == ()
    assert not sink.has_errors
    assert not sink.has_warnings


def test_sink_records_in_order():
    sink = DiagnosticSink()
    sink.note("first")
    sink.diagnose(Severity.WARNING, "second")
    sink.error("third")
    assert [d.message for d in sink.diagnostics] == ["first", "second", "third"]
    assert sink.has_errors
    assert sink.has_warnings


def test_notes_and_warnings_are_not_errors():
    sink = DiagnosticSink()
    sink.note("n")
    sink.diagnose(Severity.WARNING, "w")
    assert not sink.has_errors


def test_consumers_see_each_diagnostic():
    seen = []
    sink = DiagnosticSink(consumers=[seen.append])
    d = sink.error("boom")
    assert seen == [d]


def test_diagnostics_view_is_read_only():
    sink = DiagnosticSink()
    sink.error("boom")
    view = sink.diagnostics
    assert isinstance(view, tuple)
    sink.note("later")
    assert len(view) == 1
    assert len(sink.diagnostics) == 2


def test_diagnostic_str_without_location():
    assert str(Diagnostic(Severity.ERROR, "bad")) == "error: bad"


def test_diagnostic_str_with_location():
    d = Diagnostic(Severity.NOTE, "hi", SourceLocation("a.py", 3, 7))
    assert str(d) == "a.py:3:7: note: hi"


# ---------------------------------------------------------------------------
# location_for_offset
# ---------------------------------------------------------------------------


def test_location_at_start():
    assert location_for_offset("f.py", b"x = 1\n", 0) == SourceLocation("f.py", 1, 1)


def test_location_on_later_line():
    source = b"x = 1\ny = (\n"
    assert location_for_offset("f.py", source, 10) == SourceLocation("f.py", 2, 5)


def test_location_counts_bytes():
    source = "s = 'é'\nz\n".encode("utf-8")
    # "é" is two bytes, so "z" starts at byte 9
    assert location_for_offset("f.py", source, 9) == SourceLocation("f.py", 2, 1)


def test_location_clamps_past_end():
    source = b"a\nbc"
    assert location_for_offset("f.py", source, 99) == SourceLocation("f.py", 2, 3)


def test_location_clamps_negative():
    assert location_for_offset("f.py", b"abc", -4) == SourceLocation("f.py", 1, 1)
