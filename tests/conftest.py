import pytest

from cstfmt.diagnostics import DiagnosticSink


@pytest.fixture
def sink():
    return DiagnosticSink()


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str, content: bytes):
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _make
