"""Read source bytes from files or stdin and expand directory arguments."""

import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .errors import UnreadableSourceError

# Directory names never descended into when expanding a directory argument.
_EXCLUDED_DIR_NAMES = frozenset(
    {".venv", "venv", "env", ".tox", "__pycache__", "node_modules"}
)


def read_source(path: Optional[str] = None) -> bytes:
    """Return the raw bytes of *path*, or of stdin when *path* is None."""
    try:
        if path is None:
            return sys.stdin.buffer.read()
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise UnreadableSourceError(str(exc)) from exc


def _excluded(part: str) -> bool:
    return part in _EXCLUDED_DIR_NAMES or (part.startswith(".") and part not in (".", ".."))


def iter_source_paths(paths: Iterable[str]) -> Iterator[str]:
    """Yield the files to format for the given command-line *paths*.

    Directories expand to the ``*.py`` files below them in sorted order;
    anything else is yielded as given so a missing file is still reported.
    """
    for path in paths:
        root = Path(path)
        if not root.is_dir():
            yield path
            continue
        for candidate in sorted(root.rglob("*.py")):
            relative = candidate.relative_to(root).parts[:-1]
            if any(_excluded(part) for part in relative):
                continue
            if candidate.is_file():
                yield str(candidate)
