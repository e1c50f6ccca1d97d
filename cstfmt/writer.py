"""Commit formatted bytes to a file in place or to standard output."""

import io
import os
import stat
import sys
import tempfile
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from .errors import OutputWriteError


@dataclass(frozen=True)
class InPlace:
    path: str


@dataclass(frozen=True)
class Stdout:
    # None means sys.stdout's binary buffer at write time
    stream: Optional[BinaryIO] = None


OutputTarget = Union[InPlace, Stdout]


def _stdout_stream() -> BinaryIO:
    return getattr(sys.stdout, "buffer", sys.stdout)


def _replace_file(path: str, data: bytes) -> None:
    """Atomically replace the contents of *path* with *data*.

    The original file keeps its permission bits. On failure the temporary
    file is removed and *path* is left untouched.
    """
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        mode = None
    tmp = tempfile.NamedTemporaryFile(
        dir=os.path.dirname(path), prefix=".cstfmt-", suffix=".tmp", delete=False
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        if mode is not None:
            os.chmod(tmp.name, mode)
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except FileNotFoundError:
            pass
        raise


def write_output(data: bytes, target: OutputTarget) -> None:
    """Write *data* to *target*.

    In-place writes assemble the complete output in memory, write it to a
    temporary file beside the target, and move that over the target with one
    os.replace, so the file is never left holding partial output. Any OSError
    becomes OutputWriteError.
    """
    if isinstance(target, InPlace):
        buffer = io.BytesIO()
        buffer.write(data)
        buffer.flush()
        path = os.path.join(os.getcwd(), target.path)
        try:
            _replace_file(path, buffer.getvalue())
        except OSError as exc:
            raise OutputWriteError(f"unable to write {target.path}: {exc}") from exc
        return

    stream = target.stream if target.stream is not None else _stdout_stream()
    try:
        stream.write(data)
        stream.flush()
    except OSError as exc:
        raise OutputWriteError(f"unable to write to standard output: {exc}") from exc
