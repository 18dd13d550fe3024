"""
CodeEditor: byte-range splicing and atomic whole-file writes.

All edits work on raw bytes so that every byte outside the edited span is
preserved exactly (including CRLF line endings and non-UTF-8 content).
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from gosurgeon.logging_config import logger
from gosurgeon.schemas import SymbolLocation
from .config import APPEND_SEPARATOR, APPEND_TERMINATOR, TRAILING_BREAK_BYTES


def atomic_write(file_path: Union[str, Path], content: bytes) -> None:
    """
    Write file atomically using temp file + rename, keeping the file's mode.

    Raises:
        OSError: If the temp file cannot be written or renamed.
    """
    path = Path(file_path)
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else None

    # Temp file in the same directory keeps the rename on one filesystem
    fd, temp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        if mode is not None:
            os.chmod(temp_path, mode)
        os.replace(temp_path, str(path))
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    logger.debug(f"Atomic write completed: {file_path}")


class CodeEditor:
    """
    Pure byte transformations plus the read/write boundary.

    The splice/cut/append helpers never touch the filesystem, so a caller can
    format the result before writing it.
    """

    def read_source(self, file_path: Union[str, Path]) -> bytes:
        return Path(file_path).read_bytes()

    def write(self, file_path: Union[str, Path], content: bytes) -> None:
        atomic_write(file_path, content)

    def splice(self, source: bytes, location: SymbolLocation, new_code: str) -> bytes:
        """Replace [start_byte, end_byte) with new_code."""
        return (
            source[:location.start_byte] +
            new_code.encode("utf-8") +
            source[location.end_byte:]
        )

    def cut(self, source: bytes, location: SymbolLocation) -> bytes:
        """Remove the span and the run of line breaks directly after it."""
        end = location.end_byte
        while end < len(source) and source[end:end + 1] in TRAILING_BREAK_BYTES:
            end += 1
        return source[:location.start_byte] + source[end:]

    def append(self, source: bytes, new_code: str) -> bytes:
        """Append new_code after a blank line at the end of source."""
        return source + (APPEND_SEPARATOR + new_code + APPEND_TERMINATOR).encode("utf-8")
