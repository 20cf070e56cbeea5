from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable

import structlog
from binembed.core import EmbedIOError, SourceNotFoundError

log = structlog.get_logger(__name__)

ByteLike = bytes | bytearray | memoryview


@dataclass(frozen=True, slots=True)
class SourceRead:
    """
    Bytes read from a source file plus the length it reported at open time.
    """

    path: Path
    data: bytes
    expected_length: int

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def length_mismatch(self) -> bool:
        return self.length != self.expected_length

    def mismatch_message(self) -> str | None:
        if not self.length_mismatch:
            return None
        return f"Read {self.length} bytes, expected {self.expected_length}"


def to_byte_sequence(values: ByteLike | Iterable[int]) -> bytes:
    """
    Reinterpret every element as an unsigned 8-bit value.

    Signed inputs (-128..127) wrap the same way a C char does: -1 -> 0xff.
    """
    if isinstance(values, (bytes, bytearray, memoryview)):
        return bytes(values)
    if isinstance(values, str):
        raise TypeError("expected bytes or an iterable of ints, got str")
    return bytes(int(v) & 0xFF for v in values)


def read_stream(stream: BinaryIO, expected_length: int) -> bytes:
    """
    Read up to `expected_length` bytes from a binary stream.

    Stops early at EOF; the caller decides what a short read means.
    """
    if expected_length < 0:
        raise ValueError(f"expected_length must be >= 0, got {expected_length}")

    chunks: list[bytes] = []
    remaining = expected_length
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(to_byte_sequence(chunk))
        remaining -= len(chunk)
    return b"".join(chunks)


def read_source(
    path: str | os.PathLike[str], expected_length: int | None = None
) -> SourceRead:
    """
    Read a whole file into memory.

    `expected_length` defaults to the size the file reports once opened.
    """
    p = Path(path)
    if not p.exists():
        raise SourceNotFoundError(f"File does not exist: {p}")

    try:
        with p.open("rb") as f:
            if expected_length is None:
                expected_length = int(os.fstat(f.fileno()).st_size)
            log.debug("Reading source", path=str(p), expected_bytes=expected_length)
            data = read_stream(f, expected_length)
    except OSError as e:
        raise EmbedIOError(f"Error reading file: {p} ({e.strerror or e})") from e

    return SourceRead(path=p, data=data, expected_length=expected_length)
