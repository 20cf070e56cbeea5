from __future__ import annotations

import io
from pathlib import Path

import pytest
from binembed.core import EmbedIOError, SourceNotFoundError
from binembed.stages import source


def test_read_source_reads_whole_file(tmp_path: Path) -> None:
    f = tmp_path / "blob.bin"
    f.write_bytes(bytes(range(256)))

    got = source.read_source(f)
    assert got.data == bytes(range(256))
    assert got.expected_length == 256
    assert got.length == 256
    assert not got.length_mismatch
    assert got.mismatch_message() is None


def test_read_source_empty_file(tmp_path: Path) -> None:
    f = tmp_path / "empty.bin"
    f.write_bytes(b"")
    got = source.read_source(f)
    assert got.data == b""
    assert not got.length_mismatch


def test_read_source_missing_path(tmp_path: Path) -> None:
    with pytest.raises(SourceNotFoundError) as ei:
        source.read_source(tmp_path / "nope.bin")
    assert "nope.bin" in str(ei.value)


def test_read_source_directory_is_io_error(tmp_path: Path) -> None:
    with pytest.raises(EmbedIOError):
        source.read_source(tmp_path)


def test_read_source_short_read_is_reported_not_raised(tmp_path: Path) -> None:
    f = tmp_path / "short.bin"
    f.write_bytes(b"abc")

    got = source.read_source(f, expected_length=10)
    assert got.data == b"abc"
    assert got.length_mismatch
    assert got.mismatch_message() == "Read 3 bytes, expected 10"


def test_read_source_stops_at_expected_length(tmp_path: Path) -> None:
    f = tmp_path / "long.bin"
    f.write_bytes(b"abcdef")
    got = source.read_source(f, expected_length=4)
    assert got.data == b"abcd"
    assert not got.length_mismatch


class _Trickle:
    """Returns at most one byte per read() call."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)

    def read(self, n: int = -1) -> bytes:
        return self._buf.read(1 if n != 0 else 0)


def test_read_stream_collects_partial_reads() -> None:
    assert source.read_stream(_Trickle(b"\x00\x01\x02\x03"), 4) == b"\x00\x01\x02\x03"
    assert source.read_stream(_Trickle(b"\x00\x01"), 4) == b"\x00\x01"
    assert source.read_stream(io.BytesIO(b"xyz"), 0) == b""


def test_read_stream_rejects_negative_length() -> None:
    with pytest.raises(ValueError):
        source.read_stream(io.BytesIO(b""), -1)


def test_to_byte_sequence_reinterprets_signed_values() -> None:
    assert source.to_byte_sequence([-1, 0, 127, -128, 255]) == b"\xff\x00\x7f\x80\xff"
    assert source.to_byte_sequence(bytearray(b"\x01\x02")) == b"\x01\x02"
    assert source.to_byte_sequence(memoryview(b"\x03")) == b"\x03"

    with pytest.raises(TypeError):
        source.to_byte_sequence("text")  # type: ignore[arg-type]
