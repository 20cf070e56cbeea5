from __future__ import annotations

from dataclasses import dataclass

import brotli
import structlog
from binembed.core import (
    DEFAULT_MODE,
    DEFAULT_QUALITY,
    DEFAULT_WINDOW,
    CompressionError,
)
from binembed.core.config import BrotliMode

from .source import ByteLike, to_byte_sequence

log = structlog.get_logger(__name__)

_MODES: dict[str, int] = {
    "generic": brotli.MODE_GENERIC,
    "text": brotli.MODE_TEXT,
    "font": brotli.MODE_FONT,
}


def max_compressed_size(input_size: int) -> int:
    """
    Worst-case Brotli output size for `input_size` input bytes.

    Mirrors BrotliEncoderMaxCompressedSize: one metablock header per 16 KiB
    block plus stream framing.
    """
    if input_size < 0:
        raise ValueError(f"input_size must be >= 0, got {input_size}")
    if input_size == 0:
        return 2
    num_large_blocks = input_size >> 14
    overhead = 2 + (4 * num_large_blocks) + 3 + 1
    return input_size + overhead


def brotli_compress(
    data: ByteLike,
    *,
    quality: int = DEFAULT_QUALITY,
    lgwin: int = DEFAULT_WINDOW,
    mode: BrotliMode = DEFAULT_MODE,
) -> bytes:
    """
    One-shot Brotli compression of an in-memory buffer.
    """
    if mode not in _MODES:
        raise CompressionError(f"Unknown brotli mode: {mode!r}")

    raw = to_byte_sequence(data)
    try:
        out = brotli.compress(raw, mode=_MODES[mode], quality=quality, lgwin=lgwin)
    except (brotli.error, ValueError) as e:
        raise CompressionError(
            f"BrotliEncoderCompress failed for {len(raw)} input bytes: {e}"
        ) from e

    bound = max_compressed_size(len(raw))
    if len(out) > bound:
        raise CompressionError(
            f"Compressed output of {len(out)} bytes exceeds bound {bound} "
            f"for {len(raw)} input bytes"
        )
    return bytes(out)


@dataclass(frozen=True, slots=True)
class CompressStage:
    """
    Optional compression as a pipeline stage.

    Configure once, apply many:

        stage = compression_stage(enabled)
        out = stage(data)

    Disabled, the stage is the identity on the byte content.
    """

    enabled: bool = True
    quality: int = DEFAULT_QUALITY
    lgwin: int = DEFAULT_WINDOW
    mode: BrotliMode = DEFAULT_MODE
    stage_id: str = "compress"

    def configure(self, enabled: bool) -> "CompressStage":
        return CompressStage(
            enabled=bool(enabled),
            quality=self.quality,
            lgwin=self.lgwin,
            mode=self.mode,
            stage_id=self.stage_id,
        )

    def run(self, data: ByteLike) -> bytes:
        raw = to_byte_sequence(data)
        if not self.enabled:
            return raw
        out = brotli_compress(raw, quality=self.quality, lgwin=self.lgwin, mode=self.mode)
        log.debug(
            "Compressed",
            bytes_in=len(raw),
            bytes_out=len(out),
            quality=self.quality,
            lgwin=self.lgwin,
            mode=self.mode,
        )
        return out

    def __call__(self, data: ByteLike) -> bytes:
        return self.run(data)


default_compress_stage = CompressStage()


def compression_stage(enabled: bool) -> CompressStage:
    return default_compress_stage.configure(enabled)
