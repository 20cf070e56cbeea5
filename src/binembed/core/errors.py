from __future__ import annotations

import traceback
from dataclasses import dataclass


class EmbedError(RuntimeError):
    """Base error"""


@dataclass(frozen=True, slots=True)
class StageError:
    """
    A normalized error record for stage failures.
    """

    exc_type: str
    message: str
    traceback: str


def stage_error_from_exc(exc: BaseException) -> StageError:
    return StageError(
        exc_type=type(exc).__name__,
        message=str(exc),
        traceback=traceback.format_exc(),
    )


class SourceNotFoundError(EmbedError):
    """Input path does not exist"""


class EmbedIOError(EmbedError):
    """
    Open, read or write failure on the source or the destination file
    """


class CompressionError(EmbedError):
    """
    The compressor reported failure. Never retried.
    """


class InvalidConfigError(EmbedError):
    """Empty identifier or path handed to the pipeline"""
