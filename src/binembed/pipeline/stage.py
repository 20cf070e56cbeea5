from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from binembed.core import (
    ILogger,
    StageError,
    monotonic_ms,
    stage_error_from_exc,
    utc_now_iso,
)


def format_duration_ms(ms: int) -> str:
    """Return a short human-readable duration string."""
    if ms < 1000:
        return f"{ms} ms"
    return f"{ms / 1000:.2f} s"


StageFn = Callable[[bytes], bytes]


class ByteStage(Protocol):
    stage_id: str

    def run(self, data: bytes) -> bytes: ...


@dataclass(slots=True)
class FunctionStage:
    """
    Adapter that turns a plain function into a ByteStage.
    """

    stage_id: str
    fn: StageFn

    def run(self, data: bytes) -> bytes:
        return self.fn(data)


@dataclass(slots=True)
class StageResult:
    stage: str
    status: str  # "success" | "failed"
    started_at_utc: str
    duration_ms: int
    bytes_in: int
    bytes_out: int | None = None
    error: Optional[StageError] = None


def run_stage(
    *,
    stage: ByteStage,
    data: bytes,
    logger: ILogger,
    index: int | None = None,
    total: int | None = None,
) -> tuple[bytes, StageResult]:
    """
    Run one stage, log its outcome and re-raise any failure unchanged.

    On failure the StageResult is attached to the exception as `stage_result`.
    """
    stage_id = stage.stage_id
    log = logger.bind(stage=stage_id)

    t0 = monotonic_ms()
    started_at = utc_now_iso()
    position = f"{index}/{total}" if index is not None and total is not None else None

    log.info("Stage starting", position=position, bytes_in=len(data))

    try:
        out = stage.run(data)
        if not isinstance(out, bytes):
            raise TypeError(
                f"Stage {stage_id} returned {type(out).__name__}, expected bytes"
            )
    except Exception as e:
        duration = monotonic_ms() - t0
        result = StageResult(
            stage=stage_id,
            status="failed",
            started_at_utc=started_at,
            duration_ms=duration,
            bytes_in=len(data),
            error=stage_error_from_exc(e),
        )
        log.error(
            "Stage failed",
            status="failed",
            position=position,
            duration=format_duration_ms(duration),
            error=str(e),
        )
        log.exception("Stage exception")
        e.stage_result = result  # type: ignore[attr-defined]
        raise

    duration = monotonic_ms() - t0
    log.info(
        "Stage succeeded",
        status="success",
        position=position,
        duration_ms=duration,
        duration=format_duration_ms(duration),
        bytes_in=len(data),
        bytes_out=len(out),
    )
    return out, StageResult(
        stage=stage_id,
        status="success",
        started_at_utc=started_at,
        duration_ms=duration,
        bytes_in=len(data),
        bytes_out=len(out),
    )
