from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from binembed.core import ILogger, configure_logging, get_logger, monotonic_ms

from .stage import (
    ByteStage,
    FunctionStage,
    StageFn,
    StageResult,
    format_duration_ms,
    run_stage,
)


def default_logger() -> ILogger:
    """
    Provide a structlog BoundLogger that satisfies ILogger.
    """
    configure_logging()
    return get_logger("pipeline")


@dataclass(slots=True)
class PipelineRun:
    data: bytes
    duration_ms: int
    stages: list[StageResult] = field(default_factory=list)


class PipelineRunner:
    """
    Apply byte stages strictly in order; the first failure aborts the run.
    """

    def __init__(
        self,
        *,
        stages: Sequence[ByteStage],
        logger: ILogger | None = None,
    ) -> None:
        self.stages = list(stages)
        self.logger: ILogger = logger or default_logger()

        ids = [s.stage_id for s in self.stages]
        if len(ids) != len(set(ids)):
            dupes = sorted({x for x in ids if ids.count(x) > 1})
            raise ValueError(f"Duplicate stage_id(s): {dupes}")

    @staticmethod
    def fn(stage_id: str, fn: StageFn) -> ByteStage:
        return FunctionStage(stage_id=stage_id, fn=fn)

    def run(self, data: bytes) -> PipelineRun:
        t0 = monotonic_ms()
        results: list[StageResult] = []

        total = len(self.stages)
        for idx, st in enumerate(self.stages, start=1):
            data, res = run_stage(
                stage=st, data=data, logger=self.logger, index=idx, total=total
            )
            results.append(res)

        duration = monotonic_ms() - t0
        self.logger.debug(
            "Pipeline finished",
            stages=[r.stage for r in results],
            duration=format_duration_ms(duration),
            bytes_out=len(data),
        )
        return PipelineRun(data=data, duration_ms=duration, stages=results)
