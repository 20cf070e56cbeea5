from .runner import PipelineRun, PipelineRunner
from .stage import ByteStage, FunctionStage, StageResult, format_duration_ms, run_stage

__all__ = [
    "PipelineRun",
    "PipelineRunner",
    "ByteStage",
    "FunctionStage",
    "StageResult",
    "format_duration_ms",
    "run_stage",
]
