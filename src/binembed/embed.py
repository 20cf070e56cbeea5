from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from binembed.core import ILogger, PipelineConfig, monotonic_ms
from binembed.pipeline import ByteStage, PipelineRunner, StageResult, format_duration_ms
from binembed.pipeline.runner import default_logger
from binembed.stages import compression_stage, read_source, render_array, write_artifact


@dataclass(frozen=True, slots=True)
class EmbedResult:
    source: Path
    destination: Path
    name: str
    size_name: str
    compressed: bool
    input_length: int
    output_length: int
    duration_ms: int
    warnings: tuple[str, ...] = ()
    stages: tuple[StageResult, ...] = ()


def build_stages(cfg: PipelineConfig) -> list[ByteStage]:
    # The compress stage stays in the chain when disabled; it is then a passthrough.
    return [compression_stage(cfg.compress)]


def embed_file(cfg: PipelineConfig, *, logger: ILogger | None = None) -> EmbedResult:
    """
    Read `cfg.source`, optionally compress it and write the rendered array to
    `cfg.destination`.

    Raises an EmbedError subclass on any failure; the destination is only
    replaced once the whole text has been rendered.
    """
    log = logger or default_logger()
    t0 = monotonic_ms()
    warnings: list[str] = []

    src = read_source(cfg.source)
    log.info("File size", bytes=src.expected_length, path=str(src.path))

    # Checked against the pre-compression length for both modes.
    mismatch = src.mismatch_message()
    if mismatch is not None:
        warnings.append(mismatch)
        log.warning(mismatch, path=str(src.path))

    runner = PipelineRunner(stages=build_stages(cfg), logger=log)
    run = runner.run(src.data)

    artifact = render_array(run.data, cfg.name)
    out = write_artifact(artifact, cfg.destination)

    duration = monotonic_ms() - t0
    log.info(
        "Array written",
        output=str(out),
        name=artifact.name,
        size_name=artifact.size_name,
        input_bytes=src.length,
        output_bytes=artifact.length,
        compressed=cfg.compress,
        duration=format_duration_ms(duration),
    )

    return EmbedResult(
        source=src.path,
        destination=out,
        name=artifact.name,
        size_name=artifact.size_name,
        compressed=cfg.compress,
        input_length=src.length,
        output_length=artifact.length,
        duration_ms=duration,
        warnings=tuple(warnings),
        stages=tuple(run.stages),
    )
