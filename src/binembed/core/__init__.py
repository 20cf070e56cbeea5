from .config import (
    DEFAULT_ARRAY_NAME,
    DEFAULT_MODE,
    DEFAULT_QUALITY,
    DEFAULT_WINDOW,
    PipelineConfig,
    build_pipeline_config,
    load_settings,
)
from .errors import (
    CompressionError,
    EmbedError,
    EmbedIOError,
    InvalidConfigError,
    SourceNotFoundError,
    StageError,
    stage_error_from_exc,
)
from .fs import atomic_write_text, ensure_parent, fsync_dir
from .logging import ILogger, bind, configure_logging, get_logger
from .provenance import new_run_id
from .time import monotonic_ms, utc_now_iso

__all__ = [
    "DEFAULT_ARRAY_NAME",
    "DEFAULT_MODE",
    "DEFAULT_QUALITY",
    "DEFAULT_WINDOW",
    "PipelineConfig",
    "build_pipeline_config",
    "load_settings",
    "CompressionError",
    "EmbedError",
    "EmbedIOError",
    "InvalidConfigError",
    "SourceNotFoundError",
    "StageError",
    "stage_error_from_exc",
    "atomic_write_text",
    "ensure_parent",
    "fsync_dir",
    "ILogger",
    "bind",
    "configure_logging",
    "get_logger",
    "new_run_id",
    "monotonic_ms",
    "utc_now_iso",
]
