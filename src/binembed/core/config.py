from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidConfigError

LogFormat = Literal["json", "console"]
BrotliMode = Literal["generic", "text", "font"]

# Encoder defaults: best quality, 4 MiB window, no content-specific tuning.
DEFAULT_QUALITY = 11
DEFAULT_WINDOW = 22
DEFAULT_MODE: BrotliMode = "generic"

DEFAULT_ARRAY_NAME = "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BINEMBED_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_format: LogFormat = Field(default="console")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    return Settings()


class PipelineConfig(BaseModel):
    """
    Validated, immutable inputs for one embed run.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: Path
    destination: Path
    name: str = Field(min_length=1)
    compress: bool = False

    @field_validator("source", "destination", mode="before")
    @classmethod
    def _non_empty_path(cls, v: Any) -> Any:
        # Path("") silently becomes Path("."), so reject before coercion.
        if isinstance(v, (str, os.PathLike)) and not os.fspath(v):
            raise ValueError("path must not be empty")
        return v


def build_pipeline_config(
    *,
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    name: str,
    compress: bool = False,
) -> PipelineConfig:
    try:
        return PipelineConfig(
            source=source, destination=destination, name=name, compress=compress
        )
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidConfigError(
            f"Invalid pipeline config ({', '.join(fields) or 'unknown'}): {e}"
        ) from e
