from __future__ import annotations

from pathlib import Path

import pytest
from binembed.core import config, errors
from pydantic import ValidationError


def test_build_pipeline_config_is_frozen(tmp_path: Path) -> None:
    cfg = config.build_pipeline_config(
        source=tmp_path / "in.bin", destination="out.hpp", name="data", compress=True
    )
    assert cfg.source == tmp_path / "in.bin"
    assert cfg.destination == Path("out.hpp")
    assert cfg.compress is True

    with pytest.raises(ValidationError):
        cfg.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"source": "", "destination": "o.hpp", "name": "data"}, "source"),
        ({"source": "i.bin", "destination": "", "name": "data"}, "destination"),
        ({"source": "i.bin", "destination": "o.hpp", "name": ""}, "name"),
    ],
)
def test_build_pipeline_config_rejects_empty_values(kwargs, field) -> None:
    with pytest.raises(errors.InvalidConfigError) as ei:
        config.build_pipeline_config(**kwargs)
    assert field in str(ei.value)
    assert isinstance(ei.value, errors.EmbedError)


def test_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BINEMBED_LOG_FORMAT", "json")
    monkeypatch.setenv("BINEMBED_LOG_LEVEL", "debug")
    s = config.Settings()
    assert s.log_format == "json"
    assert s.log_level == "debug"


def test_stage_error_from_exc() -> None:
    try:
        raise errors.CompressionError("boom")
    except Exception as exc:
        err = errors.stage_error_from_exc(exc)
    assert err.exc_type == "CompressionError"
    assert err.message == "boom"
    assert "CompressionError" in err.traceback
