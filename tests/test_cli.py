from __future__ import annotations

from pathlib import Path

import binembed.stages.compress as compress_mod
import brotli
import pytest
from binembed.cli import main


def test_cli_writes_header(tmp_path: Path) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x00\xab\x10\xff\x05")
    out = tmp_path / "out.hpp"

    assert main(["-i", str(src), "-o", str(out), "-n", "myArray"]) == 0
    text = out.read_text()
    assert "constexpr std::size_t MYARRAY_SIZE = 5;" in text
    assert "0x00, 0xab, 0x10, 0xff, \n    0x05};" in text


def test_cli_compress_flag(tmp_path: Path) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"z" * 1000)
    out = tmp_path / "out.hpp"

    assert main(["-i", str(src), "-o", str(out), "--compress"]) == 0
    body = out.read_text().split("= {", 1)[1]
    raw = bytes(int(tok.strip().rstrip("};"), 16) for tok in body.split(","))
    assert brotli.decompress(raw) == b"z" * 1000


def test_cli_missing_input_fails(tmp_path: Path) -> None:
    out = tmp_path / "out.hpp"
    assert main(["-i", str(tmp_path / "missing.bin"), "-o", str(out)]) == 1
    assert not out.exists()


@pytest.mark.parametrize("flag", ["-o", "-n"])
def test_cli_empty_values_fail(tmp_path: Path, flag: str) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x01")
    argv = {"-i": str(src), "-o": str(tmp_path / "out.hpp"), "-n": "data"}
    argv[flag] = ""
    assert main([x for kv in argv.items() for x in kv]) == 1


def test_cli_unwritable_output_fails(tmp_path: Path) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x01")
    blocker = tmp_path / "file"
    blocker.write_text("")
    assert main(["-i", str(src), "-o", str(blocker / "out.hpp")]) == 1


@pytest.mark.parametrize("argv, code", [(["--help"], 0), (["--version"], 0), ([], 2)])
def test_cli_help_version_and_usage(argv: list[str], code: int) -> None:
    with pytest.raises(SystemExit) as ei:
        main(argv)
    assert ei.value.code == code


def test_cli_compressor_fault_fails_without_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"payload")
    out = tmp_path / "out.hpp"

    def _fail(*args, **kwargs):
        raise brotli.error("simulated fault")

    monkeypatch.setattr(compress_mod.brotli, "compress", _fail)
    assert main(["-i", str(src), "-o", str(out), "--compress"]) == 1
    assert not out.exists()
    assert list(tmp_path.iterdir()) == [src]


def test_cli_log_level_is_validated(tmp_path: Path) -> None:
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x01")
    out = tmp_path / "out.hpp"

    with pytest.raises(SystemExit) as ei:
        main(["-i", str(src), "-o", str(out), "--log-level", "loud"])
    assert ei.value.code == 2
    assert not out.exists()

    assert main(["-i", str(src), "-o", str(out), "--log-level", "debug"]) == 0
    assert out.exists()
