import os
import stat
import tempfile
from pathlib import Path

DEFAULT_FILE_MODE = 0o644


def ensure_parent(path: Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def fsync_dir(parent: Path) -> None:
    """
    Ensure directory entry durability after atomic rename.
    """
    fd = os.open(parent, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _target_mode(path: Path) -> int:
    # An overwritten header keeps its permission bits.
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """
    Replace `path` with `text` so readers only ever see the old or the new file.

    The temp file lives next to `path` so `os.replace` stays on one filesystem.
    Any OSError propagates; the temp file is removed first.
    """
    path = Path(path)
    ensure_parent(path)
    mode = _target_mode(path)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent, text=True
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    fsync_dir(path.parent)
