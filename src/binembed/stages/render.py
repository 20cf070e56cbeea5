from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog
from binembed.core import EmbedIOError, InvalidConfigError, atomic_write_text

from .source import ByteLike, to_byte_sequence

log = structlog.get_logger(__name__)

HEADER_COMMENT = "// Generated by binembed"
INCLUDES = ("<array>", "<cstddef>", "<cstdint>")
INDENT = "    "
PER_LINE = 4


@dataclass(frozen=True, slots=True)
class RenderedArtifact:
    name: str
    size_name: str
    length: int
    text: str


def size_constant_name(name: str) -> str:
    """
    `myArray` -> `MYARRAY_SIZE`. Only ASCII letters are uppercased.
    """
    return "".join(c.upper() if c.isascii() else c for c in name) + "_SIZE"


def format_array_body(data: ByteLike) -> str:
    """
    Comma-separated lowercase hex literals, four per line.

    The separator precedes the line break, so full lines end in `", "`.
    """
    parts: list[str] = []
    for index, value in enumerate(to_byte_sequence(data)):
        if index > 0:
            parts.append(", ")
            if index % PER_LINE == 0:
                parts.append("\n" + INDENT)
        parts.append(f"0x{value:02x}")
    return "".join(parts)


def render_array(data: ByteLike, name: str) -> RenderedArtifact:
    if not name:
        raise InvalidConfigError("Array name is empty")

    raw = to_byte_sequence(data)
    size_name = size_constant_name(name)

    lines = [HEADER_COMMENT]
    lines.extend(f"#include {inc}" for inc in INCLUDES)
    lines.append("")
    lines.append(f"constexpr std::size_t {size_name} = {len(raw)};")
    lines.append("")
    lines.append(f"constexpr std::array<std::uint8_t, {size_name}> {name} = {{")
    text = "\n".join(lines) + "\n" + INDENT + format_array_body(raw) + "};\n"

    return RenderedArtifact(name=name, size_name=size_name, length=len(raw), text=text)


def write_artifact(
    artifact: RenderedArtifact, destination: str | os.PathLike[str]
) -> Path:
    """
    Replace `destination` with the rendered text in one atomic step.
    """
    if not os.fspath(destination):
        raise InvalidConfigError("Output file name is empty")

    out = Path(destination)
    try:
        atomic_write_text(out, artifact.text)
    except OSError as e:
        raise EmbedIOError(
            f"Error opening output file: {out} ({e.strerror or e})"
        ) from e

    log.debug("Artifact written", path=str(out), length=artifact.length)
    return out
