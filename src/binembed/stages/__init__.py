from .compress import (
    CompressStage,
    brotli_compress,
    compression_stage,
    default_compress_stage,
    max_compressed_size,
)
from .render import (
    RenderedArtifact,
    format_array_body,
    render_array,
    size_constant_name,
    write_artifact,
)
from .source import SourceRead, read_source, read_stream, to_byte_sequence

__all__ = [
    "CompressStage",
    "brotli_compress",
    "default_compress_stage",
    "compression_stage",
    "max_compressed_size",
    "RenderedArtifact",
    "format_array_body",
    "render_array",
    "size_constant_name",
    "write_artifact",
    "SourceRead",
    "read_source",
    "read_stream",
    "to_byte_sequence",
]
