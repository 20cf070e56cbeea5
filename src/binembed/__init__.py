from __future__ import annotations

from .core.version import BINEMBED_DIST_VERSION as __version__
from .embed import EmbedResult, embed_file

__all__ = ["EmbedResult", "embed_file", "__version__"]
