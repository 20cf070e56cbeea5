from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as dist_version


def safe_dist_version(dist_name: str) -> str:
    try:
        return dist_version(dist_name)
    except PackageNotFoundError:
        return "0.0.0+unknown"


BINEMBED_DIST_VERSION: str = safe_dist_version("binembed")
