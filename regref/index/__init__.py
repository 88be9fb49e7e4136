"""Local circular index."""

from regref.index.local_index import (
    IndexBuildResult,
    LocalIndex,
    build_local_index,
    discover_collection,
)

__all__ = ["IndexBuildResult", "LocalIndex", "build_local_index", "discover_collection"]
