"""findpath runtime services."""

from findpath.runtime.resolver import PathResolver, find_path

__all__ = [
    "PathResolver",
    "find_path",
]
