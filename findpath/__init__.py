"""findpath: locate tools on the host by name, location and version."""

from findpath.checkers import Candidate, VersionChecker
from findpath.primitives.errors import ConfigurationError, FindPathError, InternalError
from findpath.runtime.resolver import PathResolver, find_path
from findpath.schemas import (
    Fallback,
    Kind,
    Prefer,
    SearchSpec,
    VersionCheck,
    load_search_spec,
    parse_search_spec,
)

__version__ = "0.1.0"

__all__ = [
    "PathResolver",
    "find_path",
    "SearchSpec",
    "VersionCheck",
    "Kind",
    "Prefer",
    "Fallback",
    "Candidate",
    "VersionChecker",
    "load_search_spec",
    "parse_search_spec",
    "FindPathError",
    "ConfigurationError",
    "InternalError",
]
