"""findpath search spec schema and loading."""

from findpath.schemas.loader import load_search_spec, parse_search_spec, spec_from_dict
from findpath.schemas.search_spec import (
    Fallback,
    Kind,
    PathCheck,
    Prefer,
    SearchSpec,
    ShellCheck,
    VersionCheck,
)

__all__ = [
    "Kind",
    "Prefer",
    "Fallback",
    "VersionCheck",
    "PathCheck",
    "ShellCheck",
    "SearchSpec",
    "spec_from_dict",
    "parse_search_spec",
    "load_search_spec",
]
