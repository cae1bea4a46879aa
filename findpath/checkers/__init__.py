"""findpath checkers."""

from findpath.checkers.base import (
    HIGHEST_POSSIBLE,
    LOWEST_POSSIBLE,
    Candidate,
    Checker,
    CheckOutcome,
    RankKey,
)
from findpath.checkers.kind import KindChecker, path_has_kind
from findpath.checkers.path_check import PathChecker
from findpath.checkers.shell import ShellChecker
from findpath.checkers.version import VersionChecker

__all__ = [
    "Checker",
    "CheckOutcome",
    "Candidate",
    "RankKey",
    "LOWEST_POSSIBLE",
    "HIGHEST_POSSIBLE",
    "KindChecker",
    "path_has_kind",
    "PathChecker",
    "ShellChecker",
    "VersionChecker",
]
