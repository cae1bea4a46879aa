"""Checker abstraction.

A checker looks at one candidate path and either accepts it (optionally with
a rank key used to order candidates later) or rejects it. Rejection is never
an error. Accepted candidates are appended to the checker's own list and are
never removed during a resolution pass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from packaging.version import Version

_LOWEST = 0
_VERSION = 1
_HIGHEST = 2


@dataclass(frozen=True)
class RankKey:
    """Ordering key for a candidate: a version or a sentinel extreme."""

    rank: int
    version: Optional[Version] = None

    @classmethod
    def of(cls, version: Version) -> "RankKey":
        return cls(_VERSION, version)

    @property
    def is_sentinel(self) -> bool:
        return self.rank != _VERSION

    def sort_key(self) -> Tuple[int, Tuple[int, ...]]:
        return (self.rank, self.version.release if self.version is not None else ())

    def __str__(self) -> str:
        if self.rank == _LOWEST:
            return "lowest-possible"
        if self.rank == _HIGHEST:
            return "highest-possible"
        return str(self.version)


LOWEST_POSSIBLE = RankKey(_LOWEST)
HIGHEST_POSSIBLE = RankKey(_HIGHEST)


@dataclass(frozen=True)
class Candidate:
    """An accepted path and its rank key (None for unranked checkers)."""

    path: str
    rank_key: Optional[RankKey] = None


@dataclass(frozen=True)
class CheckOutcome:
    """Result of evaluating one path."""

    accepted: bool
    rank_key: Optional[RankKey] = None

    @classmethod
    def accept(cls, rank_key: Optional[RankKey] = None) -> "CheckOutcome":
        return cls(True, rank_key)

    @classmethod
    def reject(cls) -> "CheckOutcome":
        return cls(False)


class Checker(ABC):
    """Accepts or rejects candidate paths."""

    def __init__(self):
        self.candidates: List[Candidate] = []

    @abstractmethod
    def evaluate(self, path: str) -> CheckOutcome:
        """Decide on *path* without touching any state."""

    def check(self, path: str) -> bool:
        """Evaluate *path* and record it if accepted."""
        outcome = self.evaluate(path)
        if not outcome.accepted:
            return False
        self.candidates.append(Candidate(path, outcome.rank_key))
        return True
