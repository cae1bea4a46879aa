"""Existence and filesystem-kind checking."""

import os

from findpath.checkers.base import Checker, CheckOutcome
from findpath.schemas.search_spec import Kind


def path_has_kind(path: str, kind: Kind) -> bool:
    """True if *path* exists and is a *kind*."""
    if kind is Kind.DIRECTORY:
        return os.path.isdir(path)
    if kind is Kind.FILE:
        return os.path.isfile(path)
    return os.path.isfile(path) and os.access(path, os.X_OK)


class KindChecker(Checker):
    """Accepts paths that exist as the configured kind."""

    def __init__(self, kind: Kind):
        super().__init__()
        self.kind = kind

    def evaluate(self, path: str) -> CheckOutcome:
        if path_has_kind(path, self.kind):
            return CheckOutcome.accept()
        return CheckOutcome.reject()
