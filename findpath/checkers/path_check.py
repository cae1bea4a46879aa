"""Checks for paths that must exist alongside a candidate."""

import logging
import os
from typing import Mapping, Optional

from findpath.checkers.base import Checker, CheckOutcome
from findpath.checkers.kind import path_has_kind
from findpath.primitives.template import expand_env
from findpath.schemas.search_spec import PathCheck

logger = logging.getLogger(__name__)


class PathChecker(Checker):
    """Accepts a candidate if ``config.path`` exists relative to it.

    Directory candidates are the base themselves. For file and executable
    candidates the base is the directory containing them, so a clang++
    binary can require "../include/clang" next to its bin directory.
    """

    def __init__(self, config: PathCheck, env: Optional[Mapping[str, str]] = None):
        super().__init__()
        self.config = config
        self.env = env if env is not None else os.environ

    def evaluate(self, path: str) -> CheckOutcome:
        relative = expand_env(self.config.path, self.env)
        if relative is None:
            logger.debug("Path check %r references an unset variable", self.config.path)
            return CheckOutcome.reject()

        base = path if os.path.isdir(path) else os.path.dirname(path)
        target = os.path.normpath(os.path.join(base, relative))

        if path_has_kind(target, self.config.kind):
            return CheckOutcome.accept()

        logger.debug("Rejecting %s: %s is not a %s", path, target, self.config.kind.value)
        return CheckOutcome.reject()
