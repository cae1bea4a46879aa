"""Version-aware checking and candidate ranking.

The version of a candidate comes either from its own path (no command
configured) or from the output of a probe command run against it. Versions
are padded to major.minor.patch and compared numerically. Candidates whose
version can't be determined are handled by the configured fallback policy:

    fail    - reject the candidate
    accept  - keep it, but rank it below every real version
    prefer  - keep it, and rank it above every real version

("below" and "above" are relative to the preferred direction.)
"""

import logging
import os
from typing import List, Mapping, Optional

from packaging.version import InvalidVersion

from findpath.checkers.base import (
    HIGHEST_POSSIBLE,
    LOWEST_POSSIBLE,
    Candidate,
    Checker,
    CheckOutcome,
    RankKey,
)
from findpath.primitives.errors import InternalError
from findpath.primitives.semver import parse_version
from findpath.primitives.subprocess import CommandRunner, ShellCommandRunner
from findpath.primitives.template import render_command
from findpath.schemas.search_spec import Fallback, Prefer, VersionCheck

logger = logging.getLogger(__name__)


class VersionChecker(Checker):
    """Checker for a VersionCheck.

    Every accepted candidate is kept in ``candidates`` together with its rank
    key. Use sorted_candidates() or best_candidate() once all paths have been
    checked.
    """

    def __init__(
        self,
        config: VersionCheck,
        runner: Optional[CommandRunner] = None,
        env: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__()
        self.config = config
        self.runner = runner or ShellCommandRunner()
        self.env = env if env is not None else os.environ
        self.timeout = config.timeout if config.timeout is not None else timeout
        self._regex = config.pattern
        self._min = config.min_version
        self._max = config.max_version

    def sorted_candidates(self) -> List[Candidate]:
        """All accepted candidates, best first.

        The sort is stable: candidates with equal rank keys keep the order
        in which they were checked.
        """
        return sorted(
            self.candidates,
            key=lambda c: c.rank_key.sort_key(),
            reverse=self.config.prefer is Prefer.HIGHEST,
        )

    def best_candidate(self) -> Optional[str]:
        """Path of the best checked candidate, or None if nothing was accepted.

        Candidates are sorted ascending; the lowest end wins for Lowest and
        the highest end for Highest. Among equal versions that means the
        first-checked one for Lowest and the last-checked one for Highest.
        """
        ascending = sorted(self.candidates, key=lambda c: c.rank_key.sort_key())
        if not ascending:
            return None
        if self.config.prefer is Prefer.LOWEST:
            return ascending[0].path
        return ascending[-1].path

    def evaluate(self, path: str) -> CheckOutcome:
        version_string = self._get_version_string(path)

        if version_string is None:
            rank_key = self._fallback_rank_key()
            if rank_key is None:
                logger.debug("Rejecting %s: no version found", path)
                return CheckOutcome.reject()
            logger.debug("No version found for %s, accepting as %s", path, rank_key)
            return CheckOutcome.accept(rank_key)

        try:
            version = parse_version(version_string)
        except InvalidVersion:
            logger.warning("Rejecting %s: unparsable version %r", path, version_string)
            return CheckOutcome.reject()

        if self._min is not None and version < self._min:
            logger.debug("Rejecting %s: version %s < min %s", path, version, self._min)
            return CheckOutcome.reject()

        if self._max is not None and version > self._max:
            logger.debug("Rejecting %s: version %s > max %s", path, version, self._max)
            return CheckOutcome.reject()

        logger.debug("Accepting %s at version %s", path, version)
        return CheckOutcome.accept(RankKey.of(version))

    def _fallback_rank_key(self) -> Optional[RankKey]:
        fallback = self.config.fallback
        highest = self.config.prefer is Prefer.HIGHEST

        if fallback is Fallback.FAIL:
            return None
        elif fallback is Fallback.ACCEPT:
            return LOWEST_POSSIBLE if highest else HIGHEST_POSSIBLE
        elif fallback is Fallback.PREFER:
            return HIGHEST_POSSIBLE if highest else LOWEST_POSSIBLE
        raise InternalError(f"BUG: unhandled fallback policy {fallback!r}")

    def _get_version_string(self, path: str) -> Optional[str]:
        if self.config.command is None:
            return self._capture(path)

        command = render_command(self.config.command, path, self.env)
        if command is None:
            logger.debug("Version command %r references an unset variable", self.config.command)
            return None

        result = self.runner.run(command, timeout=self.timeout)
        if not result.success:
            return None
        return self._capture(result.stdout)

    def _capture(self, text: str) -> Optional[str]:
        """First capture group of the version regex in *text*, if any."""
        match = self._regex.search(text)
        if match is None:
            return None
        return match.group(1)
