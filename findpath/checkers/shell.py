"""Checks that run a shell command against a candidate."""

import logging
import os
from typing import Mapping, Optional

from findpath.checkers.base import Checker, CheckOutcome
from findpath.primitives.subprocess import CommandRunner, ShellCommandRunner
from findpath.primitives.template import render_command
from findpath.schemas.search_spec import ShellCheck

logger = logging.getLogger(__name__)


class ShellChecker(Checker):
    """Accepts a candidate if its rendered command exits with status 0."""

    def __init__(
        self,
        config: ShellCheck,
        runner: Optional[CommandRunner] = None,
        env: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__()
        self.config = config
        self.runner = runner or ShellCommandRunner()
        self.env = env if env is not None else os.environ
        self.timeout = config.timeout if config.timeout is not None else timeout

    def evaluate(self, path: str) -> CheckOutcome:
        command = render_command(self.config.shell, path, self.env)
        if command is None:
            logger.debug("Shell check %r references an unset variable", self.config.shell)
            return CheckOutcome.reject()

        result = self.runner.run(command, timeout=self.timeout)
        if result.success:
            return CheckOutcome.accept()

        logger.debug("Rejecting %s: %r exited %d", path, command, result.return_code)
        return CheckOutcome.reject()
