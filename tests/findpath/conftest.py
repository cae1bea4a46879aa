"""Shared fixtures for findpath tests."""

import os
import shlex
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

_repo_root = str(Path(__file__).resolve().parent.parent.parent)
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from findpath.config import Settings  # noqa: E402
from findpath.primitives.subprocess import SubprocessResult  # noqa: E402


class FakeRunner:
    """CommandRunner that answers from a table keyed by candidate path.

    The first word of every command is the (quoted) candidate path, so
    "% --version" style probes are matched by path.
    """

    def __init__(self):
        self.results: Dict[str, SubprocessResult] = {}
        self.calls: List[Tuple[str, Optional[float]]] = []

    def add(self, path, stdout: str = "", return_code: int = 0, timed_out: bool = False):
        self.results[str(path)] = SubprocessResult(
            success=return_code == 0 and not timed_out,
            stdout=stdout,
            stderr="",
            return_code=-1 if timed_out else return_code,
            duration_ms=1.0,
            timed_out=timed_out,
        )
        return self

    def run(self, command: str, timeout: Optional[float] = None) -> SubprocessResult:
        self.calls.append((command, timeout))
        program = shlex.split(command)[0]
        if program in self.results:
            return self.results[program]
        return SubprocessResult(
            success=False, stdout="", stderr="not found", return_code=127, duration_ms=1.0
        )

    @property
    def commands(self) -> List[str]:
        return [command for command, _ in self.calls]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def settings():
    return Settings(probe_timeout=2.0, log_level="DEBUG")


@pytest.fixture
def make_executable():
    """Create an executable file, including parent directories."""

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\nexit 0\n")
        os.chmod(path, 0o755)
        return path

    return _make
