"""Path resolver.

Turns a SearchSpec into concrete candidate paths and picks the best one.

Candidate order is deterministic:
    1. absolute names, in order
    2. search_paths (outer) x names (inner)
    3. for executables, PATH directories (outer) x names (inner)

Glob patterns are expanded in sorted order. An absolute name is a candidate
on its own. Entries that reference an unset environment variable without a
default are skipped.
"""

import glob
import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

from findpath.checkers.base import Candidate, Checker
from findpath.checkers.kind import KindChecker
from findpath.checkers.path_check import PathChecker
from findpath.checkers.shell import ShellChecker
from findpath.checkers.version import VersionChecker
from findpath.config import Settings, get_settings
from findpath.primitives.subprocess import CommandRunner, ShellCommandRunner
from findpath.primitives.template import expand_env
from findpath.schemas.loader import load_search_spec
from findpath.schemas.search_spec import Kind, PathCheck, SearchSpec

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")


class PathResolver:
    """Resolves search specs to filesystem paths. Holds no state between calls."""

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        runner: Optional[CommandRunner] = None,
        env: Optional[Mapping[str, str]] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize resolver.

        Args:
            root: Directory relative search paths and names resolve against.
                  If None, uses current working directory.
            runner: Executes probe and shell-check commands.
            env: Environment for templating and PATH lookup. Defaults to
                 os.environ.
            settings: Defaults such as the probe timeout.
        """
        self.root = Path(root) if root else Path.cwd()
        self.runner = runner or ShellCommandRunner()
        self.env = env if env is not None else os.environ
        self.settings = settings or get_settings()

    def find(self, spec: SearchSpec) -> Optional[str]:
        """Best path matching *spec*, or None if nothing qualifies."""
        accepted, version_checker = self._run_checkers(spec)
        if version_checker is not None:
            best = version_checker.best_candidate()
        else:
            best = accepted[0].path if accepted else None

        if best is None:
            logger.info("No %s found for %s", spec.kind.value, spec.names)
            return None

        logger.info("Using %s %s", spec.kind.value, best)
        return best

    def find_all(self, spec: SearchSpec) -> List[Candidate]:
        """Every path matching *spec*, best first."""
        accepted, version_checker = self._run_checkers(spec)
        if version_checker is not None:
            return version_checker.sorted_candidates()
        return accepted

    def find_from_file(self, spec_path: Union[str, Path]) -> Optional[str]:
        """Load a YAML search spec and resolve it."""
        return self.find(load_search_spec(spec_path))

    def candidate_paths(self, spec: SearchSpec) -> List[str]:
        """Expand *spec* into the ordered, de-duplicated list of paths to check."""
        names = self._expand_all(spec.names)
        directories = [self._absolute(d) for d in self._expand_all(spec.search_paths)]

        relative = [name for name in names if not os.path.isabs(name)]

        # Absolute names are candidates on their own and come first
        paths: List[str] = []
        for name in names:
            if os.path.isabs(name):
                paths.extend(self._expand_pattern(name))

        for directory in directories:
            for name in relative:
                paths.extend(self._expand_pattern(os.path.join(directory, name)))

        if spec.kind is Kind.EXECUTABLE:
            for directory in self._path_directories():
                for name in relative:
                    for variant in self._executable_names(name):
                        paths.extend(self._expand_pattern(os.path.join(directory, variant)))

        seen = set()
        unique: List[str] = []
        for path in paths:
            normalized = os.path.normpath(path)
            if normalized not in seen:
                seen.add(normalized)
                unique.append(normalized)
        return unique

    def _run_checkers(
        self, spec: SearchSpec
    ) -> Tuple[List[Candidate], Optional[VersionChecker]]:
        timeout = self.settings.probe_timeout
        checkers: List[Checker] = [KindChecker(spec.kind)]
        for check in spec.checks:
            if isinstance(check, PathCheck):
                checkers.append(PathChecker(check, env=self.env))
            else:
                checkers.append(
                    ShellChecker(check, runner=self.runner, env=self.env, timeout=timeout)
                )

        version_checker: Optional[VersionChecker] = None
        if spec.version is not None:
            version_checker = VersionChecker(
                spec.version, runner=self.runner, env=self.env, timeout=timeout
            )
            checkers.append(version_checker)

        accepted: List[Candidate] = []
        for path in self.candidate_paths(spec):
            if all(checker.check(path) for checker in checkers):
                accepted.append(Candidate(path))
        return accepted, version_checker

    def _expand_all(self, entries: List[str]) -> List[str]:
        expanded = []
        for entry in entries:
            value = expand_env(entry, self.env)
            if not value:
                logger.debug("Skipping %r: references an unset variable", entry)
                continue
            expanded.append(os.path.expanduser(value))
        return expanded

    def _absolute(self, directory: str) -> str:
        if os.path.isabs(directory):
            return directory
        return str(self.root / directory)

    def _expand_pattern(self, pattern: str) -> List[str]:
        if any(char in pattern for char in _GLOB_CHARS):
            return sorted(glob.glob(pattern))
        return [pattern]

    def _path_directories(self) -> List[str]:
        raw = self.env.get("PATH", "")
        return [d for d in raw.split(os.pathsep) if d]

    def _executable_names(self, name: str) -> List[str]:
        if os.name != "nt":
            return [name]
        suffixes = self.env.get("PATHEXT", ".COM;.EXE;.BAT;.CMD").split(";")
        names = [name]
        for suffix in suffixes:
            if suffix and not name.lower().endswith(suffix.lower()):
                names.append(f"{name}{suffix.lower()}")
        return names


def find_path(
    spec: SearchSpec,
    root: Optional[Union[str, Path]] = None,
    env: Optional[Dict[str, str]] = None,
) -> Optional[str]:
    """Resolve *spec* with a default PathResolver."""
    return PathResolver(root=root, env=env).find(spec)
