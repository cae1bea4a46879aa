"""findpath primitives: errors, command execution, templating."""

from findpath.primitives.errors import (
    ConfigurationError,
    FindPathError,
    InternalError,
    ValidationError,
)
from findpath.primitives.subprocess import (
    CommandRunner,
    ShellCommandRunner,
    SubprocessResult,
)
from findpath.primitives.semver import normalize_version, parse_version
from findpath.primitives.template import PATH_PLACEHOLDER, expand_env, render_command

__all__ = [
    # Errors
    "ValidationError",
    "FindPathError",
    "ConfigurationError",
    "InternalError",
    # Subprocess
    "SubprocessResult",
    "CommandRunner",
    "ShellCommandRunner",
    # Versions
    "normalize_version",
    "parse_version",
    # Templating
    "PATH_PLACEHOLDER",
    "expand_env",
    "render_command",
]
