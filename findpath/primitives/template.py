"""Templating for search specs.

Two kinds of substitution:
1. Environment variables: ${VAR} and ${VAR:-default}
2. Candidate path: every % in a command becomes the shell-quoted path
"""

import re
import shlex
from typing import Mapping, Optional

PATH_PLACEHOLDER = "%"

# Only uppercase env var names, same as shell convention for exported vars.
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class _UnsetVariable(Exception):
    pass


def expand_env(text: str, env: Mapping[str, str]) -> Optional[str]:
    """Expand ${VAR} and ${VAR:-default} in text.

    A variable that is unset (or empty) falls back to its default. If there
    is no default the whole entry is unusable and None is returned, so
    "${LLVM_ROOT}/bin" never silently turns into "/bin".

    Args:
        text: Text with variable references.
        env: Environment dict for lookups.

    Returns:
        Expanded text, or None if a required variable is missing.
    """
    if not text:
        return text

    def replace_var(match: "re.Match[str]") -> str:
        value = env.get(match.group(1))
        if value:
            return value
        default = match.group(2)
        if default is None:
            raise _UnsetVariable(match.group(1))
        return default

    try:
        return _ENV_VAR_PATTERN.sub(replace_var, text)
    except _UnsetVariable:
        return None


def render_command(template: str, path: str, env: Mapping[str, str]) -> Optional[str]:
    """Fill a command template for one candidate.

    Only placeholders written in the template itself are replaced; a % that
    arrives through a variable value or the path is left as is.
    Returns None when the template references an unset variable.
    """
    pieces = []
    for piece in template.split(PATH_PLACEHOLDER):
        expanded = expand_env(piece, env)
        if expanded is None:
            return None
        pieces.append(expanded)
    return shlex.quote(path).join(pieces)
