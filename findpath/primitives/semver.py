"""Version normalization and parsing.

Tools report versions with one, two or three components ("10", "10.2",
"10.2.1"). Everything is padded to major.minor.patch before comparison so
that ordering is numeric, never lexicographic.
"""

import re

from packaging.version import InvalidVersion, Version

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def normalize_version(raw: str) -> str:
    """Pad *raw* with ".0" until it has three components.

    ```
    normalize_version("10")      # => "10.0.0"
    normalize_version("10.2")    # => "10.2.0"
    normalize_version("10.3.0")  # => "10.3.0"
    ```
    """
    version = raw.strip()
    dots = version.count(".")
    if dots < 2:
        version += ".0" * (2 - dots)
    return version


def parse_version(raw: str) -> Version:
    """Normalize and parse *raw* as a numeric major.minor.patch version.

    Raises:
        InvalidVersion: If the normalized string isn't exactly three numeric
            components. Pre-releases and local tags are not accepted.
    """
    normalized = normalize_version(raw)
    if not SEMVER_PATTERN.match(normalized):
        raise InvalidVersion(f"Invalid version: {raw!r} (normalized to {normalized!r})")
    return Version(normalized)
