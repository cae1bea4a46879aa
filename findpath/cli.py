"""findpath command entry point.

    findpath SPEC.yaml [--root DIR] [--all] [--debug]

Prints the resolved path and exits 0, or prints a diagnostic to stderr and
exits 1 when nothing matches.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as SettingsError

from findpath.config import get_settings
from findpath.primitives.errors import ConfigurationError
from findpath.runtime.resolver import PathResolver
from findpath.schemas.loader import load_search_spec


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="findpath",
        description="Find the best matching tool, file or directory for a search spec",
    )
    parser.add_argument("spec", help="Path to a YAML search spec")
    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Directory relative search paths resolve against (default: the spec's directory)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Print every accepted candidate, best first",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def die(msg: str, code: int = 1) -> int:
    """Print error to stderr and return the exit code."""
    print(f"error: {msg}", file=sys.stderr)
    return code


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except SettingsError as e:
        return die(f"invalid FINDPATH_* setting: {e.errors()[0]['msg']}")
    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level.upper(),
        format="[%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    spec_path = Path(args.spec)
    root = Path(args.root) if args.root else spec_path.resolve().parent

    try:
        spec = load_search_spec(spec_path)
    except ConfigurationError as e:
        return die(e.message)

    resolver = PathResolver(root=root, settings=settings)

    if args.all:
        candidates = resolver.find_all(spec)
        if not candidates:
            return die(f"no {spec.kind.value} found matching {', '.join(spec.names)}")
        for candidate in candidates:
            key = candidate.rank_key if candidate.rank_key is not None else "-"
            print(f"{candidate.path}\t{key}")
        return 0

    path = resolver.find(spec)
    if path is None:
        return die(f"no {spec.kind.value} found matching {', '.join(spec.names)}")

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
