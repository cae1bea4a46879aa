"""Load search specs from YAML."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pydantic
import yaml

from findpath.primitives.errors import ConfigurationError, ValidationError
from findpath.schemas.search_spec import SearchSpec

logger = logging.getLogger(__name__)


def _validation_errors(exc: pydantic.ValidationError) -> List[ValidationError]:
    return [
        ValidationError(
            field=".".join(str(part) for part in err["loc"]) or "<root>",
            error=err["msg"],
            value=err.get("input"),
        )
        for err in exc.errors()
    ]


def spec_from_dict(data: Dict[str, Any]) -> SearchSpec:
    """Validate a plain dict into a SearchSpec.

    Raises:
        ConfigurationError: With one ValidationError per problem found.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Search spec must be a mapping, got {type(data).__name__}"
        )

    try:
        return SearchSpec.model_validate(data)
    except pydantic.ValidationError as e:
        errors = _validation_errors(e)
        summary = "; ".join(f"{err.field}: {err.error}" for err in errors)
        raise ConfigurationError(
            f"Invalid search spec: {summary}",
            field=errors[0].field if errors else None,
            errors=errors,
            cause=e,
        ) from e


def parse_search_spec(text: str) -> SearchSpec:
    """Parse YAML text into a SearchSpec."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in search spec: {e}", cause=e) from e

    if data is None:
        raise ConfigurationError("Search spec is empty")

    return spec_from_dict(data)


def load_search_spec(path: Union[str, Path]) -> SearchSpec:
    """Read and validate a YAML search spec file."""
    path = Path(path)
    logger.debug("Loading search spec from %s", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read search spec {path}: {e}", cause=e) from e

    try:
        return parse_search_spec(text)
    except ConfigurationError as e:
        e.message = f"{path}: {e.message}"
        e.args = (e.message,)
        raise
