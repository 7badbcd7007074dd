"""Result set loader: reads scraped results saved as JSON or YAML."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from .models import ScrapedResultSet
from .schemas import ScrapedResultSetSchema

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}

# Unquoted clock times such as 42:10 or 1:45:03.5
CLOCK_TIME_RE = re.compile(r"^[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+(?:\.[0-9_]*)?$")


class ResultYamlLoader(yaml.SafeLoader):
    """SafeLoader that reads clock times as strings instead of base-60 numbers."""


ResultYamlLoader.yaml_implicit_resolvers = {
    first: list(resolvers)
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
for _first in "-+0123456789":
    ResultYamlLoader.yaml_implicit_resolvers.setdefault(_first, []).insert(
        0, ("tag:yaml.org,2002:str", CLOCK_TIME_RE)
    )


def read_document(path: str | Path) -> Any:
    """Read a JSON or YAML document, chosen by file extension."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in JSON_SUFFIXES:
        return json.loads(path.read_text(encoding="utf-8-sig"))
    if suffix in YAML_SUFFIXES:
        with open(path, encoding="utf-8") as f:
            return yaml.load(f, Loader=ResultYamlLoader)

    raise ValueError(
        f"Unsupported file type: {path.name} (expected .json, .yaml or .yml)"
    )


def parse_result_set(data: Any, default_event_name: str = "Unknown Event") -> ScrapedResultSet:
    """Build a ScrapedResultSet from a decoded document.

    Accepts either {"event": {...}, "results": [...]} or a bare list of
    result records (event metadata then defaults to `default_event_name`).

    Raises:
        ValueError: top-level shape is neither a mapping nor a list
        pydantic.ValidationError: a record has fields of the wrong type
    """
    if isinstance(data, list):
        data = {"event": {"name": default_event_name}, "results": data}
    elif not isinstance(data, dict):
        raise ValueError(
            f"Result set must be a mapping or a list, got {type(data).__name__}"
        )
    elif "event" not in data:
        data = {**data, "event": {"name": default_event_name}}

    return ScrapedResultSetSchema.model_validate(data).to_model()


def load_result_set(path: str | Path) -> ScrapedResultSet:
    """Load a scraped result set from a JSON or YAML file."""
    path = Path(path)
    result_set = parse_result_set(read_document(path), default_event_name=path.stem)
    logger.debug(
        f"Loaded {len(result_set.results)} results for "
        f"'{result_set.event.name}' from {path}"
    )
    return result_set
