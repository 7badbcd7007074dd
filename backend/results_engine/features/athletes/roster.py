"""Athlete roster loader: reads known identities from JSON or YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from results_engine.features.results.loader import read_document

from .models import AthleteIdentity
from .schemas import AthleteIdentitySchema


def parse_roster(data: Any) -> list[AthleteIdentity]:
    """Build identities from [...] or {"athletes": [...]}.

    Raises:
        ValueError: document is not a list of athletes
    """
    if isinstance(data, dict):
        data = data.get("athletes")
    if not isinstance(data, list):
        raise ValueError("Roster must be a list of athletes or {'athletes': [...]}")
    return [AthleteIdentitySchema.model_validate(item).to_model() for item in data]


def load_roster(path: str | Path) -> list[AthleteIdentity]:
    """Load an athlete roster file."""
    return parse_roster(read_document(path))
