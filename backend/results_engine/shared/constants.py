"""
Unified constants for result records, matching and validation.

This module provides a single source of truth for the recognized value
sets used across reconciliation, validation and athlete matching.
"""

from enum import Enum


class ResultStatus(str, Enum):
    """Outcome of an athlete's race."""
    FINISHED = "finished"
    DNF = "dnf"     # Did not finish
    DNS = "dns"     # Did not start
    DQ = "dq"       # Disqualified


class CheckpointType(str, Enum):
    """Kind of intermediate timing point."""
    DISTANCE = "distance"
    TRANSITION = "transition"   # T1 / T2 in multisport
    DISCIPLINE = "discipline"   # swim / bike / run leg


class MatchMethod(str, Enum):
    """Signal that decided a cross-source match."""
    BIB = "bib"
    NAME_TIME = "name_time"
    POSITION_NAME = "position_name"


class Resolution(str, Enum):
    """How a field disagreement between two sources is resolved."""
    USE_A = "use_a"
    USE_B = "use_b"
    MERGE = "merge"
    MANUAL = "manual"


class Severity(str, Enum):
    """Validation error severity (critical > error)."""
    CRITICAL = "critical"
    ERROR = "error"


class RaceType(str, Enum):
    """Broad race family, used to pick expected checkpoints."""
    RUNNING = "running"
    ULTRA = "ultra"
    TRIATHLON = "triathlon"
    DUATHLON = "duathlon"


# Time strings that mean "no time recorded" (compared case-insensitively)
NO_TIME_SENTINELS: frozenset[str] = frozenset({"dnf", "dns", "dq"})

# Accepted gender spellings (compared upper-cased)
RECOGNIZED_GENDERS: frozenset[str] = frozenset(
    {"M", "F", "X", "MALE", "FEMALE", "OTHER"}
)

# Fields compared when two matched records are merged, in report order
COMPARABLE_FIELDS: tuple[str, ...] = (
    "position",
    "bib_number",
    "name",
    "gender",
    "category",
    "finish_time",
    "gun_time",
    "chip_time",
    "pace",
    "gender_position",
    "category_position",
    "country",
    "club",
    "age",
    "status",
    "time_behind",
)

# Fields whose population rate is tracked by validation
TRACKED_FIELDS: tuple[str, ...] = (
    "name",
    "position",
    "bib_number",
    "gender",
    "category",
    "finish_time",
    "gun_time",
    "chip_time",
    "pace",
    "gender_position",
    "category_position",
    "country",
    "club",
    "age",
    "checkpoints",
)

# Position used when sorting records that have none
MISSING_POSITION_SORT_KEY = 9999
