"""
Shared utilities (NOT business logic).

Usage:
    from results_engine.shared import calculate_name_similarity, parse_time
    from results_engine.shared.formatters import format_bar
"""
from .names import (
    normalize_name,
    levenshtein_distance,
    calculate_name_similarity,
    name_tokens,
    REARRANGED_NAME_SIMILARITY,
)
from .timing import (
    parse_time,
    format_time,
)
from .formulas import (
    round_half_up,
    clamp,
    percentage,
)
from .formatters import (
    format_percent,
    format_bar,
    format_value,
)
from .constants import (
    ResultStatus,
    CheckpointType,
    MatchMethod,
    Resolution,
    Severity,
    RaceType,
    NO_TIME_SENTINELS,
    RECOGNIZED_GENDERS,
    COMPARABLE_FIELDS,
    TRACKED_FIELDS,
    MISSING_POSITION_SORT_KEY,
)

__all__ = [
    # names
    "normalize_name",
    "levenshtein_distance",
    "calculate_name_similarity",
    "name_tokens",
    "REARRANGED_NAME_SIMILARITY",
    # timing
    "parse_time",
    "format_time",
    # formulas
    "round_half_up",
    "clamp",
    "percentage",
    # formatters
    "format_percent",
    "format_bar",
    "format_value",
    # constants
    "ResultStatus",
    "CheckpointType",
    "MatchMethod",
    "Resolution",
    "Severity",
    "RaceType",
    "NO_TIME_SENTINELS",
    "RECOGNIZED_GENDERS",
    "COMPARABLE_FIELDS",
    "TRACKED_FIELDS",
    "MISSING_POSITION_SORT_KEY",
]
