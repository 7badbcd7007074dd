"""
Result set validation module.

Usage:
    from results_engine.features.validation import validate_results
    from results_engine.features.validation import generate_validation_report

Components:
- rules: per-distance time bounds and expected checkpoints
- checks: per-result checks (required fields, times, splits, gender, bib)
- aggregate: duplicate bibs, position gaps, checkpoint coverage, population
- service: validate_results + completeness score
"""

from .models import (
    DistanceRules,
    ValidationError,
    ValidationWarning,
    ValidationStatistics,
    ValidationResult,
    QuickValidation,
)
from .rules import (
    DISTANCE_RULES,
    DISTANCE_ALIASES,
    canonical_distance_name,
    get_distance_rules,
    get_expected_checkpoints,
    detect_race_type,
)
from .service import (
    ScoreConfig,
    completeness_score,
    validate_results,
    validate_result_set,
    quick_validate_result,
)
from .report import generate_validation_report
from .schemas import ValidationResponse

__all__ = [
    # Models
    "DistanceRules",
    "ValidationError",
    "ValidationWarning",
    "ValidationStatistics",
    "ValidationResult",
    "QuickValidation",
    # Rules
    "DISTANCE_RULES",
    "DISTANCE_ALIASES",
    "canonical_distance_name",
    "get_distance_rules",
    "get_expected_checkpoints",
    "detect_race_type",
    # Service
    "ScoreConfig",
    "completeness_score",
    "validate_results",
    "validate_result_set",
    "quick_validate_result",
    "generate_validation_report",
    # Schemas
    "ValidationResponse",
]
