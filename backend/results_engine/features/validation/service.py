"""Validation service: plausibility and completeness scoring for scraped results."""

from __future__ import annotations

import logging
from typing import Sequence

from results_engine.features.results.models import ResultRecord, ScrapedResultSet
from results_engine.shared.constants import NO_TIME_SENTINELS, ResultStatus, Severity
from results_engine.shared.formulas import clamp, percentage, round_half_up
from results_engine.shared.timing import parse_time

from .aggregate import (
    analyze_field_population,
    analyze_missing_checkpoints,
    count_complete_results,
    find_duplicate_bibs,
    find_position_gaps,
)
from .checks import (
    validate_bib_number,
    validate_checkpoints,
    validate_gender,
    validate_required_fields,
    validate_time_reasonable,
)
from .models import (
    QuickValidation,
    ValidationError,
    ValidationResult,
    ValidationStatistics,
    ValidationWarning,
)
from .rules import get_distance_rules, get_expected_checkpoints

logger = logging.getLogger(__name__)


class ScoreConfig:
    """Completeness score weights."""

    FIELD_POPULATION_WEIGHT = 0.5
    CHECKPOINT_COVERAGE_WEIGHT = 0.3

    # Up to 20 points, one lost per warning
    WARNING_BUDGET = 20

    CRITICAL_ERROR_PENALTY = 5
    REGULAR_ERROR_PENALTY = 2
    MAX_ERROR_PENALTY = 50

    # Regular errors allowed before a set is invalid (share of results)
    MAX_ERROR_RATIO = 0.1


def completeness_score(
    field_population: dict[str, int],
    checkpoint_coverage: float,
    warning_count: int,
    critical_errors: int,
    regular_errors: int,
) -> int:
    """Single 0-100 summary of population, coverage, warnings and errors."""
    avg_population = (
        sum(field_population.values()) / len(field_population) if field_population else 0.0
    )
    error_penalty = min(
        ScoreConfig.MAX_ERROR_PENALTY,
        critical_errors * ScoreConfig.CRITICAL_ERROR_PENALTY
        + regular_errors * ScoreConfig.REGULAR_ERROR_PENALTY,
    )
    score = round_half_up(
        avg_population * ScoreConfig.FIELD_POPULATION_WEIGHT
        + checkpoint_coverage * ScoreConfig.CHECKPOINT_COVERAGE_WEIGHT
        + (ScoreConfig.WARNING_BUDGET - min(ScoreConfig.WARNING_BUDGET, warning_count))
        - error_penalty
    )
    return int(clamp(score, 0, 100))


def validate_results(
    results: Sequence[ResultRecord],
    distance_name: str,
) -> ValidationResult:
    """Validate a scraped result set for one distance.

    Findings are accumulated, never raised: a bad record does not stop
    validation of the rest.

    Args:
        results: Records in scraped order (indexes are reported back)
        distance_name: Canonical distance ("10K", "Marathon", ...); unknown
            names skip the time-bound and expected-checkpoint checks

    Returns:
        ValidationResult with errors, warnings, statistics and score
    """
    rules = get_distance_rules(distance_name)
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    for index, result in enumerate(results):
        errors.extend(validate_required_fields(result, index))
        errors.extend(validate_time_reasonable(result, distance_name, rules, index))
        errors.extend(validate_checkpoints(result, index))
        errors.extend(validate_gender(result, index))
        errors.extend(validate_bib_number(result, index))

    warnings.extend(find_duplicate_bibs(results))
    warnings.extend(find_position_gaps(results))
    warnings.extend(analyze_missing_checkpoints(results, get_expected_checkpoints(distance_name)))

    field_population = analyze_field_population(results)
    with_checkpoints = sum(1 for r in results if r.has_checkpoints)
    total_checkpoints = sum(len(r.checkpoints) for r in results)
    checkpoint_coverage = percentage(with_checkpoints, len(results))

    statistics = ValidationStatistics(
        total_results=len(results),
        results_with_all_fields=count_complete_results(results),
        results_with_checkpoints=with_checkpoints,
        field_population=field_population,
        checkpoint_coverage=checkpoint_coverage,
        average_checkpoints_per_result=(total_checkpoints / len(results)) if results else 0.0,
    )

    critical_errors = sum(1 for e in errors if e.severity == Severity.CRITICAL)
    regular_errors = sum(1 for e in errors if e.severity == Severity.ERROR)

    score = completeness_score(
        field_population,
        checkpoint_coverage,
        len(warnings),
        critical_errors,
        regular_errors,
    )
    is_valid = critical_errors == 0 and regular_errors < len(results) * ScoreConfig.MAX_ERROR_RATIO

    logger.info(
        f"Validated {len(results)} results for {distance_name or 'unknown distance'}: "
        f"score={score}, valid={is_valid}, critical={critical_errors}, "
        f"errors={regular_errors}, warnings={len(warnings)}"
    )

    return ValidationResult(
        is_valid=is_valid,
        completeness_score=score,
        errors=errors,
        warnings=warnings,
        statistics=statistics,
    )


def validate_result_set(result_set: ScrapedResultSet) -> ValidationResult:
    """Validate a scraped set against its own event distance."""
    return validate_results(result_set.results, result_set.event.distance_name)


def quick_validate_result(result: ResultRecord) -> QuickValidation:
    """Cheap per-record check for real-time scrape progress updates."""
    issues: list[str] = []

    if not result.name:
        issues.append("Missing name")
    if result.position is None or result.position < 0:
        issues.append("Invalid position")
    if not result.finish_time and result.status == ResultStatus.FINISHED:
        issues.append("Missing finish time")
    if (
        result.finish_time
        and result.finish_time.strip().lower() not in NO_TIME_SENTINELS
        and parse_time(result.finish_time) is None
    ):
        issues.append("Invalid time format")

    return QuickValidation(is_valid=not issues, issues=issues)
