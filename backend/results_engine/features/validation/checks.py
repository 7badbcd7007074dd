"""Per-result validation checks.

Each check takes one record and its index in the result set and returns
a (possibly empty) list of ValidationError. Checks never raise.
"""

from __future__ import annotations

from results_engine.features.results.models import ResultRecord
from results_engine.shared.constants import RECOGNIZED_GENDERS, ResultStatus, Severity
from results_engine.shared.timing import format_time, parse_time

from .models import DistanceRules, ValidationError

# Allowed gap between last checkpoint and finish time (seconds)
FINISH_CHECKPOINT_TOLERANCE_SECONDS = 60

MAX_BIB_LENGTH = 20


def validate_required_fields(result: ResultRecord, index: int) -> list[ValidationError]:
    """Name (critical), position and finish time for finishers."""
    errors: list[ValidationError] = []

    if not result.name or not result.name.strip():
        errors.append(ValidationError(
            field="name",
            result_index=index,
            message="Missing athlete name",
            severity=Severity.CRITICAL,
        ))

    if result.position is None or result.position < 0:
        errors.append(ValidationError(
            field="position",
            result_index=index,
            message="Invalid or missing position",
            severity=Severity.ERROR,
        ))

    if not result.finish_time and result.status == ResultStatus.FINISHED:
        errors.append(ValidationError(
            field="finish_time",
            result_index=index,
            message="Missing finish time for finished athlete",
            severity=Severity.ERROR,
        ))

    return errors


def validate_time_reasonable(
    result: ResultRecord,
    distance_name: str,
    rules: DistanceRules | None,
    index: int,
) -> list[ValidationError]:
    """Finish time must parse and, for known distances, sit within bounds."""
    if not result.finish_time or result.status != ResultStatus.FINISHED:
        return []

    time_seconds = parse_time(result.finish_time)
    if time_seconds is None:
        return [ValidationError(
            field="finish_time",
            result_index=index,
            message=f"Invalid time format: {result.finish_time}",
            severity=Severity.ERROR,
        )]

    if rules is None:
        return []

    errors: list[ValidationError] = []
    if time_seconds < rules.min_time_seconds:
        errors.append(ValidationError(
            field="finish_time",
            result_index=index,
            message=(
                f"Time {result.finish_time} is impossibly fast for {distance_name} "
                f"(minimum: {format_time(rules.min_time_seconds)})"
            ),
            severity=Severity.ERROR,
        ))
    if time_seconds > rules.max_time_seconds:
        errors.append(ValidationError(
            field="finish_time",
            result_index=index,
            message=(
                f"Time {result.finish_time} exceeds reasonable cutoff for {distance_name} "
                f"(maximum: {format_time(rules.max_time_seconds)})"
            ),
            severity=Severity.ERROR,
        ))
    return errors


def validate_checkpoints(result: ResultRecord, index: int) -> list[ValidationError]:
    """Cumulative times must not go backwards and must end near the finish."""
    if not result.checkpoints:
        return []

    errors: list[ValidationError] = []
    ordered = sorted(result.checkpoints, key=lambda cp: cp.checkpoint_order)
    last_time = 0

    for cp in ordered:
        if not cp.cumulative_time:
            continue

        field = f"checkpoints.{cp.checkpoint_name}.cumulative_time"
        time_seconds = parse_time(cp.cumulative_time)
        if time_seconds is None:
            errors.append(ValidationError(
                field=field,
                result_index=index,
                message=f"Invalid checkpoint time format: {cp.cumulative_time}",
                severity=Severity.ERROR,
            ))
            continue

        if time_seconds < last_time:
            errors.append(ValidationError(
                field=field,
                result_index=index,
                message=(
                    f"Checkpoint time goes backwards: {cp.checkpoint_name} "
                    f"({cp.cumulative_time}) is before previous checkpoint"
                ),
                severity=Severity.ERROR,
            ))
        last_time = time_seconds

    last_checkpoint = ordered[-1]
    if result.finish_time and last_checkpoint.cumulative_time:
        finish_seconds = parse_time(result.finish_time)
        last_seconds = parse_time(last_checkpoint.cumulative_time)
        if (
            finish_seconds is not None
            and last_seconds is not None
            and abs(finish_seconds - last_seconds) > FINISH_CHECKPOINT_TOLERANCE_SECONDS
        ):
            errors.append(ValidationError(
                field="checkpoints",
                result_index=index,
                message=(
                    f"Last checkpoint time ({last_checkpoint.cumulative_time}) "
                    f"doesn't match finish time ({result.finish_time})"
                ),
                severity=Severity.ERROR,
            ))

    return errors


def validate_gender(result: ResultRecord, index: int) -> list[ValidationError]:
    """Gender, when present, must be one of the recognized spellings."""
    if not result.gender:
        return []
    if result.gender.strip().upper() in RECOGNIZED_GENDERS:
        return []
    return [ValidationError(
        field="gender",
        result_index=index,
        message=f"Invalid gender value: {result.gender}",
        severity=Severity.ERROR,
    )]


def validate_bib_number(result: ResultRecord, index: int) -> list[ValidationError]:
    """Bib numbers longer than 20 characters are almost always scrape noise."""
    if result.bib_number and len(result.bib_number) > MAX_BIB_LENGTH:
        return [ValidationError(
            field="bib_number",
            result_index=index,
            message=f"Suspiciously long bib number: {result.bib_number}",
            severity=Severity.ERROR,
        )]
    return []
