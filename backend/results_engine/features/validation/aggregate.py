"""Aggregate checks and statistics across a whole result set."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from results_engine.features.results.models import ResultRecord
from results_engine.shared.constants import TRACKED_FIELDS, ResultStatus
from results_engine.shared.formulas import percentage, round_half_up

from .models import ValidationWarning

# Expected checkpoints carried by fewer than this share of results warn
CHECKPOINT_PRESENCE_RATIO = 0.5

# Duplicate bibs listed in the warning message before truncating
MAX_LISTED_DUPLICATES = 5


def find_duplicate_bibs(results: Sequence[ResultRecord]) -> list[ValidationWarning]:
    """One warning listing every bib number used more than once."""
    counts = Counter(r.bib_number for r in results if r.bib_number)
    duplicates = [(bib, count) for bib, count in counts.items() if count > 1]
    if not duplicates:
        return []

    affected = sum(count for _, count in duplicates)
    listed = ", ".join(f"{bib} ({count}x)" for bib, count in duplicates[:MAX_LISTED_DUPLICATES])
    more = "..." if len(duplicates) > MAX_LISTED_DUPLICATES else ""

    return [ValidationWarning(
        field="bib_number",
        message=f"Found {len(duplicates)} duplicate bib numbers: {listed}{more}",
        affected_count=affected,
        percentage=percentage(affected, len(results)),
    )]


def find_position_gaps(results: Sequence[ResultRecord]) -> list[ValidationWarning]:
    """Warn when finished positions skip numbers (filtered rows, removed DNFs)."""
    positions = sorted(
        r.position
        for r in results
        if r.status == ResultStatus.FINISHED and r.position is not None
    )

    gaps = [
        current
        for previous, current in zip(positions, positions[1:])
        if current - previous > 1
    ]
    if not gaps:
        return []

    return [ValidationWarning(
        field="position",
        message=(
            f"Found {len(gaps)} position gaps in results "
            f"(positions may have been filtered or DNFs removed)"
        ),
        affected_count=len(gaps),
        percentage=percentage(len(gaps), len(positions)),
    )]


def _matching_expected(checkpoint_name: str, expected: Sequence[str]) -> str | None:
    """Expected checkpoint a scraped name stands for.

    Exact (case-insensitive) names win; otherwise the first expected name
    that contains, or is contained in, the scraped one.
    """
    name = checkpoint_name.lower()
    for candidate in expected:
        if candidate.lower() == name:
            return candidate
    for candidate in expected:
        lowered = candidate.lower()
        if lowered in name or name in lowered:
            return candidate
    return None


def analyze_missing_checkpoints(
    results: Sequence[ResultRecord],
    expected_checkpoints: Sequence[str],
) -> list[ValidationWarning]:
    """Warn about expected checkpoints absent from all or most results."""
    if not expected_checkpoints:
        return []

    with_checkpoints = [r for r in results if r.has_checkpoints]
    counts = {cp: 0 for cp in expected_checkpoints}

    for result in with_checkpoints:
        for cp in result.checkpoints:
            expected = _matching_expected(cp.checkpoint_name, expected_checkpoints)
            if expected is not None:
                counts[expected] += 1

    warnings: list[ValidationWarning] = []
    total = len(with_checkpoints)
    for checkpoint, count in counts.items():
        if count == 0 and total > 0:
            warnings.append(ValidationWarning(
                field="checkpoints",
                message=f'Expected checkpoint "{checkpoint}" not found in any result',
                affected_count=len(results),
                percentage=100.0,
            ))
        elif count < total * CHECKPOINT_PRESENCE_RATIO:
            missing = total - count
            warnings.append(ValidationWarning(
                field="checkpoints",
                message=(
                    f'Checkpoint "{checkpoint}" only present in '
                    f"{round_half_up(percentage(count, total))}% of results"
                ),
                affected_count=missing,
                percentage=percentage(missing, total),
            ))

    return warnings


def _is_populated(result: ResultRecord, field: str) -> bool:
    value = getattr(result, field)
    if field == "checkpoints":
        return bool(value)
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def analyze_field_population(results: Sequence[ResultRecord]) -> dict[str, int]:
    """Percentage (rounded) of results with a value, per tracked field."""
    if not results:
        return {}

    return {
        field: round_half_up(
            percentage(sum(1 for r in results if _is_populated(r, field)), len(results))
        )
        for field in TRACKED_FIELDS
    }


def count_complete_results(results: Sequence[ResultRecord]) -> int:
    """Results carrying name, position, finish time, gender and category."""
    required = ("name", "position", "finish_time", "gender", "category")
    return sum(1 for r in results if all(_is_populated(r, f) for f in required))
