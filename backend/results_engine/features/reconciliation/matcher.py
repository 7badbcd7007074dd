"""
Result matcher: decides whether two records describe the same performance.

Rules are evaluated in priority order, the first satisfied rule wins:

1. Bib match:           equal non-empty bib numbers (authoritative)
2. Name + time:         similar names, finish times within 60s
3. Name + position:     similar names, same position, no usable times
4. Weak position+name:  same position, partially similar names
"""

from __future__ import annotations

from results_engine.features.results.models import ResultRecord
from results_engine.shared.constants import MatchMethod, Resolution
from results_engine.shared.formulas import clamp, round_half_up
from results_engine.shared.names import calculate_name_similarity
from results_engine.shared.timing import parse_time

from .models import FieldConflict, MatchResult


class MatchConfig:
    """Matching thresholds."""

    # Minimum name similarity (0-1) for fuzzy matching
    MIN_NAME_SIMILARITY = 0.75

    # Maximum finish time difference for name+time matching (seconds)
    MAX_TIME_DIFFERENCE_SECONDS = 60

    # Below this, a bib match is flagged for manual name review
    BIB_NAME_MISMATCH_SIMILARITY = 0.5
    BIB_NAME_MISMATCH_CONFIDENCE = 75

    # Minimum similarity for the weak position+name rule
    WEAK_NAME_SIMILARITY = 0.6

    # Default confidence at which a match is merged without review
    AUTO_MERGE_CONFIDENCE = 85


def names_match(name_a: str | None, name_b: str | None) -> bool:
    """Check if two names are likely the same person."""
    return calculate_name_similarity(name_a, name_b) >= MatchConfig.MIN_NAME_SIMILARITY


def match_results(result_a: ResultRecord, result_b: ResultRecord) -> MatchResult:
    """Match a primary (A) record against a secondary (B) record.

    Never raises: ambiguity is expressed as lower confidence or as a
    manual-review conflict on the returned MatchResult.
    """
    name_similarity = calculate_name_similarity(result_a.name, result_b.name)

    # Rule 1: exact bib number match
    if result_a.bib_number and result_b.bib_number and result_a.bib_number == result_b.bib_number:
        if name_similarity < MatchConfig.BIB_NAME_MISMATCH_SIMILARITY:
            # Bib matches but names don't, likely a data error on one side
            return MatchResult(
                is_match=True,
                confidence=MatchConfig.BIB_NAME_MISMATCH_CONFIDENCE,
                method=MatchMethod.BIB,
                conflicts=[
                    FieldConflict(
                        field="name",
                        value_a=result_a.name,
                        value_b=result_b.name,
                        resolution=Resolution.MANUAL,
                        reason="Bib numbers match but names are different",
                    )
                ],
            )
        return MatchResult(is_match=True, confidence=100, method=MatchMethod.BIB)

    same_position = result_a.position is not None and result_a.position == result_b.position

    if name_similarity >= MatchConfig.MIN_NAME_SIMILARITY:
        # Rule 2: name + finish time
        time_a = parse_time(result_a.finish_time)
        time_b = parse_time(result_b.finish_time)
        if time_a is not None and time_b is not None:
            time_diff = abs(time_a - time_b)
            if time_diff <= MatchConfig.MAX_TIME_DIFFERENCE_SECONDS:
                confidence = round_half_up(80 + name_similarity * 15 - (time_diff / 60) * 5)
                return MatchResult(
                    is_match=True,
                    confidence=int(clamp(confidence, 80, 98)),
                    method=MatchMethod.NAME_TIME,
                )

        # Rule 3: name + position fallback
        if same_position:
            return MatchResult(
                is_match=True,
                confidence=round_half_up(70 + name_similarity * 10),
                method=MatchMethod.POSITION_NAME,
            )

    # Rule 4: position + partial name
    if same_position and name_similarity >= MatchConfig.WEAK_NAME_SIMILARITY:
        return MatchResult(
            is_match=True,
            confidence=round_half_up(60 + name_similarity * 15),
            method=MatchMethod.POSITION_NAME,
        )

    return MatchResult(is_match=False, confidence=0, method=MatchMethod.BIB)
