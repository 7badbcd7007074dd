"""Reconciliation service: merges result sets scraped from two timing providers."""

from __future__ import annotations

import logging
from typing import Sequence

from results_engine.features.results.models import ResultRecord, ScrapedResultSet
from results_engine.shared.constants import MISSING_POSITION_SORT_KEY, Resolution
from results_engine.shared.formulas import percentage, round_half_up
from results_engine.shared.names import calculate_name_similarity

from .matcher import MatchConfig, match_results
from .merge import enriched_fields, merge_results
from .models import (
    DuplicateEventCandidate,
    EventSummary,
    FieldConflict,
    MatchResult,
    ReconciliationResult,
    ReconciliationStatistics,
)

logger = logging.getLogger(__name__)

# Event names at least this similar are reported as possible duplicates
DUPLICATE_EVENT_NAME_SIMILARITY = 0.7


def _position_sort_key(record: ResultRecord) -> int:
    # 0 is the providers' "unplaced" marker, same as missing
    return record.position or MISSING_POSITION_SORT_KEY


def _best_candidate(
    result_a: ResultRecord,
    results_b: Sequence[ResultRecord],
    claimed: list[bool],
) -> tuple[int, MatchResult] | None:
    """Highest-confidence unclaimed match in B (first one wins ties)."""
    best: tuple[int, MatchResult] | None = None
    for index, result_b in enumerate(results_b):
        if claimed[index]:
            continue
        match = match_results(result_a, result_b)
        if match.is_match and (best is None or match.confidence > best[1].confidence):
            best = (index, match)
    return best


def reconcile_results(
    results_a: Sequence[ResultRecord],
    results_b: Sequence[ResultRecord],
    auto_merge_threshold: int = MatchConfig.AUTO_MERGE_CONFIDENCE,
    source_a_name: str = "Source A",
    source_b_name: str = "Source B",
) -> ReconciliationResult:
    """Reconcile two result sets for the same event distance.

    Greedy best-match assignment: A's records are processed in the given
    order and each claims its best unclaimed B record, so the outcome is
    order-dependent by construction.

    Args:
        results_a: Primary source records
        results_b: Secondary source records
        auto_merge_threshold: Matches below this confidence are still
            merged but flagged with a `_match_confidence` manual conflict

    Returns:
        ReconciliationResult with merged records sorted by position
    """
    merged_results: list[ResultRecord] = []
    all_conflicts: list[FieldConflict] = []
    claimed = [False] * len(results_b)
    fields_enriched: set[str] = set()
    matched_count = 0

    for result_a in results_a:
        best = _best_candidate(result_a, results_b, claimed)
        if best is None:
            merged_results.append(result_a)
            continue

        index, match = best
        result_b = results_b[index]
        claimed[index] = True
        matched_count += 1
        outcome = merge_results(result_a, result_b, match)

        if match.confidence >= auto_merge_threshold:
            fields_enriched |= enriched_fields(result_a, result_b)
        else:
            logger.debug(
                f"Low confidence match {result_a.name!r} ~ {result_b.name!r} "
                f"({match.confidence}%, {match.method.value})"
            )
            all_conflicts.append(
                FieldConflict(
                    field="_match_confidence",
                    value_a=result_a.name,
                    value_b=result_b.name,
                    resolution=Resolution.MANUAL,
                    reason=f"Low confidence match ({match.confidence}%) - review needed",
                )
            )

        merged_results.append(outcome.merged)
        all_conflicts.extend(outcome.conflicts)

    for index, result_b in enumerate(results_b):
        if not claimed[index]:
            merged_results.append(result_b)

    merged_results.sort(key=_position_sort_key)

    statistics = ReconciliationStatistics(
        total_from_a=len(results_a),
        total_from_b=len(results_b),
        match_rate=percentage(matched_count, len(results_a)),
        fields_enriched=sorted(fields_enriched),
        source_a_name=source_a_name,
        source_b_name=source_b_name,
    )

    logger.info(
        f"Reconciled {source_a_name} ({len(results_a)}) with {source_b_name} "
        f"({len(results_b)}): {matched_count} matched ({statistics.match_rate:.1f}%), "
        f"{len(all_conflicts)} conflicts"
    )

    return ReconciliationResult(
        merged_results=merged_results,
        matched_count=matched_count,
        unmatched_from_a=len(results_a) - matched_count,
        unmatched_from_b=len(results_b) - sum(claimed),
        conflicts=all_conflicts,
        statistics=statistics,
    )


def reconcile_events(
    event_a: ScrapedResultSet,
    event_b: ScrapedResultSet,
    auto_merge_threshold: int = MatchConfig.AUTO_MERGE_CONFIDENCE,
) -> ReconciliationResult:
    """Reconcile two scraped result sets, naming sources by organiser."""
    return reconcile_results(
        event_a.results,
        event_b.results,
        auto_merge_threshold=auto_merge_threshold,
        source_a_name=event_a.event.organiser or "Source A",
        source_b_name=event_b.event.organiser or "Source B",
    )


def find_potential_duplicate_events(
    events: Sequence[EventSummary],
) -> list[DuplicateEventCandidate]:
    """Find events scraped from different providers that look identical.

    Pairs must share a date, come from different organisers and have
    event names at least 70% similar. Sorted by descending similarity.
    """
    candidates: list[DuplicateEventCandidate] = []

    for i, event_a in enumerate(events):
        for event_b in events[i + 1:]:
            if event_a.date != event_b.date:
                continue
            if event_a.organiser == event_b.organiser:
                continue

            similarity = calculate_name_similarity(event_a.name, event_b.name)
            if similarity >= DUPLICATE_EVENT_NAME_SIMILARITY:
                candidates.append(
                    DuplicateEventCandidate(
                        event_a=event_a.id,
                        event_b=event_b.id,
                        similarity=round_half_up(similarity * 100),
                    )
                )

    return sorted(candidates, key=lambda c: c.similarity, reverse=True)
