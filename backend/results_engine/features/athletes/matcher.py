"""Athlete matcher: resolves unmatched results to known athlete identities."""

from __future__ import annotations

import logging
from typing import Sequence

from results_engine.features.results.models import ResultRecord
from results_engine.shared.formulas import round_half_up
from results_engine.shared.names import calculate_name_similarity, name_tokens, normalize_name

from .models import AthleteIdentity, AthleteLink, AutoMatchSummary, MatchCandidate
from .scoring import score_breakdown, weighted_confidence

logger = logging.getLogger(__name__)

# Maximum raw name distance (1 - similarity) for suggestions
DEFAULT_NAME_THRESHOLD = 0.6
# Stricter distance used when linking without a human
AUTO_MATCH_NAME_THRESHOLD = 0.3
DEFAULT_AUTO_LINK_CONFIDENCE = 90
DEFAULT_ROSTER_SEARCH_LIMIT = 50


def search_roster(
    name: str,
    roster: Sequence[AthleteIdentity],
    limit: int = DEFAULT_ROSTER_SEARCH_LIMIT,
) -> list[AthleteIdentity]:
    """Coarse pre-filter: identities sharing a name token or substring.

    Ranked by number of shared tokens, roster order breaking ties.
    """
    normalized = normalize_name(name)
    if not normalized:
        return []
    tokens = name_tokens(name)

    ranked: list[tuple[int, int, AthleteIdentity]] = []
    for order, athlete in enumerate(roster):
        shared = len(tokens & set(athlete.normalized_name.split()))
        substring = normalized in athlete.normalized_name or athlete.normalized_name in normalized
        if shared or (substring and athlete.normalized_name):
            ranked.append((-shared, order, athlete))

    ranked.sort(key=lambda item: (item[0], item[1]))
    return [athlete for _, _, athlete in ranked[:limit]]


def _name_similarity(result: ResultRecord, athlete: AthleteIdentity) -> float:
    return max(
        calculate_name_similarity(result.name, athlete.name),
        calculate_name_similarity(result.name, athlete.normalized_name),
    )


def find_matches_for_result(
    result: ResultRecord,
    candidates: Sequence[AthleteIdentity],
    threshold: float = DEFAULT_NAME_THRESHOLD,
) -> list[MatchCandidate]:
    """Score pre-filtered identities against one unmatched result.

    Args:
        result: Result without an athlete link
        candidates: Identities from a coarse roster lookup
        threshold: Maximum raw name distance; worse candidates are dropped

    Returns:
        Candidates sorted by descending confidence (stable for ties)
    """
    matches: list[MatchCandidate] = []

    for athlete in candidates:
        similarity = _name_similarity(result, athlete)
        score = 1 - similarity
        if score >= threshold:
            continue

        breakdown = score_breakdown(result, athlete, round_half_up(similarity * 100))
        matches.append(
            MatchCandidate(
                athlete=athlete,
                result=result,
                score=score,
                confidence=weighted_confidence(breakdown),
                breakdown=breakdown,
            )
        )

    return sorted(matches, key=lambda m: m.confidence, reverse=True)


def find_matches_for_results(
    results: Sequence[ResultRecord],
    roster: Sequence[AthleteIdentity],
    threshold: float = DEFAULT_NAME_THRESHOLD,
    search_limit: int = DEFAULT_ROSTER_SEARCH_LIMIT,
) -> dict[int, list[MatchCandidate]]:
    """Suggestions for every unmatched result, keyed by result index.

    Results without any candidate are omitted.
    """
    suggestions: dict[int, list[MatchCandidate]] = {}
    for index, result in enumerate(results):
        candidates = search_roster(result.name, roster, limit=search_limit)
        matches = find_matches_for_result(result, candidates, threshold)
        if matches:
            suggestions[index] = matches
    return suggestions


def auto_match_results(
    results: Sequence[ResultRecord],
    roster: Sequence[AthleteIdentity],
    confidence_threshold: int = DEFAULT_AUTO_LINK_CONFIDENCE,
    name_threshold: float = AUTO_MATCH_NAME_THRESHOLD,
    search_limit: int = DEFAULT_ROSTER_SEARCH_LIMIT,
) -> AutoMatchSummary:
    """Link results whose identity is unambiguous.

    A result is linked only when exactly one candidate reaches
    `confidence_threshold`. No candidates, or several qualifying ones,
    count as skipped and are left for manual review.
    """
    summary = AutoMatchSummary()

    for result in results:
        candidates = search_roster(result.name, roster, limit=search_limit)
        matches = find_matches_for_result(result, candidates, name_threshold)
        qualifying = [m for m in matches if m.confidence >= confidence_threshold]

        if len(qualifying) == 1:
            best = qualifying[0]
            summary.links.append(
                AthleteLink(result=result, athlete=best.athlete, confidence=best.confidence)
            )
            summary.matched += 1
        else:
            if len(qualifying) > 1:
                logger.debug(
                    f"Ambiguous athlete match for {result.name!r}: "
                    f"{[m.athlete.id for m in qualifying]}"
                )
            summary.skipped += 1

    logger.info(f"Auto-match: {summary.matched} linked, {summary.skipped} skipped")
    return summary


def suggest_matches_for_athlete(
    athlete: AthleteIdentity,
    results: Sequence[ResultRecord],
    threshold: float = DEFAULT_NAME_THRESHOLD,
) -> list[MatchCandidate]:
    """Reverse lookup: unmatched results that may belong to `athlete`.

    Only results whose normalized name contains (or is contained in) the
    athlete's are scored. Sorted by ascending raw score (best first).
    """
    athlete_name = athlete.normalized_name
    if not athlete_name:
        return []

    suggestions: list[MatchCandidate] = []
    for result in results:
        result_name = normalize_name(result.name)
        if not result_name:
            continue
        if athlete_name not in result_name and result_name not in athlete_name:
            continue

        similarity = calculate_name_similarity(result_name, athlete_name)
        score = 1 - similarity
        if score >= threshold:
            continue

        suggestions.append(
            MatchCandidate(
                athlete=athlete,
                result=result,
                score=score,
                confidence=round_half_up(similarity * 100),
            )
        )

    return sorted(suggestions, key=lambda c: c.score)
