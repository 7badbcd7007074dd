"""
Multi-factor confidence for athlete identity matching.

Confidence = name * 0.6 + position * 0.2 + club * 0.1 + geography * 0.1
(each factor scored 0-100), rounded and capped at 100.
"""

from __future__ import annotations

from results_engine.features.results.models import ResultRecord
from results_engine.shared.formulas import round_half_up

from .models import AthleteIdentity, ScoreBreakdown


class MatchWeights:
    """Factor weights (sum to 1.0)."""

    NAME = 0.6
    POSITION = 0.2
    CLUB = 0.1
    GEOGRAPHY = 0.1


# Same-event finish within this many places counts as "close"
POSITION_PROXIMITY_PLACES = 10
POSITION_PROXIMITY_SCORE = 50

GEOGRAPHY_MATCH_SCORE = 30


def position_proximity_score(result: ResultRecord, athlete: AthleteIdentity) -> int:
    """50 if the athlete already has a result within 10 places in this event."""
    if not result.position or not result.event_id:
        return 0

    for prior in athlete.results:
        if prior.event_id != result.event_id or not prior.position:
            continue
        if abs(prior.position - result.position) <= POSITION_PROXIMITY_PLACES:
            return POSITION_PROXIMITY_SCORE
    return 0


def club_match_score(result: ResultRecord, athlete: AthleteIdentity) -> int:
    """Club affiliation factor.

    Always 0 until roster identities carry a verified club.
    """
    # TODO: compare result.club with athlete.club once roster clubs are verified
    return 0


def geography_score(result: ResultRecord, athlete: AthleteIdentity) -> int:
    """30 if the result's country equals the athlete's (case-insensitive)."""
    if not athlete.country or not result.country:
        return 0
    if result.country.strip().casefold() == athlete.country.strip().casefold():
        return GEOGRAPHY_MATCH_SCORE
    return 0


def score_breakdown(
    result: ResultRecord,
    athlete: AthleteIdentity,
    name_confidence: int,
) -> ScoreBreakdown:
    """Collect all factor scores for one result/athlete pair."""
    return ScoreBreakdown(
        name=name_confidence,
        position=position_proximity_score(result, athlete),
        club=club_match_score(result, athlete),
        geography=geography_score(result, athlete),
    )


def weighted_confidence(breakdown: ScoreBreakdown) -> int:
    """Weighted sum of factor scores, rounded, capped at 100."""
    total = (
        breakdown.name * MatchWeights.NAME
        + breakdown.position * MatchWeights.POSITION
        + breakdown.club * MatchWeights.CLUB
        + breakdown.geography * MatchWeights.GEOGRAPHY
    )
    return min(100, round_half_up(total))
