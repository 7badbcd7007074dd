"""
Athlete identity matching module.

Usage:
    from results_engine.features.athletes import find_matches_for_result, auto_match_results

Components:
- search_roster: coarse name-token pre-filter over a roster
- scoring: name / position / club / geography confidence factors
- matcher: suggestions, auto-linking and reverse (athlete → results) lookup
"""

from .models import (
    PriorResult,
    AthleteIdentity,
    ScoreBreakdown,
    MatchCandidate,
    AthleteLink,
    AutoMatchSummary,
)
from .scoring import (
    MatchWeights,
    position_proximity_score,
    club_match_score,
    geography_score,
    score_breakdown,
    weighted_confidence,
)
from .matcher import (
    search_roster,
    find_matches_for_result,
    find_matches_for_results,
    auto_match_results,
    suggest_matches_for_athlete,
)
from .roster import parse_roster, load_roster
from .schemas import (
    AthleteIdentitySchema,
    MatchCandidateSchema,
    AutoMatchResponse,
)

__all__ = [
    # Models
    "PriorResult",
    "AthleteIdentity",
    "ScoreBreakdown",
    "MatchCandidate",
    "AthleteLink",
    "AutoMatchSummary",
    # Scoring
    "MatchWeights",
    "position_proximity_score",
    "club_match_score",
    "geography_score",
    "score_breakdown",
    "weighted_confidence",
    # Matching
    "search_roster",
    "find_matches_for_result",
    "find_matches_for_results",
    "auto_match_results",
    "suggest_matches_for_athlete",
    # Roster
    "parse_roster",
    "load_roster",
    # Schemas
    "AthleteIdentitySchema",
    "MatchCandidateSchema",
    "AutoMatchResponse",
]
