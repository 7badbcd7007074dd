"""Data models for athlete identity matching."""

from __future__ import annotations

from dataclasses import dataclass, field

from results_engine.features.results.models import ResultRecord
from results_engine.shared.names import normalize_name


@dataclass
class PriorResult:
    """A result already linked to an athlete (event + place only)."""

    event_id: str
    position: int | None = None


@dataclass
class AthleteIdentity:
    """A known person from the athlete roster (read-only here)."""

    id: str
    name: str
    normalized_name: str = ""
    country: str | None = None
    club: str | None = None
    results: list[PriorResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.normalized_name:
            self.normalized_name = normalize_name(self.name)


@dataclass
class ScoreBreakdown:
    """Per-factor component scores, each 0-100 before weighting."""

    name: int
    position: int
    club: int
    geography: int


@dataclass
class MatchCandidate:
    """One unmatched result paired with one possible athlete."""

    athlete: AthleteIdentity
    result: ResultRecord
    score: float  # raw name distance, lower = better
    confidence: int  # weighted 0-100, higher = better
    breakdown: ScoreBreakdown | None = None


@dataclass
class AthleteLink:
    """An accepted result → athlete link produced by auto-match."""

    result: ResultRecord
    athlete: AthleteIdentity
    confidence: int


@dataclass
class AutoMatchSummary:
    """Outcome of an auto-match run."""

    matched: int = 0
    skipped: int = 0
    links: list[AthleteLink] = field(default_factory=list)
