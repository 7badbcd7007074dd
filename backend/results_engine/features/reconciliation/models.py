"""Data models for cross-source reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from results_engine.features.results.models import ResultRecord
from results_engine.shared.constants import MatchMethod, Resolution


@dataclass
class FieldConflict:
    """One disagreement between two sources."""

    field: str  # "finish_time", "name", "_match_confidence"
    value_a: Any
    value_b: Any
    resolution: Resolution
    reason: str


@dataclass
class MatchResult:
    """Outcome of comparing two result records."""

    is_match: bool
    confidence: int  # 0-100
    method: MatchMethod
    # Conflicts surfaced by the comparison itself (e.g. bib ok, name not)
    conflicts: list[FieldConflict] = field(default_factory=list)


@dataclass
class MergeOutcome:
    """A merged record plus the conflicts found while merging."""

    merged: ResultRecord
    conflicts: list[FieldConflict] = field(default_factory=list)


@dataclass
class ReconciliationStatistics:
    """Aggregate numbers for one reconciliation run."""

    total_from_a: int
    total_from_b: int
    match_rate: float  # percent of A that was matched
    fields_enriched: list[str] = field(default_factory=list)
    source_a_name: str = "Source A"
    source_b_name: str = "Source B"


@dataclass
class ReconciliationResult:
    """Output of reconciling two result sets for the same event."""

    merged_results: list[ResultRecord]  # ordered by position
    matched_count: int
    unmatched_from_a: int
    unmatched_from_b: int
    conflicts: list[FieldConflict]
    statistics: ReconciliationStatistics

    @property
    def manual_review_conflicts(self) -> list[FieldConflict]:
        return [c for c in self.conflicts if c.resolution == Resolution.MANUAL]


@dataclass
class EventSummary:
    """Minimal event description used to spot the same event twice."""

    id: str
    name: str
    date: str
    organiser: str


@dataclass
class DuplicateEventCandidate:
    """Two events that look like the same race from different providers."""

    event_a: str
    event_b: str
    similarity: int  # 0-100
