"""
Multi-source reconciliation module.

Usage:
    from results_engine.features.reconciliation import reconcile_results
    from results_engine.features.reconciliation import generate_reconciliation_report

Components:
- match_results: same-athlete decision between two records
- merge_results: field conflict policy + checkpoint merge
- reconcile_results: greedy best-match assignment across two result sets
"""

from .models import (
    FieldConflict,
    MatchResult,
    MergeOutcome,
    ReconciliationResult,
    ReconciliationStatistics,
    EventSummary,
    DuplicateEventCandidate,
)
from .matcher import MatchConfig, match_results, names_match
from .merge import (
    detect_field_conflict,
    enriched_fields,
    merge_checkpoints,
    merge_results,
    resolution_for_field,
)
from .service import reconcile_results, reconcile_events, find_potential_duplicate_events
from .report import generate_reconciliation_report
from .schemas import (
    FieldConflictSchema,
    ReconciliationResponse,
    ReconciliationStatisticsSchema,
    EventSummarySchema,
)

__all__ = [
    # Models
    "FieldConflict",
    "MatchResult",
    "MergeOutcome",
    "ReconciliationResult",
    "ReconciliationStatistics",
    "EventSummary",
    "DuplicateEventCandidate",
    # Matching
    "MatchConfig",
    "match_results",
    "names_match",
    # Merging
    "detect_field_conflict",
    "enriched_fields",
    "merge_checkpoints",
    "merge_results",
    "resolution_for_field",
    # Service
    "reconcile_results",
    "reconcile_events",
    "find_potential_duplicate_events",
    "generate_reconciliation_report",
    # Schemas
    "FieldConflictSchema",
    "ReconciliationResponse",
    "ReconciliationStatisticsSchema",
    "EventSummarySchema",
]
