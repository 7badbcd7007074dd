"""
Reconciliation schemas.

Pydantic schemas for serializing reconciliation output (e.g. to JSON for
an admin review queue) and for reading event summaries.
"""

from dataclasses import asdict
from typing import Any, List

from pydantic import Field, field_validator

from results_engine.features.results.schemas import ResultRecordSchema, WireModel, date_to_iso
from results_engine.shared.constants import Resolution

from .models import EventSummary, ReconciliationResult


class FieldConflictSchema(WireModel):
    """One disagreement between sources."""
    field: str
    value_a: Any = None
    value_b: Any = None
    resolution: Resolution
    reason: str


class ReconciliationStatisticsSchema(WireModel):
    """Aggregate reconciliation numbers."""
    total_from_a: int
    total_from_b: int
    match_rate: float = Field(..., description="Percent of source A matched")
    fields_enriched: List[str] = Field(default_factory=list)
    source_a_name: str
    source_b_name: str


class ReconciliationResponse(WireModel):
    """Full reconciliation output."""
    merged_results: List[ResultRecordSchema]
    matched_count: int
    unmatched_from_a: int
    unmatched_from_b: int
    conflicts: List[FieldConflictSchema]
    statistics: ReconciliationStatisticsSchema

    @classmethod
    def from_result(cls, result: ReconciliationResult) -> "ReconciliationResponse":
        return cls.model_validate(asdict(result))


class EventSummarySchema(WireModel):
    """Event description used for duplicate detection."""
    id: str
    name: str
    date: str
    organiser: str

    @field_validator("date", mode="before")
    @classmethod
    def date_as_string(cls, v):
        return date_to_iso(v)

    def to_model(self) -> EventSummary:
        return EventSummary(**self.model_dump())
