"""
Athlete matching schemas.

Pydantic schemas for reading an athlete roster and serializing match
suggestions and auto-match output.
"""

from dataclasses import asdict
from typing import List, Optional

from pydantic import Field

from results_engine.features.results.schemas import ResultRecordSchema, WireModel

from .models import AthleteIdentity, AutoMatchSummary, MatchCandidate, PriorResult


class PriorResultSchema(WireModel):
    """Result already linked to an athlete."""
    event_id: str
    position: Optional[int] = None


class AthleteIdentitySchema(WireModel):
    """Roster entry."""
    id: str
    name: str
    normalized_name: str = ""
    country: Optional[str] = None
    club: Optional[str] = None
    results: List[PriorResultSchema] = Field(default_factory=list)

    def to_model(self) -> AthleteIdentity:
        return AthleteIdentity(
            id=self.id,
            name=self.name,
            normalized_name=self.normalized_name,
            country=self.country,
            club=self.club,
            results=[PriorResult(**r.model_dump()) for r in self.results],
        )


class MatchCandidateSchema(WireModel):
    """One suggested athlete for a result."""
    athlete_id: str
    athlete_name: str
    result_name: str
    score: float = Field(..., description="Raw name distance, lower is better")
    confidence: int = Field(..., ge=0, le=100)

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate) -> "MatchCandidateSchema":
        return cls(
            athlete_id=candidate.athlete.id,
            athlete_name=candidate.athlete.name,
            result_name=candidate.result.name,
            score=round(candidate.score, 4),
            confidence=candidate.confidence,
        )


class AthleteLinkSchema(WireModel):
    """Accepted result → athlete link."""
    athlete_id: str
    confidence: int
    result: ResultRecordSchema


class AutoMatchResponse(WireModel):
    """Auto-match run output."""
    matched: int
    skipped: int
    links: List[AthleteLinkSchema] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: AutoMatchSummary) -> "AutoMatchResponse":
        return cls(
            matched=summary.matched,
            skipped=summary.skipped,
            links=[
                AthleteLinkSchema(
                    athlete_id=link.athlete.id,
                    confidence=link.confidence,
                    result=ResultRecordSchema.model_validate(asdict(link.result)),
                )
                for link in summary.links
            ],
        )
