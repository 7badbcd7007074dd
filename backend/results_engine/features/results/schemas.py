"""
Result set schemas.

Pydantic schemas for reading scraped result sets (JSON/YAML) and for
serializing result records back out. Field names are snake_case; the
camelCase spelling used by the scrapers is accepted as an alias.
"""

from dataclasses import asdict, replace
from datetime import date, datetime
from typing import Any, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from results_engine.shared.constants import CheckpointType, ResultStatus

from .models import EventInfo, ResultRecord, ScrapedResultSet, TimingCheckpoint


class WireModel(BaseModel):
    """Base for all wire schemas: snake_case names, camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


def _lower_enum_value(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip().lower()
    return v


def date_to_iso(v: Any) -> Any:
    """YAML loads bare dates as datetime.date; keep them as ISO strings."""
    if isinstance(v, (date, datetime)):
        return v.isoformat()
    return v


class TimingCheckpointSchema(WireModel):
    """Single intermediate split."""
    checkpoint_name: str
    checkpoint_order: int
    checkpoint_type: CheckpointType = CheckpointType.DISTANCE
    split_time: Optional[str] = None
    cumulative_time: Optional[str] = None
    pace: Optional[str] = None
    segment_distance_meters: Optional[int] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("checkpoint_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return _lower_enum_value(v)

    def to_model(self) -> TimingCheckpoint:
        return TimingCheckpoint(**self.model_dump())


class ResultRecordSchema(WireModel):
    """One athlete's result as delivered by a scraper."""
    name: str = ""
    position: Optional[int] = None
    bib_number: Optional[str] = None
    gender: Optional[str] = None
    category: Optional[str] = None
    finish_time: Optional[str] = None
    gun_time: Optional[str] = None
    chip_time: Optional[str] = None
    pace: Optional[str] = None
    gender_position: Optional[int] = None
    category_position: Optional[int] = None
    country: Optional[str] = None
    club: Optional[str] = None
    age: Optional[int] = None
    status: ResultStatus = ResultStatus.FINISHED
    time_behind: Optional[str] = None
    checkpoints: List[TimingCheckpointSchema] = Field(default_factory=list)
    event_id: Optional[str] = None
    result_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        """Accept 'DNF', ' Finished ' etc."""
        return _lower_enum_value(v)

    @field_validator("checkpoints", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v

    def to_model(self) -> ResultRecord:
        data = self.model_dump(exclude={"checkpoints"})
        return ResultRecord(
            **data,
            checkpoints=[cp.to_model() for cp in self.checkpoints],
        )


class EventInfoSchema(WireModel):
    """Event metadata."""
    name: str
    distance_name: str = ""
    date: Optional[str] = None
    organiser: Optional[str] = None
    source_url: Optional[str] = None
    event_id: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_as_string(cls, v):
        return date_to_iso(v)

    def to_model(self) -> EventInfo:
        return EventInfo(**self.model_dump())


class ScrapedResultSetSchema(WireModel):
    """A scraped result set: event metadata plus its results."""
    event: EventInfoSchema
    results: List[ResultRecordSchema] = Field(default_factory=list)

    def to_model(self) -> ScrapedResultSet:
        event = self.event.to_model()
        results = [r.to_model() for r in self.results]
        if event.event_id is not None:
            results = [
                r if r.event_id is not None else replace(r, event_id=event.event_id)
                for r in results
            ]
        return ScrapedResultSet(event=event, results=results)


def dump_record(record: ResultRecord) -> dict[str, Any]:
    """Serialize a ResultRecord to a JSON-ready dict."""
    return ResultRecordSchema.model_validate(asdict(record)).model_dump(mode="json")
