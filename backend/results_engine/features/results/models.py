"""Data models for scraped race results (dataclasses, no I/O dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from results_engine.shared.constants import CheckpointType, ResultStatus


@dataclass
class TimingCheckpoint:
    """One intermediate split within a result."""

    checkpoint_name: str  # "10km", "T1", "swim"
    checkpoint_order: int  # defines sequence within the result
    checkpoint_type: CheckpointType = CheckpointType.DISTANCE
    split_time: str | None = None  # "21:40" time for this segment
    cumulative_time: str | None = None  # "43:05" elapsed since start
    pace: str | None = None  # "4:20" min/km
    segment_distance_meters: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ResultRecord:
    """One athlete's performance in one distance of one event.

    Records are never mutated once scraped; merging builds a new record.
    """

    name: str  # "Jane Doe"
    position: int | None = None  # 1-based overall place, may be provisional
    bib_number: str | None = None  # "101"
    gender: str | None = None  # "F"
    category: str | None = None  # "F35"
    finish_time: str | None = None  # "1:45:03"
    gun_time: str | None = None
    chip_time: str | None = None
    pace: str | None = None
    gender_position: int | None = None
    category_position: int | None = None
    country: str | None = None  # "KAZ"
    club: str | None = None
    age: int | None = None
    status: ResultStatus = ResultStatus.FINISHED
    time_behind: str | None = None  # "+3:12"
    checkpoints: list[TimingCheckpoint] = field(default_factory=list)
    # Not compared during reconciliation
    event_id: str | None = None
    result_id: str | None = None

    @property
    def has_checkpoints(self) -> bool:
        return bool(self.checkpoints)


@dataclass
class EventInfo:
    """Event metadata supplied by the scraper alongside the results."""

    name: str  # "Almaty Marathon 2025"
    distance_name: str = ""  # canonical: "10K", "Half Marathon", ...
    date: str | None = None  # "2025-09-28"
    organiser: str | None = None  # timing provider
    source_url: str | None = None
    event_id: str | None = None


@dataclass
class ScrapedResultSet:
    """Results for one distance of one event from one timing provider."""

    event: EventInfo
    results: list[ResultRecord] = field(default_factory=list)
