"""Data models for result set validation."""

from __future__ import annotations

from dataclasses import dataclass, field

from results_engine.shared.constants import RaceType, Severity


@dataclass
class DistanceRules:
    """Plausibility bounds and expected splits for one canonical distance."""

    distance_meters: int
    min_time_seconds: int  # just under the world record
    max_time_seconds: int  # generous cutoff
    race_type: RaceType
    expected_checkpoints: list[str] = field(default_factory=list)
    world_record_male: int | None = None
    world_record_female: int | None = None


@dataclass
class ValidationError:
    """Per-result finding."""

    field: str  # "finish_time", "checkpoints.10km.cumulative_time"
    result_index: int
    message: str
    severity: Severity


@dataclass
class ValidationWarning:
    """Aggregate finding across the whole result set."""

    field: str
    message: str
    affected_count: int
    percentage: float


@dataclass
class ValidationStatistics:
    """Field population and checkpoint coverage."""

    total_results: int
    results_with_all_fields: int
    results_with_checkpoints: int
    field_population: dict[str, int] = field(default_factory=dict)  # field → %
    checkpoint_coverage: float = 0.0  # % of results with any checkpoint
    average_checkpoints_per_result: float = 0.0


@dataclass
class ValidationResult:
    """Outcome of validating one scraped result set."""

    is_valid: bool
    completeness_score: int  # 0-100
    errors: list[ValidationError]
    warnings: list[ValidationWarning]
    statistics: ValidationStatistics

    @property
    def critical_errors(self) -> list[ValidationError]:
        return [e for e in self.errors if e.severity == Severity.CRITICAL]


@dataclass
class QuickValidation:
    """Lightweight single-record check for live scrape progress."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)
