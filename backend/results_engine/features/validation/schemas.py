"""
Validation schemas.

Pydantic schemas for serializing validation output.
"""

from dataclasses import asdict
from typing import Dict, List

from pydantic import Field

from results_engine.features.results.schemas import WireModel
from results_engine.shared.constants import Severity

from .models import ValidationResult


class ValidationErrorSchema(WireModel):
    """Per-result finding."""
    field: str
    result_index: int
    message: str
    severity: Severity


class ValidationWarningSchema(WireModel):
    """Aggregate finding."""
    field: str
    message: str
    affected_count: int
    percentage: float


class ValidationStatisticsSchema(WireModel):
    """Population and coverage statistics."""
    total_results: int
    results_with_all_fields: int
    results_with_checkpoints: int
    field_population: Dict[str, int] = Field(default_factory=dict)
    checkpoint_coverage: float
    average_checkpoints_per_result: float


class ValidationResponse(WireModel):
    """Full validation output."""
    is_valid: bool
    completeness_score: int = Field(..., ge=0, le=100)
    errors: List[ValidationErrorSchema]
    warnings: List[ValidationWarningSchema]
    statistics: ValidationStatisticsSchema

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResponse":
        return cls.model_validate(asdict(result))
