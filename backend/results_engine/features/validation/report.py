"""Human-readable validation report."""

from __future__ import annotations

from collections import Counter

from results_engine.shared.formatters import format_bar

from .models import ValidationResult


def generate_validation_report(validation: ValidationResult) -> str:
    """Render status, score, grouped errors, warnings and field population."""
    stats = validation.statistics
    lines: list[str] = ["=== Validation Report ===", ""]

    lines.append(f"Status: {'VALID' if validation.is_valid else 'INVALID'}")
    lines.append(f"Completeness Score: {validation.completeness_score}/100")
    lines.append(f"Total Results: {stats.total_results}")
    lines.append("")

    if validation.errors:
        lines.append(f"Errors ({len(validation.errors)}):")
        grouped = Counter(
            f"[{error.severity.value}] {error.message}" for error in validation.errors
        )
        for message, count in grouped.items():
            lines.append(f"  - {message} ({count}x)")
        lines.append("")

    if validation.warnings:
        lines.append(f"Warnings ({len(validation.warnings)}):")
        lines.extend(f"  - {warning.message}" for warning in validation.warnings)
        lines.append("")

    lines.append("Field Population:")
    for field, percent in stats.field_population.items():
        lines.append(f"  {field:<20} {format_bar(percent)} {percent}%")
    lines.append("")

    lines.append(
        f"Results with checkpoints: {stats.results_with_checkpoints}/{stats.total_results}"
    )
    lines.append(
        f"Average checkpoints per result: {stats.average_checkpoints_per_result:.1f}"
    )

    return "\n".join(lines) + "\n"
