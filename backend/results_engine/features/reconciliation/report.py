"""Human-readable reconciliation report."""

from __future__ import annotations

from collections import Counter

from results_engine.shared.formatters import format_percent, format_value

from .models import ReconciliationResult

# Manual-review conflicts listed individually before truncating
MAX_MANUAL_REVIEW_LINES = 10


def generate_reconciliation_report(result: ReconciliationResult) -> str:
    """Render totals, match rate, enriched fields and conflicts as text."""
    stats = result.statistics
    lines: list[str] = ["=== Reconciliation Report ===", ""]

    lines.append("Summary:")
    lines.append(f"  {stats.source_a_name}: {stats.total_from_a} results")
    lines.append(f"  {stats.source_b_name}: {stats.total_from_b} results")
    lines.append(f"  Matched: {result.matched_count} ({format_percent(stats.match_rate)})")
    lines.append(f"  Unmatched from A: {result.unmatched_from_a}")
    lines.append(f"  Unmatched from B: {result.unmatched_from_b}")
    lines.append(f"  Final merged: {len(result.merged_results)} results")
    lines.append("")

    if stats.fields_enriched:
        lines.append(f"Fields enriched from {stats.source_b_name}:")
        lines.extend(f"  - {field}" for field in stats.fields_enriched)
        lines.append("")

    if result.conflicts:
        by_field = Counter(c.field for c in result.conflicts)
        lines.append(f"Conflicts ({len(result.conflicts)} total):")
        for field, count in by_field.items():
            lines.append(f"  - {field}: {count} conflicts")
        lines.append("")

        manual = result.manual_review_conflicts
        if manual:
            lines.append("Manual review required:")
            for conflict in manual[:MAX_MANUAL_REVIEW_LINES]:
                lines.append(
                    f'  - {conflict.field}: "{format_value(conflict.value_a)}" '
                    f'vs "{format_value(conflict.value_b)}"'
                )
                lines.append(f"    Reason: {conflict.reason}")
            if len(manual) > MAX_MANUAL_REVIEW_LINES:
                lines.append(f"  ... and {len(manual) - MAX_MANUAL_REVIEW_LINES} more")

    return "\n".join(lines).rstrip() + "\n"
