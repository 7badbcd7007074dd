"""
Field conflict resolution and checkpoint merging for matched records.

The merged record starts from source A. Per-field disagreements are
resolved by a static policy:

    chip_time, pace          → use_a   (A's timing system is primary)
    gun_time                 → use_b
    club, country            → merge   (kept from A, flagged as mergeable)
    finish_time, everything  → manual  (never auto-pick a disputed time)
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from results_engine.features.results.models import ResultRecord, TimingCheckpoint
from results_engine.shared.constants import COMPARABLE_FIELDS, Resolution

from .models import FieldConflict, MatchResult, MergeOutcome

PRIORITY_A_FIELDS = frozenset({"chip_time", "pace"})
PRIORITY_B_FIELDS = frozenset({"gun_time"})
MERGEABLE_FIELDS = frozenset({"checkpoints", "club", "country"})

# Checkpoint attributes filled from B when A has no value
CHECKPOINT_GAP_FIELDS = ("split_time", "cumulative_time", "pace", "segment_distance_meters")


def resolution_for_field(field: str) -> tuple[Resolution, str]:
    """Static conflict policy: (resolution, reason) for a disputed field."""
    if field == "finish_time":
        return Resolution.MANUAL, "Finish times differ - manual review needed"
    if field in PRIORITY_A_FIELDS:
        return Resolution.USE_A, f"{field} priority is source A"
    if field in PRIORITY_B_FIELDS:
        return Resolution.USE_B, f"{field} priority is source B"
    if field in MERGEABLE_FIELDS:
        return Resolution.MERGE, f"{field} can be merged from both sources"
    return Resolution.MANUAL, "Values differ between sources"


def detect_field_conflict(field: str, value_a: Any, value_b: Any) -> FieldConflict | None:
    """Return a conflict if both sources have different non-null values."""
    if value_a is None or value_b is None:
        return None
    if value_a == value_b:
        return None

    resolution, reason = resolution_for_field(field)
    return FieldConflict(
        field=field,
        value_a=value_a,
        value_b=value_b,
        resolution=resolution,
        reason=reason,
    )


def merge_checkpoints(
    checkpoints_a: list[TimingCheckpoint],
    checkpoints_b: list[TimingCheckpoint],
) -> list[TimingCheckpoint]:
    """Merge split lists keyed by lower-cased checkpoint name.

    A's checkpoints win; B adds missing checkpoints and fills gaps in
    existing ones. Result is ordered by `checkpoint_order`.
    """
    merged: dict[str, TimingCheckpoint] = {}

    for cp in checkpoints_a:
        merged[cp.checkpoint_name.lower()] = cp

    for cp in checkpoints_b:
        key = cp.checkpoint_name.lower()
        existing = merged.get(key)
        if existing is None:
            merged[key] = cp
            continue

        gaps = {
            name: getattr(cp, name)
            for name in CHECKPOINT_GAP_FIELDS
            if getattr(existing, name) is None
        }
        merged[key] = replace(
            existing,
            **gaps,
            metadata={**cp.metadata, **existing.metadata},
        )

    # sorted() is stable: equal orders keep insertion order
    return sorted(merged.values(), key=lambda cp: cp.checkpoint_order)


def merge_results(
    result_a: ResultRecord,
    result_b: ResultRecord,
    match: MatchResult,
) -> MergeOutcome:
    """Merge two matched records into a new record.

    Inputs are left untouched. Conflicts raised by the match itself are
    appended after the field conflicts.
    """
    conflicts: list[FieldConflict] = []
    updates: dict[str, Any] = {}

    for field in COMPARABLE_FIELDS:
        value_a = getattr(result_a, field)
        value_b = getattr(result_b, field)

        conflict = detect_field_conflict(field, value_a, value_b)
        if conflict is not None:
            conflicts.append(conflict)
            if conflict.resolution == Resolution.USE_B:
                updates[field] = value_b
        elif value_a is None and value_b is not None:
            updates[field] = value_b

    if result_a.checkpoints or result_b.checkpoints:
        updates["checkpoints"] = merge_checkpoints(result_a.checkpoints, result_b.checkpoints)
    else:
        updates["checkpoints"] = []

    if result_a.event_id is None and result_b.event_id is not None:
        updates["event_id"] = result_b.event_id

    conflicts.extend(match.conflicts)

    return MergeOutcome(merged=replace(result_a, **updates), conflicts=conflicts)


def enriched_fields(result_a: ResultRecord, result_b: ResultRecord) -> set[str]:
    """Fields that B populates where A has nothing."""
    fields = {
        field
        for field in COMPARABLE_FIELDS
        if getattr(result_a, field) is None and getattr(result_b, field) is not None
    }
    if not result_a.checkpoints and result_b.checkpoints:
        fields.add("checkpoints")
    return fields
