"""
Tests for the reconciliation service.

Tests greedy best-match assignment across two result sets, statistics,
duplicate event detection and the text report.
"""

import pytest

from results_engine.features.reconciliation import (
    EventSummary,
    FieldConflict,
    ReconciliationResponse,
    ReconciliationResult,
    ReconciliationStatistics,
    find_potential_duplicate_events,
    generate_reconciliation_report,
    reconcile_events,
    reconcile_results,
)
from results_engine.features.results import EventInfo, ResultRecord, ScrapedResultSet
from results_engine.shared.constants import Resolution


# =============================================================================
# Test Data
# =============================================================================

@pytest.fixture
def source_a():
    """Primary provider: bibs and finish times, no clubs."""
    return [
        ResultRecord(name="Jane Doe", position=1, bib_number="101", finish_time="38:12"),
        ResultRecord(name="Maria Garcia", position=2, bib_number="102", finish_time="39:40"),
        ResultRecord(name="Aidar Bekov", position=3, bib_number="103", finish_time="41:05"),
    ]


@pytest.fixture
def source_b():
    """Secondary provider: same runners plus one extra, with clubs."""
    return [
        ResultRecord(name="Maria Garcia", position=2, bib_number="102", finish_time="39:40", club="Almaty Runners"),
        ResultRecord(name="Jane Doe", position=1, bib_number="101", finish_time="38:12", club="Tau Trail"),
        ResultRecord(name="Olga Kim", position=4, bib_number="104", finish_time="43:30"),
    ]


# =============================================================================
# Test Reconcile Results
# =============================================================================

class TestReconcileResults:
    """Tests for reconcile_results function."""

    def test_empty_b_returns_a(self, source_a):
        result = reconcile_results(source_a, [])

        assert result.merged_results == source_a
        assert result.matched_count == 0
        assert result.unmatched_from_a == len(source_a)
        assert result.unmatched_from_b == 0
        assert result.conflicts == []
        assert result.statistics.match_rate == 0.0

    def test_both_empty(self):
        result = reconcile_results([], [])
        assert result.merged_results == []
        assert result.statistics.match_rate == 0.0

    def test_two_sources(self, source_a, source_b):
        result = reconcile_results(source_a, source_b, source_a_name="HopaSport", source_b_name="EvoChip")

        assert result.matched_count == 2
        assert result.unmatched_from_a == 1
        assert result.unmatched_from_b == 1
        assert [r.name for r in result.merged_results] == [
            "Jane Doe", "Maria Garcia", "Aidar Bekov", "Olga Kim",
        ]
        assert result.merged_results[0].club == "Tau Trail"
        assert result.statistics.match_rate == pytest.approx(200 / 3)
        assert result.statistics.fields_enriched == ["club"]
        assert result.statistics.source_b_name == "EvoChip"

    def test_inputs_not_mutated(self, source_a, source_b):
        reconcile_results(source_a, source_b)
        assert source_a[0].club is None

    def test_low_confidence_flagged_but_counted(self):
        a = [ResultRecord(name="Maria Garcia", position=1, finish_time="42:10", country="ESP")]
        b = [ResultRecord(name="Maria Garcia", position=1, finish_time="42:40", club="Club")]

        result = reconcile_results(a, b, auto_merge_threshold=95)

        assert result.matched_count == 1
        assert result.unmatched_from_b == 0
        assert result.conflicts[0].field == "_match_confidence"
        assert result.conflicts[0].resolution == Resolution.MANUAL
        assert "93%" in result.conflicts[0].reason
        # Below threshold: merged, but not counted as enrichment
        assert result.merged_results[0].club == "Club"
        assert result.statistics.fields_enriched == []

    def test_greedy_first_a_claims(self):
        """Order-dependent: the first A record takes the only B candidate."""
        a = [
            ResultRecord(name="John Smith", position=7, finish_time="50:00"),
            ResultRecord(name="John Smith", position=8, finish_time="50:05"),
        ]
        b = [ResultRecord(name="John Smith", position=8, finish_time="50:05", club="Club")]

        result = reconcile_results(a, b)

        assert result.matched_count == 1
        assert result.unmatched_from_a == 1
        assert result.merged_results[0].position == 7
        assert result.merged_results[0].club == "Club"
        assert result.merged_results[1].club is None

    def test_best_candidate_chosen(self):
        a = [ResultRecord(name="John Smith", finish_time="50:00")]
        b = [
            ResultRecord(name="John Smith", finish_time="50:50", position=20),
            ResultRecord(name="John Smith", finish_time="50:00", position=21),
        ]

        result = reconcile_results(a, b)

        merged = next(r for r in result.merged_results if r.finish_time == "50:00")
        assert merged.position == 21
        assert result.unmatched_from_b == 1

    def test_oversized_time_falls_back_to_position(self):
        a = [ResultRecord(name="Jane Doe", position=1, finish_time="9" * 400)]
        b = [ResultRecord(name="Jane Doe", position=1, finish_time="38:12", club="Tau Trail")]

        result = reconcile_results(a, b)

        assert result.matched_count == 1
        assert result.merged_results[0].club == "Tau Trail"
        assert result.merged_results[0].finish_time == "9" * 400

    def test_ties_go_to_first_b(self):
        a = [ResultRecord(name="John Smith", finish_time="50:00")]
        b = [
            ResultRecord(name="John Smith", finish_time="50:00", club="First"),
            ResultRecord(name="John Smith", finish_time="50:00", club="Second"),
        ]

        result = reconcile_results(a, b)

        merged_clubs = [r.club for r in result.merged_results]
        assert merged_clubs[0] == "First"

    def test_missing_and_zero_positions_sort_last(self):
        a = [
            ResultRecord(name="Unplaced Runner", position=0),
            ResultRecord(name="Third Runner", position=3),
            ResultRecord(name="Unknown Runner"),
            ResultRecord(name="First Runner", position=1),
        ]

        result = reconcile_results(a, [])

        assert [r.name for r in result.merged_results] == [
            "First Runner", "Third Runner", "Unplaced Runner", "Unknown Runner",
        ]

    def test_reconcile_events_uses_organisers(self, source_a, source_b):
        set_a = ScrapedResultSet(event=EventInfo(name="Almaty 10K", organiser="HopaSport"), results=source_a)
        set_b = ScrapedResultSet(event=EventInfo(name="Almaty 10K"), results=source_b)

        result = reconcile_events(set_a, set_b)

        assert result.statistics.source_a_name == "HopaSport"
        assert result.statistics.source_b_name == "Source B"
        assert result.matched_count == 2

    def test_response_serializes(self, source_a, source_b):
        source_b[0] = ResultRecord(name="Maria Garcia", position=2, bib_number="102", finish_time="39:50")
        result = reconcile_results(source_a, source_b)

        payload = ReconciliationResponse.from_result(result).model_dump(mode="json")

        assert payload["matched_count"] == 2
        assert payload["conflicts"][0]["field"] == "finish_time"
        assert payload["conflicts"][0]["resolution"] == "manual"
        assert payload["merged_results"][0]["status"] == "finished"


# =============================================================================
# Test Duplicate Events
# =============================================================================

class TestFindPotentialDuplicateEvents:
    """Tests for find_potential_duplicate_events function."""

    def test_same_race_two_providers(self):
        events = [
            EventSummary(id="e1", name="Almaty Marathon 2025", date="2025-09-28", organiser="HopaSport"),
            EventSummary(id="e2", name="Almaty Marathon", date="2025-09-28", organiser="EvoChip"),
            EventSummary(id="e3", name="Almaty Marathon", date="2025-09-28", organiser="HopaSport"),
            EventSummary(id="e4", name="Almaty Marathon", date="2024-09-29", organiser="EvoChip"),
        ]

        candidates = find_potential_duplicate_events(events)

        pairs = {(c.event_a, c.event_b) for c in candidates}
        assert pairs == {("e1", "e2"), ("e2", "e3")}
        assert all(c.similarity == 100 for c in candidates)

    def test_dissimilar_names_ignored(self):
        events = [
            EventSummary(id="e1", name="Almaty Marathon", date="2025-09-28", organiser="A"),
            EventSummary(id="e2", name="Burabay Trail", date="2025-09-28", organiser="B"),
        ]
        assert find_potential_duplicate_events(events) == []

    def test_sorted_by_similarity(self):
        events = [
            EventSummary(id="e1", name="Tengri Ultra Trail", date="2025-05-10", organiser="A"),
            EventSummary(id="e2", name="Tengri Ultra Trails", date="2025-05-10", organiser="B"),
            EventSummary(id="e3", name="Tengri Ultra Trail", date="2025-05-10", organiser="C"),
        ]

        candidates = find_potential_duplicate_events(events)

        assert [c.similarity for c in candidates] == [100, 95, 95]
        assert (candidates[0].event_a, candidates[0].event_b) == ("e1", "e3")


# =============================================================================
# Test Report
# =============================================================================

def _manual_conflict(i: int) -> FieldConflict:
    return FieldConflict(
        field="finish_time",
        value_a=f"40:{i:02d}",
        value_b=None,
        resolution=Resolution.MANUAL,
        reason="Finish times differ - manual review needed",
    )


class TestReconciliationReport:
    """Tests for generate_reconciliation_report function."""

    def test_report_sections(self, source_a, source_b):
        result = reconcile_results(source_a, source_b, source_a_name="HopaSport", source_b_name="EvoChip")

        report = generate_reconciliation_report(result)

        assert report.startswith("=== Reconciliation Report ===")
        assert "HopaSport: 3 results" in report
        assert "Matched: 2 (66.7%)" in report
        assert "Final merged: 4 results" in report
        assert "Fields enriched from EvoChip:" in report
        assert "  - club" in report

    def test_manual_review_truncated(self):
        conflicts = [_manual_conflict(i) for i in range(12)]
        result = ReconciliationResult(
            merged_results=[],
            matched_count=0,
            unmatched_from_a=0,
            unmatched_from_b=0,
            conflicts=conflicts,
            statistics=ReconciliationStatistics(total_from_a=0, total_from_b=0, match_rate=0.0),
        )

        report = generate_reconciliation_report(result)

        assert "Conflicts (12 total):" in report
        assert "  - finish_time: 12 conflicts" in report
        assert '"40:09" vs "—"' in report
        assert '"40:10"' not in report
        assert "... and 2 more" in report
