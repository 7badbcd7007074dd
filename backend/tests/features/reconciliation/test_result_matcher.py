"""
Tests for the cross-source result matcher.

Rules are evaluated in order: bib, name+time, name+position, weak
position+name. Constants and formulas are checked exactly.
"""

import pytest

from results_engine.features.reconciliation import MatchConfig, match_results, names_match
from results_engine.features.results import ResultRecord
from results_engine.shared.constants import MatchMethod, Resolution
from results_engine.shared.formulas import round_half_up
from results_engine.shared.names import calculate_name_similarity


def make_result(**kwargs) -> ResultRecord:
    kwargs.setdefault("name", "John Smith")
    return ResultRecord(**kwargs)


# =============================================================================
# Test Bib Rule
# =============================================================================

class TestBibMatch:
    """Rule 1: equal non-empty bib numbers."""

    def test_bib_and_name_match(self):
        a = make_result(bib_number="101", name="Jane Doe", finish_time="1:45:00")
        b = make_result(bib_number="101", name="Jane Doe", finish_time="1:45:03")

        match = match_results(a, b)

        assert match.is_match is True
        assert match.confidence == 100
        assert match.method == MatchMethod.BIB
        assert match.conflicts == []

    def test_bib_match_with_different_name(self):
        """Bib matches but names don't: flagged for manual review."""
        a = make_result(bib_number="101", name="Jane Doe", finish_time="1:45:00")
        b = make_result(bib_number="101", name="John Smith", finish_time="1:45:03")

        match = match_results(a, b)

        assert match.is_match is True
        assert match.confidence == MatchConfig.BIB_NAME_MISMATCH_CONFIDENCE == 75
        assert match.method == MatchMethod.BIB
        assert len(match.conflicts) == 1
        conflict = match.conflicts[0]
        assert conflict.field == "name"
        assert conflict.resolution == Resolution.MANUAL
        assert (conflict.value_a, conflict.value_b) == ("Jane Doe", "John Smith")

    def test_bib_wins_over_times(self):
        """Bib is authoritative even when finish times are far apart."""
        a = make_result(bib_number="7", finish_time="40:00")
        b = make_result(bib_number="7", finish_time="55:00")
        assert match_results(a, b).confidence == 100

    def test_empty_bibs_do_not_match(self):
        a = make_result(bib_number="", name="Jane Doe")
        b = make_result(bib_number="", name="Mark Lee")
        assert match_results(a, b).is_match is False

    def test_different_bibs_fall_through_to_name(self):
        a = make_result(bib_number="101", finish_time="42:10")
        b = make_result(bib_number="202", finish_time="42:10")

        match = match_results(a, b)

        assert match.is_match is True
        assert match.method == MatchMethod.NAME_TIME


# =============================================================================
# Test Name + Time Rule
# =============================================================================

class TestNameTimeMatch:
    """Rule 2: similar names and finish times within 60s."""

    def test_maria_garcia_thirty_seconds(self):
        a = make_result(name="Maria Garcia", finish_time="42:10")
        b = make_result(name="Maria Garcia", finish_time="42:40")

        match = match_results(a, b)

        assert match.is_match is True
        assert match.method == MatchMethod.NAME_TIME
        assert 80 <= match.confidence <= 98
        # 80 + 1.0*15 - (30/60)*5 = 92.5 → 93
        assert match.confidence == 93

    def test_identical_times(self):
        a = make_result(finish_time="1:02:40")
        b = make_result(finish_time="1:02:40")
        assert match_results(a, b).confidence == 95

    def test_sixty_second_boundary(self):
        a = make_result(finish_time="42:00")
        b = make_result(finish_time="43:00")

        match = match_results(a, b)

        assert match.method == MatchMethod.NAME_TIME
        assert match.confidence == 90

    def test_over_sixty_seconds_without_position(self):
        a = make_result(finish_time="42:00")
        b = make_result(finish_time="43:01")
        match = match_results(a, b)
        assert match.is_match is False
        assert match.confidence == 0

    def test_rearranged_names(self):
        a = make_result(name="John Smith", finish_time="42:00")
        b = make_result(name="Smith John", finish_time="42:00")

        match = match_results(a, b)

        # 80 + 0.98*15 = 94.7 → 95
        assert match.method == MatchMethod.NAME_TIME
        assert match.confidence == 95

    def test_confidence_formula(self):
        a = make_result(name="Jon Smith", finish_time="50:00")
        b = make_result(name="John Smith", finish_time="50:45")

        similarity = calculate_name_similarity(a.name, b.name)
        expected = round_half_up(80 + similarity * 15 - (45 / 60) * 5)

        assert match_results(a, b).confidence == max(80, min(98, expected))

    def test_dnf_times_skip_rule(self):
        """Unparseable times fall through to the position rules."""
        a = make_result(finish_time="DNF", position=12)
        b = make_result(finish_time="DNF", position=12)

        match = match_results(a, b)

        assert match.method == MatchMethod.POSITION_NAME
        assert match.confidence == 80


# =============================================================================
# Test Position Rules
# =============================================================================

class TestPositionMatch:
    """Rules 3 and 4: same position."""

    def test_name_and_position(self):
        a = make_result(position=5, finish_time="42:00")
        b = make_result(position=5, finish_time="45:00")

        match = match_results(a, b)

        assert match.is_match is True
        assert match.method == MatchMethod.POSITION_NAME
        assert match.confidence == 80

    def test_weak_name_and_position(self):
        """'Jo Smyth' is too different for rule 3 but enough for rule 4."""
        a = make_result(name="Jo Smyth", position=3)
        b = make_result(name="John Smith", position=3)
        similarity = calculate_name_similarity(a.name, b.name)
        assert MatchConfig.WEAK_NAME_SIMILARITY <= similarity < MatchConfig.MIN_NAME_SIMILARITY

        match = match_results(a, b)

        assert match.is_match is True
        assert match.method == MatchMethod.POSITION_NAME
        assert match.confidence == round_half_up(60 + similarity * 15)

    def test_same_position_different_people(self):
        a = make_result(name="Jane Doe", position=3)
        b = make_result(name="Mark Lee", position=3)
        assert match_results(a, b).is_match is False

    def test_missing_positions_never_equal(self):
        a = make_result(name="Jo Smyth")
        b = make_result(name="John Smith")
        assert match_results(a, b).is_match is False

    def test_no_match_shape(self):
        match = match_results(make_result(name="Jane Doe"), make_result(name="Mark Lee"))
        assert match.is_match is False
        assert match.confidence == 0
        assert match.method == MatchMethod.BIB
        assert match.conflicts == []


class TestNamesMatch:
    """Tests for names_match helper."""

    @pytest.mark.parametrize("a,b,expected", [
        ("John Smith", "JOHN SMITH", True),
        ("John Smith", "Smith John", True),
        ("Jon Smith", "John Smith", True),
        ("Jane Doe", "John Smith", False),
        ("", "", False),
    ])
    def test_names_match(self, a, b, expected):
        assert names_match(a, b) is expected
