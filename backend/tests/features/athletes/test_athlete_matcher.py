"""
Tests for athlete identity matching.

Tests roster pre-filtering, multi-factor confidence, auto-linking and the
reverse athlete → results lookup.
"""

import pytest

from results_engine.features.athletes import (
    AthleteIdentity,
    AutoMatchResponse,
    MatchCandidateSchema,
    MatchWeights,
    PriorResult,
    auto_match_results,
    club_match_score,
    find_matches_for_result,
    find_matches_for_results,
    geography_score,
    parse_roster,
    position_proximity_score,
    search_roster,
    suggest_matches_for_athlete,
    weighted_confidence,
)
from results_engine.features.athletes.models import ScoreBreakdown
from results_engine.features.results import ResultRecord


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def roster():
    return [
        AthleteIdentity(id="a1", name="John Smith", country="KAZ"),
        AthleteIdentity(id="a2", name="Jane Smith"),
        AthleteIdentity(id="a3", name="Maria Garcia", country="ESP"),
        AthleteIdentity(id="a4", name="Jon Smith"),
    ]


# =============================================================================
# Test Models and Roster Search
# =============================================================================

class TestRosterSearch:
    """Tests for search_roster and identity normalization."""

    def test_normalized_name_derived(self):
        assert AthleteIdentity(id="x", name="José García").normalized_name == "jose garcia"

    def test_explicit_normalized_name_kept(self):
        assert AthleteIdentity(id="x", name="J. Smith", normalized_name="john smith").normalized_name == "john smith"

    def test_shared_tokens_ranked(self, roster):
        found = search_roster("John Smith", roster)
        assert [a.id for a in found] == ["a1", "a2", "a4"]

    def test_limit(self, roster):
        assert [a.id for a in search_roster("John Smith", roster, limit=1)] == ["a1"]

    def test_substring(self, roster):
        assert [a.id for a in search_roster("garc", roster)] == ["a3"]

    def test_empty_name(self, roster):
        assert search_roster("", roster) == []


# =============================================================================
# Test Scoring
# =============================================================================

class TestScoring:
    """Tests for the confidence factors."""

    def test_weights_sum_to_one(self):
        total = MatchWeights.NAME + MatchWeights.POSITION + MatchWeights.CLUB + MatchWeights.GEOGRAPHY
        assert total == pytest.approx(1.0)

    def test_position_proximity(self):
        athlete = AthleteIdentity(id="a", name="A", results=[PriorResult(event_id="e1", position=15)])

        assert position_proximity_score(ResultRecord(name="A", position=5, event_id="e1"), athlete) == 50
        assert position_proximity_score(ResultRecord(name="A", position=4, event_id="e1"), athlete) == 0
        assert position_proximity_score(ResultRecord(name="A", position=15, event_id="e2"), athlete) == 0
        assert position_proximity_score(ResultRecord(name="A", position=15), athlete) == 0

    def test_club_not_scored_yet(self):
        athlete = AthleteIdentity(id="a", name="A", club="Runners")
        assert club_match_score(ResultRecord(name="A", club="Runners"), athlete) == 0

    def test_geography(self):
        athlete = AthleteIdentity(id="a", name="A", country="KAZ")

        assert geography_score(ResultRecord(name="A", country="kaz"), athlete) == 30
        assert geography_score(ResultRecord(name="A", country="RUS"), athlete) == 0
        assert geography_score(ResultRecord(name="A"), athlete) == 0

    def test_weighted_confidence(self):
        assert weighted_confidence(ScoreBreakdown(name=100, position=50, club=0, geography=30)) == 73
        assert weighted_confidence(ScoreBreakdown(name=90, position=0, club=0, geography=0)) == 54
        assert weighted_confidence(ScoreBreakdown(name=100, position=100, club=100, geography=100)) == 100


# =============================================================================
# Test Find Matches
# =============================================================================

class TestFindMatches:
    """Tests for find_matches_for_result and find_matches_for_results."""

    def test_candidates_scored_and_sorted(self, roster):
        result = ResultRecord(name="John Smith")

        matches = find_matches_for_result(result, roster)

        assert [m.athlete.id for m in matches] == ["a1", "a4", "a2"]
        assert matches[0].score == 0
        assert matches[0].confidence == 60
        assert matches[0].breakdown.name == 100
        assert matches[1].confidence == 54

    def test_threshold_drops_distant_names(self, roster):
        result = ResultRecord(name="John Smith")
        matches = find_matches_for_result(result, roster, threshold=0.05)
        assert [m.athlete.id for m in matches] == ["a1"]

    def test_geography_and_history_boost(self):
        athlete = AthleteIdentity(
            id="a1",
            name="John Smith",
            country="KAZ",
            results=[PriorResult(event_id="e1", position=12)],
        )
        result = ResultRecord(name="John Smith", country="KAZ", position=5, event_id="e1")

        matches = find_matches_for_result(result, [athlete])

        assert matches[0].confidence == 73

    def test_results_keyed_by_index(self, roster):
        results = [ResultRecord(name="Maria Garcia"), ResultRecord(name="Zhanna Ospanova")]

        suggestions = find_matches_for_results(results, roster)

        assert list(suggestions) == [0]
        assert suggestions[0][0].athlete.id == "a3"


# =============================================================================
# Test Auto Match
# =============================================================================

class TestAutoMatch:
    """Tests for auto_match_results function."""

    def test_default_threshold_never_reached_by_name_alone(self, roster):
        summary = auto_match_results([ResultRecord(name="Maria Garcia")], roster)

        assert summary.matched == 0
        assert summary.skipped == 1

    def test_single_qualifying_candidate_linked(self, roster):
        results = [ResultRecord(name="Maria Garcia"), ResultRecord(name="Zhanna Ospanova")]

        summary = auto_match_results(results, roster, confidence_threshold=60)

        assert summary.matched == 1
        assert summary.skipped == 1
        assert summary.links[0].athlete.id == "a3"
        assert summary.links[0].confidence == 60

    def test_lower_candidates_do_not_block(self, roster):
        """'Jon Smith' is a candidate but below the confidence threshold."""
        summary = auto_match_results([ResultRecord(name="John Smith")], roster, confidence_threshold=60)

        assert summary.matched == 1
        assert summary.links[0].athlete.id == "a1"

    def test_ambiguous_candidates_skipped(self):
        roster = [
            AthleteIdentity(id="a1", name="John Smith"),
            AthleteIdentity(id="a2", name="John Smith"),
        ]

        summary = auto_match_results([ResultRecord(name="John Smith")], roster, confidence_threshold=60)

        assert summary.matched == 0
        assert summary.skipped == 1
        assert summary.links == []

    def test_response_serializes(self, roster):
        summary = auto_match_results([ResultRecord(name="Maria Garcia", bib_number="7")], roster, confidence_threshold=60)

        payload = AutoMatchResponse.from_summary(summary).model_dump(mode="json")

        assert payload["matched"] == 1
        assert payload["links"][0]["athlete_id"] == "a3"
        assert payload["links"][0]["result"]["bib_number"] == "7"


# =============================================================================
# Test Reverse Lookup
# =============================================================================

class TestSuggestMatchesForAthlete:
    """Tests for suggest_matches_for_athlete function."""

    def test_contained_names_ranked_by_score(self):
        athlete = AthleteIdentity(id="a1", name="John Smith")
        results = [
            ResultRecord(name="John Smithson"),
            ResultRecord(name="Maria Garcia"),
            ResultRecord(name="JOHN SMITH"),
        ]

        suggestions = suggest_matches_for_athlete(athlete, results)

        assert [s.result.name for s in suggestions] == ["JOHN SMITH", "John Smithson"]
        assert suggestions[0].confidence == 100
        assert suggestions[1].confidence == 77

    def test_rearranged_name_not_contained(self):
        athlete = AthleteIdentity(id="a1", name="John Smith")
        assert suggest_matches_for_athlete(athlete, [ResultRecord(name="Smith John")]) == []


# =============================================================================
# Test Roster Loading and Schemas
# =============================================================================

class TestRoster:
    """Tests for parse_roster and candidate serialization."""

    def test_list_and_wrapped_forms(self):
        data = [{"id": "a1", "name": "John Smith", "results": [{"eventId": "e1", "position": 4}]}]

        for document in (data, {"athletes": data}):
            roster = parse_roster(document)
            assert roster[0].normalized_name == "john smith"
            assert roster[0].results == [PriorResult(event_id="e1", position=4)]

    def test_numeric_ids_coerced(self):
        assert parse_roster([{"id": 42, "name": "A"}])[0].id == "42"

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            parse_roster("athletes")
        with pytest.raises(ValueError):
            parse_roster({"people": []})

    def test_candidate_schema(self, roster):
        candidate = find_matches_for_result(ResultRecord(name="Jon Smith"), roster)[0]

        payload = MatchCandidateSchema.from_candidate(candidate).model_dump()

        assert payload == {
            "athlete_id": "a4",
            "athlete_name": "Jon Smith",
            "result_name": "Jon Smith",
            "score": 0.0,
            "confidence": 60,
        }
