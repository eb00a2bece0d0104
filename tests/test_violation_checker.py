"""Tests for the violation checker and game-level aggregation."""

from datetime import date

from src.rule_engine.models import PlayerGameFacts, ViolationKind
from src.rule_engine.violation_checker import (
    build_player_facts,
    calculate_game_has_violations,
    evaluate_game,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _positions(player_id, pitched=(), caught=()):
    rows = [
        {"player_id": player_id, "inning_number": i, "position": "pitcher"}
        for i in pitched
    ]
    rows += [
        {"player_id": player_id, "inning_number": i, "position": "catcher"}
        for i in caught
    ]
    return rows


def _log(player_id, tally):
    return {"player_id": player_id, "penultimate_batter_count": tally}


# ── PlayerGameFacts ──────────────────────────────────────────────────

class TestPlayerGameFacts:
    def test_innings_are_sorted(self):
        facts = PlayerGameFacts(
            player_id="p1", pitched_innings=[3, 1, 2], caught_innings={6, 4}
        )
        assert facts.pitched_innings == (1, 2, 3)
        assert facts.caught_innings == (4, 6)

    def test_missing_innings_normalize_to_empty(self):
        facts = PlayerGameFacts(player_id="p1", pitched_innings=None)
        assert facts.pitched_innings == ()
        assert facts.pitched is False


# ── check_all ────────────────────────────────────────────────────────

class TestCheckAll:
    def test_clean_outing(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", age=10, pitched_innings=[1, 2], pitch_tally=30
        )
        assert checker.check_all(facts) == []

    def test_did_not_play_either_position(self, checker):
        assert checker.check_all(PlayerGameFacts(player_id="p1", age=10)) == []

    def test_each_rule_reported(self, checker):
        facts = PlayerGameFacts(
            player_id="p1",
            age=9,
            pitched_innings=[2, 4],
            caught_innings=[1, 5],
            pitch_tally=80,
            game_date=date(2025, 5, 13),
            previous_next_eligible_date=date(2025, 5, 14),
        )
        assert checker.check_all(facts) == [
            ViolationKind.INNINGS_GAP,
            ViolationKind.HIGH_PITCH_COUNT_CATCHING,
            ViolationKind.COMBINED_CATCHING,
            ViolationKind.EXCEEDS_AGE_LIMIT,
            ViolationKind.PITCHED_BEFORE_ELIGIBLE,
        ]

    def test_four_innings_catching(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", age=11, pitched_innings=[5, 6],
            caught_innings=[1, 2, 3, 4], pitch_tally=15,
        )
        assert checker.check_all(facts) == [ViolationKind.FOUR_INNINGS_CATCHING]

    def test_unsupported_age_only_skips_age_limit(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", age=14, pitched_innings=[1, 2, 3], pitch_tally=120
        )
        assert checker.check_all(facts) == []

    def test_tally_without_pitching_innings_ignored(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", age=8, caught_innings=[1, 2, 3], pitch_tally=60
        )
        assert facts.pitched is False
        assert checker.check_all(facts) == []


# ── Messages ─────────────────────────────────────────────────────────

class TestEvaluatePlayer:
    def test_messages_match_violations(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", age=8, pitched_innings=[1, 2, 3], caught_innings=[4],
            pitch_tally=54,
        )
        result = checker.evaluate_player(facts)
        assert result.has_violation is True
        assert result.violations == [
            ViolationKind.HIGH_PITCH_COUNT_CATCHING,
            ViolationKind.EXCEEDS_AGE_LIMIT,
        ]
        assert "threw 55 pitches (41+)" in result.messages[0]
        assert result.messages[1] == (
            "Threw 55 pitches, exceeding the maximum of 50 for age 8."
        )

    def test_four_innings_message_counts_innings(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", pitched_innings=[6], caught_innings=[1, 2, 3, 4, 5],
        )
        message = checker.describe(ViolationKind.FOUR_INNINGS_CATCHING, facts)
        assert message == "Player caught 5 innings and cannot pitch in this game."

    def test_rest_message_shows_dates(self, checker):
        facts = PlayerGameFacts(
            player_id="p1", pitched_innings=[1],
            game_date=date(2025, 5, 13),
            previous_next_eligible_date=date(2025, 5, 14),
        )
        message = checker.describe(ViolationKind.PITCHED_BEFORE_ELIGIBLE, facts)
        assert "May 13, 2025" in message
        assert "May 14, 2025" in message

    def test_no_violations(self, checker):
        result = checker.evaluate_player(PlayerGameFacts(player_id="p1"))
        assert result.has_violation is False
        assert result.messages == []


# ── Game aggregation ─────────────────────────────────────────────────

class TestBuildPlayerFacts:
    def test_groups_by_player(self):
        positions = _positions("a", pitched=[2, 1]) + _positions("b", caught=[1, 2])
        facts = build_player_facts(positions, [_log("a", 30)], {"a": 10, "b": 11})
        assert set(facts) == {"a", "b"}
        assert facts["a"].pitched_innings == (1, 2)
        assert facts["a"].pitch_tally == 30
        assert facts["b"].caught_innings == (1, 2)
        assert facts["b"].pitch_tally is None

    def test_log_without_positions_ignored(self):
        facts = build_player_facts([], [_log("ghost", 80)], {"ghost": 8})
        assert facts == {}

    def test_dates_parsed(self):
        facts = build_player_facts(
            _positions("a", pitched=[1]), [], {},
            game_date="2025-05-13",
            player_eligibility_dates={"a": "2025-05-14"},
        )
        assert facts["a"].game_date == date(2025, 5, 13)
        assert facts["a"].previous_next_eligible_date == date(2025, 5, 14)


class TestCalculateGameHasViolations:
    def test_clean_game(self):
        positions = _positions("a", pitched=[1, 2, 3]) + _positions("b", caught=[1, 2, 3])
        assert calculate_game_has_violations(positions, [_log("a", 40)], {"a": 10}) is False

    def test_one_bad_player_flags_game(self):
        positions = _positions("a", pitched=[1, 2]) + _positions("b", pitched=[3, 5])
        logs = [_log("a", 20), _log("b", 10)]
        assert calculate_game_has_violations(positions, logs, {"a": 10, "b": 10}) is True

    def test_rest_rule_requires_game_date(self):
        positions = _positions("a", pitched=[1, 2])
        eligibility = {"a": "2025-05-14"}
        assert calculate_game_has_violations(
            positions, [_log("a", 10)], {"a": 9},
            player_eligibility_dates=eligibility,
        ) is False
        assert calculate_game_has_violations(
            positions, [_log("a", 10)], {"a": 9},
            game_date="2025-05-13", player_eligibility_dates=eligibility,
        ) is True

    def test_age_limit_uses_effective_count(self):
        positions = _positions("a", pitched=[1, 2, 3, 4])
        # 74 tallied -> 75 official: exactly the 9-10 limit
        assert calculate_game_has_violations(positions, [_log("a", 74)], {"a": 10}) is False
        assert calculate_game_has_violations(positions, [_log("a", 75)], {"a": 10}) is True


class TestEvaluateGame:
    def test_only_players_with_violations_returned(self):
        positions = (
            _positions("a", pitched=[1, 2, 3], caught=[4])
            + _positions("b", caught=[1, 2, 3])
        )
        results = evaluate_game(positions, [_log("a", 45)], {"a": 11, "b": 11})
        assert [r.player_id for r in results] == ["a"]
        assert results[0].violations == [ViolationKind.HIGH_PITCH_COUNT_CATCHING]
