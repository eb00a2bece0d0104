"""Violation checker - runs every rule for a player and aggregates results."""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from src.rule_engine.models import PlayerGameFacts, PlayerViolations, ViolationKind
from src.rule_engine.pitch_smart_rules import (
    DateLike,
    format_roster_date,
    get_max_pitches_for_age,
    parse_local_date,
)
from src.rule_engine.violation_rules import (
    cannot_catch_again_due_to_combined,
    cannot_catch_due_to_high_pitch_count,
    cannot_pitch_due_to_four_innings_catching,
    exceeds_max_pitches_for_age,
    get_effective_pitch_count,
    has_innings_gap,
    pitched_before_eligible_date,
)

logger = logging.getLogger(__name__)

PITCHER = "pitcher"
CATCHER = "catcher"


class ViolationChecker:
    """Evaluates the six pitching/catching rules for one player in one game.

    Rules are checked in a fixed order so that warnings always display in
    the same sequence: innings gap, high pitch count catching, four innings
    catching, combined catching, age limit, rest days.
    """

    def check_all(self, facts: PlayerGameFacts) -> List[ViolationKind]:
        """Return every violation kind that fires for *facts*."""
        pitched = facts.pitched_innings
        caught = facts.caught_innings
        # A tally logged for a catcher-only player carries no pitches
        effective = get_effective_pitch_count(facts.pitch_tally) if facts.pitched else 0

        checks = [
            (ViolationKind.INNINGS_GAP, has_innings_gap(pitched)),
            (
                ViolationKind.HIGH_PITCH_COUNT_CATCHING,
                cannot_catch_due_to_high_pitch_count(pitched, caught, effective),
            ),
            (
                ViolationKind.FOUR_INNINGS_CATCHING,
                cannot_pitch_due_to_four_innings_catching(pitched, caught),
            ),
            (
                ViolationKind.COMBINED_CATCHING,
                cannot_catch_again_due_to_combined(pitched, caught, effective),
            ),
            (
                ViolationKind.EXCEEDS_AGE_LIMIT,
                exceeds_max_pitches_for_age(facts.age, effective),
            ),
            (
                ViolationKind.PITCHED_BEFORE_ELIGIBLE,
                pitched_before_eligible_date(
                    facts.game_date, facts.previous_next_eligible_date, pitched
                ),
            ),
        ]

        found = [kind for kind, fired in checks if fired]
        if found:
            logger.debug(
                "Player %s: %s", facts.player_id, ", ".join(k.value for k in found)
            )
        return found

    def describe(self, kind: ViolationKind, facts: PlayerGameFacts) -> str:
        """Warning text shown to coaches for a single violation."""
        effective = get_effective_pitch_count(facts.pitch_tally)

        if kind is ViolationKind.INNINGS_GAP:
            return (
                "A pitcher cannot return after being taken out. "
                "Innings must be consecutive (e.g., 1,2,3 or 4,5,6)."
            )
        if kind is ViolationKind.HIGH_PITCH_COUNT_CATCHING:
            return (
                f"Player threw {effective} pitches (41+) and cannot catch "
                "for the remainder of this game."
            )
        if kind is ViolationKind.FOUR_INNINGS_CATCHING:
            return (
                f"Player caught {len(facts.caught_innings)} innings and "
                "cannot pitch in this game."
            )
        if kind is ViolationKind.COMBINED_CATCHING:
            return (
                f"Player caught 1-3 innings and threw {effective} pitches "
                "(21+). Cannot catch again in this game."
            )
        if kind is ViolationKind.EXCEEDS_AGE_LIMIT:
            return (
                f"Threw {effective} pitches, exceeding the maximum of "
                f"{get_max_pitches_for_age(facts.age)} for age {facts.age}."
            )
        if kind is ViolationKind.PITCHED_BEFORE_ELIGIBLE:
            return (
                f"Pitched on {format_roster_date(facts.game_date)} before the "
                "required rest days elapsed (eligible "
                f"{format_roster_date(facts.previous_next_eligible_date)})."
            )
        raise ValueError(f"Unknown violation kind: {kind}")

    def evaluate_player(self, facts: PlayerGameFacts) -> PlayerViolations:
        """Run every rule and attach the warning message for each hit."""
        kinds = self.check_all(facts)
        return PlayerViolations(
            player_id=facts.player_id,
            violations=kinds,
            messages=[self.describe(kind, facts) for kind in kinds],
        )


def build_player_facts(
    positions: Iterable[Mapping],
    pitching_logs: Iterable[Mapping],
    player_ages: Mapping[str, Optional[int]],
    game_date: Optional[DateLike] = None,
    player_eligibility_dates: Optional[Mapping[str, Optional[DateLike]]] = None,
) -> Dict[str, PlayerGameFacts]:
    """Group one game's ``positions_played`` and ``pitching_logs`` rows by player.

    Only players with at least one pitcher/catcher inning are included;
    pitching logs for anyone else are ignored.
    """
    eligibility = player_eligibility_dates or {}
    innings: Dict[str, Dict[str, List[int]]] = {}

    for row in positions:
        player = innings.setdefault(row["player_id"], {PITCHER: [], CATCHER: []})
        if row["position"] in player:
            player[row["position"]].append(int(row["inning_number"]))

    tallies: Dict[str, Optional[int]] = {}
    for log in pitching_logs:
        if log["player_id"] in innings:
            tallies[log["player_id"]] = log.get("penultimate_batter_count")

    parsed_game_date = parse_local_date(game_date) if game_date else None

    facts = {}
    for player_id, player in innings.items():
        previous = eligibility.get(player_id)
        facts[player_id] = PlayerGameFacts(
            player_id=player_id,
            age=player_ages.get(player_id),
            pitched_innings=player[PITCHER],
            caught_innings=player[CATCHER],
            pitch_tally=tallies.get(player_id),
            game_date=parsed_game_date,
            previous_next_eligible_date=parse_local_date(previous) if previous else None,
        )
    return facts


def evaluate_game(
    positions: Iterable[Mapping],
    pitching_logs: Iterable[Mapping],
    player_ages: Mapping[str, Optional[int]],
    game_date: Optional[DateLike] = None,
    player_eligibility_dates: Optional[Mapping[str, Optional[DateLike]]] = None,
) -> List[PlayerViolations]:
    """Per-player violation results for one game, players with hits only."""
    checker = ViolationChecker()
    facts = build_player_facts(
        positions, pitching_logs, player_ages, game_date, player_eligibility_dates
    )
    results = [checker.evaluate_player(f) for f in facts.values()]
    return [r for r in results if r.has_violation]


def calculate_game_has_violations(
    positions: Iterable[Mapping],
    pitching_logs: Iterable[Mapping],
    player_ages: Mapping[str, Optional[int]],
    game_date: Optional[DateLike] = None,
    player_eligibility_dates: Optional[Mapping[str, Optional[DateLike]]] = None,
) -> bool:
    """Value for the game record's ``has_violation`` flag.

    The rest-date rule only applies when *game_date* is given.
    """
    checker = ViolationChecker()
    facts = build_player_facts(
        positions, pitching_logs, player_ages, game_date, player_eligibility_dates
    )
    return any(checker.check_all(f) for f in facts.values())
