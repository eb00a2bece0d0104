"""Pitching and catching restriction rules.

Each rule is an independent predicate over one player's data for one game.
Missing data (no pitches, no innings, no dates, unsupported ages) always
means "no violation"; none of these functions raise for absent input.
"""

from typing import Iterable, List, Optional

from src.rule_engine.config import (
    CATCHING_INNINGS_PITCH_LIMIT,
    COMBINED_RULE_CATCHING_INNINGS,
    COMBINED_RULE_PITCH_LIMIT,
    HIGH_PITCH_COUNT_CATCH_LIMIT,
)
from src.rule_engine.pitch_smart_rules import (
    DateLike,
    get_max_pitches_for_age,
    parse_local_date,
)


def _sorted_innings(innings: Optional[Iterable[int]]) -> List[int]:
    return sorted(innings) if innings else []


def get_effective_pitch_count(pitch_tally: Optional[int]) -> int:
    """Official pitch count from the tally before the last batter faced.

    The last batter always sees at least one more pitch than was tallied, so
    the official count is tally + 1. A missing or zero tally means the
    player did not pitch.
    """
    if not pitch_tally or pitch_tally <= 0:
        return 0
    return pitch_tally + 1


def exceeds_max_pitches_for_age(
    age: Optional[int], effective_pitches: Optional[int]
) -> bool:
    """Pitch count above the age band's daily maximum.

    - Ages 7-8: max 50 pitches
    - Ages 9-10: max 75 pitches
    - Ages 11-12: max 85 pitches

    Throwing exactly the maximum is legal. Ages without a band are not
    limited.
    """
    max_pitches = get_max_pitches_for_age(age)
    if max_pitches is None:
        return False
    return (effective_pitches or 0) > max_pitches


def has_innings_gap(innings: Optional[Iterable[int]]) -> bool:
    """A pitcher removed from the mound may not return in the same game.

    A removal-and-return shows up as a non-consecutive set of pitched
    innings.
    """
    ordered = _sorted_innings(innings)
    if len(ordered) <= 1:
        return False
    return any(b - a > 1 for a, b in zip(ordered, ordered[1:]))


def cannot_catch_due_to_high_pitch_count(
    pitched_innings: Iterable[int],
    caught_innings: Iterable[int],
    effective_pitches: Optional[int],
) -> bool:
    """41+ pitches: the player may not catch for the remainder of the game.

    Catching before the pitching stint is unaffected.
    """
    pitched = _sorted_innings(pitched_innings)
    caught = _sorted_innings(caught_innings)
    effective_pitches = effective_pitches or 0
    if effective_pitches < HIGH_PITCH_COUNT_CATCH_LIMIT or not caught or not pitched:
        return False
    last_pitched = pitched[-1]
    return any(inning > last_pitched for inning in caught)


def cannot_pitch_due_to_four_innings_catching(
    pitched_innings: Iterable[int],
    caught_innings: Iterable[int],
) -> bool:
    """A player who has caught 4 innings may not pitch later in the game.

    Only pitching after the fourth caught inning counts.
    """
    pitched = _sorted_innings(pitched_innings)
    caught = _sorted_innings(caught_innings)
    if len(caught) < CATCHING_INNINGS_PITCH_LIMIT or not pitched:
        return False
    fourth_caught = caught[CATCHING_INNINGS_PITCH_LIMIT - 1]
    return any(inning > fourth_caught for inning in pitched)


def cannot_catch_again_due_to_combined(
    pitched_innings: Iterable[int],
    caught_innings: Iterable[int],
    effective_pitches: Optional[int],
) -> bool:
    """Caught 1-3 innings, then pitched 21+: may not return to catcher.

    Fires only when the player caught both before and after the pitching
    stint.
    """
    pitched = _sorted_innings(pitched_innings)
    caught = _sorted_innings(caught_innings)
    effective_pitches = effective_pitches or 0
    min_caught, max_caught = COMBINED_RULE_CATCHING_INNINGS
    if not min_caught <= len(caught) <= max_caught:
        return False
    if effective_pitches < COMBINED_RULE_PITCH_LIMIT or not pitched:
        return False

    first_pitched, last_pitched = pitched[0], pitched[-1]
    caught_before = any(inning < first_pitched for inning in caught)
    returned_to_catch = any(inning > last_pitched for inning in caught)
    return caught_before and returned_to_catch


def pitched_before_eligible_date(
    game_date: Optional[DateLike],
    next_eligible_pitch_date: Optional[DateLike],
    pitched_innings: Optional[Iterable[int]],
) -> bool:
    """Pitched in this game before the required rest days elapsed.

    *next_eligible_pitch_date* comes from the player's most recent earlier
    pitching appearance. The player is eligible on that date itself.

    Examples:
        pitched_before_eligible_date("2025-05-12", "2025-05-14", [1, 2]) -> True
        pitched_before_eligible_date("2025-05-14", "2025-05-14", [1, 2]) -> False
    """
    if not pitched_innings:
        return False
    # No earlier restriction (e.g. first time pitching)
    if next_eligible_pitch_date is None or next_eligible_pitch_date == "":
        return False
    if game_date is None or game_date == "":
        return False

    return parse_local_date(game_date) < parse_local_date(next_eligible_pitch_date)
