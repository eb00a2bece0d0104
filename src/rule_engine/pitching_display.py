"""Roster display values for a player's most recent pitching log."""

from typing import Dict, Mapping, Optional

from src.rule_engine.pitch_smart_rules import format_roster_date


def get_official_pitch_count(penultimate_batter_count: Optional[int]) -> int:
    """Official count shown on the roster: tally + 1.

    Unlike the rule engine's effective count, a tally of 0 still counts one
    pitch here (the pitcher faced a single batter).
    """
    if penultimate_batter_count is None:
        return 0
    return penultimate_batter_count + 1


def get_pitching_display_data(pitching_log: Optional[Mapping]) -> Dict[str, str]:
    """Last pitched date, official count and next eligible date for display.

    *pitching_log* is a pitching log row with a nested ``game`` mapping that
    carries ``game_date``.
    """
    if not pitching_log or not pitching_log.get("game"):
        return {
            "last_date": "Never pitched",
            "official_count": "--",
            "next_eligible_date": "--",
        }

    official = get_official_pitch_count(pitching_log.get("penultimate_batter_count"))
    next_eligible = pitching_log.get("next_eligible_pitch_date")

    return {
        "last_date": format_roster_date(pitching_log["game"].get("game_date")),
        "official_count": str(official) if official > 0 else "--",
        "next_eligible_date": (
            format_roster_date(next_eligible) if next_eligible else "Eligible now"
        ),
    }
