"""Age-band lookup, required rest days and next-eligible-date arithmetic.

All date arithmetic works on ``datetime.date`` values: a game date is a
calendar day with no time-of-day, so there is no timezone to shift it.
Nothing in this module reads the system clock.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from src.rule_engine.config import PITCH_SMART_RULES
from src.rule_engine.models import AgeRuleBand

DateLike = Union[date, datetime, str]


# ------------------------------------------------------------------
# Calendar dates
# ------------------------------------------------------------------
def parse_local_date(value: Optional[DateLike]) -> date:
    """Convert a date, datetime or ``YYYY-MM-DD`` string to a calendar date.

    A datetime keeps its own calendar day (no UTC conversion). Strings may
    carry a trailing time component (``2025-05-10T00:00:00``), which is
    ignored.

    Raises:
        ValueError: If *value* is missing or not a valid ISO date.
    """
    if value is None:
        raise ValueError("parse_local_date requires a valid date")
    # datetime subclasses date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        raise ValueError("parse_local_date requires a valid date")
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def format_roster_date(value: Optional[DateLike]) -> str:
    """Format a date for roster display, e.g. ``May 14, 2025``.

    Returns "N/A" when no date is given.
    """
    if value is None or value == "":
        return "N/A"
    d = parse_local_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


# ------------------------------------------------------------------
# Rule table lookups
# ------------------------------------------------------------------
def get_rule_band(age: Optional[int]) -> Optional[AgeRuleBand]:
    """Return the age band covering *age*, or None if no guidance exists."""
    if age is None:
        return None
    for band in PITCH_SMART_RULES:
        if band.contains_age(age):
            return band
    return None


def get_max_pitches_for_age(age: Optional[int]) -> Optional[int]:
    """Maximum pitches allowed in one game for *age*, or None if unlimited."""
    band = get_rule_band(age)
    return band.max_pitches_per_game if band else None


def get_required_rest_days(
    age: Optional[int], pitch_count: Optional[int]
) -> Optional[int]:
    """Rest days required after throwing *pitch_count* official pitches.

    Examples:
        get_required_rest_days(12, 21) -> 1
        get_required_rest_days(10, 66) -> 4
        get_required_rest_days(8, 60)  -> None (beyond the 7-8 limit)
        get_required_rest_days(13, 30) -> None (no band for age 13)
    """
    band = get_rule_band(age)
    if band is None:
        return None

    rest_range = band.find_rest_range(pitch_count or 0)
    if rest_range is None:
        return None

    return rest_range.rest_days


def calculate_next_eligible_date(
    game_date: Optional[DateLike],
    age: Optional[int],
    pitch_count: Optional[int],
) -> Optional[date]:
    """First calendar date the player may pitch again.

    The player is never eligible again on the day they pitched: zero rest
    days still yields the following day.

    Examples:
        calculate_next_eligible_date("2025-05-10", 10, 15) -> 2025-05-11
        calculate_next_eligible_date("2025-05-10", 10, 70) -> 2025-05-15
        calculate_next_eligible_date("2025-12-30", 10, 70) -> 2026-01-04
    """
    rest_days = get_required_rest_days(age, pitch_count)
    if rest_days is None or game_date is None or game_date == "":
        return None

    return parse_local_date(game_date) + timedelta(days=rest_days + 1)
