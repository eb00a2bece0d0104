"""MLB / USA Baseball Pitch Smart guidelines as static lookup tables.

Bands must be contiguous and non-overlapping. Within a band the rest-day
ranges are closed on both ends, must not overlap, and increase in rest days
as pitch counts rise. The final range of a band ends at
OPEN_ENDED_MAX_PITCHES, which stands in for "no upper bound".
"""

from src.rule_engine.models import AgeRuleBand, RestDayRange

OPEN_ENDED_MAX_PITCHES = 999

# Ranges shared by every band from age 9 up
_STANDARD_REST_DAY_RANGES = (
    RestDayRange(min_pitches=1, max_pitches=20, rest_days=0),
    RestDayRange(min_pitches=21, max_pitches=35, rest_days=1),
    RestDayRange(min_pitches=36, max_pitches=50, rest_days=2),
    RestDayRange(min_pitches=51, max_pitches=65, rest_days=3),
    RestDayRange(min_pitches=66, max_pitches=OPEN_ENDED_MAX_PITCHES, rest_days=4),
)

PITCH_SMART_RULES = (
    AgeRuleBand(
        age_min=7,
        age_max=8,
        max_pitches_per_game=50,
        # No range above 50: anything higher is an age-limit violation
        rest_day_ranges=_STANDARD_REST_DAY_RANGES[:3],
    ),
    AgeRuleBand(
        age_min=9,
        age_max=10,
        max_pitches_per_game=75,
        rest_day_ranges=_STANDARD_REST_DAY_RANGES,
    ),
    AgeRuleBand(
        age_min=11,
        age_max=12,
        max_pitches_per_game=85,
        rest_day_ranges=_STANDARD_REST_DAY_RANGES,
    ),
)

# Position transition thresholds
HIGH_PITCH_COUNT_CATCH_LIMIT = 41  # 41+ pitches: no catching afterwards
CATCHING_INNINGS_PITCH_LIMIT = 4  # 4+ innings caught: no pitching afterwards
COMBINED_RULE_PITCH_LIMIT = 21  # 21+ pitches after catching 1-3 innings
COMBINED_RULE_CATCHING_INNINGS = (1, 3)
