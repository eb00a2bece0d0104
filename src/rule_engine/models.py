"""Value types passed into and out of the rule engine."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class RestDayRange:
    """Closed pitch-count range [min_pitches, max_pitches] -> rest days."""

    min_pitches: int
    max_pitches: int
    rest_days: int

    def contains(self, pitch_count: int) -> bool:
        return self.min_pitches <= pitch_count <= self.max_pitches


@dataclass(frozen=True)
class AgeRuleBand:
    """Pitch limits for one age band."""

    age_min: int
    age_max: int
    max_pitches_per_game: int
    rest_day_ranges: Tuple[RestDayRange, ...] = ()

    def contains_age(self, age: int) -> bool:
        return self.age_min <= age <= self.age_max

    def find_rest_range(self, pitch_count: int) -> Optional[RestDayRange]:
        """First range containing *pitch_count*, or None if it falls outside all."""
        for rest_range in self.rest_day_ranges:
            if rest_range.contains(pitch_count):
                return rest_range
        return None


def _normalize_innings(innings: Optional[Iterable[int]]) -> Tuple[int, ...]:
    if not innings:
        return ()
    return tuple(sorted(int(i) for i in innings))


@dataclass(frozen=True)
class PlayerGameFacts:
    """Everything the engine needs to know about one player in one game.

    Innings are normalized to sorted tuples on construction, so callers may
    pass lists or sets in any order.
    """

    player_id: str
    age: Optional[int] = None
    pitched_innings: Tuple[int, ...] = ()
    caught_innings: Tuple[int, ...] = ()
    pitch_tally: Optional[int] = None  # pitches before the last batter faced
    game_date: Optional[date] = None
    previous_next_eligible_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(
            self, "pitched_innings", _normalize_innings(self.pitched_innings)
        )
        object.__setattr__(
            self, "caught_innings", _normalize_innings(self.caught_innings)
        )

    @property
    def pitched(self) -> bool:
        return len(self.pitched_innings) > 0


@dataclass(frozen=True)
class EligibilityRecord:
    """Rest restriction computed after a pitching appearance.

    ``next_eligible_pitch_date`` of None means no restriction is pending.
    """

    player_id: str
    as_of_game_date: date
    next_eligible_pitch_date: Optional[date] = None


class ViolationKind(Enum):
    """The six Pitch Smart / position-restriction violations."""

    INNINGS_GAP = "innings_gap"
    HIGH_PITCH_COUNT_CATCHING = "high_pitch_count_catching"
    FOUR_INNINGS_CATCHING = "four_innings_catching"
    COMBINED_CATCHING = "combined_catching"
    EXCEEDS_AGE_LIMIT = "exceeds_age_limit"
    PITCHED_BEFORE_ELIGIBLE = "pitched_before_eligible"


@dataclass
class PlayerViolations:
    """Violations found for a single player in a single game."""

    player_id: str
    violations: List[ViolationKind] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)

    @property
    def has_violation(self) -> bool:
        return len(self.violations) > 0
