from src.rule_engine.config import PITCH_SMART_RULES
from src.rule_engine.models import (
    AgeRuleBand,
    EligibilityRecord,
    PlayerGameFacts,
    PlayerViolations,
    RestDayRange,
    ViolationKind,
)
from src.rule_engine.pitch_smart_rules import (
    calculate_next_eligible_date,
    format_roster_date,
    get_max_pitches_for_age,
    get_required_rest_days,
    get_rule_band,
    parse_local_date,
)
from src.rule_engine.pitching_display import get_pitching_display_data
from src.rule_engine.violation_checker import (
    ViolationChecker,
    calculate_game_has_violations,
    evaluate_game,
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

__all__ = [
    "AgeRuleBand",
    "EligibilityRecord",
    "PITCH_SMART_RULES",
    "PlayerGameFacts",
    "PlayerViolations",
    "RestDayRange",
    "ViolationChecker",
    "ViolationKind",
    "calculate_game_has_violations",
    "calculate_next_eligible_date",
    "cannot_catch_again_due_to_combined",
    "cannot_catch_due_to_high_pitch_count",
    "cannot_pitch_due_to_four_innings_catching",
    "evaluate_game",
    "exceeds_max_pitches_for_age",
    "format_roster_date",
    "get_effective_pitch_count",
    "get_max_pitches_for_age",
    "get_pitching_display_data",
    "get_required_rest_days",
    "get_rule_band",
    "has_innings_gap",
    "parse_local_date",
    "pitched_before_eligible_date",
]
