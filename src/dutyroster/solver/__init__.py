# dutyroster/solver - Greedy multi-pass roster allocation
from .calls import CallAssigner, run_call_pass
from .engine import generate_from_payload, generate_schedule
from .normalize import NormalizedInput, normalize_input, parse_stat_holidays
from .scoring import call_quota, is_call_eligible, priority_score, rank_candidates
from .stats import PersonStats, calculate_person_stats, stats_to_dataframe, stats_to_dict_list
from .validation import ValidationResult, Violation, validate_roster

__all__ = [
    "generate_schedule",
    "generate_from_payload",
    "normalize_input",
    "NormalizedInput",
    "parse_stat_holidays",
    "priority_score",
    "call_quota",
    "is_call_eligible",
    "rank_candidates",
    "CallAssigner",
    "run_call_pass",
    "validate_roster",
    "ValidationResult",
    "Violation",
    "calculate_person_stats",
    "stats_to_dict_list",
    "stats_to_dataframe",
    "PersonStats",
]
