"""
Scoring Rules and Constants
===========================
Central source of truth for priority-score weights and seniority thresholds.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    """Weights and limits used by the call heuristic."""

    # Priority score (higher = picked first)
    non_neuro_bonus: int = 1000
    off_rotation_bonus: int = 500       # neuro resident rotating off-service
    per_call_penalty: int = 100
    seniority_base: int = 7             # (base - level) * weight
    seniority_weight: int = 85
    recency_penalty: int = 5000
    recency_window_days: int = 3
    double_call_penalty: int = 200

    # Hard limits
    max_weekend_calls: int = 2

    # Seniority thresholds
    backup_min_level: int = 4           # level 3 may back up only when flagged
    senior_min_level: int = 3
    junior_max_level: int = 2
    pairing_level_gap: int = 2
    complex_case_min_level: int = 4    # complex OR cases need a senior this level or above


RULES = ScoringRules()
