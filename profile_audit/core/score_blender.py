"""
Blending of the rule score with the external AI score.

  final = round(R * 0.5 + A * 0.5), clamped to 0..100

When A is missing, not a real number, or outside 0..100, final = R.
"""

import math
from typing import Any

from profile_audit.core.schemas import ScoreBand

MIN_SCORE = 0
MAX_SCORE = 100
RULE_WEIGHT = 0.5
AI_WEIGHT = 0.5

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
AVERAGE_THRESHOLD = 40


def round_half_up(value: float) -> int:
    """70.5 -> 71 (Python's round() would give 70)."""
    return int(math.floor(value + 0.5))


def _clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def is_valid_ai_score(ai_score: Any) -> bool:
    if isinstance(ai_score, bool) or not isinstance(ai_score, (int, float)):
        return False
    if math.isnan(ai_score):
        return False
    return MIN_SCORE <= ai_score <= MAX_SCORE


def blend(rule_score: int, ai_score: Any = None) -> int:
    if not is_valid_ai_score(ai_score):
        return rule_score
    return _clamp(round_half_up(rule_score * RULE_WEIGHT + ai_score * AI_WEIGHT))


def score_band(score: int) -> ScoreBand:
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= AVERAGE_THRESHOLD:
        return "average"
    return "poor"
