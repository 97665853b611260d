from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

SCORE_QUANTUM = Decimal("0.01")
ZERO_SCORE = Decimal("0.00")
MAX_SCORE = Decimal("100.00")


def compute_score_percent(*, earned_points: int, total_points: int) -> Decimal:
    if total_points <= 0:
        return ZERO_SCORE
    raw = Decimal(earned_points) * Decimal(100) / Decimal(total_points)
    score = raw.quantize(SCORE_QUANTUM, rounding=ROUND_HALF_UP)
    return min(max(score, ZERO_SCORE), MAX_SCORE)


def is_passed(*, score: Decimal, passing_score: int) -> bool:
    return score >= Decimal(passing_score)


def time_spent_seconds(*, started_at: datetime, completed_at: datetime) -> int:
    return max(0, int((completed_at - started_at).total_seconds()))
