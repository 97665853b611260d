from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.quizzes.scoring import compute_score_percent, is_passed, time_spent_seconds


@pytest.mark.parametrize(
    ("earned", "total", "expected"),
    [
        (2, 2, Decimal("100.00")),
        (1, 2, Decimal("50.00")),
        (1, 3, Decimal("33.33")),
        (2, 3, Decimal("66.67")),
        (1, 8, Decimal("12.50")),
        (1, 16, Decimal("6.25")),
        (1, 32, Decimal("3.13")),
        (0, 5, Decimal("0.00")),
    ],
)
def test_score_rounds_half_up_to_two_decimals(earned: int, total: int, expected: Decimal) -> None:
    score = compute_score_percent(earned_points=earned, total_points=total)

    assert score == expected
    assert score.as_tuple().exponent == -2


def test_zero_total_points_scores_zero() -> None:
    assert compute_score_percent(earned_points=0, total_points=0) == Decimal("0.00")


def test_score_is_bounded() -> None:
    for total in range(1, 25):
        for earned in range(0, total + 1):
            score = compute_score_percent(earned_points=earned, total_points=total)
            assert Decimal("0.00") <= score <= Decimal("100.00")


@pytest.mark.parametrize(
    ("score", "passing_score", "expected"),
    [
        (Decimal("70.00"), 70, True),
        (Decimal("69.99"), 70, False),
        (Decimal("100.00"), 100, True),
        (Decimal("0.00"), 0, True),
        (Decimal("0.00"), 1, False),
    ],
)
def test_passed_compares_integer_threshold(score: Decimal, passing_score: int, expected: bool) -> None:
    assert is_passed(score=score, passing_score=passing_score) is expected


def test_time_spent_counts_whole_seconds() -> None:
    started_at = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)

    assert time_spent_seconds(
        started_at=started_at,
        completed_at=started_at + timedelta(seconds=95, milliseconds=900),
    ) == 95
    assert time_spent_seconds(started_at=started_at, completed_at=started_at) == 0
