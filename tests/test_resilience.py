import pytest

from fire_horizon.core.inputs import Snapshot
from fire_horizon.core.resilience import compute_resilience_score, resilience_label


def _snapshot(assets, debts, income, expenses) -> Snapshot:
    return Snapshot(total_assets=assets, total_debts=debts, monthly_income=income, monthly_expenses=expenses)


def test_strong_household_scores_full_marks():
    score = compute_resilience_score(_snapshot(100_000, 0, 5_000, 3_000))

    assert score.breakdown.emergency == 25
    assert score.breakdown.diversification == 25
    assert score.breakdown.debt_ratio == 25
    assert score.breakdown.savings_rate == 25
    assert score.total == 100
    assert score.label == "excellent"


def test_empty_snapshot_is_critical():
    score = compute_resilience_score(_snapshot(0, 0, 0, 0))

    assert score.total == 0
    assert score.label == "critical"


def test_partial_scores():
    # liquid 30k covers over 6 months of 4.5k; assets/debts = 2; debt 50%; savings 10%
    score = compute_resilience_score(_snapshot(100_000, 50_000, 5_000, 4_500))

    assert score.breakdown.emergency == 25
    assert score.breakdown.diversification == 17
    assert score.breakdown.debt_ratio == 13
    assert score.breakdown.savings_rate == 8


def test_half_point_sub_scores_round_up():
    # debt 50% and savings 15% both land on exactly 12.5
    score = compute_resilience_score(_snapshot(100_000, 50_000, 4_000, 3_400))

    assert score.breakdown.emergency == 25
    assert score.breakdown.diversification == 17
    assert score.breakdown.debt_ratio == 13
    assert score.breakdown.savings_rate == 13
    assert score.total == 68
    assert score.label == "strong"


@pytest.mark.parametrize(
    "assets, debts, income, expenses",
    [
        (0, 0, 0, 0),
        (0, 100_000, 0, 3_000),
        (1_000, 500_000, 2_000, 5_000),
        (10_000_000, 0, 100_000, 1),
        (50_000, 50_000, 3_000, 3_000),
        (20_000, 0, 0, 2_000),
    ],
)
def test_sub_scores_are_bounded(assets, debts, income, expenses):
    score = compute_resilience_score(_snapshot(assets, debts, income, expenses))
    parts = [
        score.breakdown.emergency,
        score.breakdown.diversification,
        score.breakdown.debt_ratio,
        score.breakdown.savings_rate,
    ]

    assert all(0 <= part <= 25 for part in parts)
    assert score.total == sum(parts)
    assert 0 <= score.total <= 100


def test_negative_savings_rate_is_clamped():
    score = compute_resilience_score(_snapshot(50_000, 0, 2_000, 5_000))

    assert score.breakdown.savings_rate == 0


@pytest.mark.parametrize(
    "total, label",
    [(100, "excellent"), (80, "excellent"), (79, "strong"), (60, "strong"), (59, "reasonable"),
     (40, "reasonable"), (39, "vulnerable"), (20, "vulnerable"), (19, "critical"), (0, "critical")],
)
def test_labels(total, label):
    assert resilience_label(total) == label
