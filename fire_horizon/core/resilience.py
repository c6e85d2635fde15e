from __future__ import annotations

from dataclasses import dataclass

from .inputs import Snapshot
from .rounding import round_half_up

MAX_SUB_SCORE = 25
LIQUID_SHARE = 0.3  # assumed liquid portion of total assets
EMERGENCY_TARGET_MONTHS = 6
NO_DEBT_RATIO = 10.0
DIVERSIFICATION_TARGET_RATIO = 3.0
SAVINGS_RATE_TARGET = 0.30

LABELS = (
    (80, "excellent"),
    (60, "strong"),
    (40, "reasonable"),
    (20, "vulnerable"),
)


@dataclass(frozen=True)
class ResilienceBreakdown:
    emergency: int
    diversification: int
    debt_ratio: int
    savings_rate: int

    @property
    def total(self) -> int:
        return self.emergency + self.diversification + self.debt_ratio + self.savings_rate


@dataclass(frozen=True)
class ResilienceScore:
    total: int
    breakdown: ResilienceBreakdown
    label: str


def _clamp(score: float) -> int:
    return max(0, min(MAX_SUB_SCORE, round_half_up(score)))


def resilience_label(total: int) -> str:
    for threshold, label in LABELS:
        if total >= threshold:
            return label
    return "critical"


def compute_resilience_score(snapshot: Snapshot) -> ResilienceScore:
    """Static 0-100 composite of emergency cover, diversification, debt load and savings rate."""
    assets, debts = snapshot.total_assets, snapshot.total_debts

    liquid_assets = assets * LIQUID_SHARE
    emergency_months = liquid_assets / snapshot.monthly_expenses if snapshot.monthly_expenses > 0 else 0.0
    emergency = _clamp(emergency_months / EMERGENCY_TARGET_MONTHS * MAX_SUB_SCORE)

    if debts > 0:
        asset_to_debt = assets / debts
    else:
        asset_to_debt = NO_DEBT_RATIO if assets > 0 else 0.0
    diversification = _clamp(min(asset_to_debt / DIVERSIFICATION_TARGET_RATIO, 1) * MAX_SUB_SCORE)

    debt_pct = debts / assets if assets > 0 else 1.0
    debt_ratio = _clamp((1 - min(debt_pct, 1)) * MAX_SUB_SCORE)

    rate = snapshot.monthly_savings / snapshot.monthly_income if snapshot.monthly_income > 0 else 0.0
    savings_rate = _clamp(min(rate / SAVINGS_RATE_TARGET, 1) * MAX_SUB_SCORE)

    breakdown = ResilienceBreakdown(emergency, diversification, debt_ratio, savings_rate)
    return ResilienceScore(total=breakdown.total, breakdown=breakdown, label=resilience_label(breakdown.total))
