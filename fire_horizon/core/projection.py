from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import add_months, current_age, month_label, resolve_today
from .engine import compound_month
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions, Snapshot
from .rounding import round_half_up

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30.44

OPTIMISTIC_RETURN = 0.09
EXPECTED_RETURN = 0.07
PESSIMISTIC_RETURN = 0.04


class FireStatus(enum.Enum):
    REACHED = "reached"
    NOT_ACHIEVABLE = "not achievable"
    PROJECTED = "projected"


@dataclass(frozen=True)
class FireDate:
    status: FireStatus
    date: Optional[date] = None  # only set when PROJECTED

    @classmethod
    def reached(cls) -> "FireDate":
        return cls(FireStatus.REACHED)

    @classmethod
    def not_achievable(cls) -> "FireDate":
        return cls(FireStatus.NOT_ACHIEVABLE)

    @classmethod
    def projected(cls, when: date) -> "FireDate":
        return cls(FireStatus.PROJECTED, when)

    @property
    def label(self) -> str:
        if self.status is FireStatus.PROJECTED:
            return month_label(self.date)
        return self.status.value


@dataclass(frozen=True)
class FireProjection:
    fire_target: float
    net_worth: float
    freedom_percentage: float
    fire_age: Optional[float]
    current_age: Optional[int]
    fire_date: FireDate
    countdown_days: int
    countdown_years: int
    countdown_months: int
    freedom_years: int
    freedom_months: int
    monthly_passive_income: float
    monthly_savings: float
    savings_rate: float


@dataclass(frozen=True)
class FireRange:
    optimistic: FireProjection
    expected: FireProjection
    pessimistic: FireProjection


def fire_target(monthly_expenses: float, safe_withdrawal_rate: float) -> float:
    """Net worth whose safe withdrawal covers a year of expenses; 0 without expenses."""
    yearly_expenses = monthly_expenses * 12
    return yearly_expenses / safe_withdrawal_rate if yearly_expenses > 0 else 0.0


def _freedom_time(net_worth: float, yearly_expenses: float) -> tuple[int, int]:
    """Years and months current net worth alone would cover at today's burn."""
    total_months = (net_worth / yearly_expenses) * 12 if yearly_expenses > 0 else 0.0
    total_months = max(0.0, total_months)
    return int(total_months // 12), int(math.floor(total_months % 12))


def months_to_target(
    net_worth: float, target: float, monthly_savings: float, monthly_return: float, cap: int
) -> Optional[int]:
    """Months of monthly compounding plus savings until target; None unless crossed before the cap."""
    projected = net_worth
    months = 0
    while projected < target and months < cap:
        projected, _ = compound_month(projected, monthly_return, monthly_savings)
        months += 1
    return months if projected >= target and months < cap else None


def compute_fire_projection(
    snapshot: Snapshot,
    annual_return: Optional[float] = None,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> FireProjection:
    today = resolve_today(today)
    if annual_return is None:
        annual_return = assumptions.resolved_return(snapshot)
    swr = assumptions.safe_withdrawal_rate

    net_worth = snapshot.net_worth
    yearly_expenses = snapshot.yearly_expenses
    target = fire_target(snapshot.monthly_expenses, swr)
    freedom_percentage = max(0.0, min(net_worth / target * 100, 100.0)) if target > 0 else 0.0
    monthly_savings = snapshot.monthly_savings
    savings_rate = monthly_savings / snapshot.monthly_income * 100 if snapshot.monthly_income > 0 else 0.0
    monthly_passive_income = net_worth * swr / 12
    freedom_years, freedom_months = _freedom_time(net_worth, yearly_expenses)

    age_now = current_age(snapshot.date_of_birth, today)
    fire_age: Optional[float] = None
    countdown_days = countdown_years = countdown_months = 0

    if net_worth >= target and target > 0:
        fire_date = FireDate.reached()
        fire_age = age_now
    elif monthly_savings > 0 and target > net_worth:
        months = months_to_target(net_worth, target, monthly_savings, annual_return / 12, assumptions.search_cap_months)
        if months is None:
            logger.debug("Target %.0f not crossed within %d months", target, assumptions.search_cap_months)
            fire_date = FireDate.not_achievable()
        else:
            fire_date = FireDate.projected(add_months(today, months))
            countdown_days = round_half_up(months * DAYS_PER_MONTH)
            countdown_years, countdown_months = divmod(months, 12)
            if age_now is not None:
                fire_age = age_now + months / 12
    else:
        fire_date = FireDate.not_achievable()

    return FireProjection(
        fire_target=target,
        net_worth=net_worth,
        freedom_percentage=freedom_percentage,
        fire_age=fire_age,
        current_age=age_now,
        fire_date=fire_date,
        countdown_days=countdown_days,
        countdown_years=countdown_years,
        countdown_months=countdown_months,
        freedom_years=freedom_years,
        freedom_months=freedom_months,
        monthly_passive_income=monthly_passive_income,
        monthly_savings=monthly_savings,
        savings_rate=savings_rate,
    )


def compute_fire_range(
    snapshot: Snapshot,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> FireRange:
    """Optimistic / expected / pessimistic projections at fixed annual returns."""
    today = resolve_today(today)
    return FireRange(
        optimistic=compute_fire_projection(snapshot, OPTIMISTIC_RETURN, assumptions=assumptions, today=today),
        expected=compute_fire_projection(snapshot, EXPECTED_RETURN, assumptions=assumptions, today=today),
        pessimistic=compute_fire_projection(snapshot, PESSIMISTIC_RETURN, assumptions=assumptions, today=today),
    )
