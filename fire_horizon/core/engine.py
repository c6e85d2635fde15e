from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from .dates import add_months, current_age, resolve_today
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionMonth:
    month: int
    date: date
    net_worth: float
    passive_income: float
    age: Optional[float]
    contribution: float
    growth: float


def compound_month(net_worth: float, monthly_return: float, contribution: float) -> tuple[float, float]:
    """One month of growth on the opening balance followed by the contribution.

    Returns (closing net worth, growth).
    """
    growth = net_worth * monthly_return
    return net_worth + growth + contribution, growth


def month_point(
    month: int,
    start: date,
    net_worth: float,
    age_now: Optional[int],
    contribution: float,
    growth: float,
    safe_withdrawal_rate: float,
) -> ProjectionMonth:
    return ProjectionMonth(
        month=month,
        date=add_months(start, month),
        net_worth=net_worth,
        passive_income=net_worth * safe_withdrawal_rate / 12,
        age=age_now + month / 12 if age_now is not None else None,
        contribution=contribution,
        growth=growth,
    )


def project_forward(
    snapshot: Snapshot,
    months: int,
    annual_return: Optional[float] = None,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> list[ProjectionMonth]:
    """Month-indexed net worth trajectory under constant-return compounding.

    Produces ``months + 1`` points; index 0 is today with no contribution or growth.
    """
    today = resolve_today(today)
    if annual_return is None:
        annual_return = assumptions.resolved_return(snapshot)
    monthly_return = annual_return / 12
    monthly_savings = snapshot.monthly_savings
    swr = assumptions.safe_withdrawal_rate
    age_now = current_age(snapshot.date_of_birth, today)

    net_worth = snapshot.net_worth
    points = [month_point(0, today, net_worth, age_now, 0.0, 0.0, swr)]
    for month in range(1, months + 1):
        net_worth, growth = compound_month(net_worth, monthly_return, monthly_savings)
        points.append(month_point(month, today, net_worth, age_now, monthly_savings, growth, swr))

    logger.debug("Projected %d months at %.2f%% annual return", months, annual_return * 100)
    return points


def trajectory_frame(points: Iterable[ProjectionMonth]) -> pd.DataFrame:
    """Tabular view of a trajectory indexed by month."""
    return pd.DataFrame.from_records([asdict(p) for p in points]).set_index("month")
