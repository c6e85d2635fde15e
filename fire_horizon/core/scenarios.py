from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import current_age, resolve_today
from .engine import ProjectionMonth, compound_month, month_point
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioProfile:
    name: str
    label: str
    color: str
    expense_growth: float  # annual change in expenses
    savings_growth: float  # annual change in savings after the yearly recompute
    expense_multiplier: float = 1.0  # applied once at the start
    contribution_multiplier: float = 1.0


@dataclass(frozen=True)
class ScenarioPath:
    name: str
    label: str
    color: str
    months: list[ProjectionMonth]
    fire_month: Optional[int]
    fire_age: Optional[float]


DRIFTER = ScenarioProfile("drifter", "Drifter", "#ef4444", 0.03, -0.02, 1.05, 0.8)
CURRENT = ScenarioProfile("current", "Current Course", "#8B5CB8", 0.0, 0.0, 1.0, 1.0)
OPTIMIZER = ScenarioProfile("optimizer", "Optimizer", "#10b981", -0.01, 0.02, 0.9, 1.2)

DEFAULT_PROFILES = (DRIFTER, CURRENT, OPTIMIZER)


MARKET_WEATHER = {
    "normal": {"label": "Normal", "return": 0.07, "volatility": 0.15, "description": "Average market return"},
    "bull": {"label": "Bull market", "return": 0.12, "volatility": 0.12, "description": "Strong market, high return"},
    "bear": {"label": "Bear market", "return": -0.20, "volatility": 0.25, "description": "Crash in year one, recovery after"},
    "stagflation": {"label": "Stagflation", "return": 0.02, "volatility": 0.18, "description": "Low return, high inflation"},
    "historical": {"label": "Historical", "return": 0.08, "volatility": 0.17, "description": "Long-run index-like patterns"},
}


def market_weather_assumptions(name: str, base: Optional[HorizonAssumptions] = None) -> HorizonAssumptions:
    """Copy of the assumptions with return and volatility taken from a named preset."""
    if name not in MARKET_WEATHER:
        raise ValueError(f"Unknown market weather '{name}'. Expected one of: {', '.join(MARKET_WEATHER)}.")
    preset = MARKET_WEATHER[name]
    return dataclasses.replace(
        base or DEFAULT_ASSUMPTIONS,
        default_return=preset["return"],
        default_volatility=preset["volatility"],
    )


def base_snapshot() -> Snapshot:
    """A reasonable starting point for callers and examples."""
    return Snapshot(
        total_assets=50_000,
        total_debts=0,
        monthly_income=3_000,
        monthly_expenses=2_000,
        monthly_contributions=500,
        yearly_must_expenses=18_000,
        date_of_birth=date(1990, 6, 15),
    )


def simulate_scenario(
    snapshot: Snapshot,
    profile: ScenarioProfile,
    months: int,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: date,
) -> ScenarioPath:
    """Single behavioural path; the FIRE target follows the scenario's own drifting expenses."""
    swr = assumptions.safe_withdrawal_rate
    monthly_return = assumptions.default_return / 12
    age_now = current_age(snapshot.date_of_birth, today)

    net_worth = snapshot.net_worth
    expenses = snapshot.monthly_expenses * profile.expense_multiplier
    savings = (snapshot.monthly_income - expenses) * profile.contribution_multiplier
    contribution = growth = 0.0
    fire_month: Optional[int] = None
    fire_age: Optional[float] = None
    points: list[ProjectionMonth] = []

    for month in range(months + 1):
        point = month_point(month, today, net_worth, age_now, contribution, growth, swr)
        points.append(point)

        target = expenses * 12 / swr
        if fire_month is None and target > 0 and net_worth >= target:
            fire_month = month
            fire_age = point.age

        if month < months:
            contribution = savings
            net_worth, growth = compound_month(net_worth, monthly_return, savings)
            # Yearly drift
            if month > 0 and month % 12 == 0:
                expenses *= 1 + profile.expense_growth
                savings = max(0.0, snapshot.monthly_income - expenses) * (1 + profile.savings_growth)

    return ScenarioPath(
        name=profile.name,
        label=profile.label,
        color=profile.color,
        months=points,
        fire_month=fire_month,
        fire_age=fire_age,
    )


def compute_scenarios(
    snapshot: Snapshot,
    years: Optional[int] = None,
    *,
    profiles: tuple[ScenarioProfile, ...] = DEFAULT_PROFILES,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> list[ScenarioPath]:
    """Drifter / current / optimizer trajectories over a shared horizon."""
    today = resolve_today(today)
    years = assumptions.scenario_years if years is None else years
    months = years * 12
    paths = [simulate_scenario(snapshot, p, months, assumptions=assumptions, today=today) for p in profiles]
    logger.debug("Scenario FIRE months: %s", {p.name: p.fire_month for p in paths})
    return paths
