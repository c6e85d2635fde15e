from __future__ import annotations

import logging
import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from datetime import date
from functools import partial
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from fire_horizon.validation.checks import validate_assumptions, validate_monte_carlo, validate_snapshot

from .dates import current_age, resolve_today
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions, MonteCarloSettings, Snapshot
from .projection import fire_target
from .rng import SeededRandom

logger = logging.getLogger(__name__)

SEED_MULTIPLIER = 7919
SEED_OFFSET = 42
PERCENTILES = {"p10": 0.10, "p25": 0.25, "p50": 0.50, "p75": 0.75, "p90": 0.90}


@dataclass
class MonteCarloResult:
    simulations: int
    years: int
    percentiles: Dict[str, List[float]]
    fire_ages: List[int]
    fire_prob: float
    p10_fire_age: Optional[int]
    p50_fire_age: Optional[int]
    p90_fire_age: Optional[int]

    def percentile_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(self.percentiles)
        frame.index.name = "year"
        return frame


def simulation_seed(sim_idx: int) -> int:
    return sim_idx * SEED_MULTIPLIER + SEED_OFFSET


def _simulate_path(
    sim_idx: int,
    net_worth: float,
    yearly_savings: float,
    target: float,
    age_now: Optional[int],
    years: int,
    mean: float,
    volatility: float,
) -> Tuple[List[float], Optional[int]]:
    """Annually stepped path for one simulation; returns (net worth by year, age at first crossing)."""
    rng = SeededRandom(simulation_seed(sim_idx))
    path = [net_worth]
    crossed_at: Optional[int] = None

    for year in range(1, years + 1):
        annual_return = rng.normal(mean, volatility)
        net_worth = max(0.0, net_worth * (1 + annual_return) + yearly_savings)
        path.append(net_worth)
        if crossed_at is None and target > 0 and net_worth >= target:
            crossed_at = age_now + year if age_now is not None else year

    return path, crossed_at


def _pick(sorted_values, fraction: float):
    return sorted_values[int(math.floor(len(sorted_values) * fraction))]


def run_monte_carlo(
    snapshot: Snapshot,
    settings: Optional[MonteCarloSettings] = None,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> MonteCarloResult:
    settings = settings or MonteCarloSettings.from_assumptions(assumptions)
    validate_snapshot(snapshot)
    validate_assumptions(assumptions)
    validate_monte_carlo(settings)

    today = resolve_today(today)
    sims, years = settings.simulations, settings.years
    target = fire_target(snapshot.monthly_expenses, assumptions.safe_withdrawal_rate)

    run_path = partial(
        _simulate_path,
        net_worth=snapshot.net_worth,
        yearly_savings=snapshot.monthly_savings * 12,
        target=target,
        age_now=current_age(snapshot.date_of_birth, today),
        years=years,
        mean=assumptions.default_return,
        volatility=assumptions.default_volatility,
    )

    if settings.workers > 1:
        with ProcessPoolExecutor(max_workers=settings.workers) as pool:
            outcomes = list(pool.map(run_path, range(sims), chunksize=max(1, sims // (settings.workers * 4))))
    else:
        outcomes = [run_path(sim_idx) for sim_idx in range(sims)]

    paths = np.array([path for path, _ in outcomes], dtype=float)
    fire_ages = sorted(age for _, age in outcomes if age is not None)

    by_year = np.sort(paths, axis=0)
    percentiles = {label: _pick(by_year, fraction).tolist() for label, fraction in PERCENTILES.items()}

    result = MonteCarloResult(
        simulations=sims,
        years=years,
        percentiles=percentiles,
        fire_ages=fire_ages,
        fire_prob=len(fire_ages) / sims,
        p10_fire_age=_pick(fire_ages, 0.10) if fire_ages else None,
        p50_fire_age=_pick(fire_ages, 0.50) if fire_ages else None,
        p90_fire_age=_pick(fire_ages, 0.90) if fire_ages else None,
    )
    logger.debug("Monte Carlo: %d sims x %d years, fire_prob=%.3f", sims, years, result.fire_prob)
    return result
