from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass, field, fields
from datetime import date
from typing import Dict, List, Optional, Union

import pandas as pd

from fire_horizon.validation.checks import validate_withdrawal

from .dates import resolve_today
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions

logger = logging.getLogger(__name__)

# Guardrails (Guyton-Klinger)
GUARDRAIL_FLOOR = 0.80
GUARDRAIL_CEILING = 1.20
GUARDRAIL_TRIGGER = 0.20
GUARDRAIL_STEP = 0.10

# Bucket split of the starting portfolio
CASH_SHARE = 0.15
BOND_SHARE = 0.30
STOCK_SHARE = 0.55
CASH_TARGET_YEARS = 3
REFILL_SHARE = 0.10  # max share of the stock pool moved to cash per year

VARIABLE_FLOOR_SHARE = 0.5


class WithdrawalStrategy(str, enum.Enum):
    CLASSIC = "classic"
    VARIABLE = "variable"
    GUARDRAILS = "guardrails"
    BUCKET = "bucket"


@dataclass(frozen=True)
class WithdrawalYear:
    age: int
    year: int
    start_balance: float
    withdrawal: float
    pension_income: float
    growth: float
    end_balance: float


@dataclass
class WithdrawalResult:
    strategy: WithdrawalStrategy
    monthly_withdrawal: float
    yearly_sustainable: float
    success_years: int
    total_years: int
    schedule: List[WithdrawalYear] = field(default_factory=list)
    depleted: bool = False

    def schedule_frame(self) -> pd.DataFrame:
        columns = [f.name for f in fields(WithdrawalYear)]
        frame = pd.DataFrame.from_records([asdict(row) for row in self.schedule], columns=columns)
        return frame.set_index("age")


def compute_withdrawal(
    start_portfolio: float,
    retirement_age: int,
    target_age: int,
    strategy: Union[WithdrawalStrategy, str],
    yearly_expenses: float,
    annual_return: Optional[float] = None,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> WithdrawalResult:
    """Year-by-year decumulation schedule from retirement to the target age."""
    strategy = WithdrawalStrategy(strategy)
    validate_withdrawal(start_portfolio, yearly_expenses)
    if annual_return is None:
        annual_return = assumptions.default_return

    total_years = target_age - retirement_age
    if total_years <= 0:
        logger.warning("Empty withdrawal horizon: retirement age %s, target age %s", retirement_age, target_age)
        return WithdrawalResult(strategy, 0.0, 0.0, success_years=0, total_years=0)

    first_year = resolve_today(today).year
    swr = assumptions.safe_withdrawal_rate
    schedule: List[WithdrawalYear] = []
    balance = start_portfolio
    depleted = False
    success_years = 0

    base_withdrawal = start_portfolio * swr
    guardrail_floor = base_withdrawal * GUARDRAIL_FLOOR
    guardrail_ceiling = base_withdrawal * GUARDRAIL_CEILING
    running_withdrawal = base_withdrawal

    cash = bonds = stocks = 0.0
    if strategy is WithdrawalStrategy.BUCKET:
        cash = start_portfolio * CASH_SHARE
        bonds = start_portfolio * BOND_SHARE
        stocks = start_portfolio * STOCK_SHARE

    for y in range(total_years):
        age = retirement_age + y
        pension_income = assumptions.pension_yearly if age >= assumptions.pension_age else 0.0
        needed = max(0.0, yearly_expenses - pension_income)

        if strategy is WithdrawalStrategy.BUCKET:
            start_balance = cash + bonds + stocks
            withdrawal = min(needed, start_balance)

            from_cash = min(withdrawal, cash)
            cash -= from_cash
            from_bonds = min(withdrawal - from_cash, bonds)
            bonds -= from_bonds
            stocks = max(0.0, stocks - (withdrawal - from_cash - from_bonds))

            # Cash does not grow
            growth = bonds * assumptions.bond_return + stocks * annual_return
            bonds *= 1 + assumptions.bond_return
            stocks *= 1 + annual_return

            target_cash = yearly_expenses * CASH_TARGET_YEARS
            if cash < target_cash and stocks > target_cash:
                refill = min(target_cash - cash, stocks * REFILL_SHARE)
                cash += refill
                stocks -= refill

            balance = cash + bonds + stocks
        else:
            start_balance = balance
            if strategy is WithdrawalStrategy.CLASSIC:
                withdrawal = min(needed, balance)
            elif strategy is WithdrawalStrategy.VARIABLE:
                withdrawal = min(max(balance * swr, needed * VARIABLE_FLOOR_SHARE), balance)
            else:
                if y == 0:
                    running_withdrawal = needed
                else:
                    prev = schedule[-1]
                    prev_start = prev.start_balance or start_portfolio
                    realized = (
                        (balance - prev_start + prev.withdrawal - prev.pension_income) / prev_start
                        if prev_start > 0
                        else 0.0
                    )
                    if realized > GUARDRAIL_TRIGGER:
                        running_withdrawal = min(running_withdrawal * (1 + GUARDRAIL_STEP), guardrail_ceiling)
                    elif realized < -GUARDRAIL_TRIGGER:
                        running_withdrawal = max(running_withdrawal * (1 - GUARDRAIL_STEP), guardrail_floor)
                    running_withdrawal *= 1 + assumptions.inflation
                withdrawal = min(running_withdrawal, balance)

            growth = (balance - withdrawal) * annual_return
            balance = balance - withdrawal + growth

        schedule.append(
            WithdrawalYear(
                age=age,
                year=first_year + y,
                start_balance=start_balance,
                withdrawal=withdrawal,
                pension_income=pension_income,
                growth=growth,
                end_balance=max(0.0, balance),
            )
        )

        if balance <= 0 and not depleted:
            depleted = True
            success_years = y + 1
        balance = max(0.0, balance)

    if not depleted:
        success_years = total_years

    first_withdrawal = schedule[0].withdrawal
    return WithdrawalResult(
        strategy=strategy,
        monthly_withdrawal=first_withdrawal / 12,
        yearly_sustainable=first_withdrawal,
        success_years=success_years,
        total_years=total_years,
        schedule=schedule,
        depleted=depleted,
    )


def compare_strategies(
    start_portfolio: float,
    retirement_age: int,
    target_age: int,
    yearly_expenses: float,
    annual_return: Optional[float] = None,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> Dict[WithdrawalStrategy, WithdrawalResult]:
    """Run every strategy on the same plan."""
    return {
        strategy: compute_withdrawal(
            start_portfolio,
            retirement_age,
            target_age,
            strategy,
            yearly_expenses,
            annual_return,
            assumptions=assumptions,
            today=today,
        )
        for strategy in WithdrawalStrategy
    }
