from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Snapshot:
    total_assets: float
    total_debts: float
    monthly_income: float
    monthly_expenses: float
    monthly_contributions: float = 0.0  # informational, compounding uses income - expenses
    yearly_must_expenses: float = 0.0
    date_of_birth: Optional[date] = None
    expected_return: Optional[float] = None  # annual fraction, overrides the default

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_debts

    @property
    def monthly_savings(self) -> float:
        return self.monthly_income - self.monthly_expenses

    @property
    def yearly_expenses(self) -> float:
        return self.monthly_expenses * 12


@dataclass(frozen=True)
class LifeEvent:
    name: str
    event_type: str = "custom"
    target_age: Optional[int] = None
    one_time_cost: float = 0.0
    monthly_cost_change: float = 0.0
    monthly_income_change: float = 0.0
    duration_months: int = 0


@dataclass(frozen=True)
class HorizonAssumptions:
    safe_withdrawal_rate: float = 0.04
    default_return: float = 0.07
    default_volatility: float = 0.15
    inflation: float = 0.02
    pension_age: int = 67
    pension_monthly: float = 1380.0  # single-person state pension, gross
    search_cap_months: int = 600  # 50 years
    bond_return: float = 0.03
    monte_carlo_simulations: int = 1000
    monte_carlo_years: int = 40
    scenario_years: int = 40

    @property
    def pension_yearly(self) -> float:
        return self.pension_monthly * 12

    def resolved_return(self, snapshot: Snapshot) -> float:
        """Snapshot override first, then the configured default."""
        return snapshot.expected_return if snapshot.expected_return is not None else self.default_return


@dataclass(frozen=True)
class MonteCarloSettings:
    simulations: int = 1000
    years: int = 40
    workers: int = 1  # >1 fans paths out over processes

    @classmethod
    def from_assumptions(cls, assumptions: HorizonAssumptions) -> "MonteCarloSettings":
        return cls(simulations=assumptions.monte_carlo_simulations, years=assumptions.monte_carlo_years)


DEFAULT_ASSUMPTIONS = HorizonAssumptions()

