from __future__ import annotations

from fire_horizon.core.inputs import HorizonAssumptions, MonteCarloSettings, Snapshot


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def validate_snapshot(inputs: Snapshot) -> None:
    _require(inputs.total_assets >= 0, "Total assets cannot be negative.")
    _require(inputs.total_debts >= 0, "Total debts cannot be negative.")
    _require(inputs.monthly_expenses >= 0, "Monthly expenses cannot be negative.")
    _require(inputs.yearly_must_expenses >= 0, "Essential expenses cannot be negative.")
    _require(inputs.expected_return is None or inputs.expected_return > -1, "Expected return must be above -100%.")


def validate_assumptions(inputs: HorizonAssumptions) -> None:
    _require(inputs.safe_withdrawal_rate > 0, "Safe withdrawal rate must be positive.")
    _require(inputs.default_volatility >= 0, "Volatility cannot be negative.")
    _require(inputs.pension_age >= 0, "Pension age cannot be negative.")
    _require(inputs.pension_monthly >= 0, "Pension amount cannot be negative.")
    _require(inputs.search_cap_months > 0, "Search cap must be positive.")
    _require(inputs.monte_carlo_simulations > 0, "Number of simulations must be positive.")
    _require(inputs.monte_carlo_years >= 0, "Simulation horizon cannot be negative.")
    _require(inputs.scenario_years >= 0, "Scenario horizon cannot be negative.")


def validate_monte_carlo(inputs: MonteCarloSettings) -> None:
    _require(inputs.simulations > 0, "Number of simulations must be positive.")
    _require(inputs.years >= 0, "Simulation horizon cannot be negative.")
    _require(inputs.workers >= 1, "Worker count must be at least 1.")


def validate_withdrawal(start_portfolio: float, yearly_expenses: float) -> None:
    _require(start_portfolio >= 0, "Starting portfolio cannot be negative.")
    _require(yearly_expenses >= 0, "Yearly expenses cannot be negative.")
