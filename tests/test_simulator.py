from datetime import date

import pytest

from fire_horizon.core.inputs import HorizonAssumptions, MonteCarloSettings, Snapshot
from fire_horizon.core.scenarios import base_snapshot, market_weather_assumptions
from fire_horizon.core.simulator import PERCENTILES, run_monte_carlo, simulation_seed

TODAY = date(2026, 1, 15)
SMALL = MonteCarloSettings(simulations=200, years=20)


def test_result_shape():
    result = run_monte_carlo(base_snapshot(), SMALL, today=TODAY)

    assert result.simulations == 200
    assert result.years == 20
    assert set(result.percentiles) == set(PERCENTILES)
    assert all(len(values) == 21 for values in result.percentiles.values())
    assert all(values[0] == 50_000 for values in result.percentiles.values())


def test_percentiles_are_ordered_every_year():
    result = run_monte_carlo(base_snapshot(), SMALL, today=TODAY)
    bands = [result.percentiles[key] for key in ("p10", "p25", "p50", "p75", "p90")]

    for year in range(result.years + 1):
        column = [band[year] for band in bands]
        assert column == sorted(column)


def test_runs_are_reproducible():
    first = run_monte_carlo(base_snapshot(), SMALL, today=TODAY)
    second = run_monte_carlo(base_snapshot(), SMALL, today=TODAY)

    assert first.percentiles == second.percentiles
    assert first.fire_ages == second.fire_ages
    assert first.fire_prob == second.fire_prob


def test_parallel_workers_match_sequential():
    sequential = run_monte_carlo(base_snapshot(), SMALL, today=TODAY)
    parallel = run_monte_carlo(
        base_snapshot(), MonteCarloSettings(simulations=200, years=20, workers=2), today=TODAY
    )

    assert parallel.percentiles == sequential.percentiles
    assert parallel.fire_ages == sequential.fire_ages


def test_fire_ages_use_birth_date():
    result = run_monte_carlo(base_snapshot(), MonteCarloSettings(simulations=300, years=40), today=TODAY)

    assert result.fire_ages == sorted(result.fire_ages)
    assert 0 < result.fire_prob <= 1
    assert len(result.fire_ages) == round(result.fire_prob * 300)
    assert all(35 < age <= 35 + 40 for age in result.fire_ages)
    assert result.p10_fire_age <= result.p50_fire_age <= result.p90_fire_age


def test_fire_ages_fall_back_to_elapsed_years():
    snapshot = Snapshot(total_assets=50_000, total_debts=0, monthly_income=3_000, monthly_expenses=2_000)
    result = run_monte_carlo(snapshot, MonteCarloSettings(simulations=100, years=40), today=TODAY)

    assert result.fire_ages
    assert all(1 <= age <= 40 for age in result.fire_ages)


def test_hopeless_savings_never_cross():
    snapshot = Snapshot(total_assets=1_000, total_debts=0, monthly_income=500, monthly_expenses=4_000)
    result = run_monte_carlo(snapshot, MonteCarloSettings(simulations=1000, years=40), today=TODAY)

    assert result.fire_prob == 0
    assert result.fire_ages == []
    assert result.p10_fire_age is None
    assert result.p50_fire_age is None
    assert result.p90_fire_age is None
    assert min(result.percentiles["p10"]) >= 0


def test_zero_volatility_is_deterministic_compounding():
    assumptions = HorizonAssumptions(default_volatility=0.0)
    snapshot = Snapshot(total_assets=10_000, total_debts=0, monthly_income=1_500, monthly_expenses=1_000)
    result = run_monte_carlo(snapshot, MonteCarloSettings(simulations=10, years=3), assumptions=assumptions, today=TODAY)

    expected = [10_000.0]
    for _ in range(3):
        expected.append(expected[-1] * 1.07 + 6_000)
    for values in result.percentiles.values():
        assert values == pytest.approx(expected)


def test_market_weather_shifts_outcomes():
    bull = run_monte_carlo(base_snapshot(), SMALL, assumptions=market_weather_assumptions("bull"), today=TODAY)
    bear = run_monte_carlo(base_snapshot(), SMALL, assumptions=market_weather_assumptions("bear"), today=TODAY)

    assert bull.percentiles["p50"][-1] > bear.percentiles["p50"][-1]


def test_settings_default_from_assumptions():
    assumptions = HorizonAssumptions(monte_carlo_simulations=50, monte_carlo_years=5)
    result = run_monte_carlo(base_snapshot(), assumptions=assumptions, today=TODAY)

    assert (result.simulations, result.years) == (50, 5)


def test_percentile_frame():
    frame = run_monte_carlo(base_snapshot(), SMALL, today=TODAY).percentile_frame()

    assert frame.index.name == "year"
    assert list(frame.columns) == ["p10", "p25", "p50", "p75", "p90"]
    assert len(frame) == 21


def test_seed_formula():
    assert [simulation_seed(i) for i in range(3)] == [42, 7961, 15880]


@pytest.mark.parametrize(
    "settings",
    [MonteCarloSettings(simulations=0), MonteCarloSettings(years=-1), MonteCarloSettings(workers=0)],
)
def test_invalid_settings(settings):
    with pytest.raises(ValueError):
        run_monte_carlo(base_snapshot(), settings, today=TODAY)


def test_negative_expenses_rejected():
    snapshot = Snapshot(total_assets=1_000, total_debts=0, monthly_income=500, monthly_expenses=-1)
    with pytest.raises(ValueError):
        run_monte_carlo(snapshot, SMALL, today=TODAY)
