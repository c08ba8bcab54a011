"""
Tests for investment asset evolution.

This module tests yearly growth, contributions within their window,
withdrawals clamped to the available value and per-type aggregation.
"""

import pytest

from lifeplan.models.asset_evolution import (
    AssetEvolutionEngine,
    AssetState,
    create_asset_states,
)
from lifeplan.models.household import Asset


class TestEvolve:
    """Test the growth, contribution, withdrawal order for a single asset."""

    def test_growth_then_contribution(self):
        asset = Asset(name="Fund", current_value=100, return_rate=10, yearly_contribution=10)
        state = AssetState(name="Fund", value=100)

        contribution, withdrawal = AssetEvolutionEngine.evolve(asset, state, 30)

        # Growth applies before the contribution is added
        assert state.value == pytest.approx(120)
        assert contribution == 10
        assert withdrawal == 0

    def test_contribution_end_age_is_inclusive(self):
        asset = Asset(name="Fund", yearly_contribution=10, contribution_end_age=40)

        assert asset.is_contributing(40)
        assert not asset.is_contributing(41)

    def test_contributions_default_to_retirement_age(self):
        """Test that an open-ended contribution stops after the fallback end age."""
        asset = Asset(name="Fund", yearly_contribution=10)

        assert asset.is_contributing(65, 65)
        assert not asset.is_contributing(66, 65)
        assert asset.is_contributing(90)

    def test_own_end_age_wins_over_fallback(self):
        asset = Asset(name="Fund", yearly_contribution=10, contribution_end_age=50)

        assert not asset.is_contributing(51, 65)

    def test_contributions_stop_at_withdrawal_age(self):
        asset = Asset(
            name="Fund", yearly_contribution=10, withdrawal_age=65, withdrawal_amount=5
        )
        state = AssetState(name="Fund", value=100)

        contribution, withdrawal = AssetEvolutionEngine.evolve(asset, state, 65)

        assert contribution == 0
        assert withdrawal == 5
        assert state.value == 95

    def test_withdrawal_is_clamped(self):
        """Test that withdrawals never take more than the asset holds."""
        asset = Asset(
            name="Fund", current_value=50, withdrawal_age=65, withdrawal_amount=100
        )
        state = AssetState(name="Fund", value=50)

        assert AssetEvolutionEngine.evolve(asset, state, 65) == (0.0, 50)
        assert state.value == 0
        assert AssetEvolutionEngine.evolve(asset, state, 66) == (0.0, 0.0)
        assert state.value == 0

    def test_negative_return_never_goes_below_zero(self):
        asset = Asset(name="Crash", return_rate=-150)
        state = AssetState(name="Crash", value=100)

        AssetEvolutionEngine.evolve(asset, state, 30)

        assert state.value == 0


class TestAssetEvolutionEngine:
    """Test yearly processing across all assets."""

    def test_process_year_totals(self, make_snapshot):
        snapshot = make_snapshot(
            assets=[
                {
                    "name": "Index",
                    "type": "nisa",
                    "amount": 100,
                    "return_rate": 10,
                    "yearly_contribution": 20,
                },
                {
                    "name": "Savings",
                    "type": "deposit",
                    "amount": 50,
                    "withdrawal_age": 30,
                    "withdrawal_amount": 10,
                },
                {"name": "Bonds", "type": "nisa", "amount": 30},
            ]
        )
        states = create_asset_states(snapshot)
        result = AssetEvolutionEngine(snapshot=snapshot).process_year(30, states)

        assert result.total_contribution == 20
        assert result.total_withdrawal == 10
        assert result.asset_balances == pytest.approx(
            {"Index": 130, "Savings": 40, "Bonds": 30}
        )
        assert result.asset_type_balances == pytest.approx({"nisa": 160, "deposit": 40})
        assert result.total_value == pytest.approx(200)

    def test_states_carry_between_years(self, make_snapshot):
        snapshot = make_snapshot(assets=[{"name": "Fund", "amount": 100, "return_rate": 10}])
        states = create_asset_states(snapshot)
        engine = AssetEvolutionEngine(snapshot=snapshot)

        engine.process_year(30, states)
        result = engine.process_year(31, states)

        assert result.asset_balances["Fund"] == pytest.approx(121)
        # The snapshot itself is left untouched
        assert snapshot.assets[0].current_value == 100

    def test_negative_starting_value_is_clamped(self, make_snapshot):
        snapshot = make_snapshot(assets=[{"name": "Odd", "amount": -10}])
        assert create_asset_states(snapshot)[0].value == 0

    def test_retirement_age_ends_contributions(self, make_snapshot):
        snapshot = make_snapshot(
            user_settings={"retirement_age": 65},
            assets=[{"name": "Fund", "yearly_contribution": 10}],
        )
        engine = AssetEvolutionEngine(snapshot=snapshot)
        states = create_asset_states(snapshot)

        assert engine.process_year(65, states).total_contribution == 10
        assert engine.process_year(66, states).total_contribution == 0
