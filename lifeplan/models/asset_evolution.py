"""
Investment asset evolution engine for life-plan projections.

Each simulated year an asset first grows by its return rate, then receives
its contribution (while inside the contribution window, which ends at the
planner's retirement age when the asset sets no end age, and before
withdrawals begin), then pays out its withdrawal (from the withdrawal age on).
Withdrawals are clamped to the available value so an asset never goes below
zero.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .household import Asset, HouseholdSnapshot
from .ledger import LineItem


class AssetState(BaseModel):
    """Running value of one investment asset."""

    name: str = Field(..., description="Asset name")
    asset_type: str = Field(default="other", description="Asset kind")
    value: float = Field(..., ge=0, description="Current value")


def create_asset_states(snapshot: HouseholdSnapshot) -> List[AssetState]:
    """Copy each asset into mutable working state, clamping negatives to zero."""
    return [
        AssetState(
            name=asset.name,
            asset_type=asset.asset_type,
            value=max(0.0, asset.current_value),
        )
        for asset in snapshot.assets
    ]


class AssetYear(BaseModel):
    """Asset flows and closing values for one simulated year."""

    contributions: List[LineItem] = Field(
        default_factory=list, description="Contribution per asset"
    )
    withdrawals: List[LineItem] = Field(
        default_factory=list, description="Withdrawal per asset"
    )
    asset_balances: Dict[str, float] = Field(
        default_factory=dict, description="Closing value per asset name"
    )
    asset_type_balances: Dict[str, float] = Field(
        default_factory=dict, description="Closing value per asset type"
    )

    @property
    def total_contribution(self) -> float:
        return sum(item.amount for item in self.contributions)

    @property
    def total_withdrawal(self) -> float:
        return sum(item.amount for item in self.withdrawals)

    @property
    def total_value(self) -> float:
        return sum(self.asset_balances.values())


class AssetEvolutionEngine(BaseModel):
    """Engine for yearly asset growth, contributions and withdrawals."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def process_year(self, age: int, states: List[AssetState]) -> AssetYear:
        """
        Evolve every asset by one year, mutating the given states.

        Args:
            age: Planner's simulated age
            states: Asset states, index-aligned with ``snapshot.assets``

        Returns:
            AssetYear with flows and closing values
        """
        result = AssetYear()

        for asset, state in zip(self.snapshot.assets, states):
            contribution, withdrawal = self.evolve(
                asset, state, age, self.snapshot.user_settings.retirement_age
            )
            if contribution:
                result.contributions.append(
                    LineItem(label=asset.name, amount=contribution)
                )
            if withdrawal:
                result.withdrawals.append(LineItem(label=asset.name, amount=withdrawal))

            result.asset_balances[state.name] = (
                result.asset_balances.get(state.name, 0.0) + state.value
            )
            result.asset_type_balances[state.asset_type] = (
                result.asset_type_balances.get(state.asset_type, 0.0) + state.value
            )

        return result

    @staticmethod
    def evolve(
        asset: Asset,
        state: AssetState,
        age: int,
        default_contribution_end_age: Optional[int] = None,
    ):
        """Apply growth, contribution and withdrawal; return (contribution, withdrawal)."""
        if asset.return_rate:
            state.value = max(0.0, state.value * (1 + asset.return_rate / 100))

        contribution = 0.0
        if asset.is_contributing(age, default_contribution_end_age):
            contribution = asset.yearly_contribution
            state.value += contribution

        withdrawal = 0.0
        if asset.is_withdrawing(age) and state.value > 0:
            withdrawal = min(asset.withdrawal_amount, state.value)
            state.value = max(0.0, state.value - withdrawal)

        return contribution, withdrawal
