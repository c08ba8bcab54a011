"""
Mutable working state of a projection run.

The snapshot is never modified; each run copies the parts that evolve from
year to year (cash, asset values, loan and mortgage balances) into a fresh
SimulationState that the year processor updates in place.
"""

from typing import List

from pydantic import BaseModel, Field

from ..asset_evolution import AssetState, create_asset_states
from ..household import HouseholdSnapshot
from ..liability_engine import (
    HousingLoanState,
    LoanState,
    create_housing_loan_states,
    create_loan_states,
)
from ..real_estate import RealEstateState, create_real_estate_states


class SimulationState(BaseModel):
    """Per-run state carried from one simulated year to the next."""

    cash: float = Field(..., description="Running cash balance")
    assets: List[AssetState] = Field(default_factory=list, description="Asset values")
    loans: List[LoanState] = Field(default_factory=list, description="Household loans")
    housing_loans: List[HousingLoanState] = Field(
        default_factory=list, description="Owned-home loans"
    )
    real_estates: List[RealEstateState] = Field(
        default_factory=list, description="Property mortgages"
    )

    @classmethod
    def from_snapshot(
        cls, snapshot: HouseholdSnapshot, current_age: int
    ) -> "SimulationState":
        """Initialize working state for a run starting at ``current_age``."""
        return cls(
            cash=snapshot.user_settings.current_savings,
            assets=create_asset_states(snapshot),
            loans=create_loan_states(snapshot),
            housing_loans=create_housing_loan_states(snapshot, current_age),
            real_estates=create_real_estate_states(snapshot),
        )
