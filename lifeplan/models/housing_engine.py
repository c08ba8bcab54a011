"""
Housing cost engine for life-plan projections.

Rental homes cost twelve months of rent, the initial deposit in the move-in
year and a renewal fee every N years. The deposit is held as a separate
net-worth bucket while living there and comes back as income in the move-out
year. Owned homes cost property tax, monthly maintenance and, until the payoff
age, the monthly payment of a simplified housing loan whose balance is tracked
by the liability engine.
"""

from typing import List

from pydantic import BaseModel, Field

from .amortization import MONTHS_PER_YEAR
from .household import HouseholdSnapshot, Housing
from .ledger import LineItem


class HousingYear(BaseModel):
    """Housing cash flows for one simulated year."""

    cost_items: List[LineItem] = Field(default_factory=list, description="Housing costs")
    deposit_returns: List[LineItem] = Field(
        default_factory=list, description="Deposits returned at move-out (income)"
    )
    deposit_balance: float = Field(default=0.0, description="Deposits currently held")


class HousingEngine(BaseModel):
    """Engine for rental and owned housing costs."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def process_year(self, age: int) -> HousingYear:
        """
        Compute housing costs, deposit returns and held deposits at ``age``.

        Args:
            age: Planner's simulated age

        Returns:
            HousingYear for the age
        """
        result = HousingYear()
        for housing in self.snapshot.housings:
            if housing.type == "rental":
                self._process_rental(housing, age, result)
            elif housing.is_active(age):
                result.cost_items.extend(self._owned_costs(housing, age))
        return result

    def _process_rental(self, housing: Housing, age: int, result: HousingYear) -> None:
        deposit = housing.initial_cost
        if deposit > 0 and self._holds_deposit(housing, age):
            result.deposit_balance += deposit

        if not housing.is_active(age):
            return

        if housing.rent > 0:
            result.cost_items.append(
                LineItem(
                    label=f"{housing.name} (rent)",
                    amount=housing.rent * MONTHS_PER_YEAR,
                )
            )

        if age == housing.start_age and deposit > 0:
            result.cost_items.append(
                LineItem(label=f"{housing.name} (initial cost)", amount=deposit)
            )

        years_since_start = age - housing.start_age
        if (
            housing.renewal_interval
            and housing.renewal_cost > 0
            and years_since_start > 0
            and years_since_start % housing.renewal_interval == 0
        ):
            result.cost_items.append(
                LineItem(label=f"{housing.name} (renewal)", amount=housing.renewal_cost)
            )

        if housing.end_age is not None and age == housing.end_age and deposit > 0:
            result.deposit_returns.append(
                LineItem(label=f"{housing.name} (deposit return)", amount=deposit)
            )

    @staticmethod
    def _holds_deposit(housing: Housing, age: int) -> bool:
        if age < housing.start_age:
            return False
        return housing.end_age is None or age < housing.end_age

    @staticmethod
    def _owned_costs(housing: Housing, age: int) -> List[LineItem]:
        items = []
        if housing.tax > 0:
            items.append(
                LineItem(label=f"{housing.name} (property tax)", amount=housing.tax)
            )
        if housing.maintenance_cost > 0:
            items.append(
                LineItem(
                    label=f"{housing.name} (maintenance)",
                    amount=housing.maintenance_cost * MONTHS_PER_YEAR,
                )
            )
        if (
            housing.loan_monthly > 0
            and housing.loan_end_age is not None
            and age <= housing.loan_end_age
        ):
            items.append(
                LineItem(
                    label=f"{housing.name} (loan)",
                    amount=housing.loan_monthly * MONTHS_PER_YEAR,
                )
            )
        return items
