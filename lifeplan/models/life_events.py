"""
One-time life events for life-plan projections.

Events fire in the single year their trigger age is reached. Insurance
surrender or coverage payouts are folded in here as negative costs rather than
as steady income.
"""

from typing import List

from pydantic import BaseModel, Field

from .household import HouseholdSnapshot
from .ledger import LineItem


class LifeEventEngine(BaseModel):
    """Engine for life events and insurance payouts."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def get_events(self, age: int) -> List[LineItem]:
        """Get event line items triggered at ``age`` (positive = outflow)."""
        items = [
            LineItem(label=event.name, amount=event.cost)
            for event in self.snapshot.life_events
            if event.age == age
        ]
        items.extend(
            LineItem(label=f"{insurance.name} (surrender)", amount=-insurance.surrender_amount)
            for insurance in self.snapshot.insurances
            if insurance.surrender_age == age and insurance.surrender_amount
        )
        return items
