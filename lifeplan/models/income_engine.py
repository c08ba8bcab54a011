"""
Income processing engine for life-plan projections.

This module sums the steady income of a simulated year: recurring incomes
compounded by their growth rate from their own start age, and pensions gated
by the owning family member's derived age and whether that member is alive.
"""

from typing import List

from pydantic import BaseModel, Field

from .household import HouseholdSnapshot, Income, Pension
from .ledger import LineItem
from .numeric import compound
from .timeline import is_alive, member_age


class IncomeEngine(BaseModel):
    """Engine for steady income (salaries, business income, pensions)."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def get_annual_income(self, age: int, year: int) -> List[LineItem]:
        """
        Get all income line items for a simulated year.

        Args:
            age: Planner's simulated age
            year: Calendar year

        Returns:
            Line items for active incomes followed by active pensions
        """
        items = [
            LineItem(label=income.name, amount=self._calculate_income(income, age))
            for income in self.snapshot.incomes
            if income.is_active(age)
        ]

        for pension in self.snapshot.pensions:
            item = self._calculate_pension(pension, age, year)
            if item is not None:
                items.append(item)

        return items

    def get_total_annual_income(self, age: int, year: int) -> float:
        """Get total steady income for a simulated year."""
        return sum(item.amount for item in self.get_annual_income(age, year))

    def _calculate_income(self, income: Income, age: int) -> float:
        return compound(income.amount, income.growth_rate, age - income.start_age)

    def _calculate_pension(self, pension: Pension, age: int, year: int):
        owner = self.snapshot.find_member(pension.owner_id)
        if owner is None:
            return None

        owner_age = member_age(owner, age, year)
        if owner_age is None or not is_alive(owner, owner_age):
            return None
        if owner_age < pension.start_age:
            return None

        return LineItem(label=f"{pension.name} ({owner.name})", amount=pension.amount)
