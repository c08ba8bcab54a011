"""
Expense processing engine for life-plan projections.

This module handles the recurring cost categories that carry no running state:
basic living expenses with inflation, education costs keyed to a family
member's age, and insurance premiums.
"""

from typing import List

from pydantic import BaseModel, Field

from .household import Education, HouseholdSnapshot
from .ledger import LineItem
from .numeric import compound
from .timeline import member_age


class ExpenseEngine(BaseModel):
    """Engine for basic, education and insurance expenses."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def get_basic_expenses(self, age: int) -> List[LineItem]:
        """Get inflation-compounded living expenses active at ``age``."""
        return [
            LineItem(
                label=expense.name,
                amount=compound(
                    expense.amount, expense.inflation_rate, age - expense.start_age
                ),
            )
            for expense in self.snapshot.expenses
            if expense.is_active(age)
        ]

    def get_education_costs(self, age: int, year: int) -> List[LineItem]:
        """
        Get education costs whose owner is within the funded age range.

        Args:
            age: Planner's simulated age
            year: Calendar year, used to age members other than the planner

        Returns:
            One line item per active education fund, labelled with the owner
        """
        items = []
        for education in self.snapshot.education_funds:
            label = self._education_label(education, age, year)
            if label is not None:
                items.append(LineItem(label=label, amount=education.amount))
        return items

    def get_insurance_premiums(self, age: int, current_age: int) -> List[LineItem]:
        """
        Get premiums for policies within their payment window.

        Args:
            age: Planner's simulated age
            current_age: Age at the start of the projection, where policies
                with a premium period start paying

        Returns:
            One line item per policy paying at ``age``
        """
        return [
            LineItem(label=insurance.name, amount=insurance.premium)
            for insurance in self.snapshot.insurances
            if insurance.is_active(age, current_age)
        ]

    def _education_label(self, education: Education, age: int, year: int):
        owner = self.snapshot.find_member(education.owner_id)
        if owner is None:
            return None
        owner_age = member_age(owner, age, year)
        if owner_age is None:
            return None
        if not education.start_age <= owner_age <= education.end_age:
            return None
        return f"{education.name} ({owner.name})"
