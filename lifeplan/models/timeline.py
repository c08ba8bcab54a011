"""
Age/year timeline for life-plan projections.

This module maps simulated ages onto calendar years and derives the ages of
other household members, which gate pensions and education costs.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .household import FamilyMember, UserSettings

DEFAULT_SIMULATION_END_AGE = 85


def compute_current_age(birth_date: date, today: date) -> int:
    """
    Compute age in whole elapsed years.

    Args:
        birth_date: Date of birth
        today: Reference date ("now")

    Returns:
        Age, not counting a birthday that has not yet occurred this year
    """
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


class ProjectionTimeline(BaseModel):
    """Contiguous run of simulated ages with their calendar years."""

    current_age: int = Field(..., description="Age at the start of the projection")
    current_year: int = Field(..., description="Calendar year at the current age")
    end_age: int = Field(..., description="Last simulated age (inclusive)")

    @classmethod
    def from_settings(
        cls,
        settings: UserSettings,
        today: date,
        default_end_age: int = DEFAULT_SIMULATION_END_AGE,
    ) -> Optional["ProjectionTimeline"]:
        """Build the timeline for a planner; None when no birth date is known."""
        if settings.birth_date is None:
            return None
        end_age = settings.simulation_end_age
        if end_age is None:
            end_age = default_end_age
        return cls(
            current_age=compute_current_age(settings.birth_date, today),
            current_year=today.year,
            end_age=end_age,
        )

    def ages(self) -> List[int]:
        """Get the simulated ages in increasing order."""
        return list(range(self.current_age, self.end_age + 1))

    def year_for_age(self, age: int) -> int:
        """Get the calendar year in which the planner is ``age``."""
        return self.current_year + (age - self.current_age)

    def __len__(self) -> int:
        return max(0, self.end_age - self.current_age + 1)


def member_age(member: FamilyMember, age: int, year: int) -> Optional[int]:
    """
    Derive a family member's age for a simulated year.

    The planner's own age is the simulation age; everyone else is aged by
    calendar year of birth. Members without any birth information have no age.
    """
    if member.relation == "self":
        return age
    birth_year = member.effective_birth_year
    if birth_year is None:
        return None
    return year - birth_year


def is_alive(member: FamilyMember, age_of_member: int) -> bool:
    """A member is alive while no life expectancy is set or it is not exceeded."""
    return member.life_expectancy is None or age_of_member <= member.life_expectancy


def family_ages(
    members: Iterable[FamilyMember], age: int, year: int
) -> Dict[str, Optional[int]]:
    """Map member id to age for the year; None when not yet born or deceased."""
    ages: Dict[str, Optional[int]] = {}
    for member in members:
        value = member_age(member, age, year)
        if value is None or value < 0 or not is_alive(member, value):
            ages[member.id] = None
        else:
            ages[member.id] = value
    return ages
