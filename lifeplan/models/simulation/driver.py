"""
Projection driver.

Walks the planner's ages from the current age to the simulation end age,
running the year processor once per age against fresh working state. Runs are
strictly sequential because every year depends on the previous year's cash,
asset and loan balances.
"""

import logging
from datetime import date
from typing import List, Optional

from ..household import HouseholdSnapshot
from ..ledger import YearRecord
from ..timeline import DEFAULT_SIMULATION_END_AGE, ProjectionTimeline
from .state import SimulationState
from .year_processor import YearProcessor

logger = logging.getLogger(__name__)


def project(
    snapshot: HouseholdSnapshot,
    today: Optional[date] = None,
    default_end_age: int = DEFAULT_SIMULATION_END_AGE,
) -> List[YearRecord]:
    """
    Project a household's cash flow year by year.

    Args:
        snapshot: Household snapshot; never modified
        today: Reference date for the current age and year (read once;
            defaults to today's date)
        default_end_age: End age used when the snapshot does not set one

    Returns:
        One YearRecord per age from the current age to the end age inclusive,
        in increasing age order. Empty when no birth date is known or the end
        age is before the current age.
    """
    if today is None:
        today = date.today()

    timeline = ProjectionTimeline.from_settings(
        snapshot.user_settings, today, default_end_age
    )
    if timeline is None:
        logger.debug("No birth date in snapshot; nothing to project")
        return []

    logger.debug(
        f"Projecting {len(timeline)} years "
        f"(ages {timeline.current_age}-{timeline.end_age}) "
        f"from {timeline.current_year}"
    )

    state = SimulationState.from_snapshot(snapshot, timeline.current_age)
    processor = YearProcessor(snapshot, timeline.current_age)

    return [
        processor.process(age, timeline.year_for_age(age), state)
        for age in timeline.ages()
    ]
