"""
Summary metrics for a projection ledger.

This module condenses a ledger into the figures a reviewer looks at first:
when savings (or cash alone) first run out, the lowest and highest net worth
and when they occur, the final net worth and the net worth at a chosen age
such as retirement.
"""

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field

from .ledger import YearRecord, ledger_series


class ProjectionMetricsConfig(BaseModel):
    """Configuration for projection metrics calculation."""

    failure_threshold: float = Field(
        default=0.0, description="Balance below which savings count as run out"
    )


class ProjectionMetricsResult(BaseModel):
    """Summary of one projection."""

    years_projected: int = Field(..., ge=0, description="Number of ledger rows")
    first_negative_savings_age: Optional[int] = Field(
        None, description="First age at which total savings fall below the threshold"
    )
    first_negative_cash_age: Optional[int] = Field(
        None, description="First age at which cash alone falls below the threshold"
    )
    min_savings: Optional[float] = Field(None, description="Lowest total savings")
    min_savings_age: Optional[int] = Field(None, description="Age of lowest savings")
    max_savings: Optional[float] = Field(None, description="Highest total savings")
    max_savings_age: Optional[int] = Field(None, description="Age of highest savings")
    final_savings: Optional[float] = Field(None, description="Savings at the end age")
    savings_at_target_age: Optional[float] = Field(
        None, description="Savings at the requested age (e.g. retirement)"
    )
    total_income: float = Field(default=0.0, description="Sum of income")
    total_expense: float = Field(default=0.0, description="Sum of expenses")
    total_event_cost: float = Field(default=0.0, description="Sum of event costs")


class ProjectionMetricsCalculator:
    """Calculator for projection summary metrics."""

    def __init__(self, config: Optional[ProjectionMetricsConfig] = None):
        """Initialize the calculator.

        Args:
            config: Configuration for metrics calculation
        """
        self.config = config or ProjectionMetricsConfig()

    def calculate_metrics(
        self, records: Sequence[YearRecord], target_age: Optional[int] = None
    ) -> ProjectionMetricsResult:
        """
        Calculate summary metrics for a ledger.

        Args:
            records: Ledger in age order
            target_age: Age whose savings should be reported (optional)

        Returns:
            ProjectionMetricsResult; all optional figures are None for an
            empty ledger
        """
        if not records:
            return ProjectionMetricsResult(years_projected=0)

        ages = ledger_series(records, "age").astype(np.int64)
        savings = ledger_series(records, "savings")
        cash = ledger_series(records, "cash_balance")

        min_index = int(np.argmin(savings))
        max_index = int(np.argmax(savings))

        return ProjectionMetricsResult(
            years_projected=len(records),
            first_negative_savings_age=self._first_age_below(ages, savings),
            first_negative_cash_age=self._first_age_below(ages, cash),
            min_savings=float(savings[min_index]),
            min_savings_age=int(ages[min_index]),
            max_savings=float(savings[max_index]),
            max_savings_age=int(ages[max_index]),
            final_savings=float(savings[-1]),
            savings_at_target_age=self._value_at_age(ages, savings, target_age),
            total_income=float(ledger_series(records, "income").sum()),
            total_expense=float(ledger_series(records, "total_expense").sum()),
            total_event_cost=float(ledger_series(records, "event_cost").sum()),
        )

    def _first_age_below(
        self, ages: NDArray[np.int64], values: NDArray[np.float64]
    ) -> Optional[int]:
        below = np.flatnonzero(values < self.config.failure_threshold)
        if below.size == 0:
            return None
        return int(ages[below[0]])

    @staticmethod
    def _value_at_age(
        ages: NDArray[np.int64], values: NDArray[np.float64], age: Optional[int]
    ) -> Optional[float]:
        if age is None:
            return None
        matches = np.flatnonzero(ages == age)
        if matches.size == 0:
            return None
        return float(values[matches[0]])
