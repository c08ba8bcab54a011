"""
Projection ledger model.

This module provides the per-year output record of a projection. A ledger is
an ordered list of YearRecord, one per simulated age, which downstream
consumers (tables, charts, exports, metrics) only ever read.

All amounts are kept as raw floats; rounding to whole units happens only when
a record is materialized for presentation via ``YearRecord.rounded``.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field


class LedgerCategory(str, Enum):
    """Fixed drill-down categories of a year record."""

    INCOME = "income"
    BASIC_EXPENSE = "basic_expense"
    EDUCATION = "education"
    HOUSING = "housing"
    INSURANCE = "insurance"
    LOAN_REPAYMENT = "loan_repayment"
    EVENT = "event"
    ASSET_CONTRIBUTION = "asset_contribution"
    ASSET_WITHDRAWAL = "asset_withdrawal"


class LineItem(BaseModel):
    """A labelled amount in a category breakdown."""

    label: str = Field(..., description="Human-readable source of the amount")
    amount: float = Field(..., description="Amount for the year")


def empty_breakdown() -> Dict[LedgerCategory, List[LineItem]]:
    """Breakdown with every category present and no items."""
    return {category: [] for category in LedgerCategory}


def total(items: Sequence[LineItem]) -> float:
    return sum(item.amount for item in items)


def round_unit(value: float) -> float:
    """Round half away from zero to the nearest whole unit."""
    return math.copysign(math.floor(abs(value) + 0.5), value) + 0.0


def _round_map(values: Dict[str, float]) -> Dict[str, float]:
    return {key: round_unit(value) for key, value in values.items()}


class YearRecord(BaseModel):
    """One projected year of household cash flow and net worth."""

    age: int = Field(..., description="Planner's simulated age")
    year: int = Field(..., description="Calendar year")

    income: float = Field(..., description="Total income incl. real estate and deposits")
    basic_expense: float = Field(..., description="Basic living expenses")
    education_cost: float = Field(..., description="Education costs")
    housing_cost: float = Field(..., description="Housing costs")
    insurance_cost: float = Field(..., description="Insurance premiums")
    loan_repayment: float = Field(
        ..., description="Loan and mortgage repayments incl. property tax"
    )
    total_expense: float = Field(..., description="Sum of all expense categories")

    event_cost: float = Field(
        ..., description="One-time costs (negative = net inflow) incl. property purchases"
    )
    event_names: List[str] = Field(
        default_factory=list, description="Names of one-time events this year"
    )

    asset_contribution: float = Field(..., description="Contributions into assets")
    asset_withdrawal: float = Field(..., description="Withdrawals out of assets")

    balance: float = Field(..., description="Net cash change for the year")
    cash_balance: float = Field(..., description="Running cash balance")
    investment_balance: float = Field(..., description="Total investment asset value")
    real_estate_balance: float = Field(..., description="Value of held properties")
    deposit_balance: float = Field(..., description="Rental deposits held")
    savings: float = Field(..., description="Total net worth")

    breakdown: Dict[LedgerCategory, List[LineItem]] = Field(
        default_factory=empty_breakdown, description="Per-category line items"
    )
    loan_balances: Dict[str, float] = Field(
        default_factory=dict, description="Remaining balance per outstanding loan"
    )
    asset_balances: Dict[str, float] = Field(
        default_factory=dict, description="Value per investment asset"
    )
    asset_type_balances: Dict[str, float] = Field(
        default_factory=dict, description="Investment value per asset type"
    )
    real_estate_values: Dict[str, float] = Field(
        default_factory=dict, description="Value per held property"
    )
    family_ages: Dict[str, Optional[int]] = Field(
        default_factory=dict, description="Age per family member id (None = not alive)"
    )

    @property
    def event_summary(self) -> str:
        return ", ".join(self.event_names)

    def category_total(self, category: LedgerCategory) -> float:
        """Sum the line items of one breakdown category."""
        return total(self.breakdown.get(category, []))

    def rounded(self) -> "YearRecord":
        """Presentation copy with every amount rounded to a whole unit."""
        amounts = {name: round_unit(getattr(self, name)) for name in AMOUNT_FIELDS}
        breakdown = {
            category: [
                LineItem(label=item.label, amount=round_unit(item.amount))
                for item in items
            ]
            for category, items in self.breakdown.items()
        }
        return self.model_copy(
            update={
                **amounts,
                "breakdown": breakdown,
                "loan_balances": _round_map(self.loan_balances),
                "asset_balances": _round_map(self.asset_balances),
                "asset_type_balances": _round_map(self.asset_type_balances),
                "real_estate_values": _round_map(self.real_estate_values),
            }
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dictionary with category keys as plain strings."""
        payload = self.model_dump(exclude={"breakdown"})
        payload["event_summary"] = self.event_summary
        payload["breakdown"] = {
            category.value: [item.model_dump() for item in items]
            for category, items in self.breakdown.items()
        }
        return payload


AMOUNT_FIELDS = (
    "income",
    "basic_expense",
    "education_cost",
    "housing_cost",
    "insurance_cost",
    "loan_repayment",
    "total_expense",
    "event_cost",
    "asset_contribution",
    "asset_withdrawal",
    "balance",
    "cash_balance",
    "investment_balance",
    "real_estate_balance",
    "deposit_balance",
    "savings",
)


def ledger_series(records: Sequence[YearRecord], field: str) -> NDArray[np.float64]:
    """
    Extract one column of a ledger as a numpy array.

    Args:
        records: Ledger in age order
        field: YearRecord attribute name (e.g. "savings", "age")

    Returns:
        Array with one value per record
    """
    return np.array([getattr(record, field) for record in records], dtype=np.float64)
