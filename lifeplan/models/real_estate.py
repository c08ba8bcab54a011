"""
Investment real-estate engine for life-plan projections.

A property is bought in its purchase month (or is already owned when no
purchase date is given), produces net rent and costs property tax pro-rated
by the months held in the year, and pays its mortgage monthly with an
interest/principal split. In the sale year the proceeds net of sale costs and
the remaining mortgage are realized and the property stops counting toward
net worth. Its value while held is its purchase price.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .amortization import MONTHS_PER_YEAR, MortgageCalculator
from .household import HouseholdSnapshot, RealEstate
from .ledger import LineItem


class RealEstateState(BaseModel):
    """Running mortgage state of one property."""

    name: str = Field(..., description="Property name")
    monthly_payment: float = Field(..., ge=0, description="Fixed mortgage payment")
    loan_balance: float = Field(..., ge=0, description="Remaining principal")
    remaining_payments: int = Field(..., ge=0, description="Installments left")
    sold: bool = Field(default=False, description="Whether the property was sold")


def create_real_estate_states(snapshot: HouseholdSnapshot) -> List[RealEstateState]:
    """Compute each mortgage payment once and copy the loan into working state."""
    states = []
    for estate in snapshot.real_estates:
        has_loan = estate.loan_amount > 0 and estate.loan_term > 0
        states.append(
            RealEstateState(
                name=estate.name,
                monthly_payment=MortgageCalculator.calculate_monthly_payment(
                    estate.loan_amount, estate.loan_rate, estate.loan_term
                )
                if has_loan
                else 0.0,
                loan_balance=estate.loan_amount if has_loan else 0.0,
                remaining_payments=estate.loan_term if has_loan else 0,
            )
        )
    return states


class RealEstateYear(BaseModel):
    """Real-estate cash flows and values for one simulated year."""

    income_items: List[LineItem] = Field(
        default_factory=list, description="Net rent and sale proceeds"
    )
    repayment_items: List[LineItem] = Field(
        default_factory=list, description="Mortgage payments and property tax"
    )
    purchase_items: List[LineItem] = Field(
        default_factory=list, description="Down payment plus purchase costs"
    )
    event_names: List[str] = Field(
        default_factory=list, description="Purchase and sale events"
    )
    values: Dict[str, float] = Field(
        default_factory=dict, description="Value per held property"
    )
    loan_balances: Dict[str, float] = Field(
        default_factory=dict, description="Remaining mortgage per property"
    )

    @property
    def total_value(self) -> float:
        return sum(self.values.values())


class RealEstateEngine(BaseModel):
    """Engine for property purchase, holding, mortgage and sale."""

    snapshot: HouseholdSnapshot = Field(..., description="Household snapshot")

    def process_year(self, year: int, states: List[RealEstateState]) -> RealEstateYear:
        """
        Process every property for a calendar year, mutating the given states.

        Args:
            year: Calendar year
            states: Property states, index-aligned with ``snapshot.real_estates``

        Returns:
            RealEstateYear for the year
        """
        result = RealEstateYear()
        for estate, state in zip(self.snapshot.real_estates, states):
            if not state.sold:
                self._process_property(estate, state, year, result)
        return result

    def _process_property(
        self,
        estate: RealEstate,
        state: RealEstateState,
        year: int,
        result: RealEstateYear,
    ) -> None:
        window = self.months_held(estate, year)
        if window is None:
            return
        months, is_purchase_year, is_sale_year = window

        if is_purchase_year:
            result.purchase_items.append(
                LineItem(
                    label=f"{estate.name} (purchase)",
                    amount=estate.down_payment + estate.initial_cost,
                )
            )
            result.event_names.append(f"{estate.name} (purchase)")

        net_rent = (estate.monthly_rent_income - estate.monthly_maintenance_cost) * months
        if net_rent:
            result.income_items.append(
                LineItem(label=f"{estate.name} (net rent)", amount=net_rent)
            )

        if estate.annual_tax > 0:
            result.repayment_items.append(
                LineItem(
                    label=f"{estate.name} (property tax)",
                    amount=estate.annual_tax * months / MONTHS_PER_YEAR,
                )
            )

        self._pay_mortgage(estate, state, months, result)

        if is_sale_year:
            proceeds = estate.sell_price - estate.sell_cost - state.loan_balance
            result.income_items.append(
                LineItem(label=f"{estate.name} (sale)", amount=proceeds)
            )
            result.event_names.append(f"{estate.name} (sale)")
            state.loan_balance = 0.0
            state.remaining_payments = 0
            state.sold = True
            return

        result.values[estate.name] = (
            result.values.get(estate.name, 0.0) + estate.purchase_price
        )
        if state.loan_balance > 0:
            result.loan_balances[estate.name] = (
                result.loan_balances.get(estate.name, 0.0) + state.loan_balance
            )

    @staticmethod
    def _pay_mortgage(
        estate: RealEstate, state: RealEstateState, months: int, result: RealEstateYear
    ) -> None:
        if state.remaining_payments <= 0 or state.loan_balance <= 0:
            return

        step = MortgageCalculator.amortize(
            state.loan_balance,
            state.monthly_payment,
            estate.loan_rate,
            min(months, state.remaining_payments),
        )
        if step.months_paid:
            result.repayment_items.append(
                LineItem(label=f"{estate.name} (mortgage)", amount=step.amount_paid)
            )
        state.loan_balance = step.ending_balance
        state.remaining_payments -= step.months_paid
        if state.loan_balance <= 0:
            state.remaining_payments = 0

    @staticmethod
    def months_held(estate: RealEstate, year: int) -> Optional[Tuple[int, bool, bool]]:
        """
        Months the property is held during ``year``.

        Returns:
            (months, is_purchase_year, is_sale_year), or None when the property
            is not held at all that year
        """
        months = MONTHS_PER_YEAR
        is_purchase_year = False
        is_sale_year = False

        if estate.sell_date is not None:
            if year > estate.sell_date.year:
                return None
            if year == estate.sell_date.year:
                is_sale_year = True

        if estate.purchase_date is not None:
            if year < estate.purchase_date.year:
                return None
            if year == estate.purchase_date.year:
                is_purchase_year = True
                months = MONTHS_PER_YEAR - estate.purchase_date.month + 1

        if is_sale_year and is_purchase_year:
            months = max(0, estate.sell_date.month - estate.purchase_date.month + 1)
        elif is_sale_year:
            months = min(months, estate.sell_date.month)

        return months, is_purchase_year, is_sale_year
