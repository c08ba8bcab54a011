"""
Liability engine for life-plan projections.

Tracks the running principal of household loans and of the simplified loans
attached to owned homes. Household loans are repaid interest-free, up to
twelve installments per simulated year, or by a fixed annual repayment through
an end age for loans without installments. Owned-home loans only track their
balance here (their payments are housing costs); a loan for a home moved into
in the future materializes its balance in the move-in year.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .amortization import MONTHS_PER_YEAR, SimpleLoanCalculator
from .household import HouseholdSnapshot
from .ledger import LineItem


class LoanState(BaseModel):
    """Running state of a household loan."""

    name: str = Field(..., description="Loan name")
    monthly_payment: float = Field(..., description="Installment amount")
    balance: float = Field(..., ge=0, description="Outstanding balance")
    remaining_payments: int = Field(..., ge=0, description="Installments left")
    yearly_repayment: float = Field(default=0.0, description="Annual repayment")
    end_age: Optional[int] = Field(default=None, description="Last annual repayment age")

    @property
    def pays_installments(self) -> bool:
        return self.monthly_payment > 0 and self.remaining_payments > 0

    def pays_annually(self, age: int) -> bool:
        return (
            self.yearly_repayment > 0
            and self.end_age is not None
            and age <= self.end_age
        )

    def is_paid_off(self, age: int) -> bool:
        """No balance left, or nothing is due at ``age`` on either schedule."""
        if self.balance <= 0:
            return True
        return not (self.pays_installments or self.pays_annually(age))


class HousingLoanState(BaseModel):
    """Running state of the simplified loan on an owned home."""

    name: str = Field(..., description="Residence name")
    start_age: int = Field(..., description="Move-in age")
    loan_end_age: int = Field(default=0, description="Payoff age (0 = none)")
    monthly_payment: float = Field(..., description="Monthly payment")
    initial_balance: float = Field(..., ge=0, description="Balance at move-in")
    balance: float = Field(..., ge=0, description="Outstanding balance")


def create_loan_states(snapshot: HouseholdSnapshot) -> List[LoanState]:
    """Copy each household loan into mutable working state."""
    return [
        LoanState(
            name=loan.name,
            monthly_payment=loan.monthly_payment,
            balance=max(0.0, loan.balance),
            remaining_payments=max(0, loan.remaining_payments),
            yearly_repayment=loan.yearly_repayment,
            end_age=loan.end_age,
        )
        for loan in snapshot.loans
    ]


def create_housing_loan_states(
    snapshot: HouseholdSnapshot, current_age: int
) -> List[HousingLoanState]:
    """Copy owned-home loans; homes not yet moved into start with no balance."""
    states = []
    for housing in snapshot.housings:
        if housing.type != "owned" or housing.loan_balance <= 0:
            continue
        states.append(
            HousingLoanState(
                name=housing.name,
                start_age=housing.start_age,
                loan_end_age=housing.loan_end_age or 0,
                monthly_payment=housing.loan_monthly,
                initial_balance=housing.loan_balance,
                balance=0.0 if housing.start_age > current_age else housing.loan_balance,
            )
        )
    return states


class LiabilityYear(BaseModel):
    """Loan repayments and remaining balances for one simulated year."""

    repayment_items: List[LineItem] = Field(
        default_factory=list, description="Household loan repayments"
    )
    loan_balances: Dict[str, float] = Field(
        default_factory=dict, description="Remaining balance per outstanding loan"
    )


class LiabilityEngine(BaseModel):
    """Engine that pays down household and owned-home loans."""

    def process_year(
        self,
        age: int,
        loans: List[LoanState],
        housing_loans: List[HousingLoanState],
    ) -> LiabilityYear:
        """
        Pay one year of every loan, mutating the given states.

        Args:
            age: Planner's simulated age
            loans: Household loan states
            housing_loans: Owned-home loan states

        Returns:
            LiabilityYear with repayments and balances after payment
        """
        result = LiabilityYear()

        for loan in loans:
            if loan.is_paid_off(age):
                continue
            if loan.pays_installments:
                step = SimpleLoanCalculator.pay_year(
                    loan.balance, loan.monthly_payment, loan.remaining_payments
                )
            else:
                step = SimpleLoanCalculator.pay_annual(
                    loan.balance, loan.yearly_repayment
                )
            if step.payments_made:
                result.repayment_items.append(
                    LineItem(label=loan.name, amount=step.amount_paid)
                )
            loan.balance = step.ending_balance
            loan.remaining_payments = step.remaining_payments
            # Loans with nothing left to pay drop out of the balance map
            if not loan.is_paid_off(age + 1):
                self._record_balance(result, loan.name, loan.balance)

        for housing_loan in housing_loans:
            self._pay_housing_loan(housing_loan, age)
            self._record_balance(result, housing_loan.name, housing_loan.balance)

        return result

    @staticmethod
    def _pay_housing_loan(state: HousingLoanState, age: int) -> None:
        if age == state.start_age and state.balance <= 0:
            state.balance = state.initial_balance

        if age < state.start_age:
            return
        if state.loan_end_age and age > state.loan_end_age:
            return
        if state.balance > 0:
            yearly_payment = state.monthly_payment * MONTHS_PER_YEAR
            state.balance = max(0.0, state.balance - yearly_payment)

    @staticmethod
    def _record_balance(result: LiabilityYear, name: str, balance: float) -> None:
        if balance > 0:
            result.loan_balances[name] = result.loan_balances.get(name, 0.0) + balance
