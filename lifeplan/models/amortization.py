"""
Loan amortization calculations for life-plan projections.

Two repayment paths are supported. Mortgages on investment property use the
standard fixed-payment formula with a monthly interest/principal split. Plain
household loans are paid down interest-free: every installment reduces the
balance by its full amount.
"""

from pydantic import BaseModel, Field

MONTHS_PER_YEAR = 12


class AmortizationStep(BaseModel):
    """Result of applying a run of monthly mortgage installments."""

    months_paid: int = Field(..., ge=0, description="Installments actually applied")
    amount_paid: float = Field(..., ge=0, description="Total of the installments")
    principal_paid: float = Field(..., ge=0, description="Principal portion")
    interest_paid: float = Field(..., ge=0, description="Interest portion")
    ending_balance: float = Field(..., ge=0, description="Balance after the run")


class SimpleLoanStep(BaseModel):
    """Result of one simulated year of an interest-free loan."""

    payments_made: int = Field(..., ge=0, description="Installments paid this year")
    amount_paid: float = Field(..., ge=0, description="Total paid this year")
    ending_balance: float = Field(..., ge=0, description="Balance after the year")
    remaining_payments: int = Field(..., ge=0, description="Installments left")


class MortgageCalculator:
    """Calculator for fixed-payment mortgage amortization."""

    @staticmethod
    def calculate_monthly_payment(
        principal: float, annual_rate_pct: float, num_payments: int
    ) -> float:
        """
        Calculate the fixed monthly payment.

        Args:
            principal: Loan principal amount
            annual_rate_pct: Annual interest rate in percent (e.g. 1.5 for 1.5%)
            num_payments: Number of monthly payments

        Returns:
            Monthly payment amount (straight-line when the rate is zero)
        """
        if principal <= 0 or num_payments <= 0:
            return 0.0

        monthly_rate = annual_rate_pct / 100 / MONTHS_PER_YEAR
        if monthly_rate == 0:
            return principal / num_payments

        growth = (1 + monthly_rate) ** num_payments
        return principal * monthly_rate * growth / (growth - 1)

    @staticmethod
    def calculate_interest_payment(balance: float, annual_rate_pct: float) -> float:
        """Calculate one month of interest on ``balance``."""
        return balance * annual_rate_pct / 100 / MONTHS_PER_YEAR

    @staticmethod
    def amortize(
        balance: float, payment: float, annual_rate_pct: float, months: int
    ) -> AmortizationStep:
        """
        Apply up to ``months`` installments to a mortgage balance.

        Amortization stops as soon as the balance reaches zero, so no
        installment is charged after payoff.

        Args:
            balance: Balance before the first installment
            payment: Fixed monthly payment
            annual_rate_pct: Annual interest rate in percent
            months: Maximum number of installments to apply

        Returns:
            AmortizationStep with totals and the ending balance
        """
        months_paid = 0
        principal_total = 0.0
        interest_total = 0.0

        for _ in range(max(0, months)):
            if balance <= 0 or payment <= 0:
                break
            interest = MortgageCalculator.calculate_interest_payment(
                balance, annual_rate_pct
            )
            principal = max(0.0, payment - interest)
            if principal >= balance:
                principal = balance
                balance = 0.0
            else:
                balance -= principal
            months_paid += 1
            principal_total += principal
            interest_total += interest

        return AmortizationStep(
            months_paid=months_paid,
            amount_paid=payment * months_paid,
            principal_paid=principal_total,
            interest_paid=interest_total,
            ending_balance=max(0.0, balance),
        )


class SimpleLoanCalculator:
    """Calculator for interest-free installment loans."""

    @staticmethod
    def pay_year(
        balance: float, monthly_payment: float, remaining_payments: int
    ) -> SimpleLoanStep:
        """
        Pay one simulated year of installments.

        Up to twelve installments are charged while the balance and the
        remaining installment count are both positive. The whole installment
        reduces the balance, which is clamped at zero.

        Args:
            balance: Outstanding balance
            monthly_payment: Installment amount
            remaining_payments: Installments left

        Returns:
            SimpleLoanStep for the year
        """
        if balance <= 0 or monthly_payment <= 0 or remaining_payments <= 0:
            return SimpleLoanStep(
                payments_made=0,
                amount_paid=0.0,
                ending_balance=max(0.0, balance),
                remaining_payments=max(0, remaining_payments),
            )

        payments = min(MONTHS_PER_YEAR, remaining_payments)
        amount = monthly_payment * payments
        return SimpleLoanStep(
            payments_made=payments,
            amount_paid=amount,
            ending_balance=max(0.0, balance - amount),
            remaining_payments=remaining_payments - payments,
        )

    @staticmethod
    def pay_annual(balance: float, yearly_repayment: float) -> SimpleLoanStep:
        """
        Pay one fixed annual repayment.

        The full repayment is charged even when it exceeds the balance; the
        balance is clamped at zero.
        """
        if balance <= 0 or yearly_repayment <= 0:
            return SimpleLoanStep(
                payments_made=0,
                amount_paid=0.0,
                ending_balance=max(0.0, balance),
                remaining_payments=0,
            )

        return SimpleLoanStep(
            payments_made=1,
            amount_paid=yearly_repayment,
            ending_balance=max(0.0, balance - yearly_repayment),
            remaining_payments=0,
        )
