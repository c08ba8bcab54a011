"""
Year processor for life-plan projections.

Computes one simulated year by running every category engine against the
working state and folding the results into a single YearRecord:

1. Steady income (incomes, pensions)
2. Expenses (living, education, insurance, housing, loans, mortgages and
   property tax)
3. Real-estate purchase and sale flows
4. Life events and insurance payouts
5. Asset growth, contributions and withdrawals
6. Net cash change and running cash balance
7. Net worth
"""

from typing import Dict

from ..asset_evolution import AssetEvolutionEngine
from ..expense_engine import ExpenseEngine
from ..household import HouseholdSnapshot
from ..housing_engine import HousingEngine
from ..income_engine import IncomeEngine
from ..ledger import LedgerCategory, YearRecord, empty_breakdown, total
from ..liability_engine import LiabilityEngine
from ..life_events import LifeEventEngine
from ..real_estate import RealEstateEngine
from ..timeline import family_ages
from .state import SimulationState


def _merge_balances(*maps: Dict[str, float]) -> Dict[str, float]:
    merged: Dict[str, float] = {}
    for balances in maps:
        for name, balance in balances.items():
            merged[name] = merged.get(name, 0.0) + balance
    return merged


class YearProcessor:
    """Folds every category of a simulated year into a ledger record."""

    def __init__(self, snapshot: HouseholdSnapshot, current_age: int):
        """Initialize the processor.

        Args:
            snapshot: Household snapshot shared by all category engines
            current_age: First simulated age of the run
        """
        self.snapshot = snapshot
        self.current_age = current_age
        self.income_engine = IncomeEngine(snapshot=snapshot)
        self.expense_engine = ExpenseEngine(snapshot=snapshot)
        self.housing_engine = HousingEngine(snapshot=snapshot)
        self.liability_engine = LiabilityEngine()
        self.real_estate_engine = RealEstateEngine(snapshot=snapshot)
        self.life_event_engine = LifeEventEngine(snapshot=snapshot)
        self.asset_engine = AssetEvolutionEngine(snapshot=snapshot)

    def process(self, age: int, year: int, state: SimulationState) -> YearRecord:
        """
        Process one simulated year, mutating ``state``.

        Args:
            age: Planner's simulated age
            year: Calendar year
            state: Working state carried across years

        Returns:
            YearRecord for the year
        """
        breakdown = empty_breakdown()

        income_items = self.income_engine.get_annual_income(age, year)
        housing = self.housing_engine.process_year(age)
        liabilities = self.liability_engine.process_year(
            age, state.loans, state.housing_loans
        )
        real_estate = self.real_estate_engine.process_year(year, state.real_estates)
        events = self.life_event_engine.get_events(age)
        assets = self.asset_engine.process_year(age, state.assets)

        breakdown[LedgerCategory.INCOME] = (
            income_items + real_estate.income_items + housing.deposit_returns
        )
        breakdown[LedgerCategory.BASIC_EXPENSE] = (
            self.expense_engine.get_basic_expenses(age)
        )
        breakdown[LedgerCategory.EDUCATION] = self.expense_engine.get_education_costs(
            age, year
        )
        breakdown[LedgerCategory.HOUSING] = housing.cost_items
        breakdown[LedgerCategory.INSURANCE] = (
            self.expense_engine.get_insurance_premiums(
                age, self.current_age
            )
        )
        breakdown[LedgerCategory.LOAN_REPAYMENT] = (
            liabilities.repayment_items + real_estate.repayment_items
        )
        breakdown[LedgerCategory.EVENT] = events + real_estate.purchase_items
        breakdown[LedgerCategory.ASSET_CONTRIBUTION] = assets.contributions
        breakdown[LedgerCategory.ASSET_WITHDRAWAL] = assets.withdrawals

        income = total(breakdown[LedgerCategory.INCOME])
        basic_expense = total(breakdown[LedgerCategory.BASIC_EXPENSE])
        education_cost = total(breakdown[LedgerCategory.EDUCATION])
        housing_cost = total(breakdown[LedgerCategory.HOUSING])
        insurance_cost = total(breakdown[LedgerCategory.INSURANCE])
        loan_repayment = total(breakdown[LedgerCategory.LOAN_REPAYMENT])
        total_expense = (
            basic_expense + education_cost + housing_cost + insurance_cost + loan_repayment
        )
        event_cost = total(breakdown[LedgerCategory.EVENT])
        contribution = assets.total_contribution
        withdrawal = assets.total_withdrawal

        balance = income + withdrawal - total_expense - event_cost - contribution
        state.cash += balance

        investment_balance = assets.total_value
        real_estate_balance = real_estate.total_value
        deposit_balance = housing.deposit_balance

        event_names = [item.label for item in events] + real_estate.event_names
        event_names.extend(item.label for item in housing.deposit_returns)

        return YearRecord(
            age=age,
            year=year,
            income=income,
            basic_expense=basic_expense,
            education_cost=education_cost,
            housing_cost=housing_cost,
            insurance_cost=insurance_cost,
            loan_repayment=loan_repayment,
            total_expense=total_expense,
            event_cost=event_cost,
            event_names=event_names,
            asset_contribution=contribution,
            asset_withdrawal=withdrawal,
            balance=balance,
            cash_balance=state.cash,
            investment_balance=investment_balance,
            real_estate_balance=real_estate_balance,
            deposit_balance=deposit_balance,
            savings=state.cash + investment_balance + real_estate_balance + deposit_balance,
            breakdown=breakdown,
            loan_balances=_merge_balances(
                liabilities.loan_balances, real_estate.loan_balances
            ),
            asset_balances=assets.asset_balances,
            asset_type_balances=assets.asset_type_balances,
            real_estate_values=real_estate.values,
            family_ages=family_ages(self.snapshot.family_members, age, year),
        )
