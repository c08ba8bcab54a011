"""
Pydantic models for household life-plan snapshots.

This module defines the input side of a projection: every financial entity a
household has configured as of "now". Numeric fields are normalized at the
boundary (missing, NaN or infinite values become zero) and the field names
used by older data-entry screens are accepted as aliases of the canonical ones.
"""

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .numeric import OptionalAge, SafeFloat, SafeInt

SELF_MEMBER_ID = "self"

Relation = Literal["self", "spouse", "child", "parent", "other"]
_RELATIONS = {"self", "spouse", "child", "parent", "other"}


def parse_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM`` strings; anything unparseable is None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()[:10]
    if len(text) == 7:
        text = f"{text}-01"
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _coerce_id(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _coerce_optional_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _coerce_relation(value: Any) -> str:
    relation = str(value or "other").strip().lower()
    return relation if relation in _RELATIONS else "other"


def _coerce_housing_type(value: Any) -> str:
    return "owned" if str(value or "").strip().lower() == "owned" else "rental"


EntityId = Annotated[str, BeforeValidator(_coerce_id)]
OptionalId = Annotated[Optional[str], BeforeValidator(_coerce_optional_id)]
Text = Annotated[str, BeforeValidator(_coerce_text)]
OptionalDate = Annotated[Optional[date], BeforeValidator(parse_date)]


class SnapshotEntity(BaseModel):
    """Base class for immutable snapshot entities."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class UserSettings(SnapshotEntity):
    """Top-level settings for the person the plan is about."""

    user_name: Text = Field(default="", description="Display name of the planner")
    birth_date: OptionalDate = Field(
        default=None, description="Birth date; required to run a projection"
    )
    life_expectancy: OptionalAge = Field(
        default=None, description="Expected age at death"
    )
    retirement_age: OptionalAge = Field(default=None, description="Planned retirement age")
    simulation_end_age: OptionalAge = Field(
        default=None,
        validation_alias=AliasChoices("simulation_end_age", "end_age"),
        description="Last simulated age (inclusive); unset uses the configured default",
    )
    current_savings: SafeFloat = Field(default=0.0, description="Current cash savings")


class FamilyMember(SnapshotEntity):
    """A household member whose age can gate pensions and education costs."""

    id: EntityId = Field(default="", description="Member identifier")
    name: Text = Field(default="", description="Member name")
    relation: Annotated[Relation, BeforeValidator(_coerce_relation)] = Field(
        default="other", description="Relation to the planner"
    )
    birth_date: OptionalDate = Field(default=None, description="Birth date")
    birth_year: OptionalAge = Field(
        default=None, description="Birth year when no birth date is known"
    )
    life_expectancy: OptionalAge = Field(
        default=None, description="Expected age at death (None = always alive)"
    )

    @property
    def effective_birth_year(self) -> Optional[int]:
        """Birth year from the birth date, falling back to ``birth_year``."""
        if self.birth_date is not None:
            return self.birth_date.year
        return self.birth_year


class Income(SnapshotEntity):
    """Recurring income with an annual growth rate."""

    id: EntityId = Field(default="", description="Income identifier")
    name: Text = Field(default="", description="Income name")
    start_age: SafeInt = Field(default=0, description="First active age (inclusive)")
    end_age: SafeInt = Field(default=0, description="Last active age (inclusive)")
    amount: SafeFloat = Field(default=0.0, description="Annual amount at start age")
    growth_rate: SafeFloat = Field(default=0.0, description="Annual growth rate (%)")

    def is_active(self, age: int) -> bool:
        return self.start_age <= age <= self.end_age


class Expense(SnapshotEntity):
    """Recurring living expense with an annual inflation rate."""

    id: EntityId = Field(default="", description="Expense identifier")
    name: Text = Field(default="", description="Expense name")
    start_age: SafeInt = Field(default=0, description="First active age (inclusive)")
    end_age: SafeInt = Field(default=0, description="Last active age (inclusive)")
    amount: SafeFloat = Field(default=0.0, description="Annual amount at start age")
    inflation_rate: SafeFloat = Field(
        default=0.0, description="Annual inflation rate (%)"
    )

    def is_active(self, age: int) -> bool:
        return self.start_age <= age <= self.end_age


class Pension(SnapshotEntity):
    """Pension paid once its owner reaches the start age."""

    id: EntityId = Field(default="", description="Pension identifier")
    name: Text = Field(default="", description="Pension name")
    owner_id: OptionalId = Field(
        default=None, description="Owning family member id (None = the planner)"
    )
    start_age: SafeInt = Field(default=0, description="Owner age when payments start")
    amount: SafeFloat = Field(default=0.0, description="Annual amount")


class Education(SnapshotEntity):
    """Education cost keyed to a family member's age."""

    id: EntityId = Field(default="", description="Education fund identifier")
    owner_id: OptionalId = Field(
        default=None, description="Family member being educated (None = the planner)"
    )
    name: Text = Field(default="", description="Education stage name")
    start_age: SafeInt = Field(default=0, description="First owner age (inclusive)")
    end_age: SafeInt = Field(default=0, description="Last owner age (inclusive)")
    amount: SafeFloat = Field(default=0.0, description="Annual cost")


class Insurance(SnapshotEntity):
    """Insurance policy with premiums and an optional surrender payout."""

    id: EntityId = Field(default="", description="Insurance identifier")
    name: Text = Field(default="", description="Policy name")
    premium: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("premium", "yearly_premium"),
        description="Annual premium",
    )
    start_age: SafeInt = Field(default=0, description="First premium age (inclusive)")
    end_age: SafeInt = Field(
        default=0,
        validation_alias=AliasChoices("end_age", "payment_end_age"),
        description="Last premium age (inclusive)",
    )
    period: OptionalAge = Field(
        default=None,
        description="Premium years counted from the current age; overrides the age window",
    )
    surrender_age: OptionalAge = Field(
        default=None, description="Age at which the policy pays out"
    )
    surrender_amount: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("surrender_amount", "coverage"),
        description="Surrender or coverage payout",
    )

    def is_active(self, age: int, current_age: int) -> bool:
        """Premiums run for ``period`` years from now, else over the age window."""
        if self.period is not None:
            return current_age <= age < current_age + self.period
        return self.start_age <= age <= self.end_age


class Housing(SnapshotEntity):
    """Rental or owned residence."""

    id: EntityId = Field(default="", description="Housing identifier")
    name: Text = Field(default="", description="Residence name")
    type: Annotated[Literal["rental", "owned"], BeforeValidator(_coerce_housing_type)] = (
        Field(default="rental", description="Rental or owned")
    )
    start_age: SafeInt = Field(default=0, description="Move-in age")
    end_age: OptionalAge = Field(
        default=None, description="Move-out age (inclusive, None = open-ended)"
    )

    # Rental
    rent: SafeFloat = Field(default=0.0, description="Monthly rent")
    initial_cost: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("initial_cost", "initial", "deposit"),
        description="Initial deposit paid at move-in and returned at move-out",
    )
    renewal_cost: SafeFloat = Field(default=0.0, description="Lease renewal fee")
    renewal_interval: OptionalAge = Field(
        default=None,
        validation_alias=AliasChoices("renewal_interval", "interval"),
        description="Years between lease renewals",
    )

    # Owned
    maintenance_cost: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("maintenance_cost", "maintenance"),
        description="Monthly maintenance cost",
    )
    tax: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("tax", "property_tax"),
        description="Annual property tax",
    )
    loan_balance: SafeFloat = Field(default=0.0, description="Housing loan balance")
    loan_monthly: SafeFloat = Field(default=0.0, description="Monthly loan payment")
    loan_end_age: OptionalAge = Field(default=None, description="Loan payoff age")

    def is_active(self, age: int) -> bool:
        return self.start_age <= age and (self.end_age is None or age <= self.end_age)


class Asset(SnapshotEntity):
    """Investment account with growth, contributions and withdrawals."""

    id: EntityId = Field(default="", description="Asset identifier")
    name: Text = Field(default="", description="Asset name")
    asset_type: Text = Field(
        default="other",
        validation_alias=AliasChoices("asset_type", "type"),
        description="Asset kind used for grouping (deposit, stock, nisa, ...)",
    )
    current_value: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("current_value", "amount"),
        description="Current value",
    )
    return_rate: SafeFloat = Field(default=0.0, description="Annual return rate (%)")
    yearly_contribution: SafeFloat = Field(
        default=0.0, description="Annual contribution"
    )
    contribution_end_age: OptionalAge = Field(
        default=None,
        validation_alias=AliasChoices(
            "contribution_end_age", "accumulation_end_age", "end_age"
        ),
        description="Last contribution age (inclusive)",
    )
    withdrawal_age: OptionalAge = Field(
        default=None, description="First withdrawal age"
    )
    withdrawal_amount: SafeFloat = Field(default=0.0, description="Annual withdrawal")

    @field_validator("asset_type")
    @classmethod
    def default_asset_type(cls, v: str) -> str:
        return v or "other"

    def is_contributing(self, age: int, default_end_age: Optional[int] = None) -> bool:
        """Contribute through the end age, or ``default_end_age`` when none is set."""
        if self.yearly_contribution <= 0:
            return False
        end_age = self.contribution_end_age or default_end_age
        if end_age is not None and age > end_age:
            return False
        return self.withdrawal_age is None or age < self.withdrawal_age

    def is_withdrawing(self, age: int) -> bool:
        return (
            self.withdrawal_age is not None
            and age >= self.withdrawal_age
            and self.withdrawal_amount > 0
        )


class RealEstate(SnapshotEntity):
    """Investment property with an optional mortgage and sale."""

    id: EntityId = Field(default="", description="Property identifier")
    name: Text = Field(default="", description="Property name")
    purchase_date: OptionalDate = Field(
        default=None, description="Purchase month (None = already owned)"
    )
    purchase_price: SafeFloat = Field(default=0.0, description="Purchase price")
    initial_cost: SafeFloat = Field(default=0.0, description="Purchase closing costs")
    loan_amount: SafeFloat = Field(default=0.0, description="Mortgage principal")
    loan_rate: SafeFloat = Field(default=0.0, description="Mortgage annual rate (%)")
    loan_term: SafeInt = Field(
        default=0,
        validation_alias=AliasChoices("loan_term", "loan_payments", "loan_duration"),
        description="Mortgage term in monthly payments",
    )
    monthly_rent_income: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("monthly_rent_income", "rent_income"),
        description="Monthly rent received",
    )
    monthly_maintenance_cost: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("monthly_maintenance_cost", "maintenance_cost"),
        description="Monthly maintenance cost",
    )
    annual_tax: SafeFloat = Field(
        default=0.0,
        validation_alias=AliasChoices("annual_tax", "tax", "property_tax"),
        description="Annual property tax",
    )
    sell_date: OptionalDate = Field(default=None, description="Sale month")
    sell_price: SafeFloat = Field(default=0.0, description="Sale price")
    sell_cost: SafeFloat = Field(default=0.0, description="Sale costs")

    @property
    def down_payment(self) -> float:
        return max(0.0, self.purchase_price - self.loan_amount)


class Loan(SnapshotEntity):
    """
    Interest-free amortizing loan.

    Loans are repaid in monthly installments while ``remaining_payments`` is
    positive. Older loans without an installment schedule are repaid by a
    fixed ``yearly_repayment`` through ``end_age`` instead.
    """

    id: EntityId = Field(default="", description="Loan identifier")
    name: Text = Field(default="", description="Loan name")
    balance: SafeFloat = Field(default=0.0, description="Outstanding balance")
    monthly_payment: SafeFloat = Field(default=0.0, description="Monthly installment")
    remaining_payments: SafeInt = Field(
        default=0, description="Number of installments left"
    )
    yearly_repayment: SafeFloat = Field(
        default=0.0, description="Annual repayment when no installments are set"
    )
    end_age: OptionalAge = Field(
        default=None, description="Last annual repayment age (inclusive)"
    )


class LifeEvent(SnapshotEntity):
    """One-time cash flow at a single age."""

    id: EntityId = Field(default="", description="Event identifier")
    name: Text = Field(
        default="",
        validation_alias=AliasChoices("name", "event_name"),
        description="Event name",
    )
    age: SafeInt = Field(default=0, description="Trigger age")
    cost: SafeFloat = Field(
        default=0.0, description="Cost (positive = outflow, negative = inflow)"
    )


class Goals(SnapshotEntity):
    """Free-text planning goals (not used by the projection)."""

    q1: Text = Field(default="", description="Goal answer 1")
    q2: Text = Field(default="", description="Goal answer 2")
    q3: Text = Field(default="", description="Goal answer 3")
    q4: Text = Field(default="", description="Goal answer 4")


def _pop_first(data: Dict[str, Any], *keys: str) -> Any:
    found = None
    for key in keys:
        if key in data:
            value = data.pop(key)
            if found is None:
                found = value
    return found


def _with_self_member(
    settings: UserSettings, members: List[FamilyMember]
) -> List[FamilyMember]:
    """Insert or sync the planner's own family member from user settings."""
    synced: Dict[str, Any] = {}
    if settings.birth_date is not None:
        synced["birth_date"] = settings.birth_date
        synced["birth_year"] = settings.birth_date.year
    if settings.life_expectancy is not None:
        synced["life_expectancy"] = settings.life_expectancy

    for index, member in enumerate(members):
        if member.relation == "self":
            if settings.user_name:
                synced["name"] = settings.user_name
            members = list(members)
            members[index] = member.model_copy(update=synced)
            return members

    self_member = FamilyMember(
        id=SELF_MEMBER_ID,
        name=settings.user_name or "Self",
        relation="self",
        **synced,
    )
    return [self_member] + members


class HouseholdSnapshot(SnapshotEntity):
    """Complete household state consumed by one projection run."""

    user_settings: UserSettings = Field(
        default_factory=UserSettings,
        validation_alias=AliasChoices("user_settings", "userSettings"),
        description="Planner settings",
    )
    family_members: List[FamilyMember] = Field(
        default_factory=list,
        validation_alias=AliasChoices("family_members", "familyMembers"),
        description="Household members, always including the planner",
    )
    incomes: List[Income] = Field(default_factory=list, description="Incomes")
    expenses: List[Expense] = Field(default_factory=list, description="Expenses")
    pensions: List[Pension] = Field(default_factory=list, description="Pensions")
    education_funds: List[Education] = Field(
        default_factory=list,
        validation_alias=AliasChoices("education_funds", "educationFunds"),
        description="Education costs",
    )
    insurances: List[Insurance] = Field(
        default_factory=list, description="Insurance policies"
    )
    housings: List[Housing] = Field(default_factory=list, description="Residences")
    assets: List[Asset] = Field(default_factory=list, description="Investment assets")
    real_estates: List[RealEstate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("real_estates", "realEstates"),
        description="Investment properties",
    )
    loans: List[Loan] = Field(default_factory=list, description="Loans")
    life_events: List[LifeEvent] = Field(
        default_factory=list,
        validation_alias=AliasChoices("life_events", "lifeEvents"),
        description="One-time life events",
    )
    goals: Goals = Field(default_factory=Goals, description="Planning goals")

    @field_validator(
        "family_members",
        "incomes",
        "expenses",
        "pensions",
        "education_funds",
        "insurances",
        "housings",
        "assets",
        "real_estates",
        "loans",
        "life_events",
        mode="before",
    )
    @classmethod
    def null_collection_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("user_settings", "goals", mode="before")
    @classmethod
    def null_section_is_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @model_validator(mode="before")
    @classmethod
    def derive_self_member(cls, data: Any) -> Any:
        """Build the unified family list once, with the planner synced from settings."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        raw_settings = _pop_first(data, "user_settings", "userSettings")
        raw_members = _pop_first(data, "family_members", "familyMembers")

        if isinstance(raw_settings, UserSettings):
            settings = raw_settings
        else:
            settings = UserSettings.model_validate(raw_settings or {})

        members = [
            member
            if isinstance(member, FamilyMember)
            else FamilyMember.model_validate(member)
            for member in (raw_members or [])
        ]

        data["user_settings"] = settings
        data["family_members"] = _with_self_member(settings, members)
        return data

    @property
    def self_member(self) -> FamilyMember:
        """The planner's own family member."""
        for member in self.family_members:
            if member.relation == "self":
                return member
        raise LookupError("snapshot has no self member")

    def find_member(self, member_id: Optional[str]) -> Optional[FamilyMember]:
        """Resolve a member id; None refers to the planner."""
        if member_id is None:
            return self.self_member
        for member in self.family_members:
            if member.id == member_id:
                return member
        return None

