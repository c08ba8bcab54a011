"""Data models and projection engine for household life plans."""

from .household import (
    Asset,
    Education,
    Expense,
    FamilyMember,
    Goals,
    HouseholdSnapshot,
    Housing,
    Income,
    Insurance,
    LifeEvent,
    Loan,
    Pension,
    RealEstate,
    UserSettings,
)
from .ledger import LedgerCategory, LineItem, YearRecord, ledger_series
from .amortization import MortgageCalculator, SimpleLoanCalculator
from .projection_metrics import (
    ProjectionMetricsCalculator,
    ProjectionMetricsConfig,
    ProjectionMetricsResult,
)
from .simulation import SimulationState, YearProcessor, project

__all__ = [
    "HouseholdSnapshot",
    "UserSettings",
    "FamilyMember",
    "Income",
    "Expense",
    "Pension",
    "Education",
    "Insurance",
    "Housing",
    "Asset",
    "RealEstate",
    "Loan",
    "LifeEvent",
    "Goals",
    "LedgerCategory",
    "LineItem",
    "YearRecord",
    "ledger_series",
    "MortgageCalculator",
    "SimpleLoanCalculator",
    "ProjectionMetricsCalculator",
    "ProjectionMetricsConfig",
    "ProjectionMetricsResult",
    "SimulationState",
    "YearProcessor",
    "project",
]
