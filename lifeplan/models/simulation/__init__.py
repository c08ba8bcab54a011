"""
Simulation package for life-plan cash-flow projections.

This package contains the projection driver, the per-year processor and the
mutable working state threaded between years.
"""

from .driver import project
from .state import SimulationState
from .year_processor import YearProcessor

__all__ = [
    "SimulationState",
    "YearProcessor",
    "project",
]
