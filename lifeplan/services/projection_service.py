"""
Projection service for running household cash-flow projections.

This service sits between the HTTP layer and the pure projection engine: it
turns a raw snapshot payload into a validated HouseholdSnapshot, runs the
projection, summarizes it and shapes a JSON-ready response.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from pydantic import ValidationError

from lifeplan.config import Settings, get_global_settings
from lifeplan.models.household import HouseholdSnapshot
from lifeplan.models.projection_metrics import ProjectionMetricsCalculator
from lifeplan.models.simulation import project

logger = logging.getLogger(__name__)


class ProjectionInputError(ValueError):
    """Raised when a snapshot payload cannot be turned into a snapshot."""


class ProjectionService:
    """Service for validating snapshots and running projections."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        metrics_calculator: Optional[ProjectionMetricsCalculator] = None,
    ) -> None:
        """Initialize the projection service.

        Args:
            settings: Application settings (defaults to the global settings)
            metrics_calculator: Calculator for ledger summaries
        """
        self.settings = settings or get_global_settings()
        self.metrics_calculator = metrics_calculator or ProjectionMetricsCalculator()
        self.logger = logging.getLogger(__name__)

    def parse_snapshot(self, snapshot_data: Any) -> HouseholdSnapshot:
        """
        Validate a raw payload into a HouseholdSnapshot.

        Args:
            snapshot_data: Decoded JSON object

        Returns:
            HouseholdSnapshot

        Raises:
            ProjectionInputError: If the payload is structurally invalid or asks
                for an end age beyond the configured maximum
        """
        if not isinstance(snapshot_data, dict):
            raise ProjectionInputError("Snapshot must be a JSON object")

        try:
            snapshot = HouseholdSnapshot.model_validate(snapshot_data)
        except ValidationError as e:
            raise ProjectionInputError(f"Invalid snapshot: {str(e)}") from e

        end_age = snapshot.user_settings.simulation_end_age
        if end_age is not None and end_age > self.settings.max_simulation_end_age:
            raise ProjectionInputError(
                f"simulation_end_age must not exceed "
                f"{self.settings.max_simulation_end_age}"
            )
        return snapshot

    def run_projection(
        self,
        snapshot_data: Any,
        today: Optional[date] = None,
        rounded: bool = True,
    ) -> Dict[str, Any]:
        """Run a projection for a raw snapshot payload.

        Args:
            snapshot_data: Decoded JSON object describing the household
            today: Reference date for the run (defaults to today's date)
            rounded: Round amounts to whole units for presentation

        Returns:
            Dictionary with the timeline bounds, ledger records and metrics

        Raises:
            ProjectionInputError: If the payload cannot be validated
        """
        snapshot = self.parse_snapshot(snapshot_data)
        today = today or date.today()

        self.logger.info(f"Starting projection as of {today.isoformat()}")
        records = project(
            snapshot,
            today=today,
            default_end_age=self.settings.default_simulation_end_age,
        )

        if not records:
            if snapshot.user_settings.birth_date is None:
                self.logger.warning("Projection skipped: snapshot has no birth date")
            else:
                self.logger.warning(
                    "Projection skipped: simulation end age is before current age"
                )

        metrics = self.metrics_calculator.calculate_metrics(
            records, target_age=snapshot.user_settings.retirement_age
        )
        self.logger.info(f"Completed projection with {len(records)} years")

        return {
            "current_age": records[0].age if records else None,
            "start_year": records[0].year if records else None,
            "end_age": records[-1].age if records else None,
            "records": [
                (record.rounded() if rounded else record).to_payload()
                for record in records
            ],
            "metrics": metrics.model_dump(),
        }
