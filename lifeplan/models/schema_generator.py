"""
JSON Schema generator for household snapshots.

This module publishes the snapshot JSON schema so the data-entry layer can
validate what it sends to the projection endpoint.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .household import HouseholdSnapshot

SCHEMA_ID = "https://lifeplan.local/schema/household_snapshot_v1.json"


def generate_snapshot_schema() -> Dict[str, Any]:
    """Generate the JSON schema for the HouseholdSnapshot model."""
    schema = HouseholdSnapshot.model_json_schema()
    schema.update(
        {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "$id": SCHEMA_ID,
            "title": "Household Snapshot Schema v1",
            "description": "Household financial entities consumed by one cash-flow projection",
        }
    )
    return schema


def save_snapshot_schema(output_path: Path) -> None:
    """Save the snapshot JSON schema to a file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(generate_snapshot_schema(), f, indent=2)


if __name__ == "__main__":
    schema_path = (
        Path(__file__).parent.parent.parent / "schema" / "household_snapshot_v1.json"
    )
    save_snapshot_schema(schema_path)
    print(f"Schema saved to {schema_path}")
