"""Schema validation and metadata stamping utilities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from nnlite import __version__

SCHEMA_METADATA_FIELDS = {
    "schema_id",
    "schema_version",
    "producer",
    "produced_at",
}


class SchemaValidationError(Exception):
    """Raised when schema validation fails."""


def strip_schema_metadata(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``record`` without schema metadata fields."""

    return {key: value for key, value in record.items() if key not in SCHEMA_METADATA_FIELDS}


@dataclass(frozen=True, slots=True)
class SchemaStamp:
    """Schema metadata applied to persisted records."""

    schema_id: str
    schema_version: int
    producer: str
    produced_at: str

    def apply(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of ``payload`` with schema metadata placed first."""

        stamped: dict[str, Any] = {
            "schema_id": self.schema_id,
            "schema_version": self.schema_version,
            "producer": self.producer,
            "produced_at": self.produced_at,
        }
        stamped.update(payload)
        return stamped


def get_schema_path(schema_id: str, version: int = 1) -> Path:
    """Get path to the bundled JSON schema file.

    Args:
        schema_id: Schema identifier (e.g., 'nn_index', 'vector_dump')
        version: Schema version (default: 1)

    Returns:
        Path to schema JSON file
    """
    schema_dir = Path(__file__).parent.parent / "schemas"
    return schema_dir / f"{schema_id}@{version}.json"


@lru_cache(maxsize=None)
def load_schema(schema_id: str, version: int = 1) -> dict[str, Any]:
    """Load a bundled JSON schema.

    Raises:
        FileNotFoundError: If schema file not found
    """
    schema_path = get_schema_path(schema_id, version)
    with open(schema_path, encoding="utf-8") as f:
        return json.load(f)


def build_schema_stamp(
    *,
    schema_id: str,
    schema_version: int,
    producer: str | None = None,
    produced_at: str | None = None,
) -> SchemaStamp:
    """Construct a :class:`SchemaStamp` for reuse across writers."""

    default_producer = producer or f"nnlite-{__version__}"
    timestamp = produced_at or datetime.now(UTC).isoformat()
    return SchemaStamp(
        schema_id=schema_id,
        schema_version=schema_version,
        producer=default_producer,
        produced_at=timestamp,
    )


def validate_record(record: Any, schema_id: str, schema_version: int = 1) -> None:
    """Validate ``record`` against a bundled schema.

    Raises:
        SchemaValidationError: If ``record`` does not conform
    """
    import jsonschema

    schema = load_schema(schema_id, schema_version)

    try:
        jsonschema.validate(record, schema)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SchemaValidationError(
            f"{schema_id}@{schema_version} validation failed at {location}: {exc.message}"
        ) from exc
