"""JSON file adapter implementing PersistencePort."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from nnlite.app.ports.persistence import IndexSnapshot, PersistencePort
from nnlite.errors import IndexFormatError
from nnlite.utils.atomic import atomic_write_text
from nnlite.utils.schema import (
    SchemaValidationError,
    build_schema_stamp,
    strip_schema_metadata,
    validate_record,
)

logger = logging.getLogger(__name__)

INDEX_SCHEMA_ID = "nn_index"
INDEX_SCHEMA_VERSION = 1
DUMP_SCHEMA_ID = "vector_dump"


class JSONFilePersistenceAdapter(PersistencePort):
    """Store indexes as single JSON documents.

    Floats are written with Python's shortest round-trip representation, so
    reloaded vectors are bit-identical to the saved ones.
    """

    def save(self, snapshot: IndexSnapshot, path: Path) -> None:
        destination = Path(path)
        stamp = build_schema_stamp(
            schema_id=INDEX_SCHEMA_ID, schema_version=INDEX_SCHEMA_VERSION
        )
        document = stamp.apply(
            {
                "metric_name": snapshot.metric_name,
                "vectors": {
                    identifier: [float(x) for x in values]
                    for identifier, values in snapshot.vectors.items()
                },
            }
        )
        atomic_write_text(destination, json.dumps(document))
        logger.info(
            "Saved %d vectors (%s) to %s",
            len(snapshot.vectors),
            snapshot.metric_name,
            destination,
        )

    def load(self, path: Path) -> IndexSnapshot:
        source = Path(path)
        document = self._read_json(source)

        if isinstance(document, dict):
            version = document.get("schema_version", INDEX_SCHEMA_VERSION)
            if isinstance(version, int) and version > INDEX_SCHEMA_VERSION:
                raise IndexFormatError(
                    source,
                    f"unsupported schema_version {version} "
                    f"(this version of nnlite reads up to {INDEX_SCHEMA_VERSION})",
                )

        try:
            validate_record(document, INDEX_SCHEMA_ID, INDEX_SCHEMA_VERSION)
        except SchemaValidationError as exc:
            raise IndexFormatError(source, str(exc)) from exc

        payload = strip_schema_metadata(document)
        vectors = {
            str(identifier): [float(x) for x in values]
            for identifier, values in payload["vectors"].items()
        }
        logger.info("Loaded %d vectors from %s", len(vectors), source)
        return IndexSnapshot(metric_name=payload["metric_name"], vectors=vectors)

    def ingest(self, path: Path) -> dict[str, list[float]]:
        source = Path(path)
        document = self._read_json(source)

        try:
            validate_record(document, DUMP_SCHEMA_ID)
        except SchemaValidationError as exc:
            raise IndexFormatError(source, str(exc)) from exc

        vectors = {
            str(identifier): [float(x) for x in values]
            for identifier, values in document.items()
        }
        logger.info("Ingested %d vectors from %s", len(vectors), source)
        return vectors

    @staticmethod
    def _read_json(path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"Index file not found: {path}")

        try:
            with open(path, encoding="utf-8") as fh:
                return json.load(fh)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(path, f"invalid JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise IndexFormatError(path, f"not UTF-8 text: {exc}") from exc
