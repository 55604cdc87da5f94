"""Tests for logging, schema and atomic write helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from nnlite.utils.atomic import atomic_write_text
from nnlite.utils.cli_output import json_response
from nnlite.utils.logging import configure_logging
from nnlite.utils.schema import (
    SchemaValidationError,
    build_schema_stamp,
    strip_schema_metadata,
    validate_record,
)


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("info")
    configure_logging(logging.DEBUG)
    own_handlers = [h for h in logger.handlers if getattr(h, "_nnlite_handler", False)]
    assert len(own_handlers) == 1
    assert logger.level == logging.DEBUG


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_atomic_write_replaces_content(temp_dir: Path) -> None:
    target = temp_dir / "out" / "file.json"
    atomic_write_text(target, "first")
    atomic_write_text(target, "second")
    assert target.read_text(encoding="utf-8") == "second"
    assert sorted(p.name for p in target.parent.iterdir()) == ["file.json"]


def test_schema_stamp_round_trip() -> None:
    stamp = build_schema_stamp(schema_id="nn_index", schema_version=1, produced_at="then")
    stamped = stamp.apply({"metric_name": "cosine", "vectors": {}})
    assert list(stamped)[:4] == ["schema_id", "schema_version", "producer", "produced_at"]
    assert stamped["produced_at"] == "then"
    assert strip_schema_metadata(stamped) == {"metric_name": "cosine", "vectors": {}}


def test_validate_record_reports_location() -> None:
    with pytest.raises(SchemaValidationError, match="vectors/a"):
        validate_record({"metric_name": "cosine", "vectors": {"a": ["x"]}}, "nn_index")


def test_json_response_wraps_payload() -> None:
    payload = json.loads(json_response("index_summary", 1, count=2))
    assert payload["schema_id"] == "index_summary"
    assert payload["count"] == 2
