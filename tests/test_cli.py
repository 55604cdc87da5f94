"""CLI integration smoke tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from nnlite import __version__
from nnlite.cli import app, parse_vector
from nnlite.index import NearestNeighbours

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"nnlite version {__version__}" in result.stdout


def test_metrics_lists_supported_names(override_settings) -> None:
    result = runner.invoke(app, ["metrics"])
    assert result.exit_code == 0, result.output
    assert result.stdout.split() == ["cosine", "euclidean", "manhattan"]


def test_create_add_query_by_name(override_settings) -> None:
    """Bare index names resolve into the configured index directory."""

    result = runner.invoke(app, ["index", "create", "demo", "--metric", "euclidean"])
    assert result.exit_code == 0, result.output
    index_path = override_settings.get_index_dir() / "demo.nn"
    assert index_path.exists()

    for identifier, vector in [("a", "1,2,3"), ("b", "[7, 2, 9]"), ("c", "4,2.1,3.4")]:
        result = runner.invoke(app, ["index", "add", "demo", identifier, vector])
        assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["index", "query", "demo", "7,2,9", "-k", "1"])
    assert result.exit_code == 0, result.output
    assert "1. b" in result.stdout

    stored = NearestNeighbours.load(index_path)
    assert stored.metric_name == "euclidean"
    assert len(stored) == 3


def test_data_dir_option_overrides_resolved_settings(override_settings, temp_dir: Path) -> None:
    override_settings.get_data_dir()
    other = temp_dir / "elsewhere"

    result = runner.invoke(app, ["--data-dir", str(other), "index", "create", "demo"])
    assert result.exit_code == 0, result.output
    assert (other / "indexes" / "demo.nn").exists()
    assert not (override_settings.get_index_dir() / "demo.nn").exists()


def test_ingest_and_query_json_output(
    override_settings, temp_dir: Path, sample_vectors_json: Path
) -> None:
    index_path = temp_dir / "out" / "vectors.nn"
    result = runner.invoke(
        app,
        ["index", "ingest", str(sample_vectors_json), str(index_path), "--metric", "manhattan"],
    )
    assert result.exit_code == 0, result.output
    assert "Indexed 4 vectors (manhattan)" in result.stdout

    result = runner.invoke(
        app, ["index", "query", str(index_path), "[4, 2, 7]", "--top-k", "2", "--json"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["schema_id"] == "query_results"
    assert payload["schema_version"] == 1
    assert payload["producer"] == f"nnlite-{__version__}"
    assert payload["total_hits"] == 2
    assert [hit["identifier"] for hit in payload["results"]] == ["c", "b"]
    assert [hit["rank"] for hit in payload["results"]] == [1, 2]
    assert payload["results"][1]["distance"] == 5.0


def test_query_uses_default_top_k(
    override_settings, temp_dir: Path, sample_vectors_json: Path
) -> None:
    override_settings.default_top_k = 3
    index_path = temp_dir / "vectors.nn"
    runner.invoke(app, ["index", "ingest", str(sample_vectors_json), str(index_path)])

    result = runner.invoke(app, ["index", "query", str(index_path), "1,1,1", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["total_hits"] == 3


def test_info_reports_summary(override_settings, temp_dir: Path, sample_vectors_json: Path) -> None:
    index_path = temp_dir / "vectors.nn"
    runner.invoke(app, ["index", "ingest", str(sample_vectors_json), str(index_path)])

    result = runner.invoke(app, ["index", "info", str(index_path), "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["metric_name"] == "cosine"
    assert payload["count"] == 4
    assert payload["dimensions"] == [3]

    result = runner.invoke(app, ["index", "info", str(index_path)])
    assert result.exit_code == 0, result.output
    assert "Vectors:    4" in result.stdout


def test_unknown_metric_exits_with_configuration_error(override_settings, temp_dir: Path) -> None:
    index_path = temp_dir / "bad.nn"
    result = runner.invoke(app, ["index", "create", str(index_path), "--metric", "Cosine"])
    assert result.exit_code == 2
    assert "Did not recognise metric 'Cosine'" in result.output
    assert not index_path.exists()


def test_existing_index_requires_force(override_settings, temp_dir: Path) -> None:
    index_path = temp_dir / "index.nn"
    assert runner.invoke(app, ["index", "create", str(index_path)]).exit_code == 0

    result = runner.invoke(app, ["index", "create", str(index_path)])
    assert result.exit_code == 1
    assert "--force" in result.output

    result = runner.invoke(app, ["index", "create", str(index_path), "--force", "-m", "manhattan"])
    assert result.exit_code == 0, result.output


def test_missing_index_exits_with_io_error(override_settings, temp_dir: Path) -> None:
    result = runner.invoke(app, ["index", "query", str(temp_dir / "nope.nn"), "1,2"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_malformed_index_exits_with_io_error(override_settings, temp_dir: Path) -> None:
    index_path = temp_dir / "broken.nn"
    index_path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["index", "info", str(index_path)])
    assert result.exit_code == 1
    assert "malformed file" in result.output


def test_index_with_unknown_metric_exits_with_io_error(override_settings, temp_dir: Path) -> None:
    index_path = temp_dir / "odd.nn"
    index_path.write_text(json.dumps({"metric_name": "jaccard", "vectors": {}}), encoding="utf-8")
    result = runner.invoke(app, ["index", "info", str(index_path)])
    assert result.exit_code == 1
    assert "malformed file" in result.output
    assert "jaccard" in result.output


def test_dimension_mismatch_exits_with_precondition_code(
    override_settings, temp_dir: Path, sample_vectors_json: Path
) -> None:
    index_path = temp_dir / "vectors.nn"
    runner.invoke(app, ["index", "ingest", str(sample_vectors_json), str(index_path)])

    result = runner.invoke(app, ["index", "query", str(index_path), "1,2"])
    assert result.exit_code == 3
    assert "dimension mismatch" in result.output


def test_unparseable_vector_is_a_usage_error(override_settings, temp_dir: Path) -> None:
    index_path = temp_dir / "index.nn"
    runner.invoke(app, ["index", "create", str(index_path)])
    result = runner.invoke(app, ["index", "add", str(index_path), "x", "1,two,3"])
    assert result.exit_code == 2


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1,2,3", [1.0, 2.0, 3.0]),
        (" 1.5 , -2 ", [1.5, -2.0]),
        ("[1, 2.5, -3]", [1.0, 2.5, -3.0]),
        ("1e-3", [0.001]),
    ],
)
def test_parse_vector(raw: str, expected: list[float]) -> None:
    assert parse_vector(raw) == expected


@pytest.mark.parametrize("raw", ["", "  ", "[]", "[1, true]", '["1"]', "{}", "1,,2", "[1,"])
def test_parse_vector_rejects_bad_input(raw: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_vector(raw)
