"""nnlite CLI application with Typer."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from nnlite import __version__
from nnlite.bootstrap import bootstrap_application
from nnlite.config import get_settings, set_settings
from nnlite.errors import DimensionMismatchError, IndexFormatError, UnknownMetricError
from nnlite.index.metrics import available_metrics
from nnlite.utils.cli_output import json_response
from nnlite.utils.logging import configure_logging

EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_PRECONDITION = 3

app = typer.Typer(
    name="nnlite",
    help="Minimal in-memory exact nearest neighbour index",
    add_completion=False,
    no_args_is_help=True,
)
index_app = typer.Typer(help="Create, extend and query index files", no_args_is_help=True)
app.add_typer(index_app, name="index")

_METRIC_HELP = f"Distance metric: {', '.join(available_metrics())}"


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"nnlite version {__version__}")
        raise typer.Exit()


def parse_vector(raw: str) -> list[float]:
    """Parse ``"[1, 2, 3]"`` or ``"1,2,3"`` into a list of floats."""
    text = raw.strip()
    if not text:
        raise typer.BadParameter("vector cannot be empty")

    if text.startswith("["):
        try:
            values = json.loads(text)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"invalid JSON array: {exc}") from exc
        if not isinstance(values, list) or not all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
        ):
            raise typer.BadParameter("JSON vector must be an array of numbers")
        vector = [float(v) for v in values]
    else:
        try:
            vector = [float(part) for part in text.split(",")]
        except ValueError as exc:
            raise typer.BadParameter(f"expected comma-separated numbers: {exc}") from exc

    if not vector:
        raise typer.BadParameter("vector cannot be empty")
    return vector


def _fail(message: str, code: int) -> typer.Exit:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Translate library exceptions into messages and exit codes."""
    try:
        yield
    except UnknownMetricError as exc:
        raise _fail(str(exc), EXIT_CONFIG_ERROR) from exc
    except DimensionMismatchError as exc:
        raise _fail(f"dimension mismatch: {exc}", EXIT_PRECONDITION) from exc
    except IndexFormatError as exc:
        raise _fail(f"malformed file {exc.path}: {exc.reason}", EXIT_IO_ERROR) from exc
    except FileExistsError as exc:
        raise _fail(f"{exc} (use --force to overwrite)", EXIT_IO_ERROR) from exc
    except FileNotFoundError as exc:
        raise _fail(str(exc), EXIT_IO_ERROR) from exc
    except ValueError as exc:
        raise _fail(str(exc), EXIT_CONFIG_ERROR) from exc


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Override data directory"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """nnlite - exact nearest neighbour search over named vectors."""
    settings = get_settings()
    if data_dir:
        settings = settings.with_data_dir(data_dir)
    set_settings(settings)
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command("metrics")
def list_metrics() -> None:
    """List the supported distance metrics."""
    for name in available_metrics():
        typer.echo(name)


@index_app.command("create")
def index_create(
    index: Annotated[str, typer.Argument(help="Index file path or bare index name")],
    metric: Annotated[
        str | None,
        typer.Option("--metric", "-m", help=_METRIC_HELP),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing index"),
    ] = False,
) -> None:
    """Create an empty index."""
    container = bootstrap_application()
    settings = container.settings
    path = settings.resolve_index_path(index)

    with _handle_errors():
        created = container.index_service.create(
            path, metric or settings.default_metric, overwrite=force
        )

    typer.secho(f"Created empty {created.metric_name} index at {path}", fg=typer.colors.GREEN)


@index_app.command("ingest")
def index_ingest(
    source: Annotated[Path, typer.Argument(help='JSON file of {"id": [numbers], ...}')],
    index: Annotated[str, typer.Argument(help="Index file path or bare index name")],
    metric: Annotated[
        str | None,
        typer.Option("--metric", "-m", help=_METRIC_HELP),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing index"),
    ] = False,
) -> None:
    """Build an index from a raw JSON vector dump."""
    container = bootstrap_application()
    settings = container.settings
    path = settings.resolve_index_path(index)

    with _handle_errors():
        built = container.index_service.ingest(
            source, path, metric or settings.default_metric, overwrite=force
        )

    typer.secho(
        f"Indexed {len(built)} vectors ({built.metric_name}) to {path}",
        fg=typer.colors.GREEN,
    )


@index_app.command("add")
def index_add(
    index: Annotated[str, typer.Argument(help="Index file path or bare index name")],
    identifier: Annotated[str, typer.Argument(help="Vector identifier")],
    vector: Annotated[str, typer.Argument(help='Vector as "1,2,3" or "[1, 2, 3]"')],
) -> None:
    """Insert a vector, replacing any vector already stored under the id."""
    values = parse_vector(vector)
    container = bootstrap_application()
    path = container.settings.resolve_index_path(index)

    with _handle_errors():
        updated = container.index_service.add(path, identifier, values)

    typer.secho(
        f"Stored {identifier!r} in {path} ({len(updated)} vectors)", fg=typer.colors.GREEN
    )


@index_app.command("query")
def index_query(
    index: Annotated[str, typer.Argument(help="Index file path or bare index name")],
    vector: Annotated[str, typer.Argument(help='Query vector as "1,2,3" or "[1, 2, 3]"')],
    top_k: Annotated[
        int | None,
        typer.Option("--top-k", "-k", help="Number of neighbours to return", min=0),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Find the nearest stored vectors."""
    values = parse_vector(vector)
    container = bootstrap_application()
    settings = container.settings
    path = settings.resolve_index_path(index)
    limit = settings.default_top_k if top_k is None else top_k

    with _handle_errors():
        hits = container.index_service.query(path, values, limit)

    if json_output:
        typer.echo(
            json_response(
                "query_results",
                1,
                index=str(path),
                top_k=limit,
                total_hits=len(hits),
                results=[
                    {"rank": rank, "identifier": hit.identifier, "distance": hit.distance}
                    for rank, hit in enumerate(hits, 1)
                ],
            )
        )
        return

    if not hits:
        typer.secho("No vectors found", fg=typer.colors.YELLOW)
        return

    for rank, hit in enumerate(hits, 1):
        typer.echo(f"{rank}. {hit.identifier} (distance: {hit.distance:.6g})")


@index_app.command("info")
def index_info(
    index: Annotated[str, typer.Argument(help="Index file path or bare index name")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output summary as JSON"),
    ] = False,
) -> None:
    """Show metric, size and dimensions of an index."""
    container = bootstrap_application()
    path = container.settings.resolve_index_path(index)

    with _handle_errors():
        summary = container.index_service.describe(path)

    if json_output:
        typer.echo(
            json_response(
                "index_summary",
                1,
                path=str(summary.path),
                metric_name=summary.metric_name,
                count=summary.count,
                dimensions=summary.dimensions,
            )
        )
        return

    dims = ", ".join(str(d) for d in summary.dimensions) or "-"
    typer.echo(f"Index:      {summary.path}")
    typer.echo(f"Metric:     {summary.metric_name}")
    typer.echo(f"Vectors:    {summary.count}")
    typer.echo(f"Dimensions: {dims}")


if __name__ == "__main__":
    app()
