"""Index file operations used by the command line."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from nnlite.app.ports import PersistencePort, VectorHit
from nnlite.index.metrics import Metric
from nnlite.index.store import NearestNeighbours

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexSummary:
    """Overview of a stored index."""

    path: Path
    metric_name: str
    count: int
    dimensions: list[int]


class IndexService:
    """Create, extend and query index files through a persistence port."""

    def __init__(self, persistence: PersistencePort) -> None:
        self._persistence = persistence

    def open(self, path: Path) -> NearestNeighbours:
        return NearestNeighbours.load(path, persistence=self._persistence)

    def _write(self, index: NearestNeighbours, path: Path, *, overwrite: bool) -> None:
        if path.exists() and not overwrite:
            raise FileExistsError(f"Index already exists: {path}")
        index.save(path, persistence=self._persistence)

    def create(
        self, path: Path, metric: str | Metric, *, overwrite: bool = False
    ) -> NearestNeighbours:
        """Write an empty index using ``metric`` to ``path``."""
        index = NearestNeighbours(metric)
        self._write(index, path, overwrite=overwrite)
        logger.info("Created empty %s index at %s", index.metric_name, path)
        return index

    def ingest(
        self,
        source: Path,
        path: Path,
        metric: str | Metric,
        *,
        overwrite: bool = False,
    ) -> NearestNeighbours:
        """Build an index from a raw JSON vector dump and write it to ``path``."""
        index = NearestNeighbours.from_json(metric, source, persistence=self._persistence)
        self._write(index, path, overwrite=overwrite)
        logger.info("Ingested %d vectors from %s into %s", len(index), source, path)
        return index

    def add(self, path: Path, identifier: str, vector: Sequence[float]) -> NearestNeighbours:
        """Insert or replace one vector in the index stored at ``path``."""
        index = self.open(path)
        replaced = identifier in index
        index.add_vector(identifier, vector)
        index.save(path, persistence=self._persistence)
        logger.info("%s %r in %s", "Replaced" if replaced else "Added", identifier, path)
        return index

    def query(self, path: Path, vector: Sequence[float], top_k: int) -> list[VectorHit]:
        """Return the ``top_k`` nearest neighbours of ``vector`` in the index at ``path``."""
        index = self.open(path)
        hits = index.query(vector, top_k=top_k)
        logger.info("Query against %s returned %d of %d vectors", path, len(hits), len(index))
        return hits

    def describe(self, path: Path) -> IndexSummary:
        index = self.open(path)
        dimensions = sorted({vector.shape[0] for vector in index.vectors.values()})
        return IndexSummary(
            path=path,
            metric_name=index.metric_name,
            count=len(index),
            dimensions=dimensions,
        )
