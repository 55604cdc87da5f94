"""In-memory vector store with exact, brute-force nearest neighbour search."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Union

import numpy as np

from nnlite.app.adapters.json_file import JSONFilePersistenceAdapter
from nnlite.app.ports.persistence import IndexSnapshot, PersistencePort
from nnlite.app.ports.vector_store import VectorHit, VectorStorePort
from nnlite.errors import DimensionMismatchError
from nnlite.index.distance import OrderedDistance
from nnlite.index.metrics import Metric

logger = logging.getLogger(__name__)

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(values: VectorLike) -> np.ndarray:
    """Convert ``values`` to a non-empty one-dimensional ``float64`` array."""
    vector = np.array(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"Vectors must be one-dimensional; received shape {vector.shape}")
    if vector.size == 0:
        raise ValueError("Vectors must contain at least one element")
    return vector


class NearestNeighbours(VectorStorePort):
    """Exact k-nearest-neighbour index over named vectors.

    Every query scans all stored vectors, so it suits small to medium
    collections. Identifiers are unique; adding an existing identifier
    replaces its vector.

    Example:
        >>> index = NearestNeighbours("euclidean")
        >>> index.add_vector("a", [1.0, 2.0, 3.0])
        >>> index.add_vector("b", [7.0, 2.0, 9.0])
        >>> index.query_by_vector([7.0, 2.0, 9.0], 1)
        ['b']
    """

    def __init__(
        self,
        metric: str | Metric = Metric.COSINE,
        vectors: Mapping[str, VectorLike] | None = None,
    ) -> None:
        self._metric = Metric.parse(metric)
        self._vectors: dict[str, np.ndarray] = {}
        if vectors:
            self.add_vectors(vectors)

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def metric_name(self) -> str:
        return self._metric.value

    @property
    def vectors(self) -> Mapping[str, np.ndarray]:
        """Read-only view of the stored vectors."""
        return MappingProxyType(self._vectors)

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._vectors

    def __iter__(self) -> Iterator[str]:
        return iter(self._vectors)

    def __repr__(self) -> str:
        return f"NearestNeighbours(metric={self.metric_name!r}, size={len(self)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NearestNeighbours):
            return NotImplemented
        if self._metric is not other._metric or self._vectors.keys() != other._vectors.keys():
            return False
        return all(
            vector.shape == other._vectors[identifier].shape
            and vector.tobytes() == other._vectors[identifier].tobytes()
            for identifier, vector in self._vectors.items()
        )

    __hash__ = None  # type: ignore[assignment]

    def ids(self) -> list[str]:
        return list(self._vectors)

    def get_vector(self, identifier: str) -> np.ndarray:
        """Return a copy of the vector stored under ``identifier``."""
        return self._vectors[identifier].copy()

    def add_vector(self, identifier: str, vector: VectorLike) -> None:
        """Insert ``vector`` under ``identifier``, replacing any previous vector.

        Lengths are not checked against other stored vectors here; a mismatch
        surfaces when the vectors are compared during a query.
        """
        replaced = identifier in self._vectors
        self._vectors[identifier] = as_vector(vector)
        logger.debug("%s vector %r", "Replaced" if replaced else "Added", identifier)

    def add_vectors(
        self, items: Mapping[str, VectorLike] | Iterable[tuple[str, VectorLike]]
    ) -> None:
        """Insert several vectors in iteration order (last write wins)."""
        pairs = items.items() if isinstance(items, Mapping) else items
        for identifier, vector in pairs:
            self.add_vector(identifier, vector)

    def _rank(self, query_vector: VectorLike, no_neighbours: int) -> list[tuple[OrderedDistance, str]]:
        if no_neighbours < 0:
            raise ValueError(f"Number of neighbours must be non-negative; received {no_neighbours}")

        query = as_vector(query_vector)
        distance = self._metric.function

        # All distances are computed before anything is returned, so a single
        # mismatched vector fails the whole query.
        scored: list[tuple[OrderedDistance, str]] = []
        for identifier, vector in self._vectors.items():
            try:
                value = distance(vector, query)
            except DimensionMismatchError as exc:
                raise exc.with_identifier(identifier) from None
            scored.append((OrderedDistance.from_float(value), identifier))

        # Stable sort: equal keys keep the store's iteration order. That
        # tie-break is an implementation detail, not a guarantee.
        scored.sort(key=lambda pair: pair[0])
        return scored[:no_neighbours]

    def query_by_vector(self, query_vector: VectorLike, no_neighbours: int) -> list[str]:
        """Return the ids of the ``no_neighbours`` vectors nearest to ``query_vector``.

        Ids are ordered by ascending distance. Fewer ids are returned when the
        store holds fewer vectors.

        Raises:
            DimensionMismatchError: If any stored vector differs in length from
                ``query_vector``.
        """
        return [identifier for _, identifier in self._rank(query_vector, no_neighbours)]

    def query(self, query_vector: VectorLike, *, top_k: int = 10) -> list[VectorHit]:
        """Like :meth:`query_by_vector` but include each hit's distance."""
        return [
            VectorHit(identifier=identifier, distance=key.value)
            for key, identifier in self._rank(query_vector, top_k)
        ]

    def to_snapshot(self) -> IndexSnapshot:
        return IndexSnapshot(
            metric_name=self.metric_name,
            vectors={identifier: vector.tolist() for identifier, vector in self._vectors.items()},
        )

    @classmethod
    def from_snapshot(cls, snapshot: IndexSnapshot) -> NearestNeighbours:
        return cls(snapshot.metric_name, snapshot.vectors)

    def save(self, path: Path, *, persistence: PersistencePort | None = None) -> None:
        """Write the index to ``path`` (JSON by default)."""
        (persistence or JSONFilePersistenceAdapter()).save(self.to_snapshot(), Path(path))

    @classmethod
    def load(cls, path: Path, *, persistence: PersistencePort | None = None) -> NearestNeighbours:
        """Load an index previously written with :meth:`save`."""
        snapshot = (persistence or JSONFilePersistenceAdapter()).load(Path(path))
        return cls.from_snapshot(snapshot)

    @classmethod
    def from_json(
        cls,
        metric: str | Metric,
        vectors_file: Path,
        *,
        persistence: PersistencePort | None = None,
    ) -> NearestNeighbours:
        """Build an index from a ``{"id": [1.0, 2.0, ...], ...}`` JSON file.

        Useful for loading vectors exported from numpy, torch and similar
        libraries.
        """
        index = cls(metric)
        index.add_vectors((persistence or JSONFilePersistenceAdapter()).ingest(Path(vectors_file)))
        return index
