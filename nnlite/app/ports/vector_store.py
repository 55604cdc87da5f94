"""Vector store port interface for exact nearest neighbour search."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import numpy as np


@dataclass(slots=True)
class VectorHit:
    """Single nearest neighbour result."""

    identifier: str
    distance: float


class VectorStorePort(Protocol):
    """Port interface for in-memory vector search.

    Implementations should provide:
    - Last-write-wins insertion keyed by identifier
    - Exact top-k search under the store's metric
    - Persistence to a single file

    Side effects: ``save`` writes to disk; everything else is in-memory.
    """

    @property
    def metric_name(self) -> str:
        """Name of the distance metric in effect."""
        ...

    def add_vector(self, identifier: str, vector: Sequence[float] | np.ndarray) -> None:
        """Insert or replace the vector stored under ``identifier``."""
        ...

    def query_by_vector(
        self, query_vector: Sequence[float] | np.ndarray, no_neighbours: int
    ) -> list[str]:
        """Return the ids of the ``no_neighbours`` nearest vectors."""
        ...

    def query(
        self, query_vector: Sequence[float] | np.ndarray, *, top_k: int = 10
    ) -> list[VectorHit]:
        """Return the ``top_k`` nearest vectors with their distances."""
        ...

    def save(self, path: Path) -> None:
        """Persist the store to ``path``."""
        ...
