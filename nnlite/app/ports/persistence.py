"""Persistence port interface for index files and raw vector dumps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(slots=True)
class IndexSnapshot:
    """Plain record of an index: metric name plus id -> vector values."""

    metric_name: str
    vectors: dict[str, list[float]] = field(default_factory=dict)


class PersistencePort(Protocol):
    """Port interface for saving and loading vector indexes.

    Adapter: JSON documents on the local filesystem.

    Side effects: Reads/writes files.
    """

    def save(self, snapshot: IndexSnapshot, path: Path) -> None:
        """Persist ``snapshot`` to ``path``.

        Args:
            snapshot: Index contents to write
            path: Destination file
        """
        ...

    def load(self, path: Path) -> IndexSnapshot:
        """Read a snapshot previously written by :meth:`save`.

        Args:
            path: Index file

        Returns:
            The stored snapshot

        Raises:
            FileNotFoundError: If ``path`` does not exist
            IndexFormatError: If the document is malformed
        """
        ...

    def ingest(self, path: Path) -> dict[str, list[float]]:
        """Read a raw ``{id: [numbers]}`` JSON dump.

        Args:
            path: JSON file

        Returns:
            Mapping of identifier to vector values

        Raises:
            FileNotFoundError: If ``path`` does not exist
            IndexFormatError: If the document is not an object of number arrays
        """
        ...
