"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .json_file import JSONFilePersistenceAdapter

__all__ = [
    "JSONFilePersistenceAdapter",
]
