"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from nnlite.app.adapters import JSONFilePersistenceAdapter
from nnlite.app.index_service import IndexService
from nnlite.app.ports import PersistencePort
from nnlite.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    persistence: PersistencePort
    index_service: IndexService


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Create the application container for CLI consumption."""

    active_settings = settings or get_settings()
    persistence = JSONFilePersistenceAdapter()
    return ApplicationContainer(
        settings=active_settings,
        persistence=persistence,
        index_service=IndexService(persistence),
    )
