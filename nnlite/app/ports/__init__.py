"""Port interfaces for the nnlite application layer.

Domain logic depends on these protocols, never on concrete adapters.
"""

__all__ = [
    "IndexSnapshot",
    "PersistencePort",
    "VectorHit",
    "VectorStorePort",
]

from nnlite.app.ports.persistence import IndexSnapshot, PersistencePort
from nnlite.app.ports.vector_store import VectorHit, VectorStorePort
