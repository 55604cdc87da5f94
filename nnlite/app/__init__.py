"""Application layer for nnlite.

Services here orchestrate the in-memory index and delegate file I/O to
adapters through the port interfaces in :mod:`nnlite.app.ports`.
"""
