"""Exception types raised by nnlite."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class NNLiteError(Exception):
    """Base class for recoverable nnlite errors."""


class UnknownMetricError(NNLiteError, ValueError):
    """Raised when a metric name is not one of the supported metrics."""

    def __init__(self, metric: object, choices: Sequence[str]) -> None:
        self.metric = metric
        self.choices = tuple(choices)
        super().__init__(
            f"Did not recognise metric {metric!r}; expected one of: {', '.join(self.choices)}"
        )


class IndexFormatError(NNLiteError):
    """Raised when a persisted index or vector dump cannot be parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class DimensionMismatchError(AssertionError):
    """Raised when two vectors of different lengths are compared.

    This is a precondition violation rather than a recoverable condition and
    deliberately does not derive from :class:`NNLiteError`.
    """

    def __init__(self, left: int, right: int, *, identifier: str | None = None) -> None:
        self.left = left
        self.right = right
        self.identifier = identifier
        message = (
            f"expected vectors of the same length but got {left} and {right}"
        )
        if identifier is not None:
            message = f"{message} (stored vector {identifier!r})"
        super().__init__(message)

    def with_identifier(self, identifier: str) -> DimensionMismatchError:
        """Return a copy of this error naming the stored vector involved."""
        return DimensionMismatchError(self.left, self.right, identifier=identifier)
