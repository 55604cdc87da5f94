"""Distance metrics and the closed metric selector.

Every metric takes two one-dimensional ``float64`` arrays of equal length and
returns a non-negative ``float`` where ``0.0`` means identical under that
metric. Comparing vectors of different lengths raises
:class:`~nnlite.errors.DimensionMismatchError`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import Enum

import numpy as np

from nnlite.errors import DimensionMismatchError, UnknownMetricError

MetricFunction = Callable[[np.ndarray, np.ndarray], float]


def _check_shapes(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(a.shape[0] if a.ndim else 0, b.shape[0] if b.ndim else 0)


def _unit_scaled(vector: np.ndarray) -> np.ndarray:
    # Cosine is scale invariant; dividing by the largest magnitude keeps the
    # dot products clear of overflow and underflow.
    peak = float(np.max(np.abs(vector))) if vector.size else 0.0
    if peak == 0.0 or not math.isfinite(peak):
        return vector
    return vector / peak


def cosine_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Return ``1 - cos(a, b)``.

    Zero-norm inputs produce NaN, which is propagated unchanged.
    """
    _check_shapes(a, b)
    a = _unit_scaled(a)
    b = _unit_scaled(b)
    with np.errstate(divide="ignore", invalid="ignore"):
        # Both squared norms lie in [1, len(a)] after scaling, so the product
        # cannot overflow and sqrt(x * x) == x keeps cosine_distance(v, v) at 0.0
        denominator = math.sqrt(float(np.dot(a, a)) * float(np.dot(b, b)))
        similarity = np.float64(np.dot(a, b)) / np.float64(denominator)
    return float(1.0 - similarity)


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Return the L2 distance between ``a`` and ``b``."""
    _check_shapes(a, b)
    diff = a - b
    return float(np.sqrt(np.dot(diff, diff)))


def manhattan_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Return the L1 distance between ``a`` and ``b``."""
    _check_shapes(a, b)
    return float(np.abs(a - b).sum())


class Metric(str, Enum):
    """Supported distance metrics."""

    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"

    @property
    def function(self) -> MetricFunction:
        return _METRIC_FUNCTIONS[self]

    @classmethod
    def parse(cls, name: str | Metric) -> Metric:
        """Resolve ``name`` to a metric, rejecting anything unrecognised.

        Matching is exact and case-sensitive.
        """
        if isinstance(name, Metric):
            return name
        for member in cls:
            if isinstance(name, str) and name == member.value:
                return member
        raise UnknownMetricError(name, available_metrics())

    def __str__(self) -> str:
        return self.value


_METRIC_FUNCTIONS: dict[Metric, MetricFunction] = {
    Metric.COSINE: cosine_distance,
    Metric.EUCLIDEAN: euclidean_distance,
    Metric.MANHATTAN: manhattan_distance,
}


def available_metrics() -> tuple[str, ...]:
    """Return the accepted metric names."""
    return tuple(member.value for member in Metric)


def metric_factory(name: str | Metric) -> MetricFunction:
    """Return the distance function for ``name``.

    Raises:
        UnknownMetricError: If ``name`` is not a supported metric.
    """
    return Metric.parse(name).function
