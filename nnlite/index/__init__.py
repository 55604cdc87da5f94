"""Distance metrics, ordered distance keys and the nearest neighbour store."""

from nnlite.index.distance import OrderedDistance, integer_decode
from nnlite.index.metrics import (
    Metric,
    MetricFunction,
    available_metrics,
    cosine_distance,
    euclidean_distance,
    manhattan_distance,
    metric_factory,
)
from nnlite.index.store import NearestNeighbours

__all__ = [
    "Metric",
    "MetricFunction",
    "NearestNeighbours",
    "OrderedDistance",
    "available_metrics",
    "cosine_distance",
    "euclidean_distance",
    "integer_decode",
    "manhattan_distance",
    "metric_factory",
]
