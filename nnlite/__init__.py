"""nnlite - minimal in-memory exact nearest neighbour index.

Stores named vectors and answers top-k queries under cosine, Euclidean or
Manhattan distance with a brute-force scan.
"""

__version__ = "0.1.0"
__author__ = "nnlite Contributors"

from nnlite.config import Settings, get_settings
from nnlite.errors import DimensionMismatchError, IndexFormatError, NNLiteError, UnknownMetricError
from nnlite.index import Metric, NearestNeighbours

__all__ = [
    "DimensionMismatchError",
    "IndexFormatError",
    "Metric",
    "NNLiteError",
    "NearestNeighbours",
    "Settings",
    "UnknownMetricError",
    "__version__",
    "get_settings",
]
