"""Core road network engine."""

from .exceptions import (
    ConfigurationError,
    EdgeNotFoundError,
    GraphOperationError,
    InvalidOperationError,
    NodeNotFoundError,
    ResourceNotFoundError,
    RoadnetError,
    StorageError,
)
from .exclusions import ExclusionSet, is_excluded, normalize_pair
from .graph import Graph
from .graph_paths import (
    AlternativeRouteFinder,
    DijkstraFinder,
    PathFinding,
    PathResult,
    SearchResult,
)
from .models import Edge, Node, Point
from .serialization import TextGraphCodec
from .store import OrderedKeyStore
from .weights import DurationWeights, FloatWeights, HopWeights, WeightAlgebra

__all__ = [
    "AlternativeRouteFinder",
    "ConfigurationError",
    "DijkstraFinder",
    "DurationWeights",
    "Edge",
    "EdgeNotFoundError",
    "ExclusionSet",
    "FloatWeights",
    "Graph",
    "GraphOperationError",
    "HopWeights",
    "InvalidOperationError",
    "Node",
    "NodeNotFoundError",
    "OrderedKeyStore",
    "PathFinding",
    "PathResult",
    "Point",
    "ResourceNotFoundError",
    "RoadnetError",
    "SearchResult",
    "StorageError",
    "TextGraphCodec",
    "WeightAlgebra",
    "is_excluded",
    "normalize_pair",
]
