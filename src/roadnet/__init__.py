"""
Roadnet - Road Network Routing Engine

This package models a weighted, undirected network of locations connected by
routes and answers shortest-path and alternative-route queries that may
temporarily exclude connections. It includes:

- An ordered node store and symmetric adjacency graph
- Dijkstra search generic over the path cost domain
- Alternative route search built on repeated Dijkstra runs
- A line-oriented text format for saving and loading networks
- An editor session and a command line front end
"""

__version__ = "0.1.0"
__author__ = "Roadnet Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("Roadnet requires Python 3.12 or higher")

# Import commonly used components for easier access
from .core.exclusions import ExclusionSet
from .core.graph import Graph
from .core.graph_paths import PathFinding, PathResult
from .core.models import Edge, Node, Point
from .core.serialization import TextGraphCodec

__all__ = [
    "Edge",
    "ExclusionSet",
    "Graph",
    "Node",
    "PathFinding",
    "PathResult",
    "Point",
    "TextGraphCodec",
]
