"""Graph path finding functionality."""

from typing import Any, Collection, List, Optional

from ..exclusions import Pair
from ..graph import Graph
from .algorithms.alternatives import DEFAULT_MAX_ROUTES, AlternativeRouteFinder
from .algorithms.shortest_path import DijkstraFinder
from .base import PathFinder
from .models import PathResult, SearchResult
from .utils import calculate_path_weight, format_path

__all__ = [
    "AlternativeRouteFinder",
    "DEFAULT_MAX_ROUTES",
    "DijkstraFinder",
    "PathFinder",
    "PathFinding",
    "PathResult",
    "SearchResult",
    "calculate_path_weight",
    "format_path",
]


class PathFinding:
    """Static interface for path finding operations."""

    @staticmethod
    def _validate_max_routes(max_routes: int) -> None:
        if not isinstance(max_routes, int) or isinstance(max_routes, bool):
            raise TypeError("max_routes must be an integer")

    @classmethod
    def dijkstra(
        cls,
        graph: Graph,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> SearchResult:
        """Run Dijkstra and return the raw predecessor map and distance table."""
        return DijkstraFinder(graph).search(start_node, end_node, excluded)

    @classmethod
    def shortest_path(
        cls,
        graph: Graph,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> Optional[PathResult]:
        """Find shortest path between nodes, None if there is none."""
        return DijkstraFinder(graph).find_path(start_node, end_node, excluded)

    @classmethod
    def alternative_paths(
        cls,
        graph: Graph,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
        max_routes: int = DEFAULT_MAX_ROUTES,
    ) -> List[PathResult]:
        """Find up to ``max_routes`` distinct routes, shortest first."""
        cls._validate_max_routes(max_routes)
        return AlternativeRouteFinder(graph).find_routes(
            start_node, end_node, excluded, max_routes=max_routes
        )
