"""
Alternative routes by excluding one edge of the shortest path at a time.

This does not enumerate the true k shortest paths. Each detour is the
shortest route that avoids one connection of the base route, which is cheap
and tends to produce visibly different routes for an interactive map.
"""

import logging
from typing import Any, Collection, List, Optional

from ...exclusions import ExclusionSet, Pair
from ..base import PathFinder
from ..models import PathResult
from ..utils import contains_route
from .shortest_path import DijkstraFinder

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUTES = 3


class AlternativeRouteFinder(PathFinder[PathResult]):
    """
    Bounded set of distinct, loop-free routes between two nodes.

    The base shortest route is part of the result. ``max_routes`` bounds the
    total number of routes returned, base route included.
    """

    def __init__(self, graph: Any):
        super().__init__(graph)
        self._dijkstra = DijkstraFinder(graph)

    def find_path(
        self,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> Optional[PathResult]:
        """Best route, i.e. the base shortest path."""
        return self._dijkstra.find_path(start_node, end_node, excluded)

    def find_routes(
        self,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
        max_routes: int = DEFAULT_MAX_ROUTES,
    ) -> List[PathResult]:
        """
        Collect up to ``max_routes`` distinct routes.

        For every connection of the base route, in route order, the search is
        repeated with that one connection excluded on top of the caller's
        exclusions. New routes are kept unless they repeat a collected one in
        either direction. The caller's exclusion set is never modified.

        Args:
            start_node: Key to start from
            end_node: Key to stop at
            excluded: Impassable connections
            max_routes: Upper bound on the number of routes returned

        Returns:
            List[PathResult]: Routes sorted by total weight, ties broken by
                node sequence. Empty if there is no route at all.
        """
        if max_routes < 1:
            return []

        base = self._dijkstra.find_path(start_node, end_node, excluded)
        if base is None:
            logger.debug(f"No route between {start_node!r} and {end_node!r}")
            return []

        routes: List[PathResult] = [base]
        caller_pairs = ExclusionSet(excluded or ())

        for a, b in base.hops:
            if len(routes) >= max_routes:
                break
            detour = self._dijkstra.find_path(start_node, end_node, caller_pairs.with_pair(a, b))
            if detour is None:
                logger.debug(f"Excluding {a!r}-{b!r} disconnects the route")
                continue
            if contains_route(routes, detour):
                continue
            routes.append(detour)

        routes.sort(key=lambda route: route.sort_key(self.weights))
        logger.debug(f"Found {len(routes)} routes between {start_node!r} and {end_node!r}")
        return routes
