"""
Single-source, single-target Dijkstra search with edge exclusions.
"""

import logging
from typing import Any, Collection, Dict, Optional

from ...exclusions import Pair, is_excluded
from ..base import PathFinder
from ..models import PathResult, SearchResult
from ..utils import LazyPriorityQueue

logger = logging.getLogger(__name__)


class DijkstraFinder(PathFinder[PathResult]):
    """
    Dijkstra's algorithm over the graph's weight algebra.

    The work queue is a lazy-deletion heap: improved distances are pushed as
    new entries and stale entries are processed again when popped. Relaxation
    only accepts strictly smaller candidates, so reprocessing is harmless and
    the search terminates. The only shortcut is stopping as soon as the end
    node is popped.
    """

    def search(
        self,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> SearchResult:
        """
        Run the search and return predecessors and the distance table.

        Args:
            start_node: Key to start from
            end_node: Key to stop at
            excluded: Impassable connections, tested in both directions

        Returns:
            SearchResult: Predecessor map and full distance table. An unknown
                start yields empty predecessors and every distance left at the
                unreachable sentinel.
        """
        algebra = self.weights
        distances: Dict[Any, Any] = {key: algebra.unreachable for key in self.graph.get_keys()}
        predecessors: Dict[Any, Any] = {}
        result = SearchResult(
            start=start_node,
            end=end_node,
            predecessors=predecessors,
            distances=distances,
            unreachable=algebra.unreachable,
        )

        if not self.graph.has_node(start_node):
            logger.debug(f"Start node {start_node!r} not in graph, no search performed")
            return result

        distances[start_node] = algebra.zero
        pq = LazyPriorityQueue(algebra)
        pq.push(start_node, algebra.zero)
        logger.debug(f"Starting Dijkstra's algorithm from {start_node!r} to {end_node!r}")

        while not pq.empty():
            current_dist, current_key = pq.pop()
            result.nodes_explored += 1

            if current_key == end_node:
                logger.debug(f"Reached end node {end_node!r} with distance {current_dist}")
                break

            current_node = self.graph.get_node(current_key)
            if current_node is None:
                continue

            for edge in current_node.edges:
                if is_excluded(excluded, current_key, edge.target_key):
                    continue

                candidate = algebra.add(distances[current_key], edge.weight)
                if algebra.less(candidate, distances.get(edge.target_key, algebra.unreachable)):
                    distances[edge.target_key] = candidate
                    predecessors[edge.target_key] = current_key
                    pq.push(edge.target_key, candidate)

        logger.debug(f"Dijkstra explored {result.nodes_explored} queue entries")
        return result

    def find_path(
        self,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> Optional[PathResult]:
        """Find the shortest path, None if the end cannot be reached."""
        return self.search(start_node, end_node, excluded).to_path_result()
