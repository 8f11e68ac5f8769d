"""
Utility functions for path finding operations.
"""

import logging
from heapq import heappop, heappush
from typing import Any, List, Optional, Sequence, Tuple

from ..graph import Graph
from ..weights import WeightAlgebra
from .models import PathResult

logger = logging.getLogger(__name__)


class LazyPriorityQueue:
    """
    Binary heap work queue without decrease-key.

    An improved distance is pushed as a new entry and older entries for the
    same key stay in the heap until they are popped. Priorities are ordered by
    the weight algebra's ``less`` when one is given. Ties are broken by
    insertion order, so runs are deterministic even for keys that do not
    compare.
    """

    def __init__(self, weights: Optional[WeightAlgebra] = None) -> None:
        self._queue: List[Tuple[Any, int, Any, Any]] = []
        self._counter = 0
        self._weights = weights

    def push(self, item: Any, priority: Any) -> None:
        order = self._weights.order_key(priority) if self._weights else priority
        heappush(self._queue, (order, self._counter, priority, item))
        self._counter += 1

    def pop(self) -> Tuple[Any, Any]:
        """Remove and return ``(priority, item)`` with the lowest priority."""
        _, _, priority, item = heappop(self._queue)
        return priority, item

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)


def calculate_path_weight(graph: Graph, nodes: Sequence[Any]) -> Any:
    """
    Total weight of a node sequence, using the cheapest record for each hop.

    Returns:
        The summed weight, or the unreachable sentinel if some hop has no edge
    """
    algebra: WeightAlgebra = graph.weights
    total = algebra.zero
    for a, b in zip(nodes, nodes[1:]):
        edges = graph.edges_between(a, b)
        if not edges:
            return algebra.unreachable
        cheapest = edges[0].weight
        for edge in edges[1:]:
            if algebra.less(edge.weight, cheapest):
                cheapest = edge.weight
        total = algebra.add(total, cheapest)
    return total


def contains_route(routes: Sequence[PathResult], candidate: PathResult) -> bool:
    """Whether ``candidate`` repeats any collected route in either direction."""
    return any(route.same_route(candidate) for route in routes)


def format_path(path: PathResult, weights: Optional[WeightAlgebra] = None) -> str:
    """Human readable form, e.g. ``a -> b -> c (8)``."""
    total = weights.format(path.total_weight) if weights else str(path.total_weight)
    return f"{' -> '.join(str(key) for key in path.nodes)} ({total})"
