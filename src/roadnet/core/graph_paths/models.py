"""
Data models for graph path finding.

This module provides the result containers used by the path finders:
- SearchResult: Raw output of a single-source, single-target Dijkstra run
- PathResult: A reconstructed route with its total weight

"No path" is a normal outcome. ``SearchResult.reconstruct`` returns an empty
list and ``SearchResult.to_path_result`` returns None in that case; only the
strict ``require_path`` turns it into an exception.

Example:
    >>> result = DijkstraFinder(graph).search("a", "c")
    >>> result.reconstruct()
    ['a', 'b', 'c']
    >>> result.distance
    8.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import GraphOperationError
from ..weights import WeightAlgebra


@dataclass(frozen=True)
class PathResult:
    """
    A route through the network.

    Attributes:
        nodes: Node keys from start to end
        total_weight: Sum of the edge weights along the route
    """

    nodes: Tuple[Any, ...]
    total_weight: Any

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple(self.nodes))
        if not self.nodes:
            raise ValueError("path must contain at least one node")

    def __len__(self) -> int:
        """Return the number of edges in the path."""
        return len(self.nodes) - 1

    def __iter__(self):
        """Return an iterator over the node keys."""
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Any:
        return self.nodes[index]

    @property
    def start(self) -> Any:
        return self.nodes[0]

    @property
    def end(self) -> Any:
        return self.nodes[-1]

    @property
    def hops(self) -> List[Tuple[Any, Any]]:
        """Consecutive ``(from, to)`` key pairs along the route."""
        return list(zip(self.nodes, self.nodes[1:]))

    def same_route(self, other: "PathResult") -> bool:
        """Whether both describe the same node sequence, read in either direction."""
        return self.nodes == other.nodes or self.nodes == tuple(reversed(other.nodes))

    def sort_key(self, weights: Optional[WeightAlgebra] = None) -> Tuple[Any, Tuple[Any, ...]]:
        """
        Ascending by weight, ties broken by the node sequence.

        With a weight algebra the weight is compared through its ``less``.
        """
        weight = weights.order_key(self.total_weight) if weights else self.total_weight
        return (weight, self.nodes)


@dataclass
class SearchResult:
    """
    Output of one Dijkstra run.

    Attributes:
        start: Requested start key
        end: Requested end key
        predecessors: Map from each reached node to the node it was reached from
        distances: Best known distance for every node in the graph
        unreachable: Sentinel of the weight algebra used for the search
        nodes_explored: Number of queue entries popped
    """

    start: Any
    end: Any
    predecessors: Dict[Any, Any] = field(default_factory=dict)
    distances: Dict[Any, Any] = field(default_factory=dict)
    unreachable: Any = None
    nodes_explored: int = 0

    def reconstruct(self) -> List[Any]:
        """
        Walk the predecessor chain back from the end node.

        Returns:
            List of node keys from start to end, or an empty list when the
            end cannot be traced back to the start
        """
        if self.start == self.end:
            return [self.start] if self.found_start else []

        path = [self.end]
        current = self.end
        while current != self.start:
            if current not in self.predecessors:
                return []
            current = self.predecessors[current]
            path.append(current)
        path.reverse()
        return path

    @property
    def found_start(self) -> bool:
        """Whether the start node took part in the search."""
        return self.start in self.distances and self.distances[self.start] != self.unreachable

    @property
    def found(self) -> bool:
        """Whether a path from start to end exists."""
        return bool(self.reconstruct())

    @property
    def distance(self) -> Any:
        """Distance of the end node, the unreachable sentinel if there is no path."""
        if not self.found:
            return self.unreachable
        return self.distances[self.end]

    def to_path_result(self) -> Optional[PathResult]:
        """Reconstructed route as a PathResult, or None if there is no path."""
        nodes = self.reconstruct()
        if not nodes:
            return None
        return PathResult(nodes=tuple(nodes), total_weight=self.distances[self.end])

    def require_path(self) -> PathResult:
        """
        Reconstructed route, failing if there is none.

        Raises:
            GraphOperationError: If no path exists between start and end
        """
        result = self.to_path_result()
        if result is None:
            raise GraphOperationError(f"No path exists between {self.start} and {self.end}")
        return result
