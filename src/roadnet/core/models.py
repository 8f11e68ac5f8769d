"""
Node and edge records of the road network.

A logical connection between two locations is stored as two mirrored
``Edge`` records, one in each endpoint's adjacency list. The graph keeps the
two records in step; nothing in this module enforces that on its own.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, NamedTuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class Point(NamedTuple):
    """Map position of a location. Its meaning is up to the caller."""

    x: float
    y: float


@dataclass
class Edge(Generic[K]):
    """
    Directed adjacency record.

    Attributes:
        target_key (K): Key of the node this record points to
        label (Any): Caller data attached to the connection, e.g. a road name
        weight (Any): Cost of traversing the connection, from the weight algebra
    """

    target_key: K
    label: Any
    weight: Any


@dataclass
class Node(Generic[K, V]):
    """
    Location in the network.

    The payload is fixed at creation; the adjacency list is owned and
    mutated by the graph only.

    Attributes:
        key (K): Unique, totally ordered key
        data (V): Opaque payload, e.g. a ``Point``
        edges (List[Edge]): Outgoing adjacency records, order irrelevant
    """

    key: K
    data: V
    edges: List[Edge[K]] = field(default_factory=list)

    def neighbors(self) -> List[K]:
        """Keys reachable over one adjacency record, duplicates kept."""
        return [edge.target_key for edge in self.edges]

    def edges_to(self, target_key: K) -> List[Edge[K]]:
        """All adjacency records pointing at ``target_key``."""
        return [edge for edge in self.edges if edge.target_key == target_key]

    @property
    def degree(self) -> int:
        """Number of adjacency records."""
        return len(self.edges)
