"""
Undirected, weighted road network graph.

This module provides the Graph class that owns every node and edge record of
the network. Nodes live in an ordered key store, so enumeration is always in
ascending key order. Each node carries an adjacency list; a connection between
A and B is stored as two mirrored records (A->B and B->A) with the same label
and weight, and every mutator keeps the two in step.

Unknown keys are not errors here. Mutators silently do nothing and queries
return None or empty results.

The graph performs no locking. It is meant to be owned by a single writer;
embedding applications that share it between threads must serialize access.
"""

import logging
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from .models import Edge, Node
from .store import OrderedKeyStore
from .weights import FloatWeights, WeightAlgebra

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class Graph(Generic[K, V]):
    """
    Road network with symmetric adjacency lists.

    Attributes:
        weights (WeightAlgebra): Cost domain of the edge weights
        _nodes (OrderedKeyStore): Node table keyed by node key
    """

    def __init__(self, weights: Optional[WeightAlgebra] = None):
        """
        Initialize an empty graph.

        Args:
            weights (Optional[WeightAlgebra]): Cost domain for edge weights,
                defaults to ``FloatWeights``
        """
        self.weights: WeightAlgebra = weights if weights is not None else FloatWeights()
        self._nodes: OrderedKeyStore[K, Node[K, V]] = OrderedKeyStore()

    def add_node(self, key: K, data: V) -> None:
        """
        Add a node with an empty adjacency list.

        Duplicate keys are ignored; the first payload is kept.
        """
        if not self._nodes.insert(key, Node(key, data)):
            logger.debug(f"Node {key!r} already exists, keeping original payload")

    def add_edge(self, source_key: K, target_key: K, label: Any, weight: Any) -> None:
        """
        Connect two nodes in both directions.

        Parallel connections are kept. Self-loops are not rejected here; the
        record pair then sits on the one node.

        Args:
            source_key: Key of one endpoint
            target_key: Key of the other endpoint
            label: Caller data for the connection, e.g. a road name
            weight: Traversal cost, must be valid for the graph's weight algebra
        """
        source = self._nodes.find(source_key)
        target = self._nodes.find(target_key)
        if source is None or target is None:
            logger.debug(f"Ignoring edge {source_key!r}-{target_key!r}: unknown endpoint")
            return
        if not self.weights.is_valid(weight):
            logger.warning(f"Ignoring edge {source_key!r}-{target_key!r}: invalid weight {weight!r}")
            return

        source.edges.append(Edge(target_key, label, weight))
        target.edges.append(Edge(source_key, label, weight))

    def remove_edge(self, source_key: K, target_key: K) -> int:
        """
        Remove every connection between two nodes.

        Args:
            source_key: Key of one endpoint
            target_key: Key of the other endpoint

        Returns:
            int: Number of undirected connections removed, 0 if there were none
                or an endpoint is unknown
        """
        source = self._nodes.find(source_key)
        target = self._nodes.find(target_key)
        if source is None or target is None:
            return 0

        before = len(source.edges)
        source.edges[:] = [e for e in source.edges if e.target_key != target_key]
        removed = before - len(source.edges)
        if source is target:
            # Both records of a self-loop sit on the same node
            return removed // 2

        target.edges[:] = [e for e in target.edges if e.target_key != source_key]
        return removed

    def update_edge(self, source_key: K, target_key: K, label: Any, weight: Any) -> bool:
        """
        Rewrite label and weight of the first connection between two nodes.

        Records of one pair are appended and removed together, so the first
        record on each side belongs to the same connection and both are
        updated together.

        Returns:
            bool: True if a connection was updated
        """
        source = self._nodes.find(source_key)
        target = self._nodes.find(target_key)
        if source is None or target is None:
            return False
        if not self.weights.is_valid(weight):
            logger.warning(f"Rejecting update of {source_key!r}-{target_key!r}: invalid weight {weight!r}")
            return False

        forward = source.edges_to(target_key)
        backward = target.edges_to(source_key)
        if not forward or not backward:
            return False

        if source is target:
            # Self-loop: the first two records form the pair
            pair = forward[:2]
        else:
            pair = [forward[0], backward[0]]
        for edge in pair:
            edge.label = label
            edge.weight = weight
        return True

    def get_node(self, key: K) -> Optional[Node[K, V]]:
        """Get a node by key, or None if it does not exist."""
        return self._nodes.find(key)

    def has_node(self, key: K) -> bool:
        """Check if a node exists in the graph."""
        return key in self._nodes

    def iter_nodes(self) -> Iterator[Node[K, V]]:
        """Lazily yield nodes in ascending key order."""
        return self._nodes.entries_in_order()

    def get_all_nodes(self) -> List[Node[K, V]]:
        """Get all nodes in ascending key order."""
        return list(self._nodes.entries_in_order())

    def get_keys(self) -> List[K]:
        """Get all node keys in ascending order."""
        return list(self._nodes.keys_in_order())

    def find_edge(self, source_key: K, target_key: K) -> Optional[Edge[K]]:
        """Get the first adjacency record from ``source_key`` to ``target_key``."""
        edges = self.edges_between(source_key, target_key)
        return edges[0] if edges else None

    def edges_between(self, source_key: K, target_key: K) -> List[Edge[K]]:
        """Get all adjacency records from ``source_key`` to ``target_key``."""
        source = self._nodes.find(source_key)
        if source is None:
            return []
        return source.edges_to(target_key)

    def has_edge(self, source_key: K, target_key: K) -> bool:
        """Check if at least one connection joins the two nodes."""
        return self.find_edge(source_key, target_key) is not None

    def connections(self) -> Iterator[Tuple[K, Edge[K]]]:
        """
        Yield every undirected connection exactly once.

        Each connection is reported from its smaller endpoint as
        ``(source_key, edge)``, in ascending source key order. A self-loop is
        stored as two records on one node and reported once.
        """
        for node in self._nodes.entries_in_order():
            loop_records = 0
            for edge in node.edges:
                if edge.target_key == node.key:
                    if loop_records % 2 == 0:
                        yield node.key, edge
                    loop_records += 1
                elif node.key < edge.target_key:
                    yield node.key, edge

    def connection_count(self) -> int:
        """Number of undirected connections."""
        return sum(1 for _ in self.connections())

    def find_edges_by_label(self, label: str) -> List[Tuple[K, Edge[K]]]:
        """
        Find connections whose label matches, ignoring case.

        Returns:
            List[Tuple[K, Edge]]: Matching connections as ``(source_key, edge)``
        """
        wanted = label.casefold()
        return [
            (source_key, edge)
            for source_key, edge in self.connections()
            if edge.label is not None and str(edge.label).casefold() == wanted
        ]

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node[K, V]]:
        return self.iter_nodes()

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self)}, connections={self.connection_count()})"
