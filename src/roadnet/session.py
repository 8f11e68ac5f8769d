"""
Editor-facing session over the road network engine.

A NetworkSession holds what the map editor works on: one graph and the
caller-owned set of blocked connections. Each editor action maps to one
method here. The session validates user input before it reaches the engine
(the engine itself ignores bad input silently) and passes its exclusion set
into every search call; the graph never stores it.

Rendering, hit-testing and dialogs stay in the editor.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .config import RoutingConfig
from .core.exceptions import EdgeNotFoundError, InvalidOperationError, NodeNotFoundError
from .core.exclusions import ExclusionSet
from .core.graph import Graph
from .core.graph_paths import PathFinding, PathResult
from .core.models import Edge, Point
from .core.serialization import FIELD_SEPARATOR, TextGraphCodec
from .infrastructure.storage import NetworkStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeListing:
    """One row of the editor's connection list."""

    source: str
    target: str
    label: Any
    weight: Any
    blocked: bool

    def display(self) -> str:
        text = f"{self.source} - {self.target} ({self.label}, {self.weight})"
        return f"{text} [BLOCKED]" if self.blocked else text


class NetworkSession:
    """
    Network plus blocked connections, as edited by one user.

    Attributes:
        config (RoutingConfig): Session settings
        codec (TextGraphCodec): File format used by load/save
        graph (Graph): The network being edited
        blocked (ExclusionSet): Connections currently closed
    """

    def __init__(
        self,
        graph: Optional[Graph] = None,
        blocked: Optional[ExclusionSet] = None,
        config: Optional[RoutingConfig] = None,
        codec: Optional[TextGraphCodec] = None,
    ):
        self.config = config if config is not None else RoutingConfig()
        self.codec = codec if codec is not None else TextGraphCodec()
        self.graph: Graph = graph if graph is not None else Graph(self.codec.weights)
        self.blocked = blocked if blocked is not None else ExclusionSet()

    # Node and edge editing

    def _require_node(self, key: str) -> None:
        if not self.graph.has_node(key):
            raise NodeNotFoundError(f"Node '{key}' not found")

    def _require_edge(self, source: str, target: str) -> None:
        self._require_node(source)
        self._require_node(target)
        if not self.graph.has_edge(source, target):
            raise EdgeNotFoundError(f"No connection between '{source}' and '{target}'")

    def add_node(self, key: str, x: float, y: float) -> None:
        """
        Add a location.

        Raises:
            InvalidOperationError: If the key is empty, unusable in a network
                file, or already taken, or a coordinate is not a finite number
        """
        key = (key or "").strip()
        if not key:
            raise InvalidOperationError("Node key must not be empty")
        if FIELD_SEPARATOR in key or key.startswith("#"):
            raise InvalidOperationError(f"Node key '{key}' cannot contain ';' or start with '#'")
        if self.graph.has_node(key):
            raise InvalidOperationError(f"Node '{key}' already exists")
        try:
            point = Point(float(x), float(y))
        except (TypeError, ValueError):
            raise InvalidOperationError(f"Coordinates of '{key}' must be numbers")
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            raise InvalidOperationError(f"Coordinates of '{key}' must be finite")
        self.graph.add_node(key, point)
        logger.info(f"Added node {key} at ({x}, {y})")

    def _check_connection(self, source: str, target: str, label: str, weight: Any) -> str:
        self._require_node(source)
        self._require_node(target)
        if source == target:
            raise InvalidOperationError("Source and target must differ")
        label = (label or "").strip()
        if not label:
            raise InvalidOperationError("Connection label must not be empty")
        if FIELD_SEPARATOR in label:
            raise InvalidOperationError("Connection label cannot contain ';'")
        if not self.graph.weights.is_valid(weight):
            raise InvalidOperationError(f"Invalid weight {weight!r}")
        return label

    def add_edge(self, source: str, target: str, label: str, weight: Any) -> None:
        """
        Connect two locations.

        Raises:
            NodeNotFoundError: If an endpoint does not exist
            InvalidOperationError: For self-loops, empty labels or invalid weights
        """
        label = self._check_connection(source, target, label, weight)
        self.graph.add_edge(source, target, label, weight)
        logger.info(f"Added connection {source}-{target} '{label}' ({weight})")

    def update_edge(self, source: str, target: str, label: str, weight: Any) -> None:
        """
        Rename and reweight a connection in both directions.

        Raises:
            EdgeNotFoundError: If the two nodes are not connected
        """
        label = self._check_connection(source, target, label, weight)
        if not self.graph.update_edge(source, target, label, weight):
            raise EdgeNotFoundError(f"No connection between '{source}' and '{target}'")
        logger.info(f"Updated connection {source}-{target} to '{label}' ({weight})")

    def remove_edge(self, source: str, target: str) -> int:
        """
        Delete every connection between two nodes and forget its blocked state.

        Raises:
            EdgeNotFoundError: If the two nodes are not connected
        """
        self._require_edge(source, target)
        removed = self.graph.remove_edge(source, target)
        self.blocked.discard(source, target)
        logger.info(f"Removed {removed} connection(s) {source}-{target}")
        return removed

    # Closures

    def block(self, source: str, target: str) -> None:
        """
        Mark a connection impassable.

        Raises:
            EdgeNotFoundError: If the two nodes are not connected
        """
        self._require_edge(source, target)
        self.blocked.add(source, target)
        logger.info(f"Blocked {source}-{target}")

    def unblock(self, source: str, target: str) -> None:
        self.blocked.discard(source, target)

    def reset_blocks(self) -> None:
        self.blocked.clear()
        logger.info("Cleared all blocked connections")

    def is_blocked(self, source: str, target: str) -> bool:
        return (source, target) in self.blocked

    # Queries

    def node_keys(self) -> List[str]:
        return self.graph.get_keys()

    def edge_listing(self) -> List[EdgeListing]:
        """Every connection once, with its blocked flag."""
        return [
            EdgeListing(
                source=source,
                target=edge.target_key,
                label=edge.label,
                weight=edge.weight,
                blocked=self.is_blocked(source, edge.target_key),
            )
            for source, edge in self.graph.connections()
        ]

    def find_edge_by_label(self, query: str) -> List[Tuple[str, Edge]]:
        """
        Find connections for the editor's edge search box.

        A ``source-target`` query such as ``a-b`` is first looked up as a
        connection between those two nodes. Otherwise, or if they are not
        connected, the query is matched against labels ignoring case.

        Returns:
            List[Tuple[str, Edge]]: Matches as ``(source_key, edge)``
        """
        query = query.strip()
        parts = [part.strip() for part in query.split("-")]
        if len(parts) == 2 and all(parts):
            source, target = parts
            edges = self.graph.edges_between(source, target)
            if edges:
                return [(source, edge) for edge in edges]
        return self.graph.find_edges_by_label(query)

    def route(self, start: str, end: str) -> Optional[PathResult]:
        """
        Shortest route avoiding blocked connections, None if there is none.

        Raises:
            NodeNotFoundError: If start or end does not exist
        """
        self._require_node(start)
        self._require_node(end)
        return PathFinding.shortest_path(self.graph, start, end, self.blocked)

    def alternatives(self, start: str, end: str, max_routes: Optional[int] = None) -> List[PathResult]:
        """
        Several distinct routes avoiding blocked connections, shortest first.

        Raises:
            NodeNotFoundError: If start or end does not exist
        """
        self._require_node(start)
        self._require_node(end)
        limit = self.config.max_routes if max_routes is None else max_routes
        return PathFinding.alternative_paths(self.graph, start, end, self.blocked, max_routes=limit)

    # Persistence

    def _storage(self, path: str) -> NetworkStorage:
        return NetworkStorage(path, self.codec, create_backup=self.config.create_backup)

    async def load(self, path: str) -> None:
        """
        Replace the network and blocked set with a file's contents.

        Raises:
            StorageError: If the file cannot be read; the session is unchanged
        """
        self.graph, self.blocked = await self._storage(path).load()

    async def save(self, path: str) -> None:
        """
        Write the network and blocked set to a file.

        Raises:
            StorageError: If the file cannot be written
        """
        await self._storage(path).save(self.graph, self.blocked)

    async def open_default(self) -> bool:
        """
        Load the configured startup file if it exists.

        Returns:
            bool: True if a file was loaded, False if the session stays empty
        """
        storage = self._storage(self.config.default_network_file)
        if not storage.exists():
            logger.info(f"No startup file at {storage.path}, starting empty")
            return False
        self.graph, self.blocked = await storage.load()
        return True
