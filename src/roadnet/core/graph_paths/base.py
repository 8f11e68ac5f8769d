from abc import ABC, abstractmethod
from typing import Any, Collection, Optional

from ..exclusions import Pair
from ..graph import Graph


class PathFinder[T](ABC):
    """Abstract base class for path finding algorithms."""

    def __init__(self, graph: Graph):
        """Initialize finder with graph."""
        self.graph = graph

    @property
    def weights(self):
        return self.graph.weights

    @abstractmethod
    def find_path(
        self,
        start_node: Any,
        end_node: Any,
        excluded: Optional[Collection[Pair]] = None,
    ) -> Optional[T]:
        """Find path between nodes, None if there is none."""
        pass
