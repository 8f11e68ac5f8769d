"""Path finding algorithms."""

from .alternatives import AlternativeRouteFinder
from .shortest_path import DijkstraFinder

__all__ = [
    "AlternativeRouteFinder",
    "DijkstraFinder",
]
