"""Shared test fixtures."""

import pytest

from roadnet.core.graph import Graph
from roadnet.core.models import Point

from graph_helpers import build_graph


@pytest.fixture
def triangle_graph() -> Graph:
    """
    Fixture providing the three-node test network:
    a --5-- b --3-- c, plus a --10-- c
    """
    graph = Graph()
    graph.add_node("a", Point(0.0, 0.0))
    graph.add_node("b", Point(10.0, 0.0))
    graph.add_node("c", Point(5.0, 5.0))
    graph.add_edge("a", "b", "ab", 5.0)
    graph.add_edge("b", "c", "bc", 3.0)
    graph.add_edge("a", "c", "ac", 10.0)
    return graph


@pytest.fixture
def ladder_graph() -> Graph:
    """
    Fixture providing three parallel two-hop routes from s to t:
    s-a-t (1+1), s-b-t (2+2), s-c-t (3+3)
    """
    return build_graph(
        ["s", "a", "b", "c", "t"],
        [
            ("s", "a", "sa", 1.0),
            ("a", "t", "at", 1.0),
            ("s", "b", "sb", 2.0),
            ("b", "t", "bt", 2.0),
            ("s", "c", "sc", 3.0),
            ("c", "t", "ct", 3.0),
        ],
    )


@pytest.fixture
def disconnected_graph() -> Graph:
    """Fixture providing two components: a-b and c-d."""
    return build_graph(
        ["a", "b", "c", "d"],
        [("a", "b", "ab", 1.0), ("c", "d", "cd", 1.0)],
    )
