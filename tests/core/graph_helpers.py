"""Graph builders and invariant checks shared by the core tests."""

import random
from collections import Counter

from roadnet.core.exclusions import is_excluded
from roadnet.core.graph import Graph
from roadnet.core.models import Point


def build_graph(nodes, edges, weights=None) -> Graph:
    """Build a graph from ``[key]`` and ``[(a, b, label, weight)]``."""
    graph = Graph(weights)
    for index, key in enumerate(nodes):
        graph.add_node(key, Point(float(index), float(index)))
    for a, b, label, weight in edges:
        graph.add_edge(a, b, label, weight)
    return graph


def random_graph(seed: int, node_count: int = 8, edge_count: int = 14) -> Graph:
    """Random graph with integral float weights, parallel edges allowed."""
    rng = random.Random(seed)
    keys = [f"n{i}" for i in range(node_count)]
    shuffled = keys[:]
    rng.shuffle(shuffled)
    graph = Graph()
    for key in shuffled:
        graph.add_node(key, Point(float(rng.randint(0, 100)), float(rng.randint(0, 100))))
    for i in range(edge_count):
        a, b = rng.sample(keys, 2)
        graph.add_edge(a, b, f"road{i}", float(rng.randint(1, 9)))
    return graph


def assert_symmetric(graph: Graph) -> None:
    """Every adjacency record has a mirror with the same label and weight."""
    for node in graph.get_all_nodes():
        outgoing = Counter((e.target_key, e.label, e.weight) for e in node.edges)
        for (target_key, label, weight), count in outgoing.items():
            target = graph.get_node(target_key)
            assert target is not None
            mirrored = sum(
                1
                for e in target.edges
                if e.target_key == node.key and e.label == label and e.weight == weight
            )
            assert mirrored == count, f"{node.key}->{target_key} has no matching mirror"


def edge_multiset(graph: Graph) -> Counter:
    """Connections as unordered pairs with label and weight."""
    return Counter(
        (tuple(sorted((source, edge.target_key))), edge.label, edge.weight)
        for source, edge in graph.connections()
    )


def respects_exclusions(nodes, excluded) -> bool:
    """No consecutive pair of the sequence is excluded."""
    return not any(is_excluded(excluded, a, b) for a, b in zip(nodes, nodes[1:]))


def is_simple_path(nodes) -> bool:
    """The sequence visits every node at most once."""
    return len(set(nodes)) == len(nodes)
