"""
Tests for the network text format.
"""

import logging
import math
import os
from datetime import timedelta

import pytest

from roadnet.core.exceptions import StorageError
from roadnet.core.exclusions import ExclusionSet
from roadnet.core.graph import Graph
from roadnet.core.models import Point
from roadnet.core.serialization import TextGraphCodec
from roadnet.core.weights import DurationWeights

from graph_helpers import build_graph, edge_multiset, random_graph

TRIANGLE_TEXT = (
    "#NODES\n"
    "a;0;0\n"
    "b;10;0\n"
    "c;5;5\n"
    "#EDGES\n"
    "a;b;ab;5\n"
    "a;c;ac;10\n"
    "b;c;bc;3\n"
    "#BLOCKED\n"
    "a;b\n"
)


def test_encode_is_deterministic(triangle_graph):
    """Nodes by key, each connection once, blocked pairs normalized."""
    codec = TextGraphCodec()
    assert codec.encode(triangle_graph, {("b", "a")}) == TRIANGLE_TEXT


def test_encode_empty_graph():
    """An empty network still writes all three headers."""
    assert TextGraphCodec().encode(Graph()) == "#NODES\n#EDGES\n#BLOCKED\n"


def test_decode_triangle():
    """Decoding restores nodes, connections and blocked pairs."""
    graph, blocked = TextGraphCodec().decode(TRIANGLE_TEXT)
    assert graph.get_keys() == ["a", "b", "c"]
    assert graph.get_node("b").data == Point(10.0, 0.0)
    assert graph.find_edge("c", "b").weight == 3.0
    assert graph.find_edge("c", "b").label == "bc"
    assert list(blocked) == [("a", "b")]


def test_decode_is_tolerant(caplog):
    """Malformed lines are skipped one by one."""
    text = "\n".join(
        [
            "preamble text is ignored",
            "  #nodes  ",
            " a ; 1.5 ; 2 ",
            "b;3",
            "c;x;1",
            "d;4;4",
            "",
            "#EDGES",
            "a;d;main street;2.5",
            "a;d;short",
            "a;d;bad;abc",
            "a;d;negative;-1",
            "a;zzz;ghost;1",
            "#UNKNOWN",
            "whatever;1;2",
            "#Blocked",
            "a",
            "a;d",
        ]
    )
    with caplog.at_level(logging.DEBUG, logger="roadnet.core.serialization"):
        graph, blocked = TextGraphCodec().decode(text)

    assert graph.get_keys() == ["a", "d"]
    assert graph.get_node("a").data == Point(1.5, 2.0)
    assert [(e.label, e.weight) for e in graph.edges_between("a", "d")] == [("main street", 2.5)]
    assert ("d", "a") in blocked
    assert len(blocked) == 1
    assert "Decoded 2 nodes, 1 connections, 1 blocked pairs (6 lines skipped)" in caplog.text


def test_decode_edge_before_nodes_is_dropped():
    """Connections to nodes not yet defined are ignored."""
    graph, _ = TextGraphCodec().decode("#EDGES\na;b;x;1\n#NODES\na;0;0\nb;0;0\n")
    assert graph.connection_count() == 0
    assert len(graph) == 2


def test_decode_empty_text():
    """Text without records is an empty network, not an error."""
    graph, blocked = TextGraphCodec().decode("")
    assert len(graph) == 0
    assert not blocked


@pytest.mark.parametrize("seed", range(8))
def test_round_trip_random_graphs(seed):
    """Encoding then decoding keeps nodes, connections and blocked pairs."""
    graph = random_graph(seed)
    keys = graph.get_keys()
    blocked = ExclusionSet([(keys[0], keys[3]), (keys[5], keys[2])])
    codec = TextGraphCodec()

    restored, restored_blocked = codec.decode(codec.encode(graph, blocked))

    assert restored.get_keys() == keys
    assert [n.data for n in restored.get_all_nodes()] == [n.data for n in graph.get_all_nodes()]
    assert edge_multiset(restored) == edge_multiset(graph)
    assert restored_blocked == blocked
    assert codec.encode(restored, restored_blocked) == codec.encode(graph, blocked)


def test_self_loop_round_trip():
    """A self-loop is written once and read back as one connection."""
    graph = build_graph(["a"], [("a", "a", "loop", 1.0)])
    codec = TextGraphCodec()
    text = codec.encode(graph)
    assert text.count("a;a;loop;1") == 1
    restored, _ = codec.decode(text)
    assert restored.connection_count() == 1


def test_encode_rejects_separator_in_fields(triangle_graph):
    """Fields that would corrupt the file are refused."""
    codec = TextGraphCodec()
    triangle_graph.add_edge("a", "b", "semi;colon", 1.0)
    with pytest.raises(ValueError):
        codec.encode(triangle_graph)

    graph = build_graph(["#hash"], [])
    with pytest.raises(ValueError):
        codec.encode(graph)


def test_encode_requires_coordinates():
    """Payloads without coordinates cannot be written."""
    graph = Graph()
    graph.add_node("a", "not a point")
    with pytest.raises(ValueError, match="has no coordinates"):
        TextGraphCodec().encode(graph)


def test_duration_weight_column():
    """The weight column follows the codec's weight algebra."""
    codec = TextGraphCodec(DurationWeights())
    graph, _ = codec.decode("#NODES\na;0;0\nb;1;1\n#EDGES\na;b;r;90\n")
    assert graph.find_edge("a", "b").weight == timedelta(seconds=90)
    assert "a;b;r;90" in codec.encode(graph)


def test_dump_and_load(tmp_path, triangle_graph):
    """Synchronous file round trip."""
    path = str(tmp_path / "network.txt")
    codec = TextGraphCodec()
    codec.dump(triangle_graph, {("a", "b")}, path)
    with open(path, encoding="utf-8") as f:
        assert f.read() == TRIANGLE_TEXT

    graph, blocked = codec.load(path)
    assert edge_multiset(graph) == edge_multiset(triangle_graph)
    assert ("b", "a") in blocked


def test_load_missing_file(tmp_path):
    """Unreadable files raise StorageError."""
    with pytest.raises(StorageError):
        TextGraphCodec().load(str(tmp_path / "missing.txt"))


def test_dump_to_directory_fails(tmp_path, triangle_graph):
    """Unwritable targets raise StorageError."""
    target = tmp_path / "folder"
    os.makedirs(target)
    with pytest.raises(StorageError):
        TextGraphCodec().dump(triangle_graph, None, str(target))


@pytest.mark.parametrize("x", [math.inf, -math.inf, math.nan])
def test_encode_rejects_non_finite_coordinates(x):
    """A coordinate the decoder would refuse is not written."""
    graph = build_graph(["b"], [])
    graph.add_node("a", Point(x, 0.0))
    graph.add_edge("a", "b", "road", 1.0)
    with pytest.raises(ValueError, match="not a finite number"):
        TextGraphCodec().encode(graph)


def test_encode_rejects_label_with_surrounding_whitespace():
    """Labels that decoding would trim are refused."""
    graph = build_graph(["a", "b"], [("a", "b", " Main St ", 1.0)])
    with pytest.raises(ValueError, match="start or end with whitespace"):
        TextGraphCodec().encode(graph)


def test_label_with_inner_spaces_round_trips():
    """Inner whitespace in labels is kept."""
    graph = build_graph(["a", "b"], [("a", "b", "Main  St", 1.0)])
    codec = TextGraphCodec()
    restored, _ = codec.decode(codec.encode(graph))
    assert restored.find_edge("a", "b").label == "Main  St"


def test_decode_drops_blocked_pairs_with_unknown_nodes():
    """Blocked pairs must name existing nodes, wherever the section appears."""
    text = "#BLOCKED\na;b\na;zzz\n#NODES\na;0;0\nb;1;1\n#BLOCKED\nyyy;zzz\n"
    _, blocked = TextGraphCodec().decode(text)
    assert list(blocked) == [("a", "b")]
