"""
Line-oriented text encoding of a road network.

The format has three sections, one record per line, fields separated by ``;``::

    #NODES
    <key>;<x>;<y>
    #EDGES
    <sourceKey>;<targetKey>;<label>;<weight>
    #BLOCKED
    <keyA>;<keyB>

Decoding is tolerant: lines are trimmed, blank lines and text before the first
header are ignored, headers match case-insensitively, unknown sections are
skipped, and a record with too few fields or an unparseable number is dropped
on its own without aborting the load. Connections and blocked pairs that name
an unknown node are dropped as well. Encoding is deterministic: nodes by key,
each connection once from its smaller endpoint, each blocked pair once.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Collection, Iterable, List, Optional, Tuple

from .exceptions import StorageError
from .exclusions import ExclusionSet, Pair, normalize_pair
from .graph import Graph
from .models import Point
from .weights import FloatWeights, WeightAlgebra, format_number, parse_number

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"
NODES_HEADER = "#NODES"
EDGES_HEADER = "#EDGES"
BLOCKED_HEADER = "#BLOCKED"


class GraphSerializer(ABC):
    @abstractmethod
    def encode(self, graph: Graph, excluded: Optional[Collection[Pair]] = None) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> Tuple[Graph, ExclusionSet]:
        pass


def _check_field(value: Any, what: str) -> str:
    text = str(value)
    if FIELD_SEPARATOR in text or "\n" in text or "\r" in text:
        raise ValueError(f"{what} {text!r} cannot contain ';' or line breaks")
    return text


def _check_key(key: Any) -> str:
    text = _check_field(key, "Node key")
    if not text.strip() or text != text.strip() or text.startswith("#"):
        raise ValueError(f"Node key {text!r} cannot be written to a network file")
    return text


def _check_label(label: Any) -> str:
    text = _check_field("" if label is None else label, "Edge label")
    if text != text.strip():
        raise ValueError(f"Edge label {text!r} cannot start or end with whitespace")
    return text


def _check_coordinate(key: Any, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"Node {key!r} has a coordinate that is not a finite number: {value!r}")
    return format_number(value)


class TextGraphCodec(GraphSerializer):
    """
    Encoder and decoder for the ``#NODES``/``#EDGES``/``#BLOCKED`` format.

    Node keys are strings and node payloads are ``Point`` values. The weight
    column is parsed and formatted by the weight algebra, so the same format
    carries float costs, hop counts or durations.

    Attributes:
        weights (WeightAlgebra): Cost domain of the weight column
    """

    def __init__(self, weights: Optional[WeightAlgebra] = None):
        self.weights: WeightAlgebra = weights if weights is not None else FloatWeights()

    def encode(self, graph: Graph, excluded: Optional[Collection[Pair]] = None) -> str:
        """
        Encode a network and its exclusion set.

        Raises:
            ValueError: If a key or label contains the field separator or a
                line break, a label has surrounding whitespace, or a node
                payload has no finite coordinates
        """
        return "\n".join(self.encode_lines(graph, excluded)) + "\n"

    def encode_lines(self, graph: Graph, excluded: Optional[Collection[Pair]] = None) -> List[str]:
        lines = [NODES_HEADER]
        for node in graph.iter_nodes():
            try:
                x, y = node.data.x, node.data.y
            except AttributeError:
                raise ValueError(f"Node {node.key!r} has no coordinates")
            lines.append(
                FIELD_SEPARATOR.join(
                    [
                        _check_key(node.key),
                        _check_coordinate(node.key, x),
                        _check_coordinate(node.key, y),
                    ]
                )
            )

        lines.append(EDGES_HEADER)
        for source_key, edge in graph.connections():
            lines.append(
                FIELD_SEPARATOR.join(
                    [
                        _check_key(source_key),
                        _check_key(edge.target_key),
                        _check_label(edge.label),
                        self.weights.format(edge.weight),
                    ]
                )
            )

        lines.append(BLOCKED_HEADER)
        for a, b in self._blocked_pairs(excluded or ()):
            lines.append(FIELD_SEPARATOR.join([_check_key(a), _check_key(b)]))
        return lines

    @staticmethod
    def _blocked_pairs(excluded: Iterable[Pair]) -> List[Pair]:
        return sorted({normalize_pair(a, b) for a, b in excluded})

    def decode(self, text: str) -> Tuple[Graph, ExclusionSet]:
        """
        Decode a network file's contents.

        Returns:
            Tuple[Graph, ExclusionSet]: The network and the blocked pairs
        """
        return self.decode_lines(text.splitlines())

    def decode_lines(self, raw_lines: Iterable[str]) -> Tuple[Graph, ExclusionSet]:
        graph: Graph = Graph(self.weights)
        blocked = ExclusionSet()
        section: Optional[str] = None
        skipped = 0

        for number, raw in enumerate(raw_lines, start=1):
            line = raw.strip()
            if not line:
                continue
            if line.startswith("#"):
                section = line.upper()
                continue

            parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]
            if section == NODES_HEADER:
                ok = self._decode_node(graph, parts)
            elif section == EDGES_HEADER:
                ok = self._decode_edge(graph, parts)
            elif section == BLOCKED_HEADER:
                ok = self._decode_blocked(blocked, parts)
            else:
                continue

            if not ok:
                skipped += 1
                logger.debug(f"Skipping malformed line {number} in section {section}: {line!r}")

        for a, b in list(blocked):
            if not (graph.has_node(a) and graph.has_node(b)):
                blocked.discard(a, b)
                logger.debug(f"Dropping blocked pair {a!r}-{b!r}: unknown node")

        logger.info(
            f"Decoded {len(graph)} nodes, {graph.connection_count()} connections, "
            f"{len(blocked)} blocked pairs ({skipped} lines skipped)"
        )
        return graph, blocked

    def _decode_node(self, graph: Graph, parts: List[str]) -> bool:
        if len(parts) < 3 or not parts[0]:
            return False
        try:
            point = Point(parse_number(parts[1]), parse_number(parts[2]))
        except ValueError:
            return False
        graph.add_node(parts[0], point)
        return True

    def _decode_edge(self, graph: Graph, parts: List[str]) -> bool:
        if len(parts) < 4:
            return False
        try:
            weight = self.weights.parse(parts[3])
        except ValueError:
            return False
        graph.add_edge(parts[0], parts[1], parts[2], weight)
        return True

    @staticmethod
    def _decode_blocked(blocked: ExclusionSet, parts: List[str]) -> bool:
        if len(parts) < 2 or not parts[0] or not parts[1]:
            return False
        blocked.add(parts[0], parts[1])
        return True

    def dump(self, graph: Graph, excluded: Optional[Collection[Pair]], path: str) -> None:
        """
        Write a network file.

        Raises:
            StorageError: If the file cannot be written
        """
        text = self.encode(graph, excluded)
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError as e:
            logger.error(f"Failed to save network to {path}: {e}")
            raise StorageError(f"Failed to save network to {path}: {e}")
        logger.info(f"Saved network to {path}")

    def load(self, path: str) -> Tuple[Graph, ExclusionSet]:
        """
        Read a network file.

        Raises:
            StorageError: If the file cannot be read
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load network from {path}: {e}")
            raise StorageError(f"Failed to load network from {path}: {e}")
        logger.info(f"Loading network from {path}")
        return self.decode(text)
