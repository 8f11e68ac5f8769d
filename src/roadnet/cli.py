"""Command line interface for road network files.

This module lets a network file be inspected and queried without the map
editor. Blocked connections stored in the file apply to every query, and more
can be added per invocation with ``--block``.

The CLI supports the following commands:
    - nodes: List nodes with their positions
    - edges: List connections, marking blocked ones
    - route: Shortest route between two nodes
    - alternatives: Several distinct routes between two nodes

Example Usage:
    python -m roadnet route data/inputGraph.txt a c
    python -m roadnet alternatives data/inputGraph.txt a c -k 4 --block a,b
    python -m roadnet --config roadnet.json edges data/inputGraph.txt

Exit status is 0 on success, 1 when there is no route or a node is unknown,
and 2 on file or configuration errors.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .config import RoutingConfig
from .core.exceptions import ConfigurationError, ResourceNotFoundError, StorageError
from .core.graph_paths import format_path
from .core.weights import format_number
from .session import NetworkSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def parse_pair(text: str) -> Tuple[str, str]:
    """Parse ``A,B`` into a key pair.

    Raises:
        argparse.ArgumentTypeError: If the text is not two comma separated keys.
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2 or not all(parts):
        raise argparse.ArgumentTypeError(f"expected A,B but got {text!r}")
    return parts[0], parts[1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roadnet", description="Query road network files")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    nodes = subparsers.add_parser("nodes", help="List nodes")
    nodes.add_argument("file")

    edges = subparsers.add_parser("edges", help="List connections")
    edges.add_argument("file")

    for name, help_text in (
        ("route", "Shortest route between two nodes"),
        ("alternatives", "Distinct routes between two nodes"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file")
        sub.add_argument("start")
        sub.add_argument("end")
        sub.add_argument(
            "--block",
            action="append",
            type=parse_pair,
            default=[],
            metavar="A,B",
            help="Treat the connection A-B as closed (repeatable)",
        )
        if name == "alternatives":
            sub.add_argument("-k", "--max-routes", type=int, default=None)

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def run_command(session: NetworkSession, args: argparse.Namespace) -> int:
    """Execute a parsed command against a loaded session and print results."""
    weights = session.graph.weights

    if args.command == "nodes":
        for node in session.graph.iter_nodes():
            print(f"{node.key}\t{format_number(node.data.x)}\t{format_number(node.data.y)}")
        return EXIT_OK

    if args.command == "edges":
        for row in session.edge_listing():
            print(row.display())
        return EXIT_OK

    for a, b in args.block:
        session.block(a, b)

    if args.command == "route":
        path = session.route(args.start, args.end)
        if path is None:
            print(f"No route from {args.start} to {args.end}")
            return EXIT_NOT_FOUND
        print(format_path(path, weights))
        return EXIT_OK

    routes = session.alternatives(args.start, args.end, args.max_routes)
    if not routes:
        print(f"No route from {args.start} to {args.end}")
        return EXIT_NOT_FOUND
    for index, path in enumerate(routes, start=1):
        print(f"{index}. {format_path(path, weights)}")
    return EXIT_OK


async def _run(args: argparse.Namespace, config: RoutingConfig) -> int:
    session = NetworkSession(config=config)
    await session.load(args.file)
    return run_command(session, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = RoutingConfig.load(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        return asyncio.run(_run(args, config))
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ResourceNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
