"""Command-line interface for flowcut."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

import yaml

from flowcut.algorithms.max_flow import max_flow
from flowcut.algorithms.min_cut import min_cut
from flowcut.io import NetworkFile, load_network_file, result_to_dict
from flowcut.logging import get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_number(value: Any) -> str:
    """Return a number without a trailing ``.0`` for integral floats.

    Examples:
        23 -> "23"; 23.0 -> "23"; 2.5 -> "2.5".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _resolve_terminal(
    network: NetworkFile, override: Optional[int], name: str
) -> int:
    """Pick the CLI value over the file value; both use the file's numbering."""
    if override is not None:
        return network.graph.check_vertex(network.to_internal(override), name)
    value = getattr(network, name)
    if value is None:
        raise ValueError(f"No {name} given: set '{name}' in the file or pass --{name}")
    return value


def _load(path: Path, one_based: bool) -> NetworkFile:
    logger.info(f"Loading network from: {path}")
    return load_network_file(path, one_based=True if one_based else None)


def _solve(
    path: Path,
    source: Optional[int],
    sink: Optional[int],
    one_based: bool,
    as_json: bool,
) -> None:
    """Run max flow and min cut on a network file and print the result.

    Args:
        path: Network YAML/JSON file.
        source: Source override in the file's numbering.
        sink: Sink override in the file's numbering.
        one_based: Force 1-based vertex numbering.
        as_json: Print a JSON document instead of tables.
    """
    _start_time = perf_counter()
    try:
        network = _load(path, one_based)
        s = _resolve_terminal(network, source, "source")
        t = _resolve_terminal(network, sink, "sink")

        result = max_flow(network.graph, s, t)
        cut = min_cut(result.graph, s)
        logger.info(
            f"Max flow computed in {len(result.phases)} phase(s), "
            f"{_format_duration(perf_counter() - _start_time)}"
        )
    except FileNotFoundError:
        logger.error(f"Network file not found: {path}")
        print(f"ERROR: Network file not found: {path}")
        sys.exit(1)
    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to solve network: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to solve network: {type(e).__name__}: {e}")
        sys.exit(1)

    if as_json:
        payload = result_to_dict(network, result.total_flow, cut, s, t)
        print(json.dumps(payload, indent=2))
        return

    ext = network.to_external
    print("\n" + "=" * 60)
    print("MAXIMUM FLOW")
    print("=" * 60)
    print(f"Source: {ext(s)}   Sink: {ext(t)}")
    print(f"Maximum Flow: {_format_number(result.total_flow)}")
    print(f"Phases: {len(result.phases)}")

    print("\nMinimum Cut Arcs:")
    if cut.cut_arcs:
        rows = [
            [ext(a.tail), ext(a.head), _format_number(a.capacity)]
            for a in cut.cut_arcs
        ]
        print(_format_table(["From", "To", "Capacity"], rows))
        print(f"   Total Cut Capacity: {_format_number(cut.capacity)}")
    else:
        print("   No cut arcs found")

    print(
        "\nSource partition: {"
        + ", ".join(str(ext(v)) for v in sorted(cut.source_side))
        + "}"
    )
    print(
        "Sink partition: {"
        + ", ".join(str(ext(v)) for v in sorted(cut.sink_side))
        + "}"
    )

    flow_rows = [
        [
            ext(arc.tail),
            ext(arc.head),
            _format_number(arc.flow),
            _format_number(arc.capacity),
        ]
        for arc in result.arc_flows()
    ]
    if flow_rows:
        print("\nFlow on Arcs:")
        print(_format_table(["From", "To", "Flow", "Capacity"], flow_rows))


def _inspect(path: Path, one_based: bool) -> None:
    """Validate a network file and print its size and terminals."""
    try:
        network = _load(path, one_based)
    except FileNotFoundError:
        logger.error(f"Network file not found: {path}")
        print(f"ERROR: Network file not found: {path}")
        sys.exit(1)
    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid network file: {type(e).__name__}: {e}")
        print(f"ERROR: Invalid network file: {type(e).__name__}: {e}")
        sys.exit(1)

    graph = network.graph
    total_capacity = sum(arc.capacity for arc in graph.arcs())
    logger.info("Network file validated successfully")

    print("\n" + "=" * 60)
    print("NETWORK")
    print("=" * 60)
    print(f"Vertices: {graph.num_vertices}")
    print(f"Arcs: {graph.num_arcs}")
    print(f"Total capacity: {_format_number(total_capacity)}")
    print(f"Numbering: {'1-based' if network.one_based else '0-based'}")
    for name in ("source", "sink"):
        value = getattr(network, name)
        shown = "-" if value is None else network.to_external(value)
        print(f"{name.capitalize()}: {shown}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``flowcut`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="flowcut",
        description="Compute maximum flows and minimum cuts of flow networks.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,inspect}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser(
        "solve", help="Compute max flow and min cut of a network file"
    )
    solve_parser.add_argument("network", type=Path, help="Path to network YAML/JSON")
    solve_parser.add_argument(
        "--source", "-s", type=int, default=None, help="Source vertex (overrides file)"
    )
    solve_parser.add_argument(
        "--sink", "-t", type=int, default=None, help="Sink vertex (overrides file)"
    )
    solve_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a network file and show its size"
    )
    inspect_parser.add_argument(
        "network", type=Path, help="Path to network YAML/JSON"
    )

    for p in (solve_parser, inspect_parser):
        p.add_argument(
            "--one-based",
            action="store_true",
            help="Number vertices from 1 regardless of the file's 'one_based' flag",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "solve":
        _solve(
            path=args.network,
            source=args.source,
            sink=args.sink,
            one_based=args.one_based,
            as_json=args.json,
        )
    elif args.command == "inspect":
        _inspect(args.network, args.one_based)


if __name__ == "__main__":
    main()
