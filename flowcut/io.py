"""YAML/JSON loader for flow network files.

A network file is a mapping with the vertex count, the terminals and exactly
one of three arc layouts:

.. code-block:: yaml

    vertices: 4
    one_based: true
    source: 1
    sink: 4
    arcs:
      - [1, 2, 10]
      - [2, 4, 5]

``adjacency`` (one list of ``[head, capacity]`` pairs per vertex) and
``matrix`` (dense square capacity matrix) may replace ``arcs``. JSON is a
subset of YAML, so the same loader reads both.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from flowcut.algorithms.types import MinCut
from flowcut.graph.convert import from_adjacency, from_arcs, from_capacity_matrix
from flowcut.graph.residual import Number, ResidualGraph, Vertex

_LAYOUTS = ("arcs", "adjacency", "matrix")
_RECOGNIZED_KEYS = {"vertices", "one_based", "source", "sink", *_LAYOUTS}


@dataclass
class NetworkFile:
    """A parsed network file.

    Attributes:
        graph: Graph built from the file, always 0-based internally.
        source: Source vertex (0-based) if the file names one.
        sink: Sink vertex (0-based) if the file names one.
        one_based: Whether the file numbers vertices from 1.
    """

    graph: ResidualGraph
    source: Optional[Vertex] = None
    sink: Optional[Vertex] = None
    one_based: bool = False

    def to_external(self, v: Vertex) -> int:
        """Vertex id as written in the file's numbering."""
        return v + 1 if self.one_based else v

    def to_internal(self, v: int) -> Vertex:
        """0-based vertex id for an id in the file's numbering."""
        return v - 1 if self.one_based else v


def load_network_yaml(
    yaml_str: str, *, one_based: Optional[bool] = None
) -> NetworkFile:
    """Parse and validate a network description.

    Args:
        yaml_str: YAML or JSON text.
        one_based: Override the file's ``one_based`` flag.

    Returns:
        NetworkFile with the built graph and 0-based terminals.

    Raises:
        ValueError: If the document is not a mapping, has unknown keys, has
            zero or several arc layouts, or describes an invalid graph.
    """
    data = yaml.safe_load(yaml_str)
    if not isinstance(data, dict):
        raise ValueError("The network file must map to a dictionary at top-level.")

    extra = set(data) - _RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s): {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(_RECOGNIZED_KEYS)}"
        )

    layouts = [key for key in _LAYOUTS if key in data]
    if len(layouts) != 1:
        raise ValueError(
            f"Exactly one of {', '.join(_LAYOUTS)} is required, got {layouts or 'none'}"
        )
    layout = layouts[0]
    body = data[layout]
    if not isinstance(body, list):
        raise ValueError(f"'{layout}' must be a list")

    if one_based is None:
        one_based = bool(data.get("one_based", False))

    if layout == "arcs":
        if "vertices" not in data:
            raise ValueError("'vertices' is required with an 'arcs' list")
        graph = from_arcs(data["vertices"], body, one_based=one_based)
    elif layout == "adjacency":
        graph = from_adjacency(body, one_based=one_based)
    else:
        graph = from_capacity_matrix(body)
    if "vertices" in data and data["vertices"] != graph.num_vertices:
        raise ValueError(
            f"'vertices' is {data['vertices']} but the {layout} describe "
            f"{graph.num_vertices} vertices"
        )

    network = NetworkFile(graph=graph, one_based=one_based)
    for key in ("source", "sink"):
        if data.get(key) is not None:
            vertex = data[key]
            if isinstance(vertex, int) and not isinstance(vertex, bool):
                vertex = network.to_internal(vertex)
            setattr(network, key, graph.check_vertex(vertex, key))
    return network


def load_network_file(path: Path, *, one_based: Optional[bool] = None) -> NetworkFile:
    """Read ``path`` and parse it with ``load_network_yaml``."""
    return load_network_yaml(path.read_text(encoding="utf-8"), one_based=one_based)


def result_to_dict(
    network: NetworkFile, total_flow: Number, cut: MinCut, source: Vertex, sink: Vertex
) -> Dict[str, Any]:
    """JSON-ready summary of a flow run in the file's numbering."""
    ext = network.to_external
    return {
        "source": ext(source),
        "sink": ext(sink),
        "max_flow": total_flow,
        "min_cut": {
            "capacity": cut.capacity,
            "source_side": sorted(ext(v) for v in cut.source_side),
            "sink_side": sorted(ext(v) for v in cut.sink_side),
            "arcs": [
                {"tail": ext(a.tail), "head": ext(a.head), "capacity": a.capacity}
                for a in cut.cut_arcs
            ],
        },
        "flows": [
            {
                "tail": ext(arc.tail),
                "head": ext(arc.head),
                "capacity": arc.capacity,
                "flow": arc.flow,
            }
            for arc in network.graph.arcs()
            if arc.flow > 0
        ],
    }
