"""Builders that turn external graph descriptions into a ResidualGraph.

Callers describe networks as arc lists, adjacency lists, dense capacity
matrices or NetworkX graphs. Every builder validates the whole input first and
only then creates the graph, so a bad entry never leaves a half-built result.
With ``one_based=True`` vertex ids are shifted down by one before validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import networkx as nx

from flowcut.graph.residual import Number, ResidualGraph

if TYPE_CHECKING:
    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any

ArcSpec = Tuple[int, int, Number]


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex indices.

    Attributes:
        to_index: Maps original node names to vertex indices.
        to_name: Maps vertex indices back to original node names.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def names(self, vertices: Iterable[int]) -> List[Hashable]:
        """Translate vertex indices to node names, preserving order."""
        return [self.to_name[v] for v in vertices]

    def __len__(self) -> int:
        return len(self.to_index)


def _shift(vertex: Any, one_based: bool) -> Any:
    if one_based and isinstance(vertex, int) and not isinstance(vertex, bool):
        return vertex - 1
    return vertex


def _fields(item: Any, count: int, message: str) -> Tuple[Any, ...]:
    """Unpack a fixed-size entry, raising ValueError for anything else."""
    if isinstance(item, (str, bytes)):
        raise ValueError(f"{message}, got {item!r}")
    try:
        size = len(item)
    except TypeError:
        raise ValueError(f"{message}, got {item!r}") from None
    if size != count:
        raise ValueError(f"{message}, got {size} fields")
    return tuple(item)


def _build(n: int, arcs: Sequence[ArcSpec]) -> ResidualGraph:
    graph = ResidualGraph(n)
    # Dry run against the same rules add_arc applies
    for u, v, capacity in arcs:
        graph.check_vertex(u, "tail")
        graph.check_vertex(v, "head")
        graph.check_capacity(capacity)
    for u, v, capacity in arcs:
        graph.add_arc(u, v, capacity)
    return graph


def from_arcs(
    n: int, arcs: Iterable[Sequence[Any]], *, one_based: bool = False
) -> ResidualGraph:
    """Build a graph from ``(tail, head, capacity)`` triples.

    Args:
        n: Number of vertices.
        arcs: Iterable of ``(tail, head, capacity)``.
        one_based: Treat vertex ids as ``1 .. n``.

    Raises:
        ValueError: On malformed triples, out-of-range ids or bad capacities.
    """
    normalized: List[ArcSpec] = []
    for i, item in enumerate(arcs):
        u, v, capacity = _fields(item, 3, f"Arc #{i} must be (tail, head, capacity)")
        normalized.append((_shift(u, one_based), _shift(v, one_based), capacity))
    return _build(n, normalized)


def from_adjacency(
    adjacency: Sequence[Iterable[Sequence[Any]]], *, one_based: bool = False
) -> ResidualGraph:
    """Build a graph from per-vertex lists of ``(head, capacity)`` pairs.

    The list position is the tail vertex; with ``one_based=True`` only the
    head ids are shifted.
    """
    normalized: List[ArcSpec] = []
    for u, neighbors in enumerate(adjacency):
        if isinstance(neighbors, (str, bytes)) or not isinstance(neighbors, Iterable):
            raise ValueError(
                f"Adjacency of vertex {u} must be a list of (head, capacity), "
                f"got {neighbors!r}"
            )
        for item in neighbors:
            v, capacity = _fields(
                item, 2, f"Adjacency entry of vertex {u} must be (head, capacity)"
            )
            normalized.append((u, _shift(v, one_based), capacity))
    return _build(len(adjacency), normalized)


def from_capacity_matrix(matrix: Sequence[Sequence[Any]]) -> ResidualGraph:
    """Build a graph from a dense square capacity matrix.

    Entry ``[u][v]`` is the capacity of ``u -> v``; zero entries produce no
    arc. Works with nested lists and 2-D numpy arrays.
    """
    n = len(matrix)
    normalized: List[ArcSpec] = []
    for u, row in enumerate(matrix):
        row = _fields(
            row, n, f"Capacity matrix must be square: row {u} needs {n} entries"
        )
        for v, capacity in enumerate(row):
            ResidualGraph.check_capacity(capacity)
            if capacity > 0:
                normalized.append((u, v, capacity))
    return _build(n, normalized)


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: Optional[Number] = None,
) -> Tuple[ResidualGraph, NodeMap]:
    """Convert a NetworkX graph into a ResidualGraph.

    Node names are mapped to indices in sorted order (by ``str``) so results
    are reproducible. Undirected graphs contribute one arc in each direction
    per edge.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        capacity_attr: Edge attribute holding the capacity.
        default_capacity: Capacity for edges missing ``capacity_attr``. When
            None, a missing attribute is an error.

    Returns:
        Tuple of (graph, node_map).

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
        ValueError: If an edge has no capacity and no default is given, or a
            capacity is invalid.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    node_map = NodeMap.from_names(sorted(G.nodes(), key=str))

    normalized: List[ArcSpec] = []
    for u, v, data in G.edges(data=True):
        if capacity_attr in data:
            capacity = data[capacity_attr]
        elif default_capacity is not None:
            capacity = default_capacity
        else:
            raise ValueError(f"Edge ({u!r}, {v!r}) has no '{capacity_attr}' attribute")
        src, dst = node_map.to_index[u], node_map.to_index[v]
        normalized.append((src, dst, capacity))
        if not G.is_directed():
            normalized.append((dst, src, capacity))

    return _build(len(node_map), normalized), node_map
