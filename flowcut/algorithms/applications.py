"""Problems solved by reduction to a single-source, single-sink max flow.

Covers maximum bipartite matching and networks with several sources or sinks,
which are joined through a super source and a super sink.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from flowcut.algorithms.max_flow import max_flow
from flowcut.algorithms.types import MaxFlowResult
from flowcut.graph.residual import Number, ResidualGraph, Vertex
from flowcut.logging import get_logger

logger = get_logger(__name__)

Terminals = Union[Iterable[Vertex], Mapping[Vertex, Optional[Number]]]


def max_bipartite_matching(
    num_left: int, num_right: int, pairs: Iterable[Tuple[int, int]]
) -> List[Tuple[int, int]]:
    """Find a maximum matching in a bipartite graph.

    Left items are ``0 .. num_left - 1``, right items ``0 .. num_right - 1``,
    and ``pairs`` lists the allowed ``(left, right)`` assignments. Every arc
    gets capacity 1, so an integral max flow picks each item at most once.

    Returns:
        Matched ``(left, right)`` pairs sorted by left item.

    Raises:
        ValueError: If a pair refers to an item outside its side.
    """
    for count, name in ((num_left, "num_left"), (num_right, "num_right")):
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"{name} must be a non-negative int, got {count!r}")

    edges = list(pairs)
    for left, right in edges:
        if not 0 <= left < num_left:
            raise ValueError(f"Left item {left} is out of range [0, {num_left})")
        if not 0 <= right < num_right:
            raise ValueError(f"Right item {right} is out of range [0, {num_right})")

    # Layout: source, left items, right items, sink
    source = 0
    sink = num_left + num_right + 1
    graph = ResidualGraph(num_left + num_right + 2)
    for left in range(num_left):
        graph.add_arc(source, 1 + left, 1)
    for right in range(num_right):
        graph.add_arc(1 + num_left + right, sink, 1)
    for left, right in edges:
        graph.add_arc(1 + left, 1 + num_left + right, 1)

    result = max_flow(graph, source, sink)
    matching = sorted(
        (arc.tail - 1, arc.head - 1 - num_left)
        for arc in result.graph.arcs()
        if arc.flow > 0 and arc.tail != source and arc.head != sink
    )
    logger.debug("Matched %d of %d left items", len(matching), num_left)
    return matching


def _terminal_capacities(
    graph: ResidualGraph, terminals: Terminals, outgoing: bool, name: str
) -> Dict[Vertex, Number]:
    if isinstance(terminals, Mapping):
        requested = dict(terminals)
    else:
        requested = {v: None for v in terminals}
    if not requested:
        raise ValueError(f"At least one {name} is required")

    capacities: Dict[Vertex, Number] = {}
    for v, capacity in requested.items():
        graph.check_vertex(v, name)
        if capacity is None:
            # Unbounded terminal: all capacity it could ever carry
            capacity = sum(
                arc.capacity
                for arc in graph.arcs()
                if (arc.tail if outgoing else arc.head) == v
            )
        capacities[v] = ResidualGraph.check_capacity(capacity)
    return capacities


def with_super_terminals(
    graph: ResidualGraph, sources: Terminals, sinks: Terminals
) -> Tuple[ResidualGraph, Vertex, Vertex]:
    """Join several sources and sinks through a super source and super sink.

    The returned graph holds a fresh copy of ``graph``'s arcs (capacities
    only, no flow) on vertices ``0 .. n-1``, plus a super source ``n`` and a
    super sink ``n + 1``. Terminals given as a mapping use the mapped value as
    the capacity of their super arc; ``None`` or a plain iterable means the
    terminal's total outgoing (sources) or incoming (sinks) capacity.

    Returns:
        ``(graph, super_source, super_sink)``.

    Raises:
        ValueError: If a terminal list is empty, a vertex is out of range, a
            vertex is both a source and a sink, or a capacity is invalid.
    """
    source_caps = _terminal_capacities(graph, sources, True, "source")
    sink_caps = _terminal_capacities(graph, sinks, False, "sink")
    overlap = set(source_caps) & set(sink_caps)
    if overlap:
        raise ValueError(f"Vertices cannot be both source and sink: {sorted(overlap)}")

    n = graph.num_vertices
    joined = ResidualGraph(n + 2)
    for arc in graph.arcs():
        joined.add_arc(arc.tail, arc.head, arc.capacity)
    super_source, super_sink = n, n + 1
    for v, capacity in source_caps.items():
        joined.add_arc(super_source, v, capacity)
    for v, capacity in sink_caps.items():
        joined.add_arc(v, super_sink, capacity)
    return joined, super_source, super_sink


def multi_terminal_max_flow(
    graph: ResidualGraph, sources: Terminals, sinks: Terminals, **kwargs
) -> MaxFlowResult:
    """Max flow from a set of sources to a set of sinks.

    Runs on the graph built by ``with_super_terminals``; ``graph`` itself is
    left untouched. Extra keyword arguments go to ``max_flow``.
    """
    joined, super_source, super_sink = with_super_terminals(graph, sources, sinks)
    return max_flow(joined, super_source, super_sink, **kwargs)
