"""Minimum s-t cut extraction from a finished maximum flow.

After ``max_flow`` terminates the sink is unreachable in the residual graph.
The vertices still reachable from the source form the source side of a
minimum cut; every forward arc leaving that set is saturated, and their
capacities add up to the flow value.
"""

from __future__ import annotations

from typing import Optional

from flowcut.algorithms.levels import residual_reachable
from flowcut.algorithms.types import CutArc, MinCut
from flowcut.graph.residual import ResidualGraph, Vertex
from flowcut.logging import get_logger

logger = get_logger(__name__)


def min_cut(
    graph: ResidualGraph, source: Vertex, *, tolerance: Optional[float] = None
) -> MinCut:
    """Partition the vertices of a max-flow residual graph into an s-t cut.

    Reads the graph only, so repeated calls on the same state agree.

    Args:
        graph: Residual graph after ``max_flow``.
        source: Source vertex used for the flow.
        tolerance: Residual capacity at or below this counts as saturated.

    Returns:
        MinCut with both vertex sets and the crossing arcs.

    Raises:
        ValueError: If ``source`` is not a vertex of ``graph``.
    """
    graph.check_vertex(source, "source")
    source_side = frozenset(residual_reachable(graph, source, tolerance=tolerance))
    sink_side = frozenset(range(graph.num_vertices)) - source_side
    cut_arcs = tuple(
        CutArc(arc.tail, arc.head, arc.capacity)
        for arc in graph.arcs()
        if arc.capacity > 0 and arc.tail in source_side and arc.head in sink_side
    )
    logger.debug(
        "Min cut from %s: %d source-side vertices, %d cut arcs",
        source,
        len(source_side),
        len(cut_arcs),
    )
    return MinCut(source_side=source_side, sink_side=sink_side, cut_arcs=cut_arcs)
