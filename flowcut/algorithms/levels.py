from collections import deque
from typing import List, Optional, Set, Tuple

from flowcut.algorithms.types import UNREACHED
from flowcut.config import FLOW_CONFIG
from flowcut.graph.residual import ResidualGraph, Vertex


def build_levels(
    graph: ResidualGraph,
    source: Vertex,
    sink: Vertex,
    *,
    tolerance: Optional[float] = None,
) -> Tuple[List[int], bool]:
    """
    Breadth-first search over arcs with positive residual capacity.

    The search runs until the queue is empty rather than stopping at the sink,
    so every vertex gets its exact distance. Arcs are expanded in insertion
    order.

    Returns:
        ``(levels, sink_reachable)`` where ``levels[v]`` is the distance from
        ``source`` or ``UNREACHED``.
    """
    tol = FLOW_CONFIG.resolve_tolerance(tolerance)
    levels = [UNREACHED] * graph.num_vertices
    levels[source] = 0
    queue = deque([source])
    while queue:
        u = queue.popleft()
        next_level = levels[u] + 1
        for e in graph.outgoing(u):
            v = graph.head(e)
            if levels[v] == UNREACHED and graph.arc_residual(e) > tol:
                levels[v] = next_level
                queue.append(v)
    return levels, levels[sink] != UNREACHED


def residual_reachable(
    graph: ResidualGraph, source: Vertex, *, tolerance: Optional[float] = None
) -> Set[Vertex]:
    """Vertices reachable from ``source`` along positive-residual arcs."""
    levels, _ = build_levels(graph, source, source, tolerance=tolerance)
    return {v for v, level in enumerate(levels) if level != UNREACHED}
