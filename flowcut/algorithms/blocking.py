"""Blocking-flow search on a level graph.

An arc ``u -> v`` is admissible when it has positive residual capacity and
``levels[v] == levels[u] + 1``. Searches walk admissible arcs from the source
using an explicit stack. Each vertex keeps a cursor into its outgoing arcs;
an arc that is inadmissible, saturated, or leads to a dead end moves the
cursor past it for the rest of the phase. That keeps a whole phase within
``O(V * E)`` work.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from flowcut.algorithms.types import PhaseContext
from flowcut.config import FLOW_CONFIG
from flowcut.graph.residual import ArcID, Number, ResidualGraph, Vertex


def augment(
    graph: ResidualGraph,
    ctx: PhaseContext,
    source: Vertex,
    sink: Vertex,
    *,
    tolerance: Optional[float] = None,
) -> Number:
    """Find one admissible source-sink path and push its bottleneck.

    Args:
        graph: Residual graph, mutated in place.
        ctx: Phase state; cursors advance as arcs are exhausted.
        source: Source vertex.
        sink: Sink vertex.
        tolerance: Residual capacity at or below this counts as saturated.

    Returns:
        Amount pushed, or 0 when the level graph holds no more paths.
    """
    tol = FLOW_CONFIG.resolve_tolerance(tolerance)
    if source == sink:
        return 0

    levels, cursor = ctx.levels, ctx.cursor
    path: List[ArcID] = []
    # bottleneck[i] is the minimum residual over path[: i + 1]
    bottleneck: List[Number] = []
    u = source

    while u != sink:
        out = graph.outgoing(u)
        i = cursor[u]
        want = levels[u] + 1
        while i < len(out):
            e = out[i]
            if levels[graph.head(e)] == want and graph.arc_residual(e) > tol:
                break
            i += 1
        cursor[u] = i

        if i < len(out):
            e = out[i]
            residual = graph.arc_residual(e)
            bottleneck.append(min(bottleneck[-1], residual) if bottleneck else residual)
            path.append(e)
            u = graph.head(e)
            continue

        # Dead end: retreat one hop and skip the arc that led here
        if not path:
            return 0
        e = path.pop()
        bottleneck.pop()
        u = graph.tail(e)
        cursor[u] += 1

    amount = bottleneck[-1]
    for e in path:
        graph.push_arc(e, amount, tolerance=tol)
    return amount


def blocking_flow(
    graph: ResidualGraph,
    ctx: PhaseContext,
    source: Vertex,
    sink: Vertex,
    *,
    tolerance: Optional[float] = None,
) -> Tuple[Number, int]:
    """Augment along admissible paths until none remain.

    Returns:
        ``(pushed, augmentations)``: total flow added and the number of paths
        used.
    """
    pushed: Number = 0
    augmentations = 0
    while True:
        amount = augment(graph, ctx, source, sink, tolerance=tolerance)
        if not amount:
            return pushed, augmentations
        pushed += amount
        augmentations += 1
