"""Maximum-flow computation via level graphs and blocking flows.

Implements Dinic's algorithm as a small state machine: LEVELING builds BFS
levels over the residual graph, BLOCKING saturates the resulting level graph,
and the controller alternates between them until the sink is unreachable. By
the max-flow min-cut theorem the accumulated flow is then maximal. Each phase
strictly increases the source-sink distance, so there are at most ``V - 1``
phases.
"""

from __future__ import annotations

from typing import List, Optional

from flowcut.algorithms.blocking import blocking_flow
from flowcut.algorithms.levels import build_levels
from flowcut.algorithms.types import (
    FlowState,
    MaxFlowResult,
    PhaseContext,
    PhaseRecord,
)
from flowcut.config import FLOW_CONFIG
from flowcut.errors import FlowInvariantError
from flowcut.graph.residual import Number, ResidualGraph, Vertex
from flowcut.logging import get_logger

logger = get_logger(__name__)


def _validate_terminals(graph: ResidualGraph, source: Vertex, sink: Vertex) -> None:
    graph.check_vertex(source, "source")
    graph.check_vertex(sink, "sink")
    if source == sink:
        raise ValueError(f"Source and sink must differ, both are {source}")


def max_flow(
    graph: ResidualGraph,
    source: Vertex,
    sink: Vertex,
    *,
    tolerance: Optional[float] = None,
    check_invariants: Optional[bool] = None,
    copy_graph: bool = False,
    reset_flow: bool = False,
) -> MaxFlowResult:
    """Compute the maximum flow from ``source`` to ``sink``.

    The graph is mutated in place unless ``copy_graph`` is set; the final
    residual state is returned in the result either way. Flow already present
    on the graph is kept and extended, so ``total_flow`` counts only the flow
    added by this call.

    Args:
        graph: Residual graph holding the network.
        source: Source vertex.
        sink: Sink vertex, distinct from ``source``.
        tolerance: Residual capacity at or below this counts as saturated.
            Defaults to ``FLOW_CONFIG.tolerance``.
        check_invariants: Run ``verify_flow`` on the final state. Defaults to
            ``FLOW_CONFIG.check_invariants``.
        copy_graph: Work on a copy and leave ``graph`` untouched.
        reset_flow: Zero existing flow before starting.

    Returns:
        MaxFlowResult with the total, the final graph and per-phase records.

    Raises:
        ValueError: If a terminal is out of range or ``source == sink``. The
            graph is not modified.
        FlowInvariantError: If the phase bookkeeping breaks.

    Examples:
        >>> g = ResidualGraph(3)
        >>> g.add_arc(0, 1, 10)
        0
        >>> g.add_arc(1, 2, 5)
        2
        >>> result = max_flow(g, 0, 2)
        >>> result.total_flow
        5
        >>> total, final_graph = result
    """
    _validate_terminals(graph, source, sink)
    tol = FLOW_CONFIG.resolve_tolerance(tolerance)
    if check_invariants is None:
        check_invariants = FLOW_CONFIG.check_invariants

    flow_graph = graph.copy() if copy_graph else graph
    if reset_flow:
        flow_graph.reset_flow()

    total: Number = 0
    phases: List[PhaseRecord] = []
    levels: List[int] = []
    last_distance = 0
    state = FlowState.LEVELING

    while state != FlowState.DONE:
        if state == FlowState.LEVELING:
            levels, sink_reachable = build_levels(
                flow_graph, source, sink, tolerance=tol
            )
            if not sink_reachable:
                state = FlowState.DONE
                continue
            if levels[sink] <= last_distance:
                raise FlowInvariantError(
                    f"Source-sink distance did not increase: {levels[sink]} "
                    f"after {last_distance}"
                )
            state = FlowState.BLOCKING
        else:
            ctx = PhaseContext.start(levels)
            pushed, augmentations = blocking_flow(
                flow_graph, ctx, source, sink, tolerance=tol
            )
            if not pushed:
                raise FlowInvariantError(
                    f"Sink reachable at level {levels[sink]} but no flow was pushed"
                )
            total += pushed
            last_distance = levels[sink]
            phases.append(
                PhaseRecord(
                    index=len(phases) + 1,
                    sink_level=last_distance,
                    pushed=pushed,
                    augmentations=augmentations,
                    total_after=total,
                )
            )
            logger.debug(
                "Phase %d: distance=%d pushed=%s paths=%d total=%s",
                len(phases),
                last_distance,
                pushed,
                augmentations,
                total,
            )
            state = FlowState.LEVELING

    logger.debug(
        "Max flow %s -> %s: %s in %d phase(s)", source, sink, total, len(phases)
    )

    if check_invariants:
        verify_flow(flow_graph, source, sink, tolerance=tol)

    return MaxFlowResult(
        total_flow=total,
        graph=flow_graph,
        source=source,
        sink=sink,
        phases=tuple(phases),
    )


def calc_max_flow(
    graph: ResidualGraph,
    source: Vertex,
    sink: Vertex,
    *,
    copy_graph: bool = True,
    **kwargs,
) -> Number:
    """Return only the max-flow value, leaving ``graph`` untouched by default."""
    return max_flow(graph, source, sink, copy_graph=copy_graph, **kwargs).total_flow


def verify_flow(
    graph: ResidualGraph,
    source: Vertex,
    sink: Vertex,
    *,
    tolerance: Optional[float] = None,
) -> Number:
    """Check capacity limits and flow conservation.

    Args:
        graph: Graph carrying a flow.
        source: Source vertex.
        sink: Sink vertex.
        tolerance: Allowed numeric slack.

    Returns:
        The flow value, i.e. the net inflow at ``sink``.

    Raises:
        FlowInvariantError: If an arc is over capacity or carries negative
            flow, or an inner vertex does not conserve flow.
    """
    tol = FLOW_CONFIG.resolve_tolerance(tolerance)
    for arc in graph.arcs():
        if arc.flow < -tol or arc.flow > arc.capacity + tol:
            raise FlowInvariantError(
                f"Arc {arc.tail}->{arc.head} carries {arc.flow} outside [0, {arc.capacity}]"
            )
    for v in range(graph.num_vertices):
        if v in (source, sink):
            continue
        excess = graph.excess(v)
        if abs(excess) > tol * max(1, len(graph.outgoing(v))):
            raise FlowInvariantError(f"Vertex {v} does not conserve flow: excess {excess}")
    return graph.excess(sink)
