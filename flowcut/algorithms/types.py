"""Types and data structures for flow computations.

Defines the controller state enum, the per-phase search context, and the
immutable result containers returned by ``max_flow`` and ``min_cut``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Iterator, List, Tuple

from flowcut.graph.residual import Arc, Number, ResidualGraph, Vertex

#: Level of a vertex not reached by the breadth-first search.
UNREACHED = -1


class FlowState(IntEnum):
    """States of the max-flow controller."""

    #: Compute BFS levels over positive-residual arcs.
    LEVELING = 1
    #: Saturate the level graph with a blocking flow.
    BLOCKING = 2
    #: Sink unreachable; the accumulated flow is maximal.
    DONE = 3


@dataclass
class PhaseContext:
    """Mutable state shared by all augmenting-path searches of one phase.

    Attributes:
        levels: BFS distance from the source per vertex, ``UNREACHED`` if none.
        cursor: Index into ``graph.outgoing(u)`` of the next arc to try from
            ``u``. Only ever moves forward within a phase.
    """

    levels: List[int]
    cursor: List[int] = field(default_factory=list)

    @classmethod
    def start(cls, levels: List[int]) -> PhaseContext:
        """Create a context with every cursor at the first arc."""
        return cls(levels=levels, cursor=[0] * len(levels))


@dataclass(frozen=True)
class PhaseRecord:
    """Outcome of one LEVELING -> BLOCKING cycle.

    Attributes:
        index: 1-based phase number.
        sink_level: Source-sink distance in the phase's level graph.
        pushed: Flow added by the phase's blocking flow.
        augmentations: Number of augmenting paths found.
        total_after: Accumulated flow at the end of the phase.
    """

    index: int
    sink_level: int
    pushed: Number
    augmentations: int
    total_after: Number


@dataclass(frozen=True)
class MaxFlowResult:
    """Result of a max-flow computation.

    Unpacks as ``total_flow, graph`` for callers that only need those two.

    Attributes:
        total_flow: Value of the maximum flow.
        graph: Residual graph in its final state.
        source: Source vertex.
        sink: Sink vertex.
        phases: One record per completed phase, in order.
    """

    total_flow: Number
    graph: ResidualGraph
    source: Vertex
    sink: Vertex
    phases: Tuple[PhaseRecord, ...] = ()

    def __iter__(self) -> Iterator:
        return iter((self.total_flow, self.graph))

    def flow_on(self, u: Vertex, v: Vertex) -> Number:
        """Net flow from ``u`` to ``v`` in the final state."""
        return self.graph.flow(u, v)

    def arc_flows(self) -> List[Arc]:
        """Forward arcs carrying positive flow."""
        return [arc for arc in self.graph.arcs() if arc.flow > 0]


@dataclass(frozen=True)
class CutArc:
    """A forward arc crossing from the source side to the sink side."""

    tail: Vertex
    head: Vertex
    capacity: Number


@dataclass(frozen=True)
class MinCut:
    """Minimum s-t cut read off a maximum flow.

    Attributes:
        source_side: Vertices reachable from the source in the residual graph.
        sink_side: All remaining vertices.
        cut_arcs: Forward arcs from ``source_side`` into ``sink_side`` with
            positive capacity, in insertion order.
    """

    source_side: FrozenSet[Vertex]
    sink_side: FrozenSet[Vertex]
    cut_arcs: Tuple[CutArc, ...]

    @property
    def capacity(self) -> Number:
        """Capacity of the cut, equal to the maximum flow value."""
        return sum(arc.capacity for arc in self.cut_arcs)
