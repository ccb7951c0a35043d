"""Residual flow network with paired forward/reverse arcs.

`ResidualGraph` stores directed arcs in flat per-arc lists. Every call to
``add_arc`` appends a forward arc and its zero-capacity partner together, so
each arc always has a residual counterpart. Arc handles are integers: forward
arcs receive even ids and their partners the following odd id, which makes
``partner(e) == e ^ 1``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from flowcut.config import FLOW_CONFIG
from flowcut.errors import FlowInvariantError

Vertex = int
ArcID = int
Number = Union[int, float]


@dataclass(frozen=True)
class Arc:
    """Snapshot of a single arc.

    Attributes:
        id: Arc handle inside the owning graph.
        tail: Vertex the arc leaves.
        head: Vertex the arc enters.
        capacity: Original capacity (0 for reverse partners).
        flow: Flow at the time of the snapshot (negative on loaded partners).
    """

    id: ArcID
    tail: Vertex
    head: Vertex
    capacity: Number
    flow: Number

    @property
    def residual(self) -> Number:
        return self.capacity - self.flow


class ResidualGraph:
    """A directed flow network over vertices ``0 .. n-1``.

    This class enforces:
      - Vertices are plain ints in ``[0, n)``; anything else raises ValueError.
      - Capacities are finite, non-negative real numbers.
      - Parallel arcs are kept separate: adding ``u -> v`` twice creates two
        arcs, and pair-level queries aggregate over them.
      - Flow changes only through ``push_arc``/``push``, which update an arc
        and its partner together.
    """

    def __init__(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"Vertex count must be a non-negative int, got {n!r}")
        self._n = n
        self._tail: List[Vertex] = []
        self._head: List[Vertex] = []
        self._cap: List[Number] = []
        self._flow: List[Number] = []
        self._out: List[List[ArcID]] = [[] for _ in range(n)]

    @property
    def num_vertices(self) -> int:
        return self._n

    @property
    def num_arcs(self) -> int:
        """Number of forward arcs added by callers."""
        return len(self._head) // 2

    def __repr__(self) -> str:
        return f"ResidualGraph(vertices={self._n}, arcs={self.num_arcs})"

    #
    # Validation
    #
    def check_vertex(self, v: Any, name: str = "vertex") -> Vertex:
        """Return ``v`` if it is a valid vertex id, else raise ValueError."""
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"{name} must be an int, got {type(v).__name__}")
        if not 0 <= v < self._n:
            raise ValueError(f"{name} {v} is out of range [0, {self._n})")
        return v

    @staticmethod
    def check_capacity(capacity: Any) -> Number:
        """Return ``capacity`` if it is finite and non-negative, else raise ValueError."""
        if isinstance(capacity, bool) or not isinstance(capacity, Real):
            raise ValueError(
                f"Capacity must be a real number, got {type(capacity).__name__}"
            )
        if not math.isfinite(capacity):
            raise ValueError(f"Capacity must be finite, got {capacity}")
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        return capacity

    #
    # Construction
    #
    def add_arc(self, u: Vertex, v: Vertex, capacity: Number) -> ArcID:
        """Add a directed arc ``u -> v`` and its zero-capacity partner.

        Args:
            u: Tail vertex.
            v: Head vertex.
            capacity: Finite, non-negative capacity.

        Returns:
            The handle of the new forward arc. Its partner is ``handle ^ 1``.

        Raises:
            ValueError: If a vertex is out of range or the capacity is invalid.
                Nothing is added in that case.
        """
        self.check_vertex(u, "tail")
        self.check_vertex(v, "head")
        self.check_capacity(capacity)

        arc_id = len(self._head)
        self._tail += [u, v]
        self._head += [v, u]
        self._cap += [capacity, 0]
        self._flow += [0, 0]
        self._out[u].append(arc_id)
        self._out[v].append(arc_id + 1)
        return arc_id

    def copy(self) -> ResidualGraph:
        """Return an independent copy including current flows."""
        clone = ResidualGraph(self._n)
        clone._tail = list(self._tail)
        clone._head = list(self._head)
        clone._cap = list(self._cap)
        clone._flow = list(self._flow)
        clone._out = [list(arcs) for arcs in self._out]
        return clone

    def reset_flow(self) -> None:
        """Zero the flow on every arc."""
        self._flow = [0] * len(self._flow)

    #
    # Arc-level access
    #
    def outgoing(self, u: Vertex) -> Sequence[ArcID]:
        """Arc handles leaving ``u`` in insertion order, partners included."""
        return self._out[u]

    def tail(self, e: ArcID) -> Vertex:
        return self._tail[e]

    def head(self, e: ArcID) -> Vertex:
        return self._head[e]

    def arc_capacity(self, e: ArcID) -> Number:
        return self._cap[e]

    def arc_flow(self, e: ArcID) -> Number:
        return self._flow[e]

    def arc_residual(self, e: ArcID) -> Number:
        return self._cap[e] - self._flow[e]

    @staticmethod
    def partner(e: ArcID) -> ArcID:
        return e ^ 1

    @staticmethod
    def is_forward(e: ArcID) -> bool:
        return e % 2 == 0

    def arc(self, e: ArcID) -> Arc:
        return Arc(e, self._tail[e], self._head[e], self._cap[e], self._flow[e])

    def arcs(self) -> Iterator[Arc]:
        """Iterate forward arcs in insertion order."""
        for e in range(0, len(self._head), 2):
            yield self.arc(e)

    #
    # Pair-level access
    #
    def _handles(self, u: Vertex, v: Vertex) -> List[ArcID]:
        self.check_vertex(u, "tail")
        self.check_vertex(v, "head")
        return [e for e in self._out[u] if self._head[e] == v]

    def capacity(self, u: Vertex, v: Vertex) -> Number:
        """Total original capacity over forward arcs ``u -> v``."""
        return sum(self._cap[e] for e in self._handles(u, v))

    def flow(self, u: Vertex, v: Vertex) -> Number:
        """Net flow from ``u`` to ``v``; ``flow(v, u) == -flow(u, v)``."""
        return sum(self._flow[e] for e in self._handles(u, v))

    def residual(self, u: Vertex, v: Vertex) -> Number:
        """Remaining capacity from ``u`` to ``v``, counting cancellable reverse flow."""
        return sum(self._cap[e] - self._flow[e] for e in self._handles(u, v))

    #
    # Mutation
    #
    def push_arc(
        self, e: ArcID, amount: Number, tolerance: Optional[float] = None
    ) -> None:
        """Send ``amount`` units along arc ``e``.

        Raises:
            FlowInvariantError: If ``amount`` is not positive or exceeds the
                arc's residual capacity by more than ``tolerance``.
        """
        tol = FLOW_CONFIG.resolve_tolerance(tolerance)
        residual = self._cap[e] - self._flow[e]
        if amount <= 0:
            raise FlowInvariantError(
                f"Push amount must be positive, got {amount} on arc {e}"
            )
        if amount > residual + tol:
            raise FlowInvariantError(
                f"Push of {amount} on arc {e} ({self._tail[e]}->{self._head[e]}) "
                f"exceeds residual capacity {residual}"
            )
        self._flow[e] += amount
        self._flow[e ^ 1] -= amount

    def push(
        self, u: Vertex, v: Vertex, amount: Number, tolerance: Optional[float] = None
    ) -> None:
        """Send ``amount`` units from ``u`` to ``v`` across all connecting arcs.

        Arcs are filled in insertion order. The amount must fit within
        ``residual(u, v)``; otherwise nothing changes and FlowInvariantError
        is raised.
        """
        tol = FLOW_CONFIG.resolve_tolerance(tolerance)
        handles = self._handles(u, v)
        available = sum(self._cap[e] - self._flow[e] for e in handles)
        if amount <= 0:
            raise FlowInvariantError(f"Push amount must be positive, got {amount}")
        if not handles:
            raise FlowInvariantError(f"No arc connects {u} to {v}")
        if amount > available + tol:
            raise FlowInvariantError(
                f"Push of {amount} from {u} to {v} exceeds residual capacity {available}"
            )
        remaining = amount
        for e in handles:
            room = self._cap[e] - self._flow[e]
            if room <= 0:
                continue
            step = min(room, remaining)
            self._flow[e] += step
            self._flow[e ^ 1] -= step
            remaining -= step
            if remaining <= 0:
                return
        # Only tolerance slack is left at this point
        e = handles[-1]
        self._flow[e] += remaining
        self._flow[e ^ 1] -= remaining

    #
    # Aggregates
    #
    def excess(self, v: Vertex) -> Number:
        """Inflow minus outflow at ``v`` over forward arcs."""
        self.check_vertex(v)
        total: Number = 0
        for e in self._out[v]:
            # Partner flows are the negated inflows of forward arcs into v
            total -= self._flow[e]
        return total

    def to_dict(self) -> Dict[str, Any]:
        """Serialize vertices and forward arcs with their current flow."""
        return {
            "vertices": self._n,
            "arcs": [
                {
                    "tail": arc.tail,
                    "head": arc.head,
                    "capacity": arc.capacity,
                    "flow": arc.flow,
                }
                for arc in self.arcs()
            ],
        }
