"""flowcut: maximum flow and minimum cut on directed networks.

flowcut computes maximum flows with Dinic's algorithm (level graphs and
blocking flows) on a residual graph, and reads the minimum cut off the final
residual state.

Primary API:
    ResidualGraph - Directed flow network over vertices 0 .. n-1
    max_flow() - Run the flow computation, returning MaxFlowResult
    min_cut() - Source/sink partition and saturated crossing arcs
    from_arcs(), from_adjacency(), from_capacity_matrix(), from_networkx()
        - Build a ResidualGraph from external descriptions

Example:
    from flowcut import ResidualGraph, max_flow, min_cut

    g = ResidualGraph(4)
    g.add_arc(0, 1, 3)
    g.add_arc(0, 2, 2)
    g.add_arc(1, 3, 2)
    g.add_arc(2, 3, 3)

    result = max_flow(g, 0, 3)
    cut = min_cut(result.graph, 0)
    assert cut.capacity == result.total_flow == 4
"""

from __future__ import annotations

from flowcut import cli, logging
from flowcut._version import __version__
from flowcut.algorithms.applications import (
    max_bipartite_matching,
    multi_terminal_max_flow,
    with_super_terminals,
)
from flowcut.algorithms.max_flow import calc_max_flow, max_flow, verify_flow
from flowcut.algorithms.min_cut import min_cut
from flowcut.algorithms.types import (
    CutArc,
    FlowState,
    MaxFlowResult,
    MinCut,
    PhaseRecord,
)
from flowcut.config import FLOW_CONFIG, FlowConfig
from flowcut.errors import FlowInvariantError
from flowcut.graph import (
    Arc,
    NodeMap,
    ResidualGraph,
    from_adjacency,
    from_arcs,
    from_capacity_matrix,
    from_networkx,
)

__all__ = [
    # Version
    "__version__",
    # Graph
    "Arc",
    "ResidualGraph",
    "NodeMap",
    "from_arcs",
    "from_adjacency",
    "from_capacity_matrix",
    "from_networkx",
    # Algorithms
    "max_flow",
    "calc_max_flow",
    "verify_flow",
    "min_cut",
    "max_bipartite_matching",
    "multi_terminal_max_flow",
    "with_super_terminals",
    # Types
    "CutArc",
    "FlowState",
    "MaxFlowResult",
    "MinCut",
    "PhaseRecord",
    # Configuration and errors
    "FLOW_CONFIG",
    "FlowConfig",
    "FlowInvariantError",
    # Utilities
    "cli",
    "logging",
]
