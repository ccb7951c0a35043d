"""Graph primitives and helpers.

This package provides the residual flow network `ResidualGraph` and builders
in `convert` that create it from arc lists, adjacency lists, capacity matrices
and NetworkX graphs.
"""

from flowcut.graph.convert import (
    NodeMap,
    from_adjacency,
    from_arcs,
    from_capacity_matrix,
    from_networkx,
)
from flowcut.graph.residual import Arc, ResidualGraph

__all__ = [
    "Arc",
    "ResidualGraph",
    "NodeMap",
    "from_arcs",
    "from_adjacency",
    "from_capacity_matrix",
    "from_networkx",
]
