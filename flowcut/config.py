"""Configuration classes for flowcut components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FlowConfig:
    """Defaults for max-flow and min-cut computations.

    Keyword arguments passed to ``max_flow`` and ``min_cut`` take precedence
    over these values.
    """

    # Residual capacity at or below this value counts as saturated
    tolerance: float = 1e-10

    # Verify capacity and conservation after every max-flow run
    check_invariants: bool = False

    def resolve_tolerance(self, tolerance: Optional[float]) -> float:
        """Return the explicit tolerance or the configured default."""
        if tolerance is None:
            return self.tolerance
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        return tolerance


# Global configuration instance
FLOW_CONFIG = FlowConfig()
