"""Exception types raised by flowcut."""


class FlowInvariantError(RuntimeError):
    """Internal flow bookkeeping broke an invariant.

    Raised when flow is pushed beyond residual capacity, when a phase whose
    level graph reaches the sink pushes nothing, or when a finished flow fails
    capacity or conservation checks. A correct caller never sees it; input
    problems raise ``ValueError`` instead.
    """
