"""Max-flow and min-cut algorithms on residual graphs.

The package re-exports nothing; import from the submodules, e.g.
``flowcut.algorithms.max_flow``. The public API lives in ``flowcut``.
"""
