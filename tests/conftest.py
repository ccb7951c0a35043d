"""Shared fixtures: small flow networks with known answers.

Arc lists below use the 1-based numbering of the textbook examples and are
converted with ``one_based=True``; vertex ``k`` in a comment is index ``k-1``
in the built graph.
"""

from __future__ import annotations

import pytest

from flowcut.graph import ResidualGraph, from_arcs

CLRS_ARCS = [
    (1, 2, 16),
    (1, 3, 13),
    (2, 3, 10),
    (2, 4, 12),
    (3, 2, 4),
    (3, 5, 14),
    (4, 3, 9),
    (4, 6, 20),
    (5, 4, 7),
    (5, 6, 4),
]


@pytest.fixture
def clrs():
    # Arcs as listed in CLRS_ARCS; max flow 1 -> 6 is 23 and the unique
    # minimum cut is {1, 2, 3, 5} | {4, 6}.
    return from_arcs(6, CLRS_ARCS, one_based=True)


@pytest.fixture
def single_arc():
    # 1 ──5──► 2
    return from_arcs(2, [(1, 2, 5)], one_based=True)


@pytest.fixture
def disconnected():
    # 1 ──3──► 2     3 ──4──► 4
    return from_arcs(4, [(1, 2, 3), (3, 4, 4)], one_based=True)


@pytest.fixture
def bottleneck():
    #      100       5
    #   ┌──────► 2 ─────┐
    #   1               4 ──100──► 5
    #   └──────► 3 ─────┘
    #      100       5
    return from_arcs(
        5,
        [(1, 2, 100), (1, 3, 100), (2, 4, 5), (3, 4, 5), (4, 5, 100)],
        one_based=True,
    )


@pytest.fixture
def diamond():
    #      10        4
    #   ┌──────► 2 ─────┐
    #   1        │2     4
    #   └──────► 3 ─────┘
    #      10        9
    # max flow 1 -> 4 is 13
    return from_arcs(
        4,
        [(1, 2, 10), (1, 3, 10), (2, 3, 2), (2, 4, 4), (3, 4, 9)],
        one_based=True,
    )


@pytest.fixture
def chain() -> ResidualGraph:
    # 0 ──5──► 1 ──3──► 2
    g = ResidualGraph(3)
    g.add_arc(0, 1, 5)
    g.add_arc(1, 2, 3)
    return g
