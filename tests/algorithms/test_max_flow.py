from types import ModuleType

import pytest
from pytest import approx

import flowcut.algorithms.max_flow as max_flow_module
from flowcut.algorithms.max_flow import calc_max_flow, max_flow, verify_flow
from flowcut.algorithms.types import MaxFlowResult
from flowcut.config import FLOW_CONFIG
from flowcut.errors import FlowInvariantError
from flowcut.graph import ResidualGraph, from_arcs


class TestMaxFlowBasic:
    """
    Known flow values on small graphs.
    """

    def test_clrs(self, clrs):
        result = max_flow(clrs, 0, 5)
        assert result.total_flow == 23
        assert isinstance(result, MaxFlowResult)

    def test_single_arc(self, single_arc):
        assert max_flow(single_arc, 0, 1).total_flow == 5

    def test_disconnected(self, disconnected):
        result = max_flow(disconnected, 0, 3)
        assert result.total_flow == 0
        assert result.phases == ()

    def test_bottleneck(self, bottleneck):
        assert max_flow(bottleneck, 0, 4).total_flow == 10

    def test_diamond(self, diamond):
        assert max_flow(diamond, 0, 3).total_flow == 13

    def test_parallel_arcs(self):
        g = from_arcs(2, [(0, 1, 3), (0, 1, 4)])
        assert max_flow(g, 0, 1).total_flow == 7

    def test_float_capacities(self):
        g = from_arcs(4, [(0, 1, 0.1), (0, 2, 0.2), (1, 3, 0.3), (2, 3, 0.15)])
        assert max_flow(g, 0, 3).total_flow == approx(0.25)

    def test_flow_requires_cancelling_reverse_arc(self):
        # The first path 0-1-2-5 must be undone through 2 -> 1 in a later phase
        g = from_arcs(
            6,
            [
                (0, 1, 1),
                (1, 2, 1),
                (2, 5, 1),
                (0, 3, 1),
                (3, 2, 1),
                (1, 4, 1),
                (4, 5, 1),
            ],
        )
        assert max_flow(g, 0, 5).total_flow == 2

    def test_result_unpacks_to_total_and_graph(self, chain):
        total, graph = max_flow(chain, 0, 2)
        assert total == 3
        assert graph is chain

    def test_flow_on_and_arc_flows(self, bottleneck):
        result = max_flow(bottleneck, 0, 4)
        assert result.flow_on(3, 4) == 10
        assert result.flow_on(4, 3) == -10
        assert [(a.tail, a.head, a.flow) for a in result.arc_flows()] == [
            (0, 1, 5),
            (0, 2, 5),
            (1, 3, 5),
            (2, 3, 5),
            (3, 4, 10),
        ]


class TestFlowProperties:
    def test_capacity_respected(self, clrs):
        max_flow(clrs, 0, 5)
        for arc in clrs.arcs():
            assert 0 <= arc.flow <= arc.capacity

    def test_conservation(self, clrs):
        max_flow(clrs, 0, 5)
        for v in range(1, 5):
            assert clrs.excess(v) == 0
        assert clrs.excess(5) == 23
        assert clrs.excess(0) == -23

    def test_reverse_flow_is_negated(self, clrs):
        max_flow(clrs, 0, 5)
        for u in range(6):
            for v in range(6):
                assert clrs.flow(v, u) == -clrs.flow(u, v)

    def test_verify_flow_returns_value(self, clrs):
        max_flow(clrs, 0, 5)
        assert verify_flow(clrs, 0, 5) == 23

    def test_verify_flow_detects_broken_conservation(self, chain):
        chain.push(0, 1, 2)
        with pytest.raises(FlowInvariantError, match="conserve"):
            verify_flow(chain, 0, 2)

    def test_phases_are_monotonic(self, clrs):
        result = max_flow(clrs, 0, 5)

        assert result.phases
        assert [p.index for p in result.phases] == list(
            range(1, len(result.phases) + 1)
        )
        assert result.phases[0].sink_level == 3
        for prev, cur in zip(result.phases, result.phases[1:]):
            assert cur.sink_level > prev.sink_level
            assert cur.total_after > prev.total_after
        assert all(p.pushed > 0 and p.augmentations > 0 for p in result.phases)
        assert result.phases[-1].total_after == 23
        assert len(result.phases) <= clrs.num_vertices - 1

    def test_single_phase_when_all_paths_equal(self, bottleneck):
        result = max_flow(bottleneck, 0, 4)
        assert len(result.phases) == 1
        phase = result.phases[0]
        assert (phase.sink_level, phase.pushed, phase.augmentations) == (3, 10, 2)

    def test_check_invariants_flag(self, clrs):
        assert max_flow(clrs, 0, 5, check_invariants=True).total_flow == 23

    def test_check_invariants_from_config(self, clrs, monkeypatch):
        monkeypatch.setattr(FLOW_CONFIG, "check_invariants", True)
        calls = []
        original = max_flow_module.verify_flow

        def spy(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        monkeypatch.setattr(max_flow_module, "verify_flow", spy)
        max_flow(clrs, 0, 5)
        assert len(calls) == 1


class TestMaxFlowCopyBehavior:
    def test_in_place_by_default(self, chain):
        result = max_flow(chain, 0, 2)
        assert result.graph is chain
        assert chain.flow(1, 2) == 3

    def test_copy_graph_leaves_input(self, chain):
        result = max_flow(chain, 0, 2, copy_graph=True)
        assert result.graph is not chain
        assert all(arc.flow == 0 for arc in chain.arcs())
        assert result.graph.flow(1, 2) == 3

    def test_calc_max_flow_copies(self, clrs):
        assert calc_max_flow(clrs, 0, 5) == 23
        assert all(arc.flow == 0 for arc in clrs.arcs())

    def test_second_run_adds_nothing(self, clrs):
        assert max_flow(clrs, 0, 5).total_flow == 23
        assert max_flow(clrs, 0, 5).total_flow == 0

    def test_reset_flow(self, clrs):
        max_flow(clrs, 0, 5)
        assert max_flow(clrs, 0, 5, reset_flow=True).total_flow == 23


class TestMaxFlowValidation:
    def test_source_equals_sink(self, clrs):
        with pytest.raises(ValueError, match="differ"):
            max_flow(clrs, 2, 2)
        assert all(arc.flow == 0 for arc in clrs.arcs())

    @pytest.mark.parametrize(
        "source, sink", [(-1, 5), (0, 6), (6, 0), ("0", 5), (0, 5.0)]
    )
    def test_invalid_terminals(self, clrs, source, sink):
        with pytest.raises(ValueError):
            max_flow(clrs, source, sink)
        assert all(arc.flow == 0 for arc in clrs.arcs())

    def test_negative_tolerance(self, chain):
        with pytest.raises(ValueError, match="tolerance"):
            max_flow(chain, 0, 2, tolerance=-1)

    def test_empty_graph_has_no_terminals(self):
        with pytest.raises(ValueError):
            max_flow(ResidualGraph(0), 0, 0)


class TestInvariantFaults:
    def test_phase_without_progress_is_fatal(self, chain, monkeypatch):
        monkeypatch.setattr(
            max_flow_module, "blocking_flow", lambda *args, **kwargs: (0, 0)
        )
        with pytest.raises(FlowInvariantError, match="no flow was pushed"):
            max_flow(chain, 0, 2)

    def test_non_increasing_distance_is_fatal(self, chain, monkeypatch):
        # A blocking flow that pushes without saturating anything
        monkeypatch.setattr(
            max_flow_module, "blocking_flow", lambda *args, **kwargs: (1, 1)
        )
        with pytest.raises(FlowInvariantError, match="did not increase"):
            max_flow(chain, 0, 2)


def test_algorithm_modules_are_importable_as_modules():
    """Submodules stay modules so their helpers can be patched in tests."""
    import flowcut
    import flowcut.algorithms.min_cut as min_cut_module

    assert isinstance(max_flow_module, ModuleType)
    assert isinstance(min_cut_module, ModuleType)
    assert max_flow_module.max_flow is max_flow
    assert flowcut.max_flow is max_flow
    assert callable(max_flow_module.blocking_flow)
