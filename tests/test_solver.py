"""
Tests for the reverse-search solver.

Tests cover:
- Trivial and immediately unsolvable inputs
- The grow-then-split scenario
- Round trips from generated puzzles
- Budget, deadline and cancellation outcomes
"""

import pytest

from treepuzzle.config import EngineSettings
from treepuzzle.core.generator import generate
from treepuzzle.core.graph import Operation, canonical_signature, validate_tree
from treepuzzle.core.solver import PuzzleSolver, SolveStatus, candidate_topologies, coerce_points, solve

SCENARIO = [(0, 0, 0), (1, 0, 0), (2, 0, 1)]


def _assert_valid_trace(construction):
    graphs = construction.graphs()
    assert graphs[0].is_single_white()
    for idx, graph in enumerate(graphs):
        assert validate_tree(graph) == [], f"step {idx}"
        if idx:
            assert len(graph) == len(graphs[idx - 1]) + 1
    assert canonical_signature(graphs[-1]) == canonical_signature(construction.final_graph)


class TestTrivialCases:
    """Tests for inputs decided before any search."""

    def test_single_white_node(self):
        construction = solve([{"gx": 0, "gy": 0, "color": 0}])

        assert construction is not None
        assert len(construction.trace) == 1
        assert construction.final_graph.edges == frozenset()
        assert construction.trace[0].graph.is_single_white()

    def test_single_black_node(self):
        assert solve([{"gx": 0, "gy": 0, "color": 1}]) is None

        outcome = PuzzleSolver().run([(0, 0, 1)])
        assert outcome.status is SolveStatus.UNSOLVABLE
        assert outcome.reason == "no white node"

    def test_all_black_nodes(self):
        outcome = PuzzleSolver().run([(0, 0, 1), (1, 0, 1)])

        assert outcome.status is SolveStatus.UNSOLVABLE

    def test_empty_input(self):
        assert PuzzleSolver().run([]).status is SolveStatus.UNSOLVABLE

    def test_disconnected_positions(self):
        outcome = PuzzleSolver().run([(0, 0, 0), (2, 0, 1)])

        assert outcome.status is SolveStatus.UNSOLVABLE
        assert outcome.topologies_tried == 0
        assert outcome.reason == "positions are not connected"

    def test_duplicate_positions(self):
        outcome = PuzzleSolver().run([(0, 0, 0), (0, 0, 1), (1, 0, 1)])

        assert outcome.status is SolveStatus.UNSOLVABLE
        assert outcome.reason == "duplicate positions"

    def test_invalid_color(self):
        with pytest.raises(ValueError):
            solve([(0, 0, 2)])

    def test_missing_field(self):
        with pytest.raises(ValueError):
            coerce_points([{"gx": 0, "gy": 0}])

    def test_fractional_values_rejected(self):
        with pytest.raises(ValueError, match="must be an integer"):
            coerce_points([(0.7, 0, 0.5)])
        with pytest.raises(ValueError, match="color must be an integer"):
            solve([(0, 0, 0.5)])
        with pytest.raises(ValueError, match="gy must be an integer"):
            coerce_points([{"gx": 0, "gy": 1.5, "color": 0}])

    def test_integral_floats_accepted(self):
        graph = coerce_points([(1.0, 0, 1.0), (0, 0, 0)])
        assert sorted(graph.points()) == [(0, 0, 0), (1, 0, 1)]


class TestScenario:
    """Grow east then split: the solver recovers a three-step trace."""

    def test_grow_then_split(self):
        construction = solve(SCENARIO)

        assert construction is not None
        assert len(construction.trace) == 3
        assert [s.operation for s in construction.trace] == [Operation.START, Operation.GROW, Operation.SPLIT]
        assert canonical_signature(construction.final_graph) == frozenset({"0,0,0", "1,0,0", "2,0,1"})
        assert construction.final_graph.edges == frozenset({(0, 1), (1, 2)})
        _assert_valid_trace(construction)

    def test_final_graph_keeps_target_positions(self):
        construction = solve(SCENARIO)

        assert construction.final_graph.points() == SCENARIO

    def test_outcome_statistics(self):
        outcome = PuzzleSolver().run(SCENARIO)

        assert outcome.solved
        assert outcome.topologies_tried == 1
        assert outcome.expansions > 0

    def test_exhausted_search_is_unsolvable(self):
        # Two white nodes: every reverse step leaves a single black node.
        outcome = PuzzleSolver().run([(0, 0, 0), (1, 0, 0)])

        assert outcome.status is SolveStatus.UNSOLVABLE
        assert outcome.reason == "every topology exhausted"
        assert outcome.topologies_tried == 1


class TestRoundTrip:
    """Generated puzzles are always solvable."""

    @pytest.mark.parametrize("seed", range(8))
    def test_generated_puzzle_is_solved(self, seed, fast_settings):
        puzzle = generate(6, seed=seed)
        construction = solve(puzzle.final_graph.points(), settings=fast_settings)

        assert construction is not None
        assert canonical_signature(construction.final_graph) == canonical_signature(puzzle.final_graph)
        _assert_valid_trace(construction)

    def test_accepts_grid_nodes(self, grown_and_split):
        construction = solve(grown_and_split.nodes.values())

        assert construction is not None
        assert len(construction.trace) == 3


class TestBudgets:
    """Budget exhaustion is reported as inconclusive, never as unsolvable."""

    def test_per_topology_cap(self):
        settings = EngineSettings(max_expansions_per_topology=1)
        outcome = PuzzleSolver(settings).run(SCENARIO)

        assert outcome.status is SolveStatus.INCONCLUSIVE
        assert outcome.construction is None
        assert solve(SCENARIO, settings=settings) is None

    def test_global_expansion_budget(self):
        settings = EngineSettings(max_total_expansions=1)
        outcome = PuzzleSolver(settings).run(SCENARIO)

        assert outcome.status is SolveStatus.INCONCLUSIVE
        assert outcome.expansions == 1

    def test_cancellation(self):
        outcome = PuzzleSolver(cancel=lambda: True).run(SCENARIO)

        assert outcome.status is SolveStatus.INCONCLUSIVE
        assert outcome.topologies_tried == 0

    def test_generous_budget_still_solves(self):
        settings = EngineSettings(max_total_expansions=1_000, time_limit=60)

        assert PuzzleSolver(settings).run(SCENARIO).solved


class TestCandidateTopologies:
    def test_square_has_four(self):
        square = [(0, 0, 0), (1, 0, 1), (0, 1, 1), (1, 1, 0)]

        assert len(list(candidate_topologies(square))) == 4
