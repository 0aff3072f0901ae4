"""
Tests for the stochastic puzzle generator.
"""

import logging
import random

import pytest

from treepuzzle.config import EngineSettings
from treepuzzle.core.generator import PuzzleGenerator, generate
from treepuzzle.core.graph import Operation, same_configuration, validate_tree


class TestGenerate:
    """Tests for generate()."""

    @pytest.mark.parametrize("target", [1, 2, 5, 12])
    def test_reaches_target_size(self, target):
        result = generate(target, seed=3)

        assert len(result.final_graph) == target
        assert len(result.trace) == target  # every operation adds exactly one node

    def test_trace_shape(self):
        result = generate(10, seed=11)

        first = result.trace[0]
        assert first.operation is Operation.START
        assert first.graph.is_single_white()
        assert first.graph.node(0).position == (0, 0)
        assert same_configuration(result.trace[-1].graph, result.final_graph)
        assert all(step.operation in (Operation.GROW, Operation.SPLIT) for step in result.trace[1:])

    def test_every_snapshot_is_a_valid_tree(self):
        for seed in range(5):
            result = generate(15, seed=seed)
            for idx, graph in enumerate(result.graphs()):
                assert validate_tree(graph) == [], f"seed={seed} step={idx}"
                assert len(graph) == idx + 1

    def test_node_ids_never_reused(self):
        result = generate(12, seed=5)

        seen = set()
        for graph in result.graphs():
            new_ids = set(graph.nodes) - seen
            assert len(new_ids) <= 1
            assert all(node_id >= graph.next_id - 1 for node_id in new_ids)
            seen |= set(graph.nodes)

    def test_seed_reproduces_trace(self):
        a = generate(9, seed=42)
        b = generate(9, seed=42)

        assert [step.graph.points() for step in a.trace] == [step.graph.points() for step in b.trace]
        assert [step.operation for step in a.trace] == [step.operation for step in b.trace]

    def test_target_must_be_positive(self):
        with pytest.raises(ValueError):
            generate(0)


class TestPuzzleGenerator:
    """Tests for PuzzleGenerator settings and random source."""

    def test_grow_only(self):
        generator = PuzzleGenerator(EngineSettings(grow_probability=1.0), random.Random(1))
        result = generator.generate(6)

        assert [s.operation for s in result.trace[1:]] == [Operation.GROW] * 5

    def test_split_only_stalls_on_root(self, caplog):
        settings = EngineSettings(grow_probability=0.0, max_consecutive_failures=25)
        generator = PuzzleGenerator(settings, random.Random(1))

        with caplog.at_level(logging.WARNING, logger="treepuzzle.core.generator"):
            result = generator.generate(4)

        assert len(result.final_graph) == 1
        assert len(result.trace) == 1
        assert "stalled" in caplog.text

    def test_injected_rng_is_used(self):
        rng = random.Random(99)
        PuzzleGenerator(rng=rng).generate(5)

        assert rng.getstate() != random.Random(99).getstate()

    def test_try_split_without_edges(self, root):
        assert PuzzleGenerator(rng=random.Random(0)).try_split(root) is None
