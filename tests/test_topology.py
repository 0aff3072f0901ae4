"""
Tests for lazy spanning-tree enumeration.
"""

import pytest

from treepuzzle.core.graph import Graph, validate_tree
from treepuzzle.core.topology import adjacency_edges, count_spanning_trees, iter_spanning_trees


def _grid(width, height):
    return Graph.from_points([(x, y, 0) for y in range(height) for x in range(width)])


class TestAdjacencyEdges:
    def test_square(self):
        square = _grid(2, 2)

        assert adjacency_edges(square) == [(0, 1), (0, 2), (1, 3), (2, 3)]

    def test_ignores_existing_edges(self, grown_and_split):
        assert adjacency_edges(grown_and_split) == [(0, 2), (1, 2)]


class TestIterSpanningTrees:
    """Tests for iter_spanning_trees()."""

    def test_single_node(self, root):
        assert list(iter_spanning_trees(root)) == [frozenset()]

    def test_line_has_one_tree(self):
        line = Graph.from_points([(0, 0, 0), (1, 0, 0), (2, 0, 0)])

        assert list(iter_spanning_trees(line)) == [frozenset({(0, 1), (1, 2)})]

    @pytest.mark.parametrize(
        "width,height,expected",
        [(2, 2, 4), (3, 2, 15), (3, 3, 192)],
    )
    def test_grid_counts(self, width, height, expected):
        assert count_spanning_trees(_grid(width, height)) == expected

    def test_trees_are_distinct_and_valid(self):
        grid = _grid(3, 3)
        trees = list(iter_spanning_trees(grid))

        assert len(set(trees)) == len(trees)
        for tree in trees:
            assert validate_tree(grid.replace(edges=tree)) == []

    def test_disconnected_positions_yield_nothing(self):
        apart = Graph.from_points([(0, 0, 0), (2, 0, 0)])

        assert list(iter_spanning_trees(apart)) == []

    def test_is_lazy(self):
        trees = iter_spanning_trees(_grid(4, 4))

        first = next(trees)
        assert len(first) == 15
