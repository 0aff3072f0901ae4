"""
Shared fixtures for puzzle engine tests.
"""

import pytest

from treepuzzle.config import EngineSettings
from treepuzzle.core.graph.models import Graph
from treepuzzle.core.operations import grow, split


@pytest.fixture
def root() -> Graph:
    return Graph.root()


@pytest.fixture
def grown(root) -> Graph:
    """Root grown east: (0,0) black, (1,0) white."""
    return grow(root, 0, (1, 0))


@pytest.fixture
def grown_and_split(grown) -> Graph:
    """Grow east then split: (0,0) white, (1,0) white, (2,0) black."""
    return split(grown, 0, 1)


@pytest.fixture
def path_graph() -> Graph:
    """Straight path 0-1-2-3 along the x axis."""
    return Graph.from_points(
        [(0, 0, 0), (1, 0, 1), (2, 0, 0), (3, 0, 1)],
        edges=[(0, 1), (1, 2), (2, 3)],
    )


@pytest.fixture
def fast_settings() -> EngineSettings:
    return EngineSettings(max_expansions_per_topology=20_000)
