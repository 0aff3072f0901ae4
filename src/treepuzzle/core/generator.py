"""
Stochastic puzzle generator.

Builds a target configuration forward from the single root node by
applying random grow/split operations, recording every accepted step.
Randomness comes from an injected ``random.Random`` so a seed reproduces
the exact trace.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from treepuzzle.config import DEFAULT_SETTINGS, EngineSettings
from treepuzzle.core.graph.models import (
    DIRECTIONS,
    Construction,
    Graph,
    Operation,
    TraceStep,
)
from treepuzzle.core.operations import grow, split
from treepuzzle.utils.logging import log_calls

logger = logging.getLogger(__name__)


def _describe(result: Construction) -> str:
    return f"{len(result.final_graph)} node(s), {result.steps} step(s)"


class PuzzleGenerator:
    """Forward builder for reachable target configurations."""

    def __init__(self, settings: Optional[EngineSettings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.rng = rng or random.Random()

    # =========================================================================
    # Main Entry Point
    # =========================================================================

    @log_calls(summarize=_describe)
    def generate(self, target_node_count: int) -> Construction:
        """
        Grow a random tree until it has ``target_node_count`` nodes.

        Gives up silently after ``max_consecutive_failures`` failed attempts
        in a row and returns whatever was built, so callers must accept
        under-sized results on cramped configurations.
        """
        if target_node_count < 1:
            raise ValueError(f"target_node_count must be >= 1, got {target_node_count}")

        graph = Graph.root()
        trace = [TraceStep(graph, Operation.START)]
        failures = 0

        while len(graph) < target_node_count and failures < self.settings.max_consecutive_failures:
            if self.rng.random() < self.settings.grow_probability:
                operation, candidate = Operation.GROW, self.try_grow(graph)
            else:
                operation, candidate = Operation.SPLIT, self.try_split(graph)

            if candidate is None:
                failures += 1
                continue

            graph = candidate
            trace.append(TraceStep(graph, operation))
            failures = 0
            logger.debug("Step %d: %s -> %d node(s)", len(trace) - 1, operation.value, len(graph))

        if len(graph) < target_node_count:
            logger.warning(
                "Generation stalled at %d/%d node(s) after %d consecutive failures",
                len(graph),
                target_node_count,
                failures,
            )
        else:
            logger.info("Generated %d node(s) in %d step(s)", len(graph), len(trace) - 1)

        return Construction(final_graph=graph, trace=trace)

    # =========================================================================
    # Attempts
    # =========================================================================

    def try_grow(self, graph: Graph) -> Optional[Graph]:
        """Grow from a random node in a random direction."""
        node_id = self.rng.choice(sorted(graph.nodes))
        direction = self.rng.choice(DIRECTIONS)
        return grow(graph, node_id, direction)

    def try_split(self, graph: Graph) -> Optional[Graph]:
        """Split a random edge, displacing its second endpoint's side."""
        if not graph.edges:
            return None
        u, v = self.rng.choice(graph.sorted_edges())
        return split(graph, u, v)


def generate(
    target_node_count: int,
    seed: Optional[int] = None,
    settings: Optional[EngineSettings] = None,
) -> Construction:
    """Generate a puzzle with a fresh seeded random source."""
    return PuzzleGenerator(settings, random.Random(seed)).generate(target_node_count)


__all__ = ["PuzzleGenerator", "generate"]
