"""
Reverse-search puzzle solver.

Given an unordered set of (position, color) nodes, decides whether the
configuration can be built from a single white node and, if so,
reconstructs a construction trace:

1. Candidate topologies: every spanning tree over grid adjacency,
   produced lazily (see ``treepuzzle.core.topology``).
2. For each topology, breadth-first search backwards (ungrow/unsplit)
   until a single white node remains.
3. The first successful search, reversed, is the construction trace.

Outcomes distinguish a proven ``UNSOLVABLE`` result from an
``INCONCLUSIVE`` one where some search stopped on a budget. The classic
``solve()`` helper folds both into ``None``.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Deque, Iterable, List, Mapping, Optional, Set, Tuple, Union

from treepuzzle.config import DEFAULT_SETTINGS, EngineSettings
from treepuzzle.core.graph.canonical import StateKey, state_key
from treepuzzle.core.graph.models import (
    Color,
    Construction,
    Graph,
    GridNode,
    Operation,
    TraceStep,
)
from treepuzzle.core.operations import reverse_successors
from treepuzzle.core.topology import TreeEdges, iter_spanning_trees
from treepuzzle.utils.logging import log_calls

logger = logging.getLogger(__name__)

PointLike = Union[GridNode, Tuple[int, int, int], Mapping[str, Any]]


class SolveStatus(str, Enum):
    """Result of a solver run."""

    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"  # Proven: no topology can reach a single white node
    INCONCLUSIVE = "inconclusive"  # A budget or cancellation stopped at least one search


class _SearchStop(str, Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"
    CAPPED = "capped"
    ABORTED = "aborted"  # Global budget, deadline or cancellation


@dataclass
class SolveOutcome:
    """Solver result with search statistics."""

    status: SolveStatus
    construction: Optional[Construction] = None
    topologies_tried: int = 0
    expansions: int = 0
    reason: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED


@dataclass(frozen=True)
class _SearchNode:
    """BFS entry; ``operation`` is the forward step that turns this state into its parent."""

    graph: Graph
    operation: Operation
    parent: Optional["_SearchNode"] = None


def _as_int(value: Any, field: str) -> int:
    """Exact integer value of ``value``; fractional or non-numeric input is rejected."""
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Node {field} must be an integer, got {value!r}") from exc
    if not number.is_integer():
        raise ValueError(f"Node {field} must be an integer, got {value!r}")
    return int(number)


def coerce_points(points: Iterable[PointLike]) -> Graph:
    """
    Build an edgeless graph from nodes given as GridNode, (gx, gy, color) or
    ``{"gx", "gy", "color"}`` mappings.

    Raises:
        ValueError: If a coordinate is not an integer, a color is not 0/1,
            or an entry cannot be read
    """
    triples: List[Tuple[int, int, int]] = []
    for point in points:
        if isinstance(point, GridNode):
            triples.append((point.gx, point.gy, int(point.color)))
            continue
        if isinstance(point, Mapping):
            try:
                gx, gy, color = point["gx"], point["gy"], point["color"]
            except KeyError as exc:
                raise ValueError(f"Node is missing field {exc}: {dict(point)}") from exc
        else:
            gx, gy, color = point
        color_value = _as_int(color, "color")
        if color_value not in (Color.WHITE, Color.BLACK):
            raise ValueError(f"Node color must be 0 (white) or 1 (black), got {color!r}")
        triples.append((_as_int(gx, "gx"), _as_int(gy, "gy"), color_value))
    return Graph.from_points(triples)


class PuzzleSolver:
    """Exhaustive reverse search over candidate spanning-tree topologies."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        cancel: Optional[Callable[[], bool]] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.cancel = cancel
        self._deadline: Optional[float] = None
        self._expansions = 0

    # =========================================================================
    # Main Entry Point
    # =========================================================================

    @log_calls(summarize=lambda outcome: outcome.status.value)
    def run(self, points: Iterable[PointLike]) -> SolveOutcome:
        """Solve a target node set and report how the search ended."""
        target = coerce_points(points)
        self._expansions = 0
        self._deadline = time.monotonic() + self.settings.time_limit if self.settings.time_limit else None

        if target.white_count() == 0:
            logger.info("No white node present; configuration is unreachable")
            return SolveOutcome(SolveStatus.UNSOLVABLE, reason="no white node")

        if target.is_single_white():
            return SolveOutcome(
                SolveStatus.SOLVED,
                construction=Construction(final_graph=target, trace=[TraceStep(target, Operation.START)]),
            )

        if len(target.occupied()) != len(target):
            logger.info("Duplicate node positions; configuration is not a valid tree")
            return SolveOutcome(SolveStatus.UNSOLVABLE, reason="duplicate positions")

        tried = 0
        capped = False
        for tree_edges in iter_spanning_trees(target):
            if self._should_abort():
                return self._inconclusive(tried, "search budget exhausted")

            tried += 1
            candidate = target.replace(edges=tree_edges)
            logger.debug("Searching topology %d (%d edge(s))", tried, len(tree_edges))
            stop, goal = self._reverse_search(candidate)

            if stop is _SearchStop.FOUND and goal is not None:
                logger.info("Solution found with topology %d after %d expansion(s)", tried, self._expansions)
                return SolveOutcome(
                    SolveStatus.SOLVED,
                    construction=Construction(final_graph=candidate, trace=self._build_trace(goal)),
                    topologies_tried=tried,
                    expansions=self._expansions,
                )
            if stop is _SearchStop.ABORTED:
                return self._inconclusive(tried, "search budget exhausted")
            if stop is _SearchStop.CAPPED:
                capped = True

        if tried == 0:
            logger.info("Node positions are not adjacency-connected")
            return SolveOutcome(SolveStatus.UNSOLVABLE, reason="positions are not connected")

        if capped:
            return self._inconclusive(tried, "per-topology expansion cap reached")

        logger.info("All %d topologies exhausted without a solution", tried)
        return SolveOutcome(
            SolveStatus.UNSOLVABLE,
            topologies_tried=tried,
            expansions=self._expansions,
            reason="every topology exhausted",
        )

    # =========================================================================
    # Reverse Search
    # =========================================================================

    def _reverse_search(self, start: Graph) -> Tuple[_SearchStop, Optional[_SearchNode]]:
        """Breadth-first search from ``start`` toward a single white node."""
        queue: Deque[_SearchNode] = deque([_SearchNode(start, Operation.START)])
        visited: Set[StateKey] = {state_key(start)}
        iterations = 0

        while queue:
            if iterations >= self.settings.max_expansions_per_topology:
                logger.debug("Topology capped after %d expansion(s)", iterations)
                return _SearchStop.CAPPED, None
            if self._should_abort():
                return _SearchStop.ABORTED, None

            iterations += 1
            self._expansions += 1
            current = queue.popleft()

            if current.graph.is_single_white():
                return _SearchStop.FOUND, current

            if iterations % self.settings.progress_interval == 0:
                logger.debug(
                    "Searching... %d expansion(s), queue: %d, visited: %d, nodes: %d",
                    iterations,
                    len(queue),
                    len(visited),
                    len(current.graph),
                )

            for operation, successor in reverse_successors(current.graph):
                key = state_key(successor)
                if key in visited:
                    continue
                visited.add(key)
                queue.append(_SearchNode(successor, operation, current))

        return _SearchStop.EXHAUSTED, None

    @staticmethod
    def _build_trace(goal: _SearchNode) -> List[TraceStep]:
        """Walk parent links from the single-node goal back to the target."""
        chain: List[_SearchNode] = []
        node: Optional[_SearchNode] = goal
        while node is not None:
            chain.append(node)
            node = node.parent

        trace = [TraceStep(chain[0].graph, Operation.START)]
        for child, parent in zip(chain, chain[1:]):
            trace.append(TraceStep(parent.graph, child.operation))
        return trace

    # =========================================================================
    # Budgets
    # =========================================================================

    def _should_abort(self) -> bool:
        total = self.settings.max_total_expansions
        if total is not None and self._expansions >= total:
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return bool(self.cancel and self.cancel())

    def _inconclusive(self, tried: int, reason: str) -> SolveOutcome:
        logger.info("Search inconclusive after %d topology(ies): %s", tried, reason)
        return SolveOutcome(
            SolveStatus.INCONCLUSIVE,
            topologies_tried=tried,
            expansions=self._expansions,
            reason=reason,
        )


def solve(
    points: Iterable[PointLike],
    settings: Optional[EngineSettings] = None,
) -> Optional[Construction]:
    """Construction trace for ``points``, or None when no solution was found within budget."""
    return PuzzleSolver(settings).run(points).construction


def candidate_topologies(points: Iterable[PointLike]) -> Iterable[TreeEdges]:
    """Lazy sequence of spanning trees the solver would try for ``points``."""
    return iter_spanning_trees(coerce_points(points))


__all__ = [
    "PointLike",
    "PuzzleSolver",
    "SolveOutcome",
    "SolveStatus",
    "candidate_topologies",
    "coerce_points",
    "solve",
]
