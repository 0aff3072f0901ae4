"""
Grid graph value types.

These types describe a puzzle configuration:
- Color: binary node color (white / black)
- GridNode: a node with an arena id and integer grid coordinates
- Graph: an immutable tree of nodes and unit-length orthogonal edges
- TraceStep: one snapshot of a construction trace
- Construction: final graph plus the full trace that builds it

Graphs are never mutated. Every structural operation returns a new Graph,
so snapshots stored in a trace can be shared freely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

EdgeKey = Tuple[int, int]
Position = Tuple[int, int]

DIRECTIONS: Tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Color(IntEnum):
    """Node color."""

    WHITE = 0
    BLACK = 1

    def flip(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Operation(str, Enum):
    """Forward operation that produced a trace step."""

    START = "start"
    GROW = "grow"
    SPLIT = "split"


def edge_key(u: int, v: int) -> EdgeKey:
    """Normalize an unordered pair of node ids."""
    return (u, v) if u <= v else (v, u)


@dataclass(frozen=True)
class GridNode:
    id: int
    gx: int
    gy: int
    color: Color = Color.WHITE

    @property
    def position(self) -> Position:
        return (self.gx, self.gy)

    def moved(self, dx: int, dy: int) -> "GridNode":
        return GridNode(self.id, self.gx + dx, self.gy + dy, self.color)

    def flipped(self) -> "GridNode":
        return GridNode(self.id, self.gx, self.gy, self.color.flip())


@dataclass(frozen=True)
class Graph:
    """
    Immutable puzzle configuration.

    Attributes:
        nodes: Nodes keyed by arena id
        edges: Normalized (low_id, high_id) pairs
        next_id: Next free arena id; only ever increases along a trace
    """

    nodes: Dict[int, GridNode]
    edges: FrozenSet[EdgeKey] = frozenset()
    next_id: int = 0

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def root(cls) -> "Graph":
        """Single white node at the origin."""
        return cls(nodes={0: GridNode(0, 0, 0, Color.WHITE)}, edges=frozenset(), next_id=1)

    @classmethod
    def from_points(
        cls,
        points: Iterable[Tuple[int, int, int]],
        edges: Iterable[EdgeKey] = (),
    ) -> "Graph":
        """Build a graph from (gx, gy, color) triples; ids follow input order."""
        nodes: Dict[int, GridNode] = {}
        for idx, (gx, gy, color) in enumerate(points):
            nodes[idx] = GridNode(idx, int(gx), int(gy), Color(int(color)))
        return cls(
            nodes=nodes,
            edges=frozenset(edge_key(u, v) for u, v in edges),
            next_id=len(nodes),
        )

    def replace(
        self,
        nodes: Optional[Dict[int, GridNode]] = None,
        edges: Optional[FrozenSet[EdgeKey]] = None,
        next_id: Optional[int] = None,
    ) -> "Graph":
        return Graph(
            nodes=self.nodes if nodes is None else nodes,
            edges=self.edges if edges is None else edges,
            next_id=self.next_id if next_id is None else next_id,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: int) -> GridNode:
        return self.nodes[node_id]

    def occupied(self) -> Dict[Position, int]:
        """Map of occupied grid cells to node ids."""
        return {n.position: n.id for n in self.nodes.values()}

    def incident_edges(self, node_id: int) -> List[EdgeKey]:
        return [e for e in self.edges if node_id in e]

    def neighbors(self, node_id: int) -> List[int]:
        return [v if u == node_id else u for u, v in self.incident_edges(node_id)]

    def degree(self, node_id: int) -> int:
        return len(self.incident_edges(node_id))

    def sorted_edges(self) -> List[EdgeKey]:
        return sorted(self.edges)

    def sorted_nodes(self) -> List[GridNode]:
        return [self.nodes[k] for k in sorted(self.nodes)]

    def points(self) -> List[Tuple[int, int, int]]:
        """(gx, gy, color) triples in id order."""
        return [(n.gx, n.gy, int(n.color)) for n in self.sorted_nodes()]

    def white_count(self) -> int:
        return sum(1 for n in self.nodes.values() if n.color is Color.WHITE)

    def is_single_white(self) -> bool:
        if len(self.nodes) != 1:
            return False
        (only,) = self.nodes.values()
        return only.color is Color.WHITE


@dataclass(frozen=True)
class TraceStep:
    """A trace snapshot and the forward operation that produced it."""

    graph: Graph
    operation: Operation = Operation.START


@dataclass
class Construction:
    """Final configuration plus its construction trace (index 0 = single node)."""

    final_graph: Graph
    trace: List[TraceStep] = field(default_factory=list)

    @property
    def steps(self) -> int:
        """Number of forward operations in the trace."""
        return max(len(self.trace) - 1, 0)

    def graphs(self) -> Sequence[Graph]:
        return [step.graph for step in self.trace]


__all__ = [
    "DIRECTIONS",
    "Color",
    "Construction",
    "EdgeKey",
    "Graph",
    "GridNode",
    "Operation",
    "Position",
    "TraceStep",
    "edge_key",
]
