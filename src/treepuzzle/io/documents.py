"""
Serializable puzzle documents.

These pydantic models are the on-disk form of a Construction:
- NodeRecord / EdgeRecord: one node or edge of a snapshot
- StepRecord: one trace snapshot plus the operation that produced it
- PuzzleDocument: final configuration, trace and provenance
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from treepuzzle.core.graph.models import (
    Color,
    Construction,
    Graph,
    GridNode,
    Operation,
    TraceStep,
    edge_key,
)


class NodeRecord(BaseModel):
    id: int
    gx: int
    gy: int
    color: Literal[0, 1] = 0


class EdgeRecord(BaseModel):
    u: int
    v: int


class StepRecord(BaseModel):
    """One snapshot of a construction trace."""

    operation: Operation = Operation.START
    nodes: List[NodeRecord] = Field(default_factory=list)
    edges: List[EdgeRecord] = Field(default_factory=list)


class PuzzleDocument(BaseModel):
    """
    A generated or solved puzzle.

    ``nodes``/``edges`` describe the final configuration; ``trace`` runs
    from the single starting node to that configuration.
    """

    puzzle_id: str
    source: Literal["generated", "solved"] = "generated"
    created_at: str = Field(default_factory=lambda: datetime.now().strftime("%Y-%m-%d"))
    seed: Optional[int] = None
    target_node_count: Optional[int] = None

    nodes: List[NodeRecord] = Field(default_factory=list)
    edges: List[EdgeRecord] = Field(default_factory=list)
    trace: List[StepRecord] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def validate_unique_ids(cls, v: List[NodeRecord]) -> List[NodeRecord]:
        ids = [n.id for n in v]
        if len(ids) != len(set(ids)):
            raise ValueError("node ids must be unique")
        return v

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def points(self) -> List[tuple]:
        """Final configuration as (gx, gy, color) triples."""
        return [(n.gx, n.gy, n.color) for n in self.nodes]


# =============================================================================
# Conversion
# =============================================================================


def _node_records(graph: Graph) -> List[NodeRecord]:
    return [NodeRecord(id=n.id, gx=n.gx, gy=n.gy, color=int(n.color)) for n in graph.sorted_nodes()]


def _edge_records(graph: Graph) -> List[EdgeRecord]:
    return [EdgeRecord(u=u, v=v) for u, v in graph.sorted_edges()]


def graph_from_records(nodes: List[NodeRecord], edges: List[EdgeRecord]) -> Graph:
    grid_nodes = {n.id: GridNode(n.id, n.gx, n.gy, Color(n.color)) for n in nodes}
    return Graph(
        nodes=grid_nodes,
        edges=frozenset(edge_key(e.u, e.v) for e in edges),
        next_id=max(grid_nodes, default=-1) + 1,
    )


def document_from_construction(
    construction: Construction,
    puzzle_id: str,
    *,
    source: str = "generated",
    seed: Optional[int] = None,
    target_node_count: Optional[int] = None,
) -> PuzzleDocument:
    """Snapshot a Construction into a serializable document."""
    final = construction.final_graph
    return PuzzleDocument(
        puzzle_id=puzzle_id,
        source=source,
        seed=seed,
        target_node_count=target_node_count,
        nodes=_node_records(final),
        edges=_edge_records(final),
        trace=[
            StepRecord(operation=step.operation, nodes=_node_records(step.graph), edges=_edge_records(step.graph))
            for step in construction.trace
        ],
    )


def construction_from_document(document: PuzzleDocument) -> Construction:
    """Rebuild the in-memory Construction from a document."""
    return Construction(
        final_graph=graph_from_records(document.nodes, document.edges),
        trace=[TraceStep(graph_from_records(s.nodes, s.edges), s.operation) for s in document.trace],
    )


__all__ = [
    "EdgeRecord",
    "NodeRecord",
    "PuzzleDocument",
    "StepRecord",
    "construction_from_document",
    "document_from_construction",
    "graph_from_records",
]
