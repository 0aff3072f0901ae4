"""
Graph model and canonicalization.

Components:
- Graph / GridNode / Color: immutable configuration values
- get_component: reachability with one node's edges excluded
- canonical_signature: translation-invariant configuration identity
- state_key: search deduplication key (includes edges)
- validate_tree: tree/adjacency invariant checks
"""

from treepuzzle.core.graph.canonical import (
    Signature,
    StateKey,
    canonical_signature,
    get_component,
    same_configuration,
    state_key,
    validate_tree,
)
from treepuzzle.core.graph.models import (
    DIRECTIONS,
    Color,
    Construction,
    EdgeKey,
    Graph,
    GridNode,
    Operation,
    Position,
    TraceStep,
    edge_key,
)

__all__ = [
    "DIRECTIONS",
    "Color",
    "Construction",
    "EdgeKey",
    "Graph",
    "GridNode",
    "Operation",
    "Position",
    "Signature",
    "StateKey",
    "TraceStep",
    "canonical_signature",
    "edge_key",
    "get_component",
    "same_configuration",
    "state_key",
    "validate_tree",
]
