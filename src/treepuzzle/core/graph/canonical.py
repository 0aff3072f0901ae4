"""Component extraction and canonical forms shared by the generator and solver."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from treepuzzle.core.graph.models import Graph, GridNode

Signature = FrozenSet[str]


def get_component(graph: Graph, start_id: int, forbidden_id: Optional[int] = None) -> Set[int]:
    """
    Collect node ids reachable from ``start_id``.

    Edges touching ``forbidden_id`` are ignored, which isolates one side of
    the tree when an edge is cut or a node is about to be removed.

    Args:
        graph: Graph to traverse
        start_id: Node the traversal starts from
        forbidden_id: Optional node whose edges are excluded

    Returns:
        Set of reachable node ids (always contains ``start_id``)
    """
    adjacency: Dict[int, List[int]] = {node_id: [] for node_id in graph.nodes}
    for u, v in graph.edges:
        if u == forbidden_id or v == forbidden_id:
            continue
        adjacency.setdefault(u, []).append(v)
        adjacency.setdefault(v, []).append(u)

    visited = {start_id}
    stack = [start_id]
    while stack:
        current = stack.pop()
        for nxt in adjacency.get(current, ()):
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return visited


def _iter_nodes(source: Union[Graph, Iterable[GridNode]]) -> List[GridNode]:
    if isinstance(source, Graph):
        return list(source.nodes.values())
    return list(source)


def canonical_signature(source: Union[Graph, Iterable[GridNode]]) -> Signature:
    """
    Translation-normalized set of ``"x,y,color"`` strings.

    Coordinates are shifted so the minimum x and minimum y are zero. Node ids
    and ordering are ignored; rotations and reflections are not normalized.
    """
    nodes = _iter_nodes(source)
    if not nodes:
        return frozenset()
    min_x = min(n.gx for n in nodes)
    min_y = min(n.gy for n in nodes)
    return frozenset(f"{n.gx - min_x},{n.gy - min_y},{int(n.color)}" for n in nodes)


def same_configuration(a: Union[Graph, Iterable[GridNode]], b: Union[Graph, Iterable[GridNode]]) -> bool:
    """Whether two node sets are the same configuration up to translation."""
    return canonical_signature(a) == canonical_signature(b)


StateKey = Tuple[Tuple[Tuple[int, int, int, int], ...], Tuple[Tuple[int, int], ...]]


def state_key(graph: Graph) -> StateKey:
    """Search-state key: translation-normalized nodes plus the edge set.

    Node ids are stable within one search (nodes are only ever removed), so
    positions and edges are both keyed by id.
    """
    if not graph.nodes:
        return (), ()
    min_x = min(n.gx for n in graph.nodes.values())
    min_y = min(n.gy for n in graph.nodes.values())
    node_part = tuple(
        (n.id, n.gx - min_x, n.gy - min_y, int(n.color)) for n in graph.sorted_nodes()
    )
    return node_part, tuple(graph.sorted_edges())


def validate_tree(graph: Graph) -> List[str]:
    """
    Check the configuration invariants.

    Returns a list of human-readable violations; empty when the graph is a
    connected tree with unique positions and unit-length orthogonal edges.
    """
    errors: List[str] = []
    if not graph.nodes:
        return ["graph has no nodes"]

    if len(graph.edges) != len(graph.nodes) - 1:
        errors.append(f"expected {len(graph.nodes) - 1} edge(s), found {len(graph.edges)}")

    seen: Dict[Tuple[int, int], int] = {}
    for node in graph.sorted_nodes():
        if node.position in seen:
            errors.append(f"nodes {seen[node.position]} and {node.id} share position {node.position}")
        else:
            seen[node.position] = node.id

    for u, v in graph.sorted_edges():
        if u not in graph.nodes or v not in graph.nodes:
            errors.append(f"edge {u}-{v} references a missing node")
            continue
        a, b = graph.nodes[u], graph.nodes[v]
        if abs(a.gx - b.gx) + abs(a.gy - b.gy) != 1:
            errors.append(f"edge {u}-{v} is not a unit orthogonal step")

    first = next(iter(graph.nodes))
    if len(get_component(graph, first) & graph.nodes.keys()) != len(graph.nodes):
        errors.append("graph is not connected")

    return errors


__all__ = [
    "Signature",
    "StateKey",
    "canonical_signature",
    "get_component",
    "same_configuration",
    "state_key",
    "validate_tree",
]
