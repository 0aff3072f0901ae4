"""
Spanning-tree enumeration over grid positions.

A target configuration fixes node positions but not edges. Any spanning
tree whose edges join orthogonally adjacent cells is a candidate topology.
Trees are produced lazily, each distinct edge set exactly once, so the
solver can interleave enumeration with search and stop at any point.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Tuple

from treepuzzle.core.graph.models import EdgeKey, Graph, edge_key

TreeEdges = FrozenSet[EdgeKey]


def adjacency_edges(graph: Graph) -> List[EdgeKey]:
    """All node pairs at Manhattan distance exactly one, sorted."""
    occupied = graph.occupied()
    edges = set()
    for node in graph.nodes.values():
        for dx, dy in ((1, 0), (0, 1)):
            other = occupied.get((node.gx + dx, node.gy + dy))
            if other is not None:
                edges.add(edge_key(node.id, other))
    return sorted(edges)


def _is_connected(node_ids: Iterable[int], edges: Iterable[EdgeKey]) -> bool:
    ids = list(node_ids)
    if not ids:
        return True
    adjacency = {node_id: [] for node_id in ids}
    for u, v in edges:
        adjacency[u].append(v)
        adjacency[v].append(u)
    seen = {ids[0]}
    stack = [ids[0]]
    while stack:
        for nxt in adjacency[stack.pop()]:
            if nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
    return len(seen) == len(ids)


def iter_spanning_trees(graph: Graph) -> Iterator[TreeEdges]:
    """
    Yield every spanning tree of the grid-adjacency graph of ``graph``.

    Existing edges of ``graph`` are ignored; only node positions matter.
    Yields nothing when the positions are not adjacency-connected.

    Each branch point takes the first candidate edge that crosses from the
    built part to the rest and either includes or excludes it, so no edge
    set is produced twice. Excluding an edge is pruned as soon as the
    remaining candidates can no longer connect every node.
    """
    node_ids = sorted(graph.nodes)
    if len(node_ids) <= 1:
        yield frozenset()
        return

    candidates = adjacency_edges(graph)
    if not _is_connected(node_ids, candidates):
        return

    Frame = Tuple[FrozenSet[int], Tuple[EdgeKey, ...], FrozenSet[EdgeKey]]
    stack: List[Frame] = [(frozenset({node_ids[0]}), (), frozenset())]

    while stack:
        visited, chosen, excluded = stack.pop()
        if len(visited) == len(node_ids):
            yield frozenset(chosen)
            continue

        crossing = next(
            (e for e in candidates if e not in excluded and ((e[0] in visited) != (e[1] in visited))),
            None,
        )
        if crossing is None:
            continue

        without = excluded | {crossing}
        if _is_connected(node_ids, (e for e in candidates if e not in without)):
            stack.append((visited, chosen, without))

        outside = crossing[1] if crossing[0] in visited else crossing[0]
        stack.append((visited | {outside}, chosen + (crossing,), excluded))


def count_spanning_trees(graph: Graph) -> int:
    """Number of candidate topologies (exhausts the enumeration)."""
    return sum(1 for _ in iter_spanning_trees(graph))


__all__ = ["TreeEdges", "adjacency_edges", "count_spanning_trees", "iter_spanning_trees"]
