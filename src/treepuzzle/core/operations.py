"""
Structural operations on grid trees.

Forward operations (used by the generator):
- grow: attach a new white leaf next to a node, flipping that node
- split: cut an edge, push one side away by the edge vector, insert a
  white node in the vacated cell and flip both original endpoints

Reverse operations (used by the solver):
- ungrow: remove a white leaf, flipping its neighbour
- unsplit: remove a straight white degree-2 node, pull one side back
  and join the two neighbours, flipping both

All functions are pure: inputs are never modified and a collision or
unmet precondition yields ``None`` (or no successor) instead of raising.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from treepuzzle.core.graph.canonical import get_component
from treepuzzle.core.graph.models import (
    DIRECTIONS,
    Color,
    EdgeKey,
    Graph,
    GridNode,
    Operation,
    Position,
    edge_key,
)


def _translate(
    nodes: Dict[int, GridNode],
    moving: Set[int],
    dx: int,
    dy: int,
) -> Optional[Dict[int, GridNode]]:
    """Shift ``moving`` by (dx, dy); None if a moved node lands on a static one."""
    static = {n.position for node_id, n in nodes.items() if node_id not in moving}
    moved: Dict[int, GridNode] = {}
    for node_id in moving:
        shifted = nodes[node_id].moved(dx, dy)
        if shifted.position in static:
            return None
        moved[node_id] = shifted
    result = dict(nodes)
    result.update(moved)
    return result


def _flip(nodes: Dict[int, GridNode], *node_ids: int) -> None:
    for node_id in node_ids:
        nodes[node_id] = nodes[node_id].flipped()


# =============================================================================
# Forward operations
# =============================================================================


def grow(graph: Graph, node_id: int, direction: Position) -> Optional[Graph]:
    """Add a white leaf next to ``node_id`` in ``direction``."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Not an orthogonal unit direction: {direction}")
    source = graph.node(node_id)
    target = (source.gx + direction[0], source.gy + direction[1])
    if target in graph.occupied():
        return None

    new_id = graph.next_id
    nodes = dict(graph.nodes)
    nodes[new_id] = GridNode(new_id, target[0], target[1], Color.WHITE)
    _flip(nodes, node_id)
    return Graph(
        nodes=nodes,
        edges=graph.edges | {edge_key(node_id, new_id)},
        next_id=new_id + 1,
    )


def split(graph: Graph, u: int, v: int) -> Optional[Graph]:
    """
    Split edge u-v, displacing v's side by ``v - u``.

    The new white node takes v's old cell, so the chain reads u - new - v
    along the original edge direction.
    """
    key = edge_key(u, v)
    if key not in graph.edges:
        raise ValueError(f"No edge between {u} and {v}")
    u_node, v_node = graph.node(u), graph.node(v)
    dx, dy = v_node.gx - u_node.gx, v_node.gy - u_node.gy

    side = get_component(graph, v, forbidden_id=u)
    nodes = _translate(graph.nodes, side, dx, dy)
    if nodes is None:
        return None

    new_id = graph.next_id
    nodes[new_id] = GridNode(new_id, v_node.gx, v_node.gy, Color.WHITE)
    _flip(nodes, u, v)
    edges = (graph.edges - {key}) | {edge_key(u, new_id), edge_key(new_id, v)}
    return Graph(nodes=nodes, edges=edges, next_id=new_id + 1)


# =============================================================================
# Reverse operations
# =============================================================================


def ungrow(graph: Graph, leaf_id: int) -> Optional[Graph]:
    """Remove white leaf ``leaf_id``; None if it is not a white leaf."""
    leaf = graph.node(leaf_id)
    incident = graph.incident_edges(leaf_id)
    if leaf.color is not Color.WHITE or len(incident) != 1:
        return None
    (edge,) = incident
    parent_id = edge[1] if edge[0] == leaf_id else edge[0]

    nodes = dict(graph.nodes)
    del nodes[leaf_id]
    _flip(nodes, parent_id)
    return graph.replace(nodes=nodes, edges=graph.edges - {edge})


def _straight_neighbors(graph: Graph, node_id: int) -> Optional[Tuple[int, int, List[EdgeKey]]]:
    node = graph.node(node_id)
    if node.color is not Color.WHITE:
        return None
    incident = graph.incident_edges(node_id)
    if len(incident) != 2:
        return None
    p, q = (e[1] if e[0] == node_id else e[0] for e in incident)
    pn, qn = graph.node(p), graph.node(q)
    if pn.gx + qn.gx != 2 * node.gx or pn.gy + qn.gy != 2 * node.gy:
        return None
    return p, q, incident


def unsplit(graph: Graph, middle_id: int, moving_id: int) -> Optional[Graph]:
    """
    Remove straight white degree-2 node ``middle_id``.

    ``moving_id`` is the neighbour whose side is pulled one cell toward the
    removed node; the other neighbour stays put. Returns None when the node
    does not qualify or the pulled side would collide.
    """
    found = _straight_neighbors(graph, middle_id)
    if found is None:
        return None
    p, q, incident = found
    if moving_id not in (p, q):
        raise ValueError(f"Node {moving_id} is not adjacent to {middle_id}")
    staying_id = q if moving_id == p else p

    middle, staying = graph.node(middle_id), graph.node(staying_id)
    dx, dy = staying.gx - middle.gx, staying.gy - middle.gy

    side = get_component(graph, moving_id, forbidden_id=middle_id)
    remaining = dict(graph.nodes)
    del remaining[middle_id]
    nodes = _translate(remaining, side, dx, dy)
    if nodes is None:
        return None

    _flip(nodes, moving_id, staying_id)
    edges = (graph.edges - set(incident)) | {edge_key(moving_id, staying_id)}
    return graph.replace(nodes=nodes, edges=edges)


def ungrow_successors(graph: Graph) -> List[Graph]:
    """Every state reachable by one ungrow."""
    results = []
    for node_id in sorted(graph.nodes):
        state = ungrow(graph, node_id)
        if state is not None:
            results.append(state)
    return results


def unsplit_successors(graph: Graph) -> List[Graph]:
    """Every state reachable by one unsplit, trying both sides of each candidate."""
    results = []
    for node_id in sorted(graph.nodes):
        found = _straight_neighbors(graph, node_id)
        if found is None:
            continue
        p, q, _ = found
        for moving_id in (p, q):
            state = unsplit(graph, node_id, moving_id)
            if state is not None:
                results.append(state)
    return results


def reverse_successors(graph: Graph) -> Iterable[Tuple[Operation, Graph]]:
    """Predecessor candidates, labelled with the forward operation they undo."""
    for state in ungrow_successors(graph):
        yield Operation.GROW, state
    for state in unsplit_successors(graph):
        yield Operation.SPLIT, state


__all__ = [
    "grow",
    "reverse_successors",
    "split",
    "ungrow",
    "ungrow_successors",
    "unsplit",
    "unsplit_successors",
]
