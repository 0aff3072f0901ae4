"""Rich/text formatting helpers for puzzle output."""

from __future__ import annotations

from typing import List, Optional

from rich.table import Table

from treepuzzle.core.graph.models import Color, Construction, Graph

WHITE_GLYPH = "o"
BLACK_GLYPH = "@"


def render_grid(graph: Graph) -> str:
    """
    Draw a graph as text, one character cell per grid cell and gap.

    White nodes are ``o``, black nodes ``@``; edges are ``-`` and ``|``.
    Rows follow increasing ``gy`` (downwards).
    """
    if not graph.nodes:
        return ""
    xs = [n.gx for n in graph.nodes.values()]
    ys = [n.gy for n in graph.nodes.values()]
    min_x, min_y = min(xs), min(ys)
    width = (max(xs) - min_x) * 2 + 1
    height = (max(ys) - min_y) * 2 + 1
    canvas: List[List[str]] = [[" "] * width for _ in range(height)]

    for node in graph.nodes.values():
        glyph = WHITE_GLYPH if node.color is Color.WHITE else BLACK_GLYPH
        canvas[(node.gy - min_y) * 2][(node.gx - min_x) * 2] = glyph

    for u, v in graph.edges:
        a, b = graph.node(u), graph.node(v)
        col = a.gx - min_x + b.gx - min_x
        row = a.gy - min_y + b.gy - min_y
        canvas[row][col] = "-" if a.gy == b.gy else "|"

    return "\n".join("".join(line).rstrip() for line in canvas)


def build_trace_table(construction: Construction, title: str = "Construction Trace") -> Table:
    table = Table(title=title)
    table.add_column("Step", justify="right")
    table.add_column("Operation")
    table.add_column("Nodes", justify="right")
    table.add_column("White", justify="right")
    table.add_column("Edges", justify="right")

    for idx, step in enumerate(construction.trace):
        graph = step.graph
        table.add_row(
            str(idx),
            step.operation.value,
            str(len(graph)),
            str(graph.white_count()),
            str(len(graph.edges)),
        )
    return table


def format_points(graph: Graph, limit: Optional[int] = 12) -> str:
    """Compact ``(x,y,c)`` listing, truncated after ``limit`` nodes."""
    points = [f"({x},{y},{c})" for x, y, c in graph.points()]
    if limit is not None and len(points) > limit:
        hidden = len(points) - limit
        points = points[:limit] + [f"... ({hidden} more)"]
    return " ".join(points)


__all__ = ["build_trace_table", "format_points", "render_grid"]
