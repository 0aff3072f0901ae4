"""
Puzzle CLI: generate, solve, inspect and check grid tree puzzles.

- Generated and solved puzzles are saved to outputs/puzzles/<name>.yaml
- Solver exit codes: 0 solved, 1 unsolvable, 2 inconclusive or bad input
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

import typer
from rich.console import Console

from treepuzzle.cli.formatters import build_trace_table, format_points, render_grid
from treepuzzle.cli.load_helpers import load_puzzle_or_exit, settings_or_exit
from treepuzzle.cli.paths import resolve_puzzle_path
from treepuzzle.core.generator import generate as generate_puzzle
from treepuzzle.core.graph.canonical import same_configuration, validate_tree
from treepuzzle.core.solver import PuzzleSolver, SolveStatus
from treepuzzle.io import (
    construction_from_document,
    document_from_construction,
    save_puzzle,
)
from treepuzzle.utils.logging import configure_logging

app = typer.Typer(help="Grid tree puzzle CLI: generate, solve, and inspect puzzles.")
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logs and full load errors"),
) -> None:
    configure_logging(verbose)
    ctx.obj = {"verbose": verbose}


def _verbose(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("verbose"))


def _parse_point(raw: str) -> Tuple[int, int, int]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 3:
        raise ValueError(f"expected 'x,y,color', got '{raw}'")
    gx, gy, color = (int(p) for p in parts)
    return gx, gy, color


@app.command()
def generate(
    ctx: typer.Context,
    nodes: int = typer.Option(..., "--nodes", "-n", min=1, help="Target node count"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a reproducible puzzle"),
    name: Optional[str] = typer.Option(None, "--name", help="Name for the output file (auto-generated if not provided)"),
    config: Optional[str] = typer.Option(None, "--config", help="Engine settings YAML"),
) -> None:
    """Generate a random reachable puzzle and save its construction trace."""
    settings = settings_or_exit(config, console=console, verbose_errors=_verbose(ctx))
    construction = generate_puzzle(nodes, seed=seed, settings=settings)

    puzzle_id = name or f"puzzle_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    document = document_from_construction(
        construction,
        puzzle_id,
        source="generated",
        seed=seed,
        target_node_count=nodes,
    )
    path = resolve_puzzle_path(puzzle_id)
    save_puzzle(document, path)

    final = construction.final_graph
    console.print("\n[bold]Puzzle Generated[/bold]")
    console.print(f"ID: {puzzle_id}")
    console.print(f"Nodes: {len(final)} (target {nodes})")
    console.print(f"Steps: {construction.steps}")
    console.print(f"Saved: {path}")
    if len(final) < nodes:
        console.print(f"[yellow]Generation stalled before reaching {nodes} node(s)[/yellow]")
    console.print(render_grid(final), markup=False, highlight=False)


@app.command()
def solve(
    ctx: typer.Context,
    puzzle: Optional[str] = typer.Argument(None, help="Puzzle name or path whose final nodes are solved"),
    points: List[str] = typer.Option([], "--point", "-p", help="Node as x,y,color (repeatable)"),
    config: Optional[str] = typer.Option(None, "--config", help="Engine settings YAML"),
    save: Optional[str] = typer.Option(None, "--save", help="Save the solution under this name"),
) -> None:
    """Find a construction trace for a node set."""
    if puzzle and points:
        console.print("[red]Give either a puzzle file or --point values, not both[/red]")
        raise typer.Exit(code=2)

    if puzzle:
        document = load_puzzle_or_exit(puzzle, console=console, verbose_errors=_verbose(ctx))
        targets = document.points()
    elif points:
        try:
            targets = [_parse_point(raw) for raw in points]
        except ValueError as exc:
            console.print(f"[red]Bad --point[/red]: {exc}")
            raise typer.Exit(code=2)
    else:
        console.print("[red]Nothing to solve[/red]: pass a puzzle file or --point values")
        raise typer.Exit(code=2)

    settings = settings_or_exit(config, console=console, verbose_errors=_verbose(ctx))
    try:
        outcome = PuzzleSolver(settings).run(targets)
    except ValueError as exc:
        console.print(f"[red]Invalid nodes[/red]: {exc}")
        raise typer.Exit(code=2)

    status_color = {"solved": "green", "unsolvable": "red"}.get(outcome.status.value, "yellow")
    console.print(f"[bold]Status:[/bold] [{status_color}]{outcome.status.value}[/{status_color}]")
    console.print(f"Topologies tried: {outcome.topologies_tried}")
    console.print(f"Expansions: {outcome.expansions}")
    if outcome.reason:
        console.print(f"[bold]Reason:[/bold] {outcome.reason}")

    if outcome.status is SolveStatus.UNSOLVABLE:
        raise typer.Exit(code=1)
    if outcome.construction is None:
        raise typer.Exit(code=2)

    construction = outcome.construction
    console.print(build_trace_table(construction))
    console.print(render_grid(construction.final_graph), markup=False, highlight=False)

    if save:
        document = document_from_construction(construction, save, source="solved")
        path = resolve_puzzle_path(save)
        save_puzzle(document, path)
        console.print(f"Saved: {path}")


@app.command()
def show(
    ctx: typer.Context,
    puzzle: str = typer.Argument(..., help="Puzzle name or path"),
    step: Optional[int] = typer.Option(None, "--step", "-s", help="Draw a specific trace step (default: final)"),
) -> None:
    """View a saved puzzle's trace."""
    document = load_puzzle_or_exit(puzzle, console=console, verbose_errors=_verbose(ctx))
    construction = construction_from_document(document)

    console.print(f"[bold]Puzzle:[/bold] {document.puzzle_id}")
    console.print(f"Source: {document.source}")
    console.print(f"Date: {document.created_at}")
    if document.seed is not None:
        console.print(f"Seed: {document.seed}")
    console.print(f"Nodes: {document.node_count}")
    console.print(build_trace_table(construction))

    if not construction.trace:
        return
    index = len(construction.trace) - 1 if step is None else step
    if not 0 <= index < len(construction.trace):
        console.print(f"[red]Step out of range[/red]: {index} (0..{len(construction.trace) - 1})")
        raise typer.Exit(code=2)

    graph = construction.trace[index].graph
    console.print(f"\n[bold]Step {index}[/bold] ({construction.trace[index].operation.value})")
    console.print(render_grid(graph), markup=False, highlight=False)
    console.print(f"[dim]{format_points(graph)}[/dim]")


@app.command()
def check(
    ctx: typer.Context,
    puzzle: str = typer.Argument(..., help="Puzzle name or path"),
) -> None:
    """Check every trace snapshot against the tree invariants."""
    document = load_puzzle_or_exit(puzzle, console=console, verbose_errors=_verbose(ctx))
    construction = construction_from_document(document)

    problems: List[str] = []
    if not construction.trace:
        problems.append("trace is empty")
    else:
        first = construction.trace[0].graph
        if not first.is_single_white():
            problems.append("step 0 is not a single white node")
        if not same_configuration(construction.trace[-1].graph, construction.final_graph):
            problems.append("last step does not match the final configuration")

    for idx, step in enumerate(construction.trace):
        problems.extend(f"step {idx}: {msg}" for msg in validate_tree(step.graph))
        if idx and len(step.graph) != len(construction.trace[idx - 1].graph) + 1:
            problems.append(f"step {idx}: expected exactly one new node")

    problems.extend(f"final: {msg}" for msg in validate_tree(construction.final_graph))

    if problems:
        console.print(f"[red]{len(problems)} problem(s) found[/red]")
        for problem in problems:
            console.print(f" - {problem}")
        raise typer.Exit(code=1)

    console.print(f"[green]OK[/green] {len(construction.trace)} step(s) valid")


__all__ = ["app"]
