"""
Puzzle generation and solving engine.

Example:
    from treepuzzle.core import generate, solve

    puzzle = generate(8, seed=42)
    construction = solve(puzzle.final_graph.points())
    assert construction is not None
"""

from treepuzzle.core.generator import PuzzleGenerator, generate
from treepuzzle.core.solver import PuzzleSolver, SolveOutcome, SolveStatus, solve

__all__ = [
    "PuzzleGenerator",
    "PuzzleSolver",
    "SolveOutcome",
    "SolveStatus",
    "generate",
    "solve",
]
