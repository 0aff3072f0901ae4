"""Where puzzle files are written and looked up: ``outputs/puzzles/<name>.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import List

PUZZLE_SUFFIX = ".yaml"


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def puzzles_dir() -> Path:
    return outputs_dir() / "puzzles"


def ensure_output_dirs() -> None:
    puzzles_dir().mkdir(parents=True, exist_ok=True)


def with_puzzle_suffix(name: str) -> str:
    """``name`` with ``.yaml`` appended unless it already ends with it."""
    return name if name.endswith(PUZZLE_SUFFIX) else f"{name}{PUZZLE_SUFFIX}"


def stored_puzzle_path(name: str) -> Path:
    """Location under outputs/puzzles for ``name``; any directory part is dropped."""
    return puzzles_dir() / with_puzzle_suffix(Path(name).name)


def resolve_puzzle_path(name: str) -> str:
    """Output path for saving puzzle ``name`` (creates outputs/puzzles)."""
    ensure_output_dirs()
    return str(stored_puzzle_path(name))


def puzzle_candidates(name_or_path: str) -> List[Path]:
    """Paths tried by ``find_puzzle_file``, in order, without duplicates."""
    ordered = [
        Path(name_or_path),
        Path(with_puzzle_suffix(name_or_path)),
        stored_puzzle_path(name_or_path),
    ]
    unique: List[Path] = []
    for path in ordered:
        if path not in unique:
            unique.append(path)
    return unique


def find_puzzle_file(name_or_path: str) -> str:
    """
    First existing file among ``puzzle_candidates(name_or_path)``.

    Raises:
        FileNotFoundError: If none of the candidates exists
    """
    candidates = puzzle_candidates(name_or_path)
    for path in candidates:
        if path.is_file():
            return str(path)
    looked_in = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Puzzle file not found: '{name_or_path}'\nLooked in:\n{looked_in}")


__all__ = [
    "ensure_output_dirs",
    "find_puzzle_file",
    "outputs_dir",
    "puzzle_candidates",
    "puzzles_dir",
    "resolve_puzzle_path",
    "stored_puzzle_path",
    "with_puzzle_suffix",
]
