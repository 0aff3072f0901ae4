"""Shared helpers for loading puzzle and settings files with CLI-friendly errors."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from treepuzzle.cli.paths import find_puzzle_file
from treepuzzle.config import DEFAULT_SETTINGS, EngineSettings
from treepuzzle.io import LoaderError, PuzzleDocument, load_puzzle, load_settings

T = TypeVar("T")


def load_or_exit(
    loader_fn: Callable[[str], T],
    path: str,
    *,
    console: Console,
    verbose_errors: bool = False,
) -> T:
    """Run ``loader_fn``; on LoaderError print it and exit 1.

    With ``verbose_errors`` the underlying cause is printed in full instead
    of the one-line summary.
    """
    try:
        return loader_fn(path)
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load data:[/red] {escape(err.message)} ({escape(path)})")
            console.print(escape(str(err.cause)), highlight=False)
        else:
            console.print(f"[red]Failed to load data:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)


def load_puzzle_or_exit(name_or_path: str, *, console: Console, verbose_errors: bool = False) -> PuzzleDocument:
    try:
        resolved = find_puzzle_file(name_or_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)
    return load_or_exit(load_puzzle, resolved, console=console, verbose_errors=verbose_errors)


def settings_or_exit(path: Optional[str], *, console: Console, verbose_errors: bool = False) -> EngineSettings:
    if path is None:
        return DEFAULT_SETTINGS
    return load_or_exit(load_settings, path, console=console, verbose_errors=verbose_errors)


__all__ = ["load_or_exit", "load_puzzle_or_exit", "settings_or_exit"]
