"""YAML persistence for puzzle documents and engine settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from treepuzzle.config import EngineSettings
from treepuzzle.io.documents import PuzzleDocument
from treepuzzle.io.errors import LoaderError


def _read_yaml_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise LoaderError(path, "Cannot read file", cause=exc) from exc
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Malformed YAML", cause=exc) from exc
    if not isinstance(data, dict):
        raise LoaderError(path, f"Expected a mapping at the top level, found {type(data).__name__}")
    return data


def save_puzzle(document: PuzzleDocument, file_path: str) -> None:
    """
    Save a puzzle document to a YAML file.

    Args:
        document: Puzzle to save
        file_path: Output file path (parent folders are created)
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    data = document.model_dump(mode="json")

    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, indent=2, sort_keys=False)


def load_puzzle(file_path: str) -> PuzzleDocument:
    """Load and validate a puzzle document.

    Raises:
        LoaderError: If the file is unreadable or does not match the schema
    """
    data = _read_yaml_file(file_path)
    try:
        return PuzzleDocument.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(file_path, "Invalid puzzle document", cause=exc) from exc


def load_settings(file_path: str) -> EngineSettings:
    """Load engine settings.

    Expected format (the ``engine`` wrapper is optional):
    engine:
      grow_probability: 0.6
      max_expansions_per_topology: 100000
      time_limit: 30
    """
    data = _read_yaml_file(file_path)
    section = data.get("engine", data)
    if not isinstance(section, dict):
        raise LoaderError(file_path, "The 'engine' section must be a mapping")
    try:
        return EngineSettings.model_validate(section)
    except ValidationError as exc:
        raise LoaderError(file_path, "Invalid engine settings", cause=exc) from exc
