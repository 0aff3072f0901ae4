"""Loader error carrying the file path and a readable summary of its cause."""

from __future__ import annotations

import os
from typing import Iterable

import yaml
from pydantic import ValidationError

MAX_REPORTED_ERRORS = 3


class LoaderError(RuntimeError):
    """A puzzle or settings file could not be read, parsed or validated.

    ``cause`` is folded into the message: pydantic errors become a short
    ``field: problem`` list, YAML syntax errors get their line and column,
    OS errors their strerror.
    """

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        try:
            shown = os.path.relpath(self.file_path)
        except ValueError:  # pragma: no cover - different drive on Windows
            shown = self.file_path
        headline = f"{self.message} ({shown})"

        if isinstance(self.cause, ValidationError):
            return f"{headline}: {_summarize_validation(self.cause.errors())}"
        if isinstance(self.cause, yaml.YAMLError):
            return f"{headline} {_describe_yaml_problem(self.cause)}"
        if isinstance(self.cause, OSError):
            return f"{headline}: {self.cause.strerror or self.cause}"
        return headline

    def __str__(self) -> str:
        return self._build_message()


def _describe_yaml_problem(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None)
    problem = getattr(exc, "problem", None) or "invalid syntax"
    if mark is None:
        return f": {problem}"
    return f"at line {mark.line + 1}, column {mark.column + 1}: {problem}"


def _summarize_validation(errors: Iterable[dict]) -> str:
    items = list(errors)
    parts = [
        f"{'.'.join(str(loc) for loc in err.get('loc', ())) or '<root>'}: {err.get('msg', 'invalid value')}"
        for err in items[:MAX_REPORTED_ERRORS]
    ]
    if len(items) > MAX_REPORTED_ERRORS:
        parts.append(f"... ({len(items) - MAX_REPORTED_ERRORS} more)")
    return "; ".join(parts)
