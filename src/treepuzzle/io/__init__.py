from .documents import (
    PuzzleDocument,
    StepRecord,
    construction_from_document,
    document_from_construction,
)
from .errors import LoaderError
from .yaml_io import load_puzzle, load_settings, save_puzzle

__all__ = [
    "LoaderError",
    "PuzzleDocument",
    "StepRecord",
    "construction_from_document",
    "document_from_construction",
    "load_puzzle",
    "load_settings",
    "save_puzzle",
]
