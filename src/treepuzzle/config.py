"""Engine settings shared by the generator and solver."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    """
    Tunable limits and probabilities.

    Defaults reproduce the classic puzzle behaviour: 60% grow / 40% split,
    2000 consecutive failed attempts before generation gives up, and
    100,000 BFS expansions per candidate topology.
    """

    grow_probability: float = Field(0.6, ge=0.0, le=1.0)
    max_consecutive_failures: int = Field(2000, ge=1)

    # Solver budgets; the optional ones apply across all topologies of one run
    max_expansions_per_topology: int = Field(100_000, ge=1)
    max_total_expansions: Optional[int] = Field(None, ge=1)
    time_limit: Optional[float] = Field(None, gt=0)
    progress_interval: int = Field(10_000, ge=1)

    model_config = {"extra": "forbid", "frozen": True}


DEFAULT_SETTINGS = EngineSettings()


__all__ = ["EngineSettings", "DEFAULT_SETTINGS"]
