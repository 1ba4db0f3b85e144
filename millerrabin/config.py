"""Strategy configuration with environment overrides."""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field


ENV_PREFIX = "MILLERRABIN_"

DEFAULT_ITERATIONS = 50
DEFAULT_BATCH_SIZE = 8


def _default_workers() -> int:
    return os.cpu_count() or 1


class StrategySettings(BaseModel):
    """Tuning knobs shared by all witness test strategies."""

    iterations: int = Field(default=DEFAULT_ITERATIONS, gt=0)
    workers: int = Field(default_factory=_default_workers, gt=0)
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, gt=0)
    seed: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "StrategySettings":
        """Build settings from MILLERRABIN_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name in ("iterations", "workers", "batch_size", "seed"):
            raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        return cls.model_validate(values)
