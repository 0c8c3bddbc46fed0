from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SchedulerSettings(BaseModel):
    # Points produced between two clock checks.
    batch_size: int = Field(1000, ge=1)
    # Time a pass may run before handing control back to the event loop.
    budget_seconds: float = Field(0.015, ge=0)
    enabled: bool = True


class RuntimeConfig(BaseModel):
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)


def load_runtime_config(overrides: Optional[dict] = None) -> RuntimeConfig:
    """
    Load runtime configuration.

    This project does not use environment-variable overrides; callers should
    pass explicit overrides when needed.
    """
    return RuntimeConfig.model_validate(overrides or {})
