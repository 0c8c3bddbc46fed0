from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from .runtime import SchedulerSettings


class StreamOptions(BaseModel):
    # Continuous mode: keep producing windows joined by the continuation rule.
    infinite: bool = False
    max_windows: Optional[int] = Field(None, ge=1)
    max_total_seconds: Optional[float] = Field(None, ge=0)
    # Minimum spacing between windows; specify at most one of the two.
    interval_seconds: float | None = Field(None, gt=0)
    windows_per_second: float | None = Field(None, gt=0)
    # Points per chunk for Stream.batches(); None emits whole windows.
    batch_size: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def _validate_oneof(self) -> "StreamOptions":
        if self.interval_seconds is not None and self.windows_per_second is not None:
            raise ValueError("Specify only one of interval_seconds or windows_per_second")
        return self


class GeneratorConfig(BaseModel):
    type: str = Field(min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)


class OutputConfig(BaseModel):
    # None writes to stdout.
    path: Optional[str] = None
    # Emit Stream.batches() chunks instead of whole windows.
    batches: bool = False


class RunConfig(BaseModel):
    # Free-text description, logged when the run starts.
    info: str = ""
    generator: GeneratorConfig
    # Seed for the random source; None leaves random-based generators non-deterministic.
    seed: Optional[int] = None
    stream: StreamOptions = Field(default_factory=StreamOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    scheduler: Optional[SchedulerSettings] = None
