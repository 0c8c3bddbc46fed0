"""
Cooperative pacing for long production passes.

A pass is modelled as a resumable `ProductionTask` (position + total). The
scheduler advances it in slices; between slices the async driver hands control
back to the event loop with `await asyncio.sleep(0)`. Pacing never changes the
produced values, their order or their count.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, NamedTuple, Optional

from .config.runtime import SchedulerSettings, load_runtime_config
from .errors import GenerationCancelled

logger = logging.getLogger(__name__)


class GenerationToken:
    """Liveness flag checked every time a suspended pass resumes."""

    def __init__(self) -> None:
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def invalidate(self) -> None:
        self._alive = False


@dataclass
class ProductionTask:
    produce: Callable[[int], Any]
    total: int
    # Elements contained in one point, e.g. the columns of a grid row.
    weight: int = 1
    position: int = 0
    processed: int = 0

    @property
    def done(self) -> bool:
        return self.position >= self.total


class Slice(NamedTuple):
    points: List[Any]
    done: bool


class CooperativeScheduler:
    """
    Time-boxed slicing of a production pass.

    - every `batch_size` processed elements the time since the last yield is checked
    - once it reaches `budget_seconds` the slice ends and the driver yields
    - `enabled=False` turns every pass into a single slice
    """

    def __init__(
        self,
        *,
        batch_size: int | None = None,
        budget_seconds: float | None = None,
        enabled: bool | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        defaults = load_runtime_config().scheduler
        self.batch_size = int(batch_size if batch_size is not None else defaults.batch_size)
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        self.budget_seconds = float(
            budget_seconds if budget_seconds is not None else defaults.budget_seconds
        )
        self.enabled = defaults.enabled if enabled is None else bool(enabled)
        self._clock = clock
        self.yields = 0

    @classmethod
    def from_settings(cls, settings: SchedulerSettings, **kwargs: Any) -> "CooperativeScheduler":
        return cls(
            batch_size=settings.batch_size,
            budget_seconds=settings.budget_seconds,
            enabled=settings.enabled,
            **kwargs,
        )

    def advance(self, task: ProductionTask, since: float) -> Slice:
        """Produce points until the task is done or the budget since `since` is spent."""
        points: List[Any] = []
        next_check = (task.processed // self.batch_size + 1) * self.batch_size
        while not task.done:
            points.append(task.produce(task.position))
            task.position += 1
            task.processed += task.weight
            if self.enabled and not task.done and task.processed >= next_check:
                next_check = (task.processed // self.batch_size + 1) * self.batch_size
                if self._clock() - since >= self.budget_seconds:
                    return Slice(points, False)
        return Slice(points, True)

    def run_to_completion(self, task: ProductionTask) -> List[Any]:
        points: List[Any] = []
        while not task.done:
            points.append(task.produce(task.position))
            task.position += 1
            task.processed += task.weight
        return points

    async def run(self, task: ProductionTask, token: Optional[GenerationToken] = None) -> List[Any]:
        if token is not None and not token.alive:
            raise GenerationCancelled("generation token was invalidated before the pass started")

        points: List[Any] = []
        last_yield = self._clock()
        while True:
            chunk = self.advance(task, last_yield)
            points.extend(chunk.points)
            if chunk.done:
                return points
            self.yields += 1
            logger.debug(
                "Yielding after %d/%d points (%.1f ms)",
                task.position,
                task.total,
                (self._clock() - last_yield) * 1000.0,
            )
            await asyncio.sleep(0)
            if token is not None and not token.alive:
                raise GenerationCancelled(
                    f"pass abandoned at {task.position}/{task.total} points"
                )
            last_yield = self._clock()
