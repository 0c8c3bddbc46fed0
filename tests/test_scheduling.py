from __future__ import annotations

import asyncio
import random

import pytest

from xydata import (
    CooperativeScheduler,
    GenerationCancelled,
    GenerationToken,
    GeneratorBusyError,
    create_progressive_trace_generator,
    create_water_drop_data_generator,
)
from xydata.config.runtime import SchedulerSettings, load_runtime_config
from xydata.scheduling import ProductionTask


class _TickingClock:
    """Advances one second every time it is read."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


def _eager() -> CooperativeScheduler:
    # Yields at every point.
    return CooperativeScheduler(batch_size=1, budget_seconds=0.0)


def test_runtime_defaults() -> None:
    settings = load_runtime_config().scheduler
    assert settings.batch_size == 1000
    assert settings.budget_seconds == pytest.approx(0.015)

    scheduler = CooperativeScheduler()
    assert scheduler.batch_size == 1000
    assert scheduler.enabled is True

    overridden = load_runtime_config({"scheduler": {"batch_size": 5}})
    assert overridden.scheduler.batch_size == 5


def test_invalid_batch_size_is_rejected() -> None:
    with pytest.raises(ValueError, match="batch_size must be > 0"):
        CooperativeScheduler(batch_size=0)


def test_advance_stops_when_budget_is_spent() -> None:
    scheduler = CooperativeScheduler(batch_size=3, budget_seconds=1.0, clock=lambda: 100.0)
    task = ProductionTask(produce=lambda i: i, total=10)

    first = scheduler.advance(task, since=0.0)
    assert first.points == [0, 1, 2]
    assert not first.done

    second = scheduler.advance(task, since=100.0)
    assert second.points == list(range(3, 10))
    assert second.done


def test_weight_counts_elements_not_points() -> None:
    scheduler = CooperativeScheduler(batch_size=10, budget_seconds=0.0, clock=lambda: 1.0)
    task = ProductionTask(produce=lambda i: i, total=6, weight=5)
    assert scheduler.advance(task, since=0.0).points == [0, 1]


def test_pacing_does_not_change_output() -> None:
    clock = _TickingClock()
    paced = CooperativeScheduler(batch_size=2, budget_seconds=0.5, clock=clock)
    unpaced = CooperativeScheduler(enabled=False)

    gen = create_progressive_trace_generator().set_number_of_points(25)
    a = asyncio.run(gen.with_random_source(random.Random(1)).with_scheduler(paced).generate())
    b = asyncio.run(gen.with_random_source(random.Random(1)).with_scheduler(unpaced).generate())

    assert a == b
    assert paced.yields > 0
    assert unpaced.yields == 0


def test_grid_pass_yields_by_columns() -> None:
    scheduler = CooperativeScheduler(batch_size=8, budget_seconds=0.0)
    gen = create_water_drop_data_generator().with_options(rows=4, columns=8).with_scheduler(scheduler)
    grid = asyncio.run(gen.generate())
    assert len(grid) == 4
    assert scheduler.yields == 3


def test_from_settings() -> None:
    scheduler = CooperativeScheduler.from_settings(
        SchedulerSettings(batch_size=7, budget_seconds=0.5, enabled=False)
    )
    assert (scheduler.batch_size, scheduler.budget_seconds, scheduler.enabled) == (7, 0.5, False)


def test_invalidated_token_abandons_pass() -> None:
    gen = (
        create_progressive_trace_generator(rng=random.Random(3))
        .set_number_of_points(10)
        .with_scheduler(_eager())
    )

    async def _scenario() -> None:
        token = GenerationToken()
        task = asyncio.ensure_future(gen.generate(token))
        await asyncio.sleep(0)
        token.invalidate()
        with pytest.raises(GenerationCancelled):
            await task

    asyncio.run(_scenario())

    # The abandoned pass left no trace: the next pass starts at x = 0 again.
    assert gen.generate_finite()[0].x == 0


def test_dead_token_refuses_to_start() -> None:
    token = GenerationToken()
    token.invalidate()
    gen = create_progressive_trace_generator().set_number_of_points(3)
    with pytest.raises(GenerationCancelled):
        asyncio.run(gen.generate(token))


def test_second_pass_on_busy_generator_is_rejected() -> None:
    gen = create_progressive_trace_generator().set_number_of_points(10).with_scheduler(_eager())

    async def _scenario() -> None:
        task = asyncio.ensure_future(gen.generate())
        await asyncio.sleep(0)
        with pytest.raises(GeneratorBusyError):
            gen.generate_finite()
        assert len(await task) == 10

    asyncio.run(_scenario())
