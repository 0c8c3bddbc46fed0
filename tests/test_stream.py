from __future__ import annotations

import asyncio
import random
import time

import pytest

from xydata import (
    CooperativeScheduler,
    Point,
    Stream,
    StreamBusyError,
    StreamExhausted,
    StreamState,
    create_ohlc_generator,
    create_parametric_function_generator,
    create_progressive_function_generator,
    create_progressive_trace_generator,
    create_sampled_data_generator,
    create_water_drop_data_generator,
)


def _counting(end: int = 3):
    return create_progressive_function_generator().with_options(start=0, end=end, step=1)


async def _collect(stream: Stream) -> list:
    return [window async for window in stream.windows()]


def test_continuous_windows_follow_each_other() -> None:
    stream = Stream(_counting(), infinite=True)
    first = stream.next_window_sync()
    second = stream.next_window_sync()
    assert [p.x for p in first] == [0, 1, 2]
    assert [p.x for p in second] == [3, 4, 5]
    assert stream.windows_produced == 2
    assert stream.state is StreamState.IDLE


def test_windows_concatenate_into_a_longer_pass() -> None:
    gen = create_progressive_trace_generator().set_number_of_points(40)
    stream = gen.with_random_source(random.Random(8)).to_stream(infinite=True, max_windows=3)
    joined = [point for window in stream for point in window]

    longer = gen.with_random_source(random.Random(8)).set_number_of_points(120).generate_finite()
    assert joined == longer


def test_ohlc_windows_chain_candles() -> None:
    gen = create_ohlc_generator(rng=random.Random(6)).set_number_of_points(5)
    windows = list(gen.to_stream(infinite=True, max_windows=2))
    assert windows[1][0].open == windows[0][-1].close
    assert windows[1][0].timestamp == windows[0][-1].timestamp + 1


def test_sampled_windows_do_not_repeat_the_seam_timestamp() -> None:
    gen = create_sampled_data_generator().with_options(input_data=[1, 2, 3], sampling_frequency=10)
    first, second = list(gen.to_stream(infinite=True, max_windows=2))
    assert second[0].timestamp == pytest.approx(first[-1].timestamp + 0.1)


def test_finite_stream_is_one_window() -> None:
    stream = Stream(_counting())
    assert len(list(stream)) == 1
    assert stream.state is StreamState.EXHAUSTED
    with pytest.raises(StreamExhausted):
        stream.next_window_sync()


def test_async_iteration_restarts_from_origin() -> None:
    stream = Stream(_counting(), {"infinite": True, "max_windows": 2})
    first_run = asyncio.run(_collect(stream))
    second_run = asyncio.run(_collect(stream))
    assert [[p.x for p in w] for w in first_run] == [[0, 1, 2], [3, 4, 5]]
    assert second_run == first_run


def test_seeded_origin_is_honoured() -> None:
    gen = _counting().continued_from(Point(100.0, 0.0))
    windows = list(Stream(gen, infinite=True, max_windows=2))
    assert [p.x for p in windows[1]] == [104, 105, 106]


def test_one_shot_generate_uses_origin() -> None:
    stream = Stream(_counting(), infinite=True)
    points = asyncio.run(stream.generate())
    assert [p.x for p in points] == [0, 1, 2]
    assert stream.windows_produced == 0


def test_empty_window_keeps_the_seed() -> None:
    gen = create_water_drop_data_generator().set_columns(0)
    stream = Stream(gen, infinite=True, max_windows=3)
    assert list(stream) == [[], [], []]


def test_batches_rechunk_windows_in_order() -> None:
    stream = Stream(_counting(5), infinite=True, max_windows=2, batch_size=3)

    async def _run() -> list:
        return [batch async for batch in stream.batches()]

    batches = asyncio.run(_run())
    assert [len(b) for b in batches] == [3, 3, 3, 1]
    assert [p.x for b in batches for p in b] == list(range(10))


@pytest.mark.parametrize("size", [0, -1])
def test_invalid_batch_size(size: int) -> None:
    stream = Stream(_counting())

    async def _run() -> None:
        async for _ in stream.batches(size):
            pass

    with pytest.raises(ValueError, match="batch_size must be > 0"):
        asyncio.run(_run())


def test_concurrent_window_request_is_rejected() -> None:
    gen = _counting(50).with_scheduler(CooperativeScheduler(batch_size=1, budget_seconds=0.0))
    stream = Stream(gen, infinite=True)

    async def _scenario() -> None:
        task = asyncio.ensure_future(stream.next_window())
        await asyncio.sleep(0)
        assert stream.state is StreamState.PRODUCING
        with pytest.raises(StreamBusyError):
            await stream.next_window()
        with pytest.raises(StreamBusyError):
            stream.restart()
        assert len(await task) == 50

    asyncio.run(_scenario())
    assert stream.state is StreamState.IDLE


def test_close_stops_the_stream() -> None:
    stream = Stream(_counting(), infinite=True)
    stream.next_window_sync()
    stream.close()
    assert stream.closed
    with pytest.raises(StreamExhausted):
        stream.next_window_sync()


def test_time_limit_ends_continuous_stream() -> None:
    stream = Stream(_counting(), infinite=True, max_total_seconds=0)
    assert list(stream) == []


def test_interval_spaces_windows() -> None:
    stream = Stream(_counting(), infinite=True, max_windows=3, interval_seconds=0.05)
    stamps = []
    for _ in stream:
        stamps.append(time.monotonic())
    assert len(stamps) == 3
    assert stamps[1] - stamps[0] >= 0.03
    assert stamps[2] - stamps[1] >= 0.03


def test_conflicting_pacing_options() -> None:
    with pytest.raises(ValueError):
        Stream(_counting(), interval_seconds=1.0, windows_per_second=2.0)


def test_single_point_windows_continue() -> None:
    gen = create_parametric_function_generator().with_options(
        start=0, end=1, step=1, x_function=lambda t: t, y_function=lambda t: t
    )
    windows = list(Stream(gen, infinite=True, max_windows=3))
    assert [[p.x for p in w] for w in windows] == [[0], [1], [2]]


def test_interval_holds_after_idle_consumer() -> None:
    stream = Stream(_counting(), infinite=True, interval_seconds=0.1)
    stream.next_window_sync()
    time.sleep(0.15)
    first = time.monotonic()
    stream.next_window_sync()
    stream.next_window_sync()
    assert time.monotonic() - first >= 0.08
