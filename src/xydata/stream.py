"""
Pull-based streaming of generator windows.

A `Stream` drives a `DataGenerator` one window at a time. In continuous mode
every completed window is turned into a continuation seed and the next window
is produced by a fresh generator instance starting right after that seed, so
the concatenated windows keep the generator's ordering dimension.

    Idle -> Producing(window) -> Seeding(next start) -> Idle

Nothing is produced unless the consumer asks for the next window.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, AsyncIterator, Generic, Iterator, List, Mapping, Optional, TypeVar

from .config.models import StreamOptions
from .errors import StreamBusyError, StreamExhausted
from .generator import DataGenerator
from .scheduling import GenerationToken
from .utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

P = TypeVar("P")


class StreamState(str, Enum):
    IDLE = "idle"
    PRODUCING = "producing"
    SEEDING = "seeding"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class Stream(Generic[P]):
    """Sequences windows of a generator for a single consumer."""

    def __init__(
        self,
        generator: DataGenerator[P, Any],
        options: StreamOptions | Mapping[str, Any] | None = None,
        **option_overrides: Any,
    ):
        options = StreamOptions.model_validate({**dict(options or {}), **option_overrides})
        self.options = options
        self._origin = generator
        self._limiter = RateLimiter(
            qps=options.windows_per_second,
            interval_seconds=options.interval_seconds,
        )
        self._token = GenerationToken()
        self._current: DataGenerator[P, Any] = generator.continued_from(generator.seed)
        self._state = StreamState.IDLE
        self._windows = 0
        self._start_ts: Optional[float] = None

    @property
    def generator(self) -> DataGenerator[P, Any]:
        """Generator that will produce the next window."""
        return self._current

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def windows_produced(self) -> int:
        return self._windows

    @property
    def closed(self) -> bool:
        return self._state is StreamState.CLOSED

    # one-shot -----------------------------------------------------------------

    async def generate(self) -> List[P]:
        """One finite window straight from the wrapped generator."""
        return await self._origin.generate(self._token)

    # continuous ---------------------------------------------------------------

    async def next_window(self) -> List[P]:
        self._begin()
        try:
            await self._limiter.acquire_async()
            window = await self._current.generate(self._token)
        except BaseException:
            self._abort()
            raise
        self._finish(window)
        return window

    def next_window_sync(self) -> List[P]:
        """Synchronous variant of `next_window`; the pass runs without yielding."""
        self._begin()
        try:
            self._limiter.acquire()
            window = self._current.generate_finite()
        except BaseException:
            self._abort()
            raise
        self._finish(window)
        return window

    async def windows(self) -> AsyncIterator[List[P]]:
        """Fresh subscription: restart from the wrapped generator and pull windows until exhausted."""
        self.restart()
        while True:
            try:
                window = await self.next_window()
            except StreamExhausted:
                return
            yield window

    def __aiter__(self) -> AsyncIterator[List[P]]:
        return self.windows()

    def iter_windows(self) -> Iterator[List[P]]:
        self.restart()
        while True:
            try:
                window = self.next_window_sync()
            except StreamExhausted:
                return
            yield window

    def __iter__(self) -> Iterator[List[P]]:
        return self.iter_windows()

    async def batches(self, batch_size: int | None = None) -> AsyncIterator[List[P]]:
        """Windows re-chunked into lists of at most `batch_size` points, in order."""
        size = self.options.batch_size if batch_size is None else batch_size
        if size is not None and size <= 0:
            raise ValueError("batch_size must be > 0")
        pending: List[P] = []
        async for window in self.windows():
            if size is None:
                yield window
                continue
            pending.extend(window)
            while len(pending) >= size:
                yield pending[:size]
                pending = pending[size:]
        if pending:
            yield pending

    # lifecycle ----------------------------------------------------------------

    def restart(self) -> None:
        """Forget produced windows and start again from the wrapped generator."""
        if self._state in (StreamState.PRODUCING, StreamState.SEEDING):
            raise StreamBusyError("cannot restart a stream while a window is being produced")
        self._token.invalidate()
        self._token = GenerationToken()
        self._current = self._origin.continued_from(self._origin.seed)
        self._windows = 0
        self._start_ts = None
        self._limiter.reset()
        self._state = StreamState.IDLE

    def close(self) -> None:
        """Stop the stream; a pass suspended at a yield will not emit anything."""
        self._token.invalidate()
        self._state = StreamState.CLOSED

    # internals ----------------------------------------------------------------

    def _time_exceeded(self) -> bool:
        if self.options.max_total_seconds is None or self._start_ts is None:
            return False
        return (time.monotonic() - self._start_ts) >= self.options.max_total_seconds

    def _windows_exceeded(self) -> bool:
        # A finite stream is exactly one window.
        limit = self.options.max_windows if self.options.infinite else 1
        return limit is not None and self._windows >= limit

    def _begin(self) -> None:
        if self._state in (StreamState.PRODUCING, StreamState.SEEDING):
            raise StreamBusyError("a window is already being produced for this stream")
        if self._state is StreamState.CLOSED:
            raise StreamExhausted("stream is closed")
        if self._start_ts is None:
            self._start_ts = time.monotonic()
        if self._state is StreamState.EXHAUSTED or self._windows_exceeded() or self._time_exceeded():
            self._state = StreamState.EXHAUSTED
            raise StreamExhausted(f"stream finished after {self._windows} window(s)")
        self._state = StreamState.PRODUCING

    def _abort(self) -> None:
        if self._state is not StreamState.CLOSED:
            self._state = StreamState.IDLE

    def _finish(self, window: List[P]) -> None:
        self._windows += 1
        if self.options.infinite and window:
            self._state = StreamState.SEEDING
            seed = self._current.continuation_seed(window[-1], window)
            self._current = self._current.continued_from(seed)
            logger.debug(
                "Window %d of %s done (%d points), next window starts after %r",
                self._windows,
                self._origin.strategy.name,
                len(window),
                seed,
            )
        if self._state is not StreamState.CLOSED:
            self._state = StreamState.IDLE
