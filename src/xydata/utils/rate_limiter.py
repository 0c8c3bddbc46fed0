from __future__ import annotations

import asyncio
import threading
import time


class RateLimiter:
    """
    Smooth rate limiter used to space stream windows.

    - Default: unlimited (no-op)
    - qps or interval_seconds enables limiting
    - `acquire()` blocks the thread, `acquire_async()` awaits
    """

    def __init__(
        self,
        *,
        qps: float | None = None,
        interval_seconds: float | None = None,
    ):
        self._enabled = False
        self._interval: float | None = None
        self._next_ts: float = 0.0
        self._lock = threading.Lock()

        if qps is not None or interval_seconds is not None:
            if qps is not None and interval_seconds is not None:
                raise ValueError("Specify only one of qps or interval_seconds")

            if interval_seconds is not None:
                if interval_seconds <= 0:
                    raise ValueError("interval_seconds must be > 0")
                self._interval = float(interval_seconds)
            else:
                if qps is None or qps <= 0:
                    raise ValueError("qps must be > 0")
                self._interval = 1.0 / float(qps)

            self._enabled = True
            self._next_ts = time.monotonic()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def reset(self) -> None:
        with self._lock:
            self._next_ts = time.monotonic()

    def _reserve(self) -> float:
        """Book the next slot and return how long the caller has to wait for it."""
        with self._lock:
            now = time.monotonic()
            wait = max(self._next_ts - now, 0.0)
            self._next_ts = max(self._next_ts, now) + self._interval
            return wait

    def acquire(self) -> None:
        if not self._enabled or self._interval is None:
            return
        wait = self._reserve()
        if wait > 0:
            time.sleep(wait)

    async def acquire_async(self) -> None:
        if not self._enabled or self._interval is None:
            return
        wait = self._reserve()
        if wait > 0:
            await asyncio.sleep(wait)
