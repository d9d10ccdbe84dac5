"""Single-threaded timer queue pumped by the game loop clock."""

from __future__ import annotations

from typing import Callable
import heapq
import itertools


class Timer:
    """One-shot callback due at a fixed time; cancel before it fires to drop it."""

    __slots__ = ("due_ms", "callback", "cancelled")

    def __init__(self, due_ms: float, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class RepeatingTask:
    """Callback re-armed after each run with a freshly computed interval."""

    def __init__(
        self,
        scheduler: Scheduler,
        interval: Callable[[], float],
        callback: Callable[[], None],
    ) -> None:
        self._scheduler = scheduler
        self._interval = interval
        self._callback = callback
        self._timer: Timer | None = None
        self.cancelled = False
        self.runs = 0

    def arm(self) -> None:
        """Schedule the next run using the interval as it is right now."""
        if self.cancelled:
            return
        self._timer = self._scheduler.call_later(self._next_interval(), self._run)

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def next_due_ms(self) -> float | None:
        if self._timer is None or self.cancelled:
            return None
        return self._timer.due_ms

    def _next_interval(self) -> float:
        interval = float(self._interval())
        if interval <= 0:
            raise ValueError(f"repeat interval must be positive, got {interval}")
        return interval

    def _run(self) -> None:
        self._timer = None
        self.runs += 1
        self._callback()
        self.arm()


class Scheduler:
    """Ordered queue of timers fired serially by :meth:`advance`.

    Nothing runs on its own: the owner moves the clock forward and every timer
    that has come due fires in due order. While a timer fires, :attr:`now_ms`
    equals its due time, so anything it schedules is anchored to that moment
    rather than to the wall clock of the frame that happened to pump the queue.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = float(start_ms)
        self._queue: list[tuple[float, int, Timer]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Timer:
        """Run callback once, delay_ms after the current time."""
        timer = Timer(self.now_ms + max(0.0, float(delay_ms)), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._counter), timer))
        return timer

    def call_every(self, interval: Callable[[], float], callback: Callable[[], None]) -> RepeatingTask:
        """Run callback repeatedly; interval() is re-read before every re-arm."""
        task = RepeatingTask(self, interval, callback)
        task.arm()
        return task

    def advance(self, now_ms: float) -> int:
        """Fire every timer due at or before now_ms and return how many ran."""
        fired = 0
        while self._queue and self._queue[0][0] <= now_ms:
            due_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = max(self.now_ms, due_ms)
            timer.callback()
            fired += 1
        self.now_ms = max(self.now_ms, float(now_ms))
        return fired

    @property
    def pending(self) -> int:
        """Number of live timers still waiting to fire."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)
