"""
Paced producer: one target per clock tick onto a bounded queue, then close.
"""
from __future__ import annotations

import logging
import queue
import time
from typing import Callable, Iterable

logger = logging.getLogger("pathfinder.pool")

# put once per worker after the last target; a worker exits when it reads it
CLOSED = object()


class Ticker:
    """
    Fixed-interval clock (period = 1/rate).

    The first tick fires one period after creation. If the caller falls
    behind, missed ticks are dropped: one late tick is delivered right away
    and the original grid resumes.
    """

    def __init__(self, rate: float, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if rate <= 0:
            raise ValueError(f"rate must be > 0 (got {rate})")
        self.period = 1.0 / rate
        self._clock = clock
        self._sleep = sleep
        self._next = clock() + self.period

    def wait(self) -> None:
        now = self._clock()
        if now < self._next:
            self._sleep(self._next - now)
        else:
            behind = int((now - self._next) // self.period)
            self._next += behind * self.period
        self._next += self.period


class Dispatcher:
    def __init__(self, jobs: "queue.Queue", rate_limit: int, workers: int,
                 ticker: Ticker | None = None):
        self.jobs = jobs
        self.workers = workers
        self.ticker = ticker or Ticker(rate_limit)
        self.dispatched = 0

    def feed(self, targets: Iterable[str]) -> int:
        """Blocks on the tick, then on the queue when it is full. Always closes."""
        try:
            for target in targets:
                self.ticker.wait()
                self.jobs.put(target)
                self.dispatched += 1
        finally:
            self.close()
        logger.debug("Dispatcher done: %s jobs", self.dispatched)
        return self.dispatched

    def close(self) -> None:
        for _ in range(self.workers):
            self.jobs.put(CLOSED)
