from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable, Iterable, Optional

from .dispatcher import CLOSED, Dispatcher, Ticker

logger = logging.getLogger("pathfinder.pool")

Probe = Callable[[str], Optional[Any]]


class ScanStats:
    """Compteurs partagés entre les workers."""

    def __init__(self):
        self._lock = threading.Lock()
        self.dispatched = 0
        self.probed = 0
        self.found = 0
        self.errors = 0
        self.started = 0.0
        self.finished = 0.0

    def incr(self, name: str, n: int = 1) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + n)

    @property
    def elapsed(self) -> float:
        end = self.finished or time.monotonic()
        return end - self.started if self.started else 0.0

    def summary(self) -> str:
        return (
            f"probed={self.probed} found={self.found} "
            f"errors={self.errors} elapsed={self.elapsed:.1f}s"
        )


class WorkerPool:
    """
    `threads` workers fed by one rate-limited Dispatcher through a bounded
    queue (capacity = threads). `run()` returns once every worker has seen
    the close sentinel.
    """

    def __init__(self, probe: Probe, threads: int, rate_limit: int,
                 on_found: Callable[[Any], None], stats: Optional[ScanStats] = None,
                 ticker: Optional[Ticker] = None):
        self.probe = probe
        self.threads = threads
        self.rate_limit = rate_limit
        self.on_found = on_found
        self.stats = stats or ScanStats()
        self.ticker = ticker

    def _worker(self, jobs: "queue.Queue") -> None:
        while True:
            target = jobs.get()
            if target is CLOSED:
                return
            logger.debug("Now scanning: %s", target)
            try:
                hit = self.probe(target)
                self.stats.incr("probed")
                if hit is not None:
                    self.stats.incr("found")
                    self.on_found(hit)
            except Exception:
                self.stats.incr("errors")
                logger.debug("Worker error on %s", target, exc_info=True)

    def run(self, targets: Iterable[str]) -> ScanStats:
        jobs: queue.Queue = queue.Queue(maxsize=self.threads)
        workers = [
            threading.Thread(target=self._worker, args=(jobs,), name=f"pathfinder-worker-{i}")
            for i in range(self.threads)
        ]
        self.stats.started = time.monotonic()
        for t in workers:
            t.start()

        dispatcher = Dispatcher(jobs, self.rate_limit, self.threads, ticker=self.ticker)
        try:
            dispatcher.feed(targets)
        finally:
            for t in workers:
                t.join()
            self.stats.dispatched = dispatcher.dispatched
            self.stats.finished = time.monotonic()
        return self.stats
