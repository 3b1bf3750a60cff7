"""Named timers for profiling the listing steps.

Usage:
    timers = Timers()
    with timers.measure("get_metas"):
        ...
    timers.log_summary()
"""

import itertools
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

from loguru import logger


@dataclass
class TimerTotal:
    """Accumulated time for one timer name."""
    calls: int = 0
    seconds: float = 0.0

    @property
    def average(self) -> float:
        return self.seconds / self.calls if self.calls else 0.0


class Timers:
    """Records how long named steps take. Has no effect on results."""

    def __init__(self):
        self._ids = itertools.count(1)
        self._running: Dict[int, Tuple[str, float]] = {}
        self._totals: Dict[str, TimerTotal] = {}

    def start_timer(self, name: str) -> int:
        """Start a timer and return its id, needed to end it."""
        timer_id = next(self._ids)
        self._running[timer_id] = (name, time.monotonic())
        return timer_id

    def end_timer(self, name: str, timer_id: int) -> float:
        """Stop a running timer and return the elapsed seconds."""
        running = self._running.get(timer_id)
        if running is None or running[0] != name:
            raise KeyError(f"No running timer '{name}' with id {timer_id}")
        del self._running[timer_id]

        elapsed = time.monotonic() - running[1]
        total = self._totals.setdefault(name, TimerTotal())
        total.calls += 1
        total.seconds += elapsed
        return elapsed

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        timer_id = self.start_timer(name)
        try:
            yield
        finally:
            self.end_timer(name, timer_id)

    def totals(self) -> Dict[str, TimerTotal]:
        return dict(self._totals)

    def reset(self) -> None:
        self._running.clear()
        self._totals.clear()

    def log_summary(self) -> None:
        """Log calls, total and average time per timer."""
        for name, total in sorted(self._totals.items(), key=lambda kv: -kv[1].seconds):
            logger.info(
                f"  {name}: {total.calls} calls, {total.seconds * 1000:.1f}ms total, "
                f"{total.average * 1000:.2f}ms avg"
            )
