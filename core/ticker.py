"""Liveness ticker.

Counts ticks at a fixed cadence, sleeping between them, and writes a status
line to its sink every ``report_interval`` ticks. Production runs never return;
the optional stop event and ``max_iterations`` cap exist for bounded runs.
"""

import sys
import threading
import time
from typing import Callable, TextIO

from pydantic import BaseModel, ConfigDict, Field

from core.logging import debug, info

TICK_INTERVAL_MS = 100
REPORT_INTERVAL = 10

STARTUP_LINE = "Starting loop..."
REPORT_PREFIX = "Loop count: "


def format_report(count: int) -> str:
    return f"{REPORT_PREFIX}{count}"


class TickerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    tick_interval_ms: float = Field(TICK_INTERVAL_MS, gt=0)
    report_interval: int = Field(REPORT_INTERVAL, ge=1)
    max_iterations: int | None = Field(None, ge=0)

    @property
    def tick_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    @property
    def report_period_seconds(self) -> float:
        """Minimum wall-clock time between two consecutive status lines."""
        return self.tick_seconds * self.report_interval


class Ticker:
    """Owns the counter and drives the increment -> sleep -> report cycle.

    ``out`` is any text stream with ``write`` and ``flush``; every line is
    flushed as soon as it is written. ``sleep`` is the blocking primitive used
    when no stop event is given.
    """

    def __init__(self, config: TickerConfig | None = None, out: TextIO | None = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config or TickerConfig()
        self.out = out if out is not None else sys.stdout
        self.count = 0
        self.reports = 0
        self._sleep = sleep
        self._started = False

    def emit(self, line: str) -> None:
        self.out.write(line + "\n")
        self.out.flush()

    def should_report(self) -> bool:
        return self.count > 0 and self.count % self.config.report_interval == 0

    def tick(self, stop: threading.Event | None = None) -> bool:
        """Run one cycle. Returns False if ``stop`` fired during the sleep."""
        self.count += 1
        if stop is None:
            self._sleep(self.config.tick_seconds)
        elif stop.wait(self.config.tick_seconds):
            return False
        if self.should_report():
            self.emit(format_report(self.count))
            self.reports += 1
            debug("report", tick=self.count)
        return True

    def run(self, stop: threading.Event | None = None) -> int:
        if self._started:
            raise RuntimeError("Ticker already started")
        self._started = True
        self.emit(STARTUP_LINE)

        limit = self.config.max_iterations
        while limit is None or self.count < limit:
            if stop is not None and stop.is_set():
                break
            if not self.tick(stop):
                break

        info("ticker stopped", tick=self.count, reports=self.reports)
        return self.count
