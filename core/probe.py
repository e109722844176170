"""Observer side of the ticker's stdout protocol.

``LivenessMonitor`` consumes timestamped lines from a ticker and raises
``ProbeViolation`` as soon as the stream breaks the contract: the startup line
comes first and only once, reports start at ``report_interval`` and step by it,
and consecutive reports are at least one report period apart.
"""

import re

from core.ticker import REPORT_INTERVAL, REPORT_PREFIX, STARTUP_LINE, TICK_INTERVAL_MS


class ProbeViolation(Exception):
    pass


REPORT_PATTERN = re.compile(re.escape(REPORT_PREFIX) + r"([0-9]+)")


def parse_report(line: str) -> int | None:
    """Returns the counter value of a status line, or None for any other line."""
    match = REPORT_PATTERN.fullmatch(line)
    if match is None:
        return None
    return int(match.group(1))


class LivenessMonitor:
    def __init__(self, report_interval: int = REPORT_INTERVAL,
                 tick_interval_ms: float = TICK_INTERVAL_MS,
                 tolerance: float = 0.0):
        self.report_interval = report_interval
        self.min_gap = report_interval * tick_interval_ms / 1000.0 - tolerance
        self.started = False
        self.started_at: float | None = None
        self.reports: list[tuple[int, float]] = []

    @property
    def last_count(self) -> int | None:
        return self.reports[-1][0] if self.reports else None

    def observe(self, line: str, at: float) -> int | None:
        """Validates one line seen at monotonic time ``at``.

        Returns the reported counter for status lines and None for the
        startup line.
        """
        line = line.rstrip("\r\n")
        if line == STARTUP_LINE:
            if self.started:
                raise ProbeViolation("startup line repeated")
            self.started = True
            self.started_at = at
            return None

        count = parse_report(line)
        if count is None:
            raise ProbeViolation(f"unexpected line: {line!r}")
        if not self.started:
            raise ProbeViolation(f"report before startup line: {count}")
        if count % self.report_interval != 0:
            raise ProbeViolation(f"count {count} is not a multiple of {self.report_interval}")

        if self.reports:
            prev_count, prev_at = self.reports[-1]
            expected = prev_count + self.report_interval
            if count != expected:
                raise ProbeViolation(f"count jumped from {prev_count} to {count} (expected {expected})")
            gap = at - prev_at
            if gap < self.min_gap:
                raise ProbeViolation(f"reports {prev_count} and {count} only {gap:.3f}s apart")
        elif count != self.report_interval:
            raise ProbeViolation(f"first report was {count}, expected {self.report_interval}")
        elif at - self.started_at < self.min_gap:
            raise ProbeViolation(f"first report only {at - self.started_at:.3f}s after startup")

        self.reports.append((count, at))
        return count
