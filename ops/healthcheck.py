#!/usr/bin/env python
"""Spawns a ticker and checks that it is alive and ticking.

Passes once the child has printed its startup line followed by
HEALTHCHECK_REPORTS well-formed, well-spaced reports and is still running.
"""
import os
import queue
import shlex
import subprocess
import sys
import threading
import time
from pathlib import Path

from core.config import Settings
from core.probe import LivenessMonitor, ProbeViolation

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_COMMAND = [sys.executable, "-m", "services.ticker.main"]


def _pump(stream, lines: queue.Queue):
    for line in iter(stream.readline, ""):
        lines.put((time.monotonic(), line))
    lines.put((time.monotonic(), None))


def _stop(proc: subprocess.Popen):
    if proc.poll() is None:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()


def check(command=None, reports=3, timeout=10.0, tolerance=0.05):
    """Returns (ok, message). Never raises for an unhealthy child."""
    if reports < 1:
        raise ValueError(f"reports must be at least 1, got {reports}")
    command = command or DEFAULT_COMMAND
    monitor = LivenessMonitor(tolerance=tolerance)
    env = dict(os.environ, PYTHONUNBUFFERED="1")
    try:
        proc = subprocess.Popen(command, cwd=REPO_ROOT, env=env, stdout=subprocess.PIPE,
                                stderr=subprocess.DEVNULL, text=True, encoding="utf-8", errors="replace")
    except OSError as e:
        return False, f"could not start {command!r}: {e}"

    lines: queue.Queue = queue.Queue()
    reader = threading.Thread(target=_pump, args=(proc.stdout, lines), daemon=True)
    reader.start()
    deadline = time.monotonic() + timeout
    try:
        while len(monitor.reports) < reports:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False, f"only {len(monitor.reports)} of {reports} reports within {timeout}s"
            try:
                at, line = lines.get(timeout=remaining)
            except queue.Empty:
                continue
            if line is None:
                return False, f"process exited with status {proc.wait()} after {len(monitor.reports)} reports"
            try:
                monitor.observe(line, at)
            except ProbeViolation as e:
                return False, str(e)

        if proc.poll() is not None:
            return False, f"process exited with status {proc.returncode}"
        return True, f"{len(monitor.reports)} reports, last count {monitor.last_count}"
    finally:
        _stop(proc)
        reader.join(timeout=5)
        # a grandchild may still hold the pipe open
        if not reader.is_alive():
            proc.stdout.close()


def main():
    s = Settings()
    command = shlex.split(s.HEALTHCHECK_COMMAND) if s.HEALTHCHECK_COMMAND else None
    ok, message = check(command, s.HEALTHCHECK_REPORTS, s.HEALTHCHECK_TIMEOUT_SECONDS,
                        s.HEALTHCHECK_TOLERANCE_SECONDS)
    if ok:
        print(f"HEALTHCHECKER: OK ({message})")
        return 0
    print(f"HEALTHCHECKER: FAIL - {message}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
