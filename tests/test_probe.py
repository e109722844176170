import pytest

from core.probe import LivenessMonitor, ProbeViolation, parse_report


def _started(monitor: LivenessMonitor, at: float = 0.0) -> LivenessMonitor:
    monitor.observe("Starting loop...\n", at)
    return monitor


def test_parse_report() -> None:
    assert parse_report("Loop count: 40") == 40
    assert parse_report("Loop count: ") is None
    assert parse_report("Loop count: -10") is None
    assert parse_report("Starting loop...") is None


def test_accepts_well_formed_stream() -> None:
    monitor = _started(LivenessMonitor())
    assert monitor.observe("Loop count: 10\n", 1.02) == 10
    assert monitor.observe("Loop count: 20\n", 2.05) == 20
    assert monitor.observe("Loop count: 30", 3.10) == 30
    assert monitor.last_count == 30
    assert [count for count, _ in monitor.reports] == [10, 20, 30]


def test_report_before_startup() -> None:
    with pytest.raises(ProbeViolation, match="before startup"):
        LivenessMonitor().observe("Loop count: 10", 1.0)


def test_repeated_startup() -> None:
    monitor = _started(LivenessMonitor())
    with pytest.raises(ProbeViolation, match="repeated"):
        monitor.observe("Starting loop...", 0.5)


def test_unexpected_line() -> None:
    monitor = _started(LivenessMonitor())
    with pytest.raises(ProbeViolation, match="unexpected line"):
        monitor.observe("hello", 0.5)


def test_first_report_must_be_report_interval() -> None:
    monitor = _started(LivenessMonitor())
    with pytest.raises(ProbeViolation, match="first report was 20"):
        monitor.observe("Loop count: 20", 2.0)


def test_non_multiple_rejected() -> None:
    monitor = _started(LivenessMonitor())
    with pytest.raises(ProbeViolation, match="not a multiple"):
        monitor.observe("Loop count: 7", 1.0)


def test_skipped_report_rejected() -> None:
    monitor = _started(LivenessMonitor())
    monitor.observe("Loop count: 10", 1.0)
    with pytest.raises(ProbeViolation, match="jumped from 10 to 30"):
        monitor.observe("Loop count: 30", 3.0)


def test_reports_too_close_together() -> None:
    monitor = _started(LivenessMonitor())
    monitor.observe("Loop count: 10", 1.0)
    with pytest.raises(ProbeViolation, match="apart"):
        monitor.observe("Loop count: 20", 1.5)


def test_first_report_too_soon_after_startup() -> None:
    monitor = _started(LivenessMonitor(), at=10.0)
    with pytest.raises(ProbeViolation, match="after startup"):
        monitor.observe("Loop count: 10", 10.4)


def test_tolerance_absorbs_reader_jitter() -> None:
    monitor = _started(LivenessMonitor(tolerance=0.05))
    monitor.observe("Loop count: 10", 1.0)
    assert monitor.observe("Loop count: 20", 1.97) == 20


def test_custom_cadence() -> None:
    monitor = _started(LivenessMonitor(report_interval=5, tick_interval_ms=10))
    assert monitor.observe("Loop count: 5", 0.06) == 5
    assert monitor.observe("Loop count: 10", 0.11) == 10


def test_non_ascii_digits_are_not_reports() -> None:
    assert parse_report("Loop count: ²") is None
    assert parse_report("Loop count: １０") is None
    assert parse_report("Loop count: 10 ") is None


def test_non_ascii_digits_are_violations() -> None:
    monitor = _started(LivenessMonitor())
    with pytest.raises(ProbeViolation, match="unexpected line"):
        monitor.observe("Loop count: ²", 5.0)
    with pytest.raises(ProbeViolation, match="unexpected line"):
        monitor.observe("Loop count: １０", 5.0)
