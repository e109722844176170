"""Shared fixtures for the ticker tests."""

from __future__ import annotations

import io

import pytest

from core import logging as ticker_logging


class FakeSleep:
    """Records requested sleeps instead of blocking."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture(autouse=True)
def reset_logging():
    ticker_logging.configure("INFO")
    yield
    ticker_logging.configure("INFO")
