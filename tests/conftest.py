"""Shared fixtures: event factory, recording channel, logging reset."""

from __future__ import annotations

import pytest

from debuglog.events import Frame, LogEvent
from debuglog.levels import Level
from debuglog.logging import reset_logging

# 2023-11-14 22:13:20.123456 UTC
TS = 1700000000.123456


class RecordingChannel:
    """System log channel that keeps what it was given."""

    def __init__(self) -> None:
        self.records: list[tuple[str, Level]] = []

    def write(self, message: str, level: Level) -> None:
        self.records.append((message, level))


@pytest.fixture(autouse=True)
def _reset_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def make_event():
    def _make(
        level: Level = Level.INFO,
        module: str = "auth",
        message: str = "login ok",
        context: dict | None = None,
        backtrace: tuple[Frame, ...] = (),
        timestamp: float = TS,
    ) -> LogEvent:
        return LogEvent(
            timestamp=timestamp,
            level=level,
            module=module,
            message=message,
            context=context or {},
            backtrace=backtrace,
        )

    return _make


@pytest.fixture()
def logfile(tmp_path):
    """An existing, empty log file."""
    path = tmp_path / "app.log"
    path.write_text("")
    return path
