"""LogSink protocol: strategy pattern for event output destinations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from debuglog.events import LogEvent


@runtime_checkable
class LogSink(Protocol):
    """Where the router hands each event. One call per event."""

    def add(self, event: LogEvent) -> None: ...
