"""No-op sink: stand-in when a router slot should receive nothing."""

from __future__ import annotations

from debuglog.events import LogEvent


class NoOpSink:
    """Discards all events. Zero overhead."""

    def add(self, event: LogEvent) -> None:
        pass
