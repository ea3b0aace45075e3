"""Message decorators: callables plugged into SinkConfig.message_decorator.

A decorator is ``(event) -> text``. SessionDecorator carries the session
state (previous event, start time) itself so the sink stays stateless,
and hands it to a render function through an explicit DecoratorContext.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

from debuglog.events import LogEvent

DEFAULT_SEPARATOR = "-" * 40


@dataclass(frozen=True)
class DecoratorContext:
    previous: LogEvent | None  # None on the first event of a session
    started_at: float  # timestamp of the session's first event


def elapsed_render(event: LogEvent, ctx: DecoratorContext) -> str:
    """Message followed by seconds since the session started."""
    return f"{event.message} +{event.timestamp - ctx.started_at:.3f}s"


class SessionDecorator:
    """Tracks a logging session and prefixes its first record with a separator.

    Usage:
        deco = SessionDecorator()
        sink = DebugLogSink(SinkConfig(filename=path, message_decorator=deco))
        ...
        deco.reset()  # next event opens a new session
    """

    def __init__(
        self,
        render: Callable[[LogEvent, DecoratorContext], object] | None = None,
        separator: str | None = DEFAULT_SEPARATOR,
    ) -> None:
        self._render = render or elapsed_render
        self._separator = separator
        self._lock = threading.Lock()
        self._previous: LogEvent | None = None
        self._started_at: float | None = None

    def __call__(self, event: LogEvent) -> str:
        with self._lock:
            first = self._started_at is None
            if first:
                self._started_at = event.timestamp
            ctx = DecoratorContext(previous=self._previous, started_at=self._started_at)
            self._previous = event
        text = str(self._render(event, ctx))
        if first and self._separator:
            return f"{self._separator}\n{text}"
        return text

    def reset(self) -> None:
        """End the current session."""
        with self._lock:
            self._previous = None
            self._started_at = None
