"""Typed event dataclasses consumed by sinks.

Events are frozen (immutable) dataclasses. The router builds them;
sinks only read them.
"""

from __future__ import annotations

import time
import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from debuglog.levels import Level


@dataclass(frozen=True)
class Frame:
    """One call site in a backtrace. Either part may be unknown."""

    file: str | None = None
    line: int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Frame:
        line = data.get("line")
        return cls(file=data.get("file"), line=int(line) if line is not None else None)


@dataclass(frozen=True)
class LogEvent:
    timestamp: float  # epoch seconds, fractional
    level: Level
    module: str
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)
    backtrace: tuple[Frame, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level.parse(self.level))
        # Own copies so later caller mutation never shows up in output
        object.__setattr__(self, "context", dict(self.context))
        object.__setattr__(
            self,
            "backtrace",
            tuple(
                f if isinstance(f, Frame) else Frame.from_mapping(f)
                for f in self.backtrace
            ),
        )

    @classmethod
    def capture(
        cls,
        level: Level,
        module: str,
        message: str,
        context: Mapping[str, Any] | None = None,
        skip: int = 0,
    ) -> LogEvent:
        """Build an event stamped now, with the caller's stack as backtrace.

        Frames are innermost first. ``skip`` drops that many extra frames
        above the caller (useful when called through a logging facade).
        """
        stack = traceback.extract_stack()[:-1]  # drop capture() itself
        frames = tuple(
            Frame(file=s.filename, line=s.lineno) for s in reversed(stack)
        )[skip:]
        return cls(
            timestamp=time.time(),
            level=Level.parse(level),
            module=module,
            message=message,
            context=context or {},
            backtrace=frames,
        )
