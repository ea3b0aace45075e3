"""Text dumper sink: append readable records to a file and the system error log.

Record layout (prefix on, context and trace on):

    2023-11-14 22:13:20.123456 auth::[INFO] login ok
      data:
        [user] => bob
      trace:
        - app/auth.py:42
        - :0

The file is never created: if it does not exist when an event arrives,
the file write is skipped. Appends hold an exclusive flock for the
duration of the write only.

Note: syslog backends often cap messages around 1024 bytes and truncate
silently. That is not detected or reported here.
"""

from __future__ import annotations

import fcntl
import os

from debuglog.channels import SystemLogChannel, get_channel
from debuglog.config import SinkConfig
from debuglog.dump import dump_context
from debuglog.events import Frame, LogEvent
from debuglog.logging import get_logger
from debuglog.timefmt import format_time

logger = get_logger("debuglog.sinks.debug_log")

_TRACE_INDENT = " " * 4 + "- "


def _frame_line(frame: Frame) -> str:
    file = frame.file if frame.file is not None else ""
    line = frame.line if frame.line is not None else 0
    return f"{_TRACE_INDENT}{file}:{line}"


def append_locked(path: str, text: str) -> bool:
    """Append ``text`` to an existing file under an exclusive lock.

    Returns False (and writes nothing) when the file does not exist.
    Opens without O_CREAT, so a file removed after the check is not recreated.
    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND)
    except FileNotFoundError:
        return False
    with os.fdopen(fd, "a", encoding="utf-8") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            f.write(text)
            f.flush()
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    return True


class DebugLogSink:
    """Formats each event as text; appends it to a file and/or the system log.

    The two writes are independent: an OSError from one is logged and the
    other still runs. Exceptions raised by ``message_decorator`` propagate.
    """

    def __init__(
        self,
        config: SinkConfig | None = None,
        channel: SystemLogChannel | None = None,
    ) -> None:
        self._config = config or SinkConfig()
        self._channel = channel or get_channel(self._config.system_log_channel, self._config)

    @property
    def config(self) -> SinkConfig:
        return self._config

    def lines(self, event: LogEvent) -> list[str]:
        """Build the record's lines. Pure except for the message decorator."""
        cfg = self._config
        time = format_time(event.timestamp, cfg.date_format, cfg.timezone)

        message = event.message
        if cfg.message_decorator is not None:
            message = str(cfg.message_decorator(event))

        if cfg.show_prefix:
            out = [f"{time} {event.module}::[{event.level.name}] {message}"]
        else:
            out = [message]

        if cfg.print_context and event.context:
            out.append("  data:")
            out.append(dump_context(event.context))

        if cfg.print_trace:
            out.append("  trace:")
            out.append("\n".join(_frame_line(f) for f in event.backtrace) + "\n")

        return out

    def format(self, event: LogEvent) -> str:
        """The record text as forwarded to the system log (no trailing newline)."""
        return "\n".join(self.lines(event))

    def add(self, event: LogEvent) -> None:
        cfg = self._config
        # Filtered events are not formatted; decorators only see written events
        if event.level < cfg.min_level:
            return

        record = self.format(event)

        if cfg.filename:
            try:
                if not append_locked(cfg.filename, record + "\n"):
                    logger.debug("sink.file.missing", filename=cfg.filename)
            except OSError as exc:
                logger.warning(
                    "sink.file.write_failed", filename=cfg.filename, error=str(exc)
                )

        if cfg.forward_to_system_log:
            try:
                self._channel.write(record, event.level)
            except OSError as exc:
                logger.warning(
                    "sink.system_log.write_failed",
                    channel=cfg.system_log_channel,
                    error=str(exc),
                )
