"""System error-log channels: where the sink forwards its records.

    stderr : the process error stream (default; what a CLI's error log is)
    syslog : the host syslog daemon via the stdlib ``syslog`` module
    null   : discard

Syslog backends commonly cap a message around 1024 bytes and truncate
silently. That is outside the sink's control and not treated as an error.

Register your own:
    from debuglog.channels import register_channel
    register_channel("journald", MyJournaldChannel)
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from debuglog.errors import ConfigError
from debuglog.levels import Level

if TYPE_CHECKING:
    from debuglog.config import SinkConfig


@runtime_checkable
class SystemLogChannel(Protocol):
    """Strategy: a platform error/diagnostic log facility."""

    def write(self, message: str, level: Level) -> None: ...


class StderrChannel:
    """Write each record to stderr, newline-terminated."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, message: str, level: Level) -> None:
        # Resolve late so pytest's capsys and redirected stderr are honored
        stream = self._stream or sys.stderr
        stream.write(message + "\n")
        stream.flush()


class SyslogChannel:
    """Forward records to syslog with a level-derived priority."""

    def __init__(self, ident: str = "debuglog") -> None:
        import syslog

        self._syslog = syslog
        self._ident = ident
        self._opened = False

    def _priority(self, level: Level) -> int:
        s = self._syslog
        if level >= Level.CRITICAL:
            return s.LOG_CRIT
        if level >= Level.ERROR:
            return s.LOG_ERR
        if level >= Level.WARNING:
            return s.LOG_WARNING
        if level >= Level.INFO:
            return s.LOG_INFO
        return s.LOG_DEBUG

    def write(self, message: str, level: Level) -> None:
        if not self._opened:
            self._syslog.openlog(self._ident, self._syslog.LOG_PID, self._syslog.LOG_USER)
            self._opened = True
        self._syslog.syslog(self._priority(level), message)


class NullChannel:
    """Discards all records."""

    def write(self, message: str, level: Level) -> None:
        pass


_CHANNELS: dict[str, type] = {
    "stderr": StderrChannel,
    "syslog": SyslogChannel,
    "null": NullChannel,
}


def register_channel(name: str, cls: type) -> None:
    """Register a custom system-log channel."""
    _CHANNELS[name] = cls


def available_channels() -> list[str]:
    return list(_CHANNELS)


def get_channel(name: str, config: SinkConfig | None = None) -> SystemLogChannel:
    """Instantiate the channel registered under ``name``."""
    cls = _CHANNELS.get(name)
    if cls is None:
        raise ConfigError(
            f"Unknown system log channel: {name!r}. "
            f"Available: {list(_CHANNELS)}. "
            f"Register custom channels with register_channel()."
        )
    if cls is SyslogChannel:
        return cls(ident=config.syslog_ident if config is not None else "debuglog")
    return cls()
