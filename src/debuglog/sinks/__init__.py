"""Log sinks: strategy pattern for event output destinations."""

from debuglog.sinks.base import LogSink
from debuglog.sinks.debug_log import DebugLogSink
from debuglog.sinks.noop_sink import NoOpSink

__all__ = ["LogSink", "DebugLogSink", "NoOpSink"]
