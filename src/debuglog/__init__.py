"""debuglog: a text dumper sink for structured log events.

Public API:
    DebugLogSink(config) : format one event, append to file / system log
    SinkConfig           : immutable sink settings (SinkConfig.load() for YAML/env)
    LogEvent, Frame      : the event the router hands to sinks
    Level                : ordered severity

Logging (the package's own diagnostics):
    setup_logging(...)   : wire structlog/stdlib formatter to stderr
    get_logger(name)     : structured logger
"""

from debuglog.channels import (
    NullChannel,
    StderrChannel,
    SyslogChannel,
    SystemLogChannel,
    get_channel,
    register_channel,
)
from debuglog.config import SinkConfig
from debuglog.decorators import DecoratorContext, SessionDecorator
from debuglog.dump import dump_context
from debuglog.errors import ConfigError, DebugLogError
from debuglog.events import Frame, LogEvent
from debuglog.levels import Level
from debuglog.logging import get_logger, register_formatter, setup_logging
from debuglog.sinks import DebugLogSink, LogSink, NoOpSink
from debuglog.timefmt import format_time

__all__ = [
    # Sinks
    "LogSink",
    "DebugLogSink",
    "NoOpSink",
    # Events
    "LogEvent",
    "Frame",
    "Level",
    # Config
    "SinkConfig",
    "ConfigError",
    "DebugLogError",
    # System log channels
    "SystemLogChannel",
    "StderrChannel",
    "SyslogChannel",
    "NullChannel",
    "get_channel",
    "register_channel",
    # Decorators
    "SessionDecorator",
    "DecoratorContext",
    # Formatting helpers
    "format_time",
    "dump_context",
    # Logging
    "get_logger",
    "setup_logging",
    "register_formatter",
]
