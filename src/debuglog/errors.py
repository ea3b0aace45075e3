"""Exception types raised by debuglog."""

from __future__ import annotations


class DebugLogError(Exception):
    """Base class for debuglog errors."""


class ConfigError(DebugLogError, ValueError):
    """Invalid sink configuration (unknown level, channel, or bad value)."""
