"""Severity levels: ordered by numeric value, named in upper case."""

from __future__ import annotations

from enum import IntEnum

from debuglog.errors import ConfigError

_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class Level(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(cls, value: Level | int | str) -> Level:
        """Coerce a name (case-insensitive) or integer value to a Level."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError as err:
                raise ConfigError(f"Unknown log level value: {value!r}") from err
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
            if name.isdigit():
                return cls.parse(int(name))
        raise ConfigError(
            f"Unknown log level: {value!r}. Available: {list(cls.__members__)}"
        )
