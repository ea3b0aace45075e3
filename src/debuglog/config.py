"""Sink configuration: immutable, built once at startup.

Construct SinkConfig directly, or use SinkConfig.load() to layer
sources. Priority: keyword overrides > env var > YAML file > default.
Env vars use the DEBUGLOG_{FIELD_NAME} convention
(e.g. DEBUGLOG_MIN_LEVEL=debug, DEBUGLOG_PRINT_TRACE=on).
YAML file default: ~/.debuglog/sink.yaml
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

from debuglog.errors import ConfigError
from debuglog.levels import Level
from debuglog.timefmt import DEFAULT_DATE_FORMAT

if TYPE_CHECKING:
    from debuglog.events import LogEvent

_TRUTHY = {"1", "true", "on", "yes"}
_FALSY = {"0", "false", "off", "no"}
_DEFAULT_PATH = Path("~/.debuglog/sink.yaml").expanduser()
_ENV_PREFIX = "DEBUGLOG_"

# Callables can't come from YAML or the environment
_CODE_ONLY = {"message_decorator"}


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ConfigError(f"{name}={value!r} is not a valid boolean")


@dataclass(frozen=True)
class SinkConfig:
    # File target; empty disables file writes. The file must already exist.
    filename: str = ""
    # Platform error log
    forward_to_system_log: bool = True
    system_log_channel: str = "stderr"  # "stderr" | "syslog" | "null"
    syslog_ident: str = "debuglog"
    # Events below this level are not written
    min_level: Level = Level.INFO
    # Optional sections
    print_context: bool = True
    print_trace: bool = False
    # Timestamp rendering; unknown zone falls back to system local
    timezone: str | None = None
    date_format: str = DEFAULT_DATE_FORMAT
    # (event) -> text replacing event.message
    message_decorator: Callable[[LogEvent], object] | None = None
    show_prefix: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_level", Level.parse(self.min_level))
        for f in fields(self):
            if f.type == "bool":
                object.__setattr__(self, f.name, _to_bool(f.name, getattr(self, f.name)))
        if self.message_decorator is not None and not callable(self.message_decorator):
            raise ConfigError("message_decorator must be callable")

        from debuglog.channels import available_channels

        if self.system_log_channel not in available_channels():
            raise ConfigError(
                f"Unknown system log channel: {self.system_log_channel!r}. "
                f"Available: {available_channels()}."
            )

    @classmethod
    def load(cls, path: Path | None = None, **overrides: Any) -> SinkConfig:
        """Load from YAML file, then env vars, then keyword overrides."""
        names = {f.name for f in fields(cls)}
        file_path = path or _DEFAULT_PATH
        kwargs: dict[str, Any] = {}

        if file_path.exists():
            raw = yaml.safe_load(file_path.read_text()) or {}
            if not isinstance(raw, dict):
                raise ConfigError(f"{file_path}: expected a mapping, got {type(raw).__name__}")
            for k, v in raw.items():
                if k not in names or k in _CODE_ONLY:
                    raise ConfigError(f"{file_path}: unknown setting {k!r}")
                kwargs[k] = v

        for name in names - _CODE_ONLY:
            env_key = f"{_ENV_PREFIX}{name.upper()}"
            if env_key in os.environ:
                kwargs[name] = os.environ[env_key]

        unknown = set(overrides) - names
        if unknown:
            raise ConfigError(f"Unknown settings: {sorted(unknown)}")
        kwargs.update(overrides)

        if kwargs.get("timezone") == "":
            kwargs["timezone"] = None
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self) if f.name not in _CODE_ONLY}
        d["min_level"] = self.min_level.name
        return d
