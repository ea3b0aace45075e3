"""Diagnostic logging for debuglog itself: swappable formatter via config.

The sink reports its own trouble (unwritable file, bad timezone) here,
never into the files it writes.

    LogFormatter: HOW records are structured (structlog, stdlib)

    setup_logging() asks the formatter for a logging.Formatter, puts it on
    a stderr handler and attaches that to the ``debuglog`` logger.

Swapping:
    DEBUGLOG_LOG_FORMATTER=structlog   (default)
    DEBUGLOG_LOG_FORMATTER=stdlib
    DEBUGLOG_LOG_FORMAT=json | console
    DEBUGLOG_LOG_LEVEL=WARNING         (default)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LogFormatter(Protocol):
    """Strategy: how diagnostic records are structured.

    setup() configures the pipeline and returns a logging.Formatter.
    get_logger() returns a logger taking ``logger.info("event", key=value)``.
    """

    def setup(self, log_format: str) -> logging.Formatter: ...

    def get_logger(self, name: str, **kwargs: Any) -> Any: ...


def _merge_structured(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Lift kwargs carried by _StructuredStdlibLogger records into the event dict."""
    record = event_dict.get("_record")
    structured = getattr(record, "_structured", None)
    if structured:
        for key, value in structured.items():
            event_dict.setdefault(key, value)
    return event_dict


class StructlogFormatter:
    """structlog processor pipeline + stdlib bridge.

    Records that bypass structlog (stdlib loggers, and module-level
    loggers bound before setup) go through ``foreign_pre_chain``, which
    keeps their structured kwargs.
    """

    def setup(self, log_format: str) -> logging.Formatter:
        import structlog

        shared_processors: list = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if log_format == "console":
            renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
        else:
            renderer = structlog.processors.JSONRenderer()

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared_processors,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[_merge_structured, *shared_processors],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        import structlog

        return structlog.get_logger(name, **kwargs)


class StdlibFormatter:
    """Pure stdlib logging with JSON or console lines.

    structlog is never imported on this path, for hosts that embed the sink
    in an application with its own stdlib logging setup.
    """

    def setup(self, log_format: str) -> logging.Formatter:
        if log_format == "console":
            return logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        return _StdlibJsonFormatter()

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        return _StructuredStdlibLogger(logging.getLogger(name))


class _StdlibJsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, event.

    Structured kwargs from _StructuredStdlibLogger are merged in at the top
    level, so ``filename``/``error`` fields land next to ``event``.
    """

    def format(self, record: logging.LogRecord) -> str:
        d: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if hasattr(record, "_structured"):
            d.update(record._structured)  # type: ignore[union-attr]
        if record.exc_info and record.exc_info[1]:
            d["exception"] = self.formatException(record.exc_info)
        return json.dumps(d, default=str)


class _StructuredStdlibLogger:
    """Gives stdlib loggers a structlog-like kwargs API.

    The sink logs ``logger.warning("sink.file.write_failed", filename=...)``.
    Stdlib loggers reject arbitrary kwargs, so this wrapper builds the
    LogRecord itself and hangs the kwargs on it as ``_structured``. Both
    formatters read them from there: _StdlibJsonFormatter directly,
    structlog through ``_merge_structured`` in its foreign_pre_chain.

    It is also what get_logger() returns before setup_logging() runs.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, event: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "(unknown)",
            0,
            event,
            (),
            None,
        )
        record._structured = kwargs  # type: ignore[attr-defined]
        self._logger.handle(record)

    def debug(self, event: str, **kw: Any) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log(logging.INFO, event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._log(logging.WARNING, event, **kw)


_FORMATTERS: dict[str, type] = {
    "structlog": StructlogFormatter,
    "stdlib": StdlibFormatter,
}

_active_formatter: LogFormatter | None = None


def register_formatter(name: str, cls: type) -> None:
    """Register a custom log formatter. Call before setup_logging()."""
    _FORMATTERS[name] = cls


def setup_logging(
    formatter: str | None = None,
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Wire a stderr handler with the chosen formatter to the ``debuglog`` logger.

    Arguments default to the DEBUGLOG_LOG_* environment variables.
    Calling again replaces the handler installed by the previous call.
    """
    global _active_formatter

    formatter = formatter or os.environ.get("DEBUGLOG_LOG_FORMATTER", "structlog")
    level = level or os.environ.get("DEBUGLOG_LOG_LEVEL", "WARNING")
    log_format = log_format or os.environ.get("DEBUGLOG_LOG_FORMAT", "json")

    formatter_cls = _FORMATTERS.get(formatter)
    if formatter_cls is None:
        raise ValueError(
            f"Unknown log formatter: {formatter!r}. "
            f"Available: {list(_FORMATTERS)}. "
            f"Register custom formatters with register_formatter()."
        )

    impl = formatter_cls()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(impl.setup(log_format))
    handler._debuglog_managed = True  # type: ignore[attr-defined]

    pkg_logger = logging.getLogger("debuglog")
    pkg_logger.handlers = [
        h for h in pkg_logger.handlers if not getattr(h, "_debuglog_managed", False)
    ]
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    _active_formatter = impl


def get_logger(name: str = "debuglog", **kwargs: Any) -> Any:
    """Get a logger from the active formatter.

    Before setup_logging() this is a kwargs-accepting stdlib wrapper,
    so ``logger.debug("event", key=value)`` works regardless.
    """
    if _active_formatter is not None:
        return _active_formatter.get_logger(name, **kwargs)
    return _StructuredStdlibLogger(logging.getLogger(name))


def reset_logging() -> None:
    """Drop the active formatter and managed handler. Use in tests."""
    global _active_formatter
    _active_formatter = None
    pkg_logger = logging.getLogger("debuglog")
    pkg_logger.handlers = [
        h for h in pkg_logger.handlers if not getattr(h, "_debuglog_managed", False)
    ]
    pkg_logger.setLevel(logging.NOTSET)
