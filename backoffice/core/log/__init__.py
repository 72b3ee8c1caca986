"""Logging for the back office: rich console output plus optional daily files.

Every record goes through a single queue. The console and file handlers run on
the listener thread, so request coroutines never wait on terminal or disk I/O.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from backoffice.core.config import Settings

from .context import ContextFilter, log_context
from .timing import timeit

__all__ = [
    "LoggingConfig",
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "timeit",
]

ROOT_LOGGER_NAME = "backoffice"

# Libraries that log every statement or connection event at INFO/DEBUG.
_CHATTY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncio")


@dataclass(frozen=True)
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    level: str | int = "INFO"
    log_dir: Path | None = None
    file_prefix: str = ROOT_LOGGER_NAME
    sql_echo: bool = False
    rich_tracebacks: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "LoggingConfig":
        return cls(
            level=settings.logging.level,
            log_dir=settings.logging.log_dir,
            sql_echo=settings.sqlalchemy_echo,
        )


@dataclass
class _LoggingState:
    config: LoggingConfig | None = None
    queue_handler: QueueHandler | None = None
    listener: QueueListener | None = None


_lock = RLock()
_state = _LoggingState()
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """Append to ``<prefix>_<YYYY_MM_DD>.log``, switching files at midnight."""

    def __init__(self, directory: Path, *, prefix: str, encoding: str = "utf-8") -> None:
        self.directory = directory
        self.prefix = prefix
        self.directory.mkdir(parents=True, exist_ok=True)
        self._current_date: date = datetime.now().date()
        super().__init__(self._path_for(self._current_date), mode="a", encoding=encoding)

    def _path_for(self, day: date) -> Path:
        return self.directory / f"{self.prefix}_{day:%Y_%m_%d}.log"

    def emit(self, record: logging.LogRecord) -> None:
        record_date = datetime.fromtimestamp(record.created).date()
        if record_date != self._current_date:
            self._current_date = record_date
            if self.stream:
                self.stream.close()
            self.baseFilename = os.fspath(self._path_for(record_date))
            self.stream = self._open()
        super().emit(record)


def _console_handler(cfg: LoggingConfig) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=cfg.rich_tracebacks,
        show_path=False,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
    return handler


def _file_handler(cfg: LoggingConfig, directory: Path) -> logging.Handler:
    handler = DailyFileHandler(directory, prefix=cfg.file_prefix)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _tune_library_loggers(cfg: LoggingConfig) -> None:
    for name in _CHATTY_LOGGERS:
        if name == "sqlalchemy.engine" and cfg.sql_echo:
            logging.getLogger(name).setLevel(logging.INFO)
        else:
            logging.getLogger(name).setLevel(logging.WARNING)


def _teardown_locked() -> None:
    if _state.listener is not None:
        _state.listener.stop()
    if _state.queue_handler is not None:
        logging.getLogger().removeHandler(_state.queue_handler)
    _state.config = None
    _state.queue_handler = None
    _state.listener = None


def init_logging(config: LoggingConfig | None = None, **overrides: object) -> LoggingConfig:
    """Install the queue-backed handlers and return the active configuration.

    Calling again with an identical configuration is a no-op; a different one
    replaces the handlers installed by the previous call.
    """

    cfg = replace(config or LoggingConfig(), **overrides)
    with _lock:
        if _state.config == cfg:
            return cfg
        _teardown_locked()

        level = _parse_level(cfg.level)
        if cfg.rich_tracebacks:
            install_rich_traceback(show_locals=False)

        handlers = [_console_handler(cfg)]
        if cfg.log_dir:
            handlers.append(_file_handler(cfg, Path(cfg.log_dir)))
        for handler in handlers:
            handler.setLevel(level)
            handler.addFilter(_context_filter)

        log_queue: SimpleQueue = SimpleQueue()
        queue_handler = QueueHandler(log_queue)
        queue_handler.setLevel(level)
        # Resolve the context on the calling task, before the record is queued.
        queue_handler.addFilter(_context_filter)
        listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
        listener.start()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        root.addHandler(queue_handler)
        _tune_library_loggers(cfg)

        _state.config = cfg
        _state.queue_handler = queue_handler
        _state.listener = listener
        return cfg


def shutdown_logging() -> None:
    """Flush and stop the listener thread."""

    with _lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    with _lock:
        if _state.config is None:
            init_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
