"""
Queue-backed logging.

Records emitted on the event loop are handed to a QueueHandler and
written to the console (and optionally a file) by a listener thread, so
a slow terminal never stalls a refresh.
"""

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
from typing import TextIO

from spreadwatch.config.constants import LOG_DATE_FORMAT, LOG_FORMAT, MAX_LOG_QUEUE_SIZE


# Third-party loggers capped at WARNING
QUIET_LOGGERS = ("aiohttp", "asyncio", "uvicorn.access")


class UtcMillisecondFormatter(logging.Formatter):
    """Formats record times in UTC with millisecond precision."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return f"{created.strftime(datefmt or LOG_DATE_FORMAT)}.{int(record.msecs):03d}"


def build_handlers(level: int, stream: TextIO, log_file: Path | None) -> list[logging.Handler]:
    """
    Create the sink handlers driven by the queue listener.

    The console honours ``level``; the file, when configured, receives
    everything down to DEBUG.
    """
    formatter = UtcMillisecondFormatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console = logging.StreamHandler(stream)
    console.setLevel(level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


class AsyncLogger:
    """
    Routes one logger hierarchy through a queue.

    Usage:
        with AsyncLogger("spreadwatch", level=logging.DEBUG):
            ...
    """

    def __init__(
        self,
        name: str,
        level: int = logging.INFO,
        log_file: Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger hierarchy to capture.
            level: Console level.
            log_file: Optional file mirror.
            stream: Console stream (default: stderr, keeping stdout for
                the terminal panel).
        """
        self._level = level
        self._log_file = log_file
        self._stream = stream or sys.stderr
        self._logger = logging.getLogger(name)
        self._queue: Queue[logging.LogRecord] = Queue(maxsize=MAX_LOG_QUEUE_SIZE)
        self._queue_handler = QueueHandler(self._queue)
        self._listener: QueueListener | None = None

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def running(self) -> bool:
        return self._listener is not None

    def start(self) -> None:
        """Attach the queue and start the writer thread. No-op if running."""
        if self._listener is not None:
            return

        handlers = build_handlers(self._level, self._stream, self._log_file)
        self._listener = QueueListener(self._queue, *handlers, respect_handler_level=True)

        self._logger.setLevel(logging.DEBUG if self._log_file else self._level)
        self._logger.addHandler(self._queue_handler)
        self._listener.start()

    def stop(self) -> None:
        """Detach the queue and flush pending records."""
        self._logger.removeHandler(self._queue_handler)

        if self._listener is not None:
            self._listener.stop()
            for handler in self._listener.handlers:
                handler.close()
            self._listener = None

    def __enter__(self) -> "AsyncLogger":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> AsyncLogger:
    """
    Configure logging for the monitor and dashboard.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path.

    Returns:
        The started AsyncLogger; call stop() on shutdown to flush it.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    async_logger = AsyncLogger("spreadwatch", level=numeric_level, log_file=log_file)
    async_logger.start()
    return async_logger
