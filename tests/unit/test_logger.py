"""
Unit tests for queue-backed logging.
"""

import io
import logging
from pathlib import Path

from spreadwatch.telemetry.logger import (
    QUIET_LOGGERS,
    AsyncLogger,
    UtcMillisecondFormatter,
    build_handlers,
    setup_logging,
)


class TestUtcMillisecondFormatter:
    """Tests for the timestamp formatter."""

    def test_formats_utc_with_millis(self) -> None:
        """Test record times render in UTC with three millisecond digits."""
        record = logging.LogRecord("spreadwatch", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 1704067200.123
        record.msecs = 123.0

        formatter = UtcMillisecondFormatter("%(asctime)s", "%Y-%m-%d %H:%M:%S")

        assert formatter.format(record) == "2024-01-01 00:00:00.123"


class TestBuildHandlers:
    """Tests for the listener sinks."""

    def test_console_only(self) -> None:
        """Test no file handler without a log file."""
        handlers = build_handlers(logging.WARNING, io.StringIO(), None)

        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING

    def test_file_mirror(self, tmp_path: Path) -> None:
        """Test the file handler takes DEBUG and creates its directory."""
        log_file = tmp_path / "logs" / "spreadwatch.log"

        handlers = build_handlers(logging.INFO, io.StringIO(), log_file)
        try:
            assert len(handlers) == 2
            assert handlers[1].level == logging.DEBUG
            assert log_file.parent.is_dir()
        finally:
            for handler in handlers:
                handler.close()


class TestAsyncLogger:
    """Tests for the queue-backed logger."""

    def test_writes_to_stream(self) -> None:
        """Test records reach the console stream after stop."""
        stream = io.StringIO()

        with AsyncLogger("spreadwatch.test", level=logging.INFO, stream=stream) as async_logger:
            async_logger.logger.info("loaded 3 pairs")
            async_logger.logger.debug("hidden")

        output = stream.getvalue()
        assert "loaded 3 pairs" in output
        assert "hidden" not in output
        assert "| INFO     |" in output

    def test_start_is_idempotent(self) -> None:
        """Test repeated start adds a single handler."""
        async_logger = AsyncLogger("spreadwatch.idempotent", stream=io.StringIO())

        async_logger.start()
        async_logger.start()
        try:
            assert len(async_logger.logger.handlers) == 1
        finally:
            async_logger.stop()

        assert async_logger.logger.handlers == []


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_levels(self) -> None:
        """Test the console level and the quieted third-party loggers."""
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        async_logger = setup_logging(level="warning")
        try:
            assert async_logger.running is True
            assert root.level == logging.WARNING
            assert async_logger.logger.name == "spreadwatch"
            for name in QUIET_LOGGERS:
                assert logging.getLogger(name).level == logging.WARNING
        finally:
            async_logger.stop()
            async_logger.logger.setLevel(logging.NOTSET)
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test an unrecognised level name means INFO."""
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        async_logger = setup_logging(level="chatty")
        try:
            assert root.level == logging.INFO
        finally:
            async_logger.stop()
            async_logger.logger.setLevel(logging.NOTSET)
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
