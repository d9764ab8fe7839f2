# ==============================================================================
# LOGGER TESTS
# ==============================================================================
# Tests for logging configuration
# ==============================================================================

import json
import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from crud_template.core.logger import JsonFormatter, RequestIdFilter, setup_logging
from crud_template.core.settings import Settings, get_settings


@pytest.fixture
def restore_logger():
    yield
    setup_logging(get_settings())


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self, restore_logger):
        logger = setup_logging(Settings(LOGS_ENABLE_FILE=False, APP_LOG_LEVEL="warning"))

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_file_handlers(self, tmp_path, restore_logger):
        """Combined and error-only files are written under the mount."""
        settings = Settings(
            LOGS_ENABLE_FILE=True,
            LOGS_DIRECTORY_MOUNT=str(tmp_path),
            LOGS_SUB_DIRECTORY="svc",
        )
        logger = setup_logging(settings)

        logging.getLogger("crud_template.test").info(
            "hello", extra={"request_id": "r-1"}
        )
        logging.getLogger("crud_template.test").error("boom")
        for handler in logger.handlers:
            handler.flush()

        combined = (tmp_path / "svc" / "combined.log").read_text()
        errors = (tmp_path / "svc" / "error.log").read_text()
        assert "[r-1] hello" in combined
        assert "[-] boom" in combined
        assert "hello" not in errors
        assert "boom" in errors

    def test_file_handlers_rotate_daily(self, tmp_path, restore_logger):
        """Files rotate at midnight and keep LOGS_FILE_MAXFILE days."""
        settings = Settings(
            LOGS_ENABLE_FILE=True,
            LOGS_DIRECTORY_MOUNT=str(tmp_path),
            LOGS_FILE_MAXFILE=7,
        )
        logger = setup_logging(settings)

        file_handlers = [
            h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)
        ]
        assert len(file_handlers) == 2
        assert all(h.when == "MIDNIGHT" for h in file_handlers)
        assert all(h.backupCount == 7 for h in file_handlers)
        assert all(h.namer is not None for h in file_handlers)


class TestFormatting:
    """Tests for record formatting."""

    def test_request_id_defaulted(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", None, None)

        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "-"

    def test_json_formatter(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg %s", ("a",), None)
        record.request_id = "r-9"

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "msg a"
        assert payload["requestId"] == "r-9"
        assert payload["level"] == "INFO"
