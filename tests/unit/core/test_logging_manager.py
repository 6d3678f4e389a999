"""
test_logging_manager.py
-----------------------
Unit tests for LogbookLogger, NullLogger and safe_logger.
"""
import pytest

from scobro.core.exceptions import NotFoundError
from scobro.core.logging_manager import LogbookLogger, NullLogger, safe_logger


@pytest.fixture
def logger(tmp_dir):
    """LogbookLogger writing into a temporary directory."""
    log = LogbookLogger(tmp_dir / "logs", component_name="testing")
    yield log
    log.close()


class TestLogbookLogger:
    """Test file output of LogbookLogger."""

    def test_creates_log_directory(self, logger, tmp_dir):
        assert (tmp_dir / "logs").is_dir()

    def test_operation_written_with_details(self, logger, tmp_dir):
        logger.log_operation("create_tag_completed", {"success": True})

        content = (tmp_dir / "logs" / "testing.log").read_text(encoding="utf-8")
        assert "OPERATION - create_tag_completed" in content
        assert '"success": true' in content

    def test_debug_written_to_component_log(self, logger, tmp_dir):
        logger.log_debug("linked tag", {"tag_id": "abc"})

        content = (tmp_dir / "logs" / "testing.log").read_text(encoding="utf-8")
        assert "DEBUG - linked tag" in content

    def test_error_written_to_errors_log(self, logger, tmp_dir):
        logger.log_error(ValueError("boom"), {"operation": "create_entry"})

        content = (tmp_dir / "logs" / "errors.log").read_text(encoding="utf-8")
        assert "ValueError: boom" in content
        assert "operation=create_entry" in content

    def test_cli_error_message(self, logger):
        message = logger.log_cli_error(NotFoundError("Entry not found: abc"))
        assert message == "❌ NotFoundError: Entry not found: abc"


class TestSafeLogger:
    """Test safe_logger() and NullLogger."""

    def test_none_gives_null_logger(self):
        assert isinstance(safe_logger(None), NullLogger)

    def test_logger_is_returned_unchanged(self, logger):
        assert safe_logger(logger) is logger

    def test_null_logger_methods_are_silent(self):
        null = NullLogger()
        null.log_operation("x")
        null.log_debug("x", {"a": 1})
        null.log_warning("x")
        null.log_error(RuntimeError("x"))
        assert null.log_cli_error(RuntimeError("x")) == "❌ RuntimeError: x"
