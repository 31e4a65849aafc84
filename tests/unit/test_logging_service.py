"""Tests for logging service configuration."""

import logging
import tempfile
from pathlib import Path

import pytest

from coopdues.config import Settings
from coopdues.services.logging import get_log_level, setup_server_logging


def make_settings(log_file: Path, **overrides) -> Settings:
    return Settings(_env_file=None, log_file=str(log_file), **overrides)


class TestServerLogging:
    """Test server logging configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        for handler in self.root_logger.handlers[:]:
            handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)
        logging.getLogger("uvicorn.access").setLevel(logging.NOTSET)

    def test_creates_log_directory(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "test_logs" / "server.log"
            assert not log_file.parent.exists()

            setup_server_logging(make_settings(log_file))

            assert log_file.parent.exists()

    def test_installs_stdout_and_file_handlers(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            setup_server_logging(make_settings(Path(temp_dir) / "server.log"))

            handler_types = {type(h) for h in self.root_logger.handlers}
            assert handler_types == {logging.StreamHandler, logging.FileHandler}

    def test_level_from_settings(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            setup_server_logging(make_settings(Path(temp_dir) / "server.log", log_level="warning"))

            assert self.root_logger.level == logging.WARNING
            for handler in self.root_logger.handlers:
                assert handler.level == logging.WARNING

    def test_sql_logging_follows_database_echo(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "server.log"

            setup_server_logging(make_settings(log_file))
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

            setup_server_logging(make_settings(log_file, database_echo=True))
            assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_writes_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "server.log"
            setup_server_logging(make_settings(log_file))

            logging.getLogger("coopdues.services.ledger_service").info("Payment recorded on due 1")

            assert "Payment recorded on due 1" in log_file.read_text(encoding="utf-8")


class TestGetLogLevel:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("INFO", logging.INFO),
            ("debug", logging.DEBUG),
            (" Warning ", logging.WARNING),
            ("chatty", logging.INFO),
        ],
    )
    def test_get_log_level(self, name, expected) -> None:
        assert get_log_level(name) == expected
