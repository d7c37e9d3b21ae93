"""Unit tests for logging configuration."""

from pathlib import Path

from loguru import logger

from address_lookup.core.logging import setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        """setup_logging with valid log level does not raise."""
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        """setup_logging accepts case-insensitive log levels."""
        setup_logging("info")
        setup_logging("debug")

    def test_json_logs(self) -> None:
        setup_logging("INFO", json_logs=True)

    def test_log_dir_writes_file(self, tmp_path: Path) -> None:
        """A log file is created in the configured directory."""
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("lookup started")
        logger.complete()

        log_file = log_dir / "address-lookup.log"
        assert log_file.exists()
        assert "lookup started" in log_file.read_text()

        setup_logging("INFO")
