"""
Tests for utils module.
"""

import logging
from datetime import datetime

import pytest

from starwx.utils import (
    format_timestamp,
    get_current_utc,
    parse_datetime,
    setup_logging,
)


class TestParseDatetime:
    """Tests for parse_datetime function."""

    def test_standard_format(self) -> None:
        dt = parse_datetime("2025-01-15 12:30:45")
        assert dt == datetime(2025, 1, 15, 12, 30, 45)

    def test_iso_format_with_z(self) -> None:
        assert parse_datetime("2025-01-15T12:30:45Z").hour == 12

    def test_jpl_month_name(self) -> None:
        assert parse_datetime("2025-Nov-12 06:30") == datetime(2025, 11, 12, 6, 30)

    def test_date_only(self) -> None:
        assert parse_datetime("2025-01-15").hour == 0

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError):
            parse_datetime("not a date")


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_epoch(self) -> None:
        assert format_timestamp(0) == "1970-01-01 00:00:00 UTC"


class TestGetCurrentUtc:
    """Tests for get_current_utc function."""

    def test_naive(self) -> None:
        assert get_current_utc().tzinfo is None


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_level(self, monkeypatch) -> None:
        monkeypatch.delenv("STARWX_LOG_LEVEL", raising=False)
        setup_logging("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("STARWX_LOG_LEVEL", "DEBUG")
        setup_logging("ERROR")
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("STARWX_LOG_LEVEL", raising=False)
        log_file = tmp_path / "starwx.log"
        setup_logging("INFO", str(log_file))
        logging.getLogger("starwx.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
