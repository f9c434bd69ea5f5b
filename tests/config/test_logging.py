"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from commissionctl.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("commissionctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("commissionctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("commissionctl.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "commissionctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("commissionctl.domain.engine").debug("Operation %d priced at 0", 4)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Operation 4 priced at 0"
        assert parsed["level"] == "debug"

    def test_http_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("urllib3").debug("Starting new HTTPS connection")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_console_mode_writes_stderr_only(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=False)
        logging.getLogger("commissionctl.infrastructure.schedule").warning("slow fee API")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "slow fee API" in captured.err

    def test_quiet_mode_hides_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("commissionctl.domain.engine").debug("Operation 0 priced")
        assert capfd.readouterr().err == ""
