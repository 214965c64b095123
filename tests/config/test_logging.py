"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog
from pydantic import SecretStr

from sitectl.config.logging import REDACTED, configure_logging
from tests.conftest import TEST_TOKEN


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    site = logging.getLogger("sitectl")
    site_level = site.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    site.setLevel(site_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("sitectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("sitectl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("sitectl.test")
        log.warning("apply.completed", branches=2)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "apply.completed"
        assert parsed["branches"] == 2
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "sitectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sitectl.plugins.manager").debug("Registered plugin: probe")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Registered plugin: probe"
        assert parsed["level"] == "debug"

    def test_sqlalchemy_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").debug("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_credentials_are_redacted(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("sitectl.test")
        log.warning("source.loaded", owner="acme", oauth_token=TEST_TOKEN)
        err = capfd.readouterr().err
        assert TEST_TOKEN not in err
        assert json.loads(err.strip())["oauth_token"] == REDACTED

    def test_secret_values_are_redacted(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("sitectl.test")
        log.warning("settings.loaded", credential=SecretStr(TEST_TOKEN))
        assert TEST_TOKEN not in capfd.readouterr().err
