"""Tests for logging configuration."""

import logging

import pytest
import structlog

from presign.common.logging import get_logger
from presign.url.methods import HttpMethod
from presign.url.signer import generate_presigned_url


@pytest.fixture(autouse=True)
def restore_structlog():
    """Put back whatever structlog configuration was active."""
    saved = structlog.get_config()
    yield
    structlog.reset_defaults()
    structlog.configure(**saved)


class TestLibraryDefaults:
    """Test logging when the application never calls setup_logging."""

    def test_get_logger_configures_stdlib_backend(self):
        """An unconfigured structlog is routed through stdlib logging."""
        structlog.reset_defaults()
        get_logger("presign.test")

        assert structlog.is_configured()
        assert isinstance(structlog.get_config()["logger_factory"], structlog.stdlib.LoggerFactory)

    def test_signing_keeps_stdout_clean(self, capsys, credentials):
        """Debug events from signing are not printed."""
        structlog.reset_defaults()
        get_logger("presign.test")

        generate_presigned_url(HttpMethod.GET, "http://h.org/p?a=1", 123, credentials)

        assert capsys.readouterr().out == ""

    def test_warnings_reach_stdlib(self, caplog):
        """Warnings are delivered to stdlib handlers."""
        structlog.reset_defaults()
        logger = get_logger("presign.test")

        with caplog.at_level(logging.WARNING):
            logger.warning("Signature mismatch", host="h.org")

        assert "Signature mismatch" in caplog.text
        assert "h.org" in caplog.text

    def test_existing_configuration_kept(self):
        """An application's own structlog setup is not replaced."""
        structlog.reset_defaults()
        factory = structlog.PrintLoggerFactory()
        structlog.configure(logger_factory=factory)

        get_logger("presign.test")

        assert structlog.get_config()["logger_factory"] is factory
