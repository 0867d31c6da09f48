"""Pytest configuration and fixtures."""

import logging

import pytest

from presign.common.settings import Settings

CREDENTIALS = "a super secret password"


@pytest.fixture
def credentials() -> str:
    """Shared secret used across signing tests."""
    return CREDENTIALS


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        secret=CREDENTIALS,
        hmac_algorithm="sha256",
        exempt_paths=("/health",),
    )


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Undo logging configuration done by code under test."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)
