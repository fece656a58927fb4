# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import contentprofile  # noqa: F401
except ImportError:
    raise ImportError("contentprofile is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_log_context():
    """Drop any structlog context bound by a previous test."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def restore_logging():
    """Restore root logger handlers/level and structlog defaults after a test."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()

