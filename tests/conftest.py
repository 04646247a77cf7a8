# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import safeinline  # noqa: F401
except ImportError:
    raise ImportError("safeinline is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog

from safeinline.themes import get_theme


@pytest.fixture(autouse=True)
def _reset_library_logger():
    """Undo logging_config.configure() so caplog sees records again."""
    yield
    lib = logging.getLogger("safeinline")
    lib.handlers.clear()
    lib.setLevel(logging.NOTSET)
    lib.propagate = True
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Tests never inherit SAFEINLINE_* settings from the developer shell."""
    for name in ("SAFEINLINE_MAX_LENGTH", "SAFEINLINE_THEME", "SAFEINLINE_LOG_LEVEL", "SAFEINLINE_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def modern_theme():
    return get_theme("modern")
