# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for the safeinline CLI and embedding apps.

Library modules only use ``logging.getLogger(__name__)``; nothing is printed
until a host calls ``configure()``. Leaf module, no safeinline imports.
"""

from __future__ import annotations

import logging
import sys

import structlog

_LIBRARY_LOGGER = "safeinline"


def configure(*, json_output: bool = False, level: str = "INFO", stream=None) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Args:
        json_output: True for JSON lines, False for the human-readable console renderer.
        level: Level for the ``safeinline`` logger tree (default INFO).
        stream: Output stream, stderr when omitted.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    lib_logger = logging.getLogger(_LIBRARY_LOGGER)
    lib_logger.handlers.clear()
    lib_logger.addHandler(handler)
    lib_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    lib_logger.propagate = False
