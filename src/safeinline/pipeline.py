# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Top-level entry: length guard -> safety gate -> paragraphs -> scanner.

``render`` never raises for any input. The two whole-input rejection paths
(safety gate trip, disallowed tag) both end in a single BLOCKED node.
"""

from __future__ import annotations

import logging

from . import ParagraphBlock, RenderResult, SafetyVerdict
from . import paragraphs, safety_gate, scanner
from .errors import DisallowedTagError
from .presentation import Presentation, present
from .text_validator import MAX_CONTENT_LENGTH, cap_length
from .themes import DEFAULT_THEME_ID, Theme, get_theme

logger = logging.getLogger(__name__)


def render(raw: object, *, max_length: int = MAX_CONTENT_LENGTH) -> RenderResult:
    """Sanitize and parse untrusted content into paragraphs of inline nodes.

    Args:
        raw: Untrusted content. None, non-strings and "" give an empty result.
        max_length: Length cap applied before anything else.

    Returns:
        RenderResult. ``blocked`` is True when the whole input was rejected,
        in which case the only node is BLOCKED.
    """
    if not isinstance(raw, str):
        if raw is not None:
            logger.warning("Non-string content ignored: %s", type(raw).__name__)
        return RenderResult()
    if not raw:
        return RenderResult()

    text, truncated = cap_length(raw, max_length)
    if truncated:
        logger.info("Content truncated: %d -> %d chars", len(raw), max_length)

    if safety_gate.check(text) is SafetyVerdict.UNSAFE:
        logger.warning("Content blocked by safety gate: rules=%s", ",".join(safety_gate.explain(text)))
        return RenderResult.blocked_result(verdict=SafetyVerdict.UNSAFE, truncated=truncated)

    try:
        blocks = [ParagraphBlock(nodes=scanner.scan(seg)) for seg in paragraphs.split(text)]
    except DisallowedTagError as e:
        logger.warning("Content blocked: disallowed tag <%s> at offset %d", e.tag, e.position)
        return RenderResult.blocked_result(verdict=SafetyVerdict.UNSAFE, truncated=truncated)

    return RenderResult(paragraphs=blocks, truncated=truncated)


def render_presentation(
    raw: object,
    theme: Theme | None = None,
    *,
    max_length: int = MAX_CONTENT_LENGTH,
) -> Presentation:
    """render() followed by the presentation mapper (default theme: modern)."""
    return present(render(raw, max_length=max_length), theme or get_theme(DEFAULT_THEME_ID))
