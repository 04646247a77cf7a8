# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Blank-line paragraph splitting."""

from __future__ import annotations

import re

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def split(raw: str) -> list[str]:
    """Split on one or more blank lines. Segments are stripped, empty ones dropped."""
    if not raw:
        return []
    return [seg.strip() for seg in _BLANK_LINE_RE.split(raw) if seg.strip()]
