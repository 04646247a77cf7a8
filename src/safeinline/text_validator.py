# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Literal payload escaping, validation and the input length guard.

Every text payload the scanner extracts goes through escape() and then
is_valid() before it is wrapped in a node. cap_length() runs once on the raw
input before anything else so worst-case scan cost stays bounded.
"""

from __future__ import annotations

import html
import re

MAX_CONTENT_LENGTH = 50_000
TRUNCATION_MARKER = "... [truncated for security]"

# C0 controls except \t \n \r, DEL + C1 controls, BOM
_INVALID_CHAR_RE = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F\uFEFF]")


def escape(text: str) -> str:
    """Replace ``< > & " '`` with entities. Applied exactly once per payload."""
    return html.escape(text, quote=True)


def is_valid(text: str) -> bool:
    """False if the payload carries NUL, other C0/C1 controls or a BOM."""
    return _INVALID_CHAR_RE.search(text) is None


def cap_length(raw: str, max_length: int = MAX_CONTENT_LENGTH) -> tuple[str, bool]:
    """Truncate ``raw`` to ``max_length`` chars, appending TRUNCATION_MARKER.

    Returns:
        (text, truncated)
    """
    if len(raw) <= max_length:
        return raw, False
    return raw[:max_length] + TRUNCATION_MARKER, True
