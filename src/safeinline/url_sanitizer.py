# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Lexical scheme whitelist for link targets.

No resolution, no network. A sanitized URL is only ever used as a hover
title, so the checks here are about keeping the title inert: no script
schemes and nothing that could break out of an attribute value.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https", "mailto"})
MAX_URL_LENGTH = 2000

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
# Browsers drop these inside a scheme ("java\tscript:"), so do we before detection.
_SCHEME_NOISE_RE = re.compile(r"[\t\n\r\x00-\x1f]")
_FORBIDDEN_CHAR_RE = re.compile(r"[\s<>\"'`\x00-\x1f\x7f-\x9f]")


def sanitize(url: str) -> str | None:
    """Return the trimmed URL if it is safe to show as a title, else None.

    Relative and path-only URLs (no scheme) are accepted. A present scheme
    must be one of http, https or mailto.
    """
    if not url:
        return None
    clean = url.strip()
    if not clean or len(clean) > MAX_URL_LENGTH:
        return None

    m = _SCHEME_RE.match(_SCHEME_NOISE_RE.sub("", clean))
    if m and m.group(1).lower() not in ALLOWED_SCHEMES:
        logger.debug("URL scheme rejected: %s", m.group(1).lower())
        return None

    if _FORBIDDEN_CHAR_RE.search(clean):
        return None

    return clean


def is_safe_url(url: str) -> bool:
    return sanitize(url) is not None
