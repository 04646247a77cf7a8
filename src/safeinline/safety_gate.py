# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Pre-flight classifier run over the whole input before any scanning.

The scanner only defends against markup it recognises. This gate catches the
rest (broken tags, fragments, encoded payloads) with plain pattern scans and
fails closed: a single hit marks the whole input UNSAFE.

Rules run on the raw text and on two decoded copies where HTML entities and
percent-escapes are resolved: one with whitespace/control noise collapsed to
a single space, one with it removed. ``java&#x09;script:``, ``%3Cscript``
and ``<b&#32;onclick=`` all trip.
"""

from __future__ import annotations

import html
import re
from urllib.parse import unquote

from . import SafetyVerdict

# Allowed: \t \n \r. Everything else in C0, DEL/C1, BOM, bidi overrides/isolates.
_DISALLOWED_CHAR_RE = re.compile(
    r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F\uFEFF\u202A-\u202E\u2066-\u2069]"
)

_MARKER_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("script_tag", re.compile(r"<\s*/?\s*script", re.IGNORECASE)),
    (
        "encoded_script_tag",
        re.compile(r"(?:\\u003c|\\x3c|&lt;?|&#0*60;?|&#x0*3c;?|%3c)\s*/?\s*script", re.IGNORECASE),
    ),
    ("event_handler", re.compile(r"<[^<>]*?[\s/\"']on[a-z]+\s*=", re.IGNORECASE)),
    ("javascript_scheme", re.compile(r"javascript\s*:", re.IGNORECASE)),
    ("vbscript_scheme", re.compile(r"vbscript\s*:", re.IGNORECASE)),
    ("html_data_uri", re.compile(r"data\s*:\s*text/html", re.IGNORECASE)),
    ("eval_call", re.compile(r"\beval\s*\(", re.IGNORECASE)),
    ("css_expression", re.compile(r"\bexpression\s*\(", re.IGNORECASE)),
)

_NOISE_RE = re.compile(r"[\s\u0000-\u001F]+")


def _decoded_variants(raw: str) -> tuple[str, str]:
    """Resolve entities/percent-escapes, then normalise whitespace noise.

    The spaced copy keeps one space per run so attribute separators survive
    (``<b&#32;onclick=``); the compact copy drops them so split schemes join
    up again (``java&#x09;script:``).
    """
    decoded = html.unescape(html.unescape(unquote(raw)))
    spaced = _NOISE_RE.sub(" ", decoded)
    return spaced, spaced.replace(" ", "")


def explain(raw: str) -> list[str]:
    """Names of every rule the input trips. Empty list means SAFE."""
    if not raw:
        return []

    hits: list[str] = []
    if _DISALLOWED_CHAR_RE.search(raw):
        hits.append("control_char")

    variants = (raw, *_decoded_variants(raw))
    for name, pattern in _MARKER_RULES:
        if any(pattern.search(text) for text in variants):
            hits.append(name)
    return hits


def check(raw: str) -> SafetyVerdict:
    """Classify the length-capped input. Absence of any hit is the only path to SAFE."""
    return SafetyVerdict.UNSAFE if explain(raw) else SafetyVerdict.SAFE
