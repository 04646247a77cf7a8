# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Left-to-right inline scanner for one paragraph segment.

At each position the scanner tries, in fixed priority order, the patterns
that can start with the current character:

    **bold**  *italic*  __underline__  _emphasis_  `code`
    <tag ...>inner</tag>   <br> / <hr>   [text](url)

and otherwise consumes plain text up to the next character that could start
one of them. Every iteration advances by at least one character, so any
input (dangling ``**``, lone ``<``) terminates in O(n) iterations.

Markup is flat: payloads are never re-scanned, so ``**a _b_ c**`` is one
BOLD node with the literal text ``a _b_ c``.

Tag and link patterns stop at the next ``<`` or ``[``, and closing tags are
looked up once per tag name, so a run of unclosed openers (``[[[[``,
``<b><b><b>``) cannot turn each attempt into a scan to the end of the segment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import partial

from . import LINE_BREAK_NODE, InlineNode, NodeKind
from . import tag_sanitizer, url_sanitizer
from .errors import DisallowedTagError
from .text_validator import escape, is_valid

logger = logging.getLogger(__name__)

_SPECIAL_RE = re.compile(r"[*_`<\[]")

_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_UNDERLINE_RE = re.compile(r"__([^_]+)__")
_EMPHASIS_RE = re.compile(r"_([^_]+)_")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]\[]+)\]\(([^)]{1,2000})\)")

_OPEN_TAG_RE = re.compile(r"<([A-Za-z][\w:\-]*)([^<>]*)>")
_SELF_CLOSING_RE = re.compile(r"<(br|hr)\s*/?>", re.IGNORECASE)
# Anything a browser would treat as markup: <name ...>, </name>, <!...>, <?...>
_TAG_LIKE_RE = re.compile(r"<\s*/?\s*([A-Za-z][\w:\-]*)[^<>]*>|<([!?])[^<>]*>")
# An opener with attributes whose ">" never comes: <iframe src="..."
_UNTERMINATED_TAG_RE = re.compile(r"<([A-Za-z][\w:\-]*)[\s/][^<>]*?=")

# snake_case guard: one char before the underscore plus a short lookahead
_INTRAWORD_RE = re.compile(r"\w_\w")
_EMPHASIS_WINDOW = 10

_TAG_KINDS: dict[str, NodeKind] = {
    "b": NodeKind.BOLD,
    "strong": NodeKind.BOLD,
    "i": NodeKind.ITALIC,
    "em": NodeKind.ITALIC,
    "u": NodeKind.UNDERLINE,
    "code": NodeKind.CODE,
}


@dataclass(frozen=True, slots=True)
class _Match:
    """A consumed span. ``node`` is None when the span produces no output."""

    node: InlineNode | None
    end: int


def _payload(kind: NodeKind, raw_text: str, end: int, *, color_key: str = "", title_url: str = "") -> _Match:
    text = escape(raw_text)
    if not is_valid(text):
        logger.debug("Payload dropped: kind=%s end=%d", kind.name, end)
        return _Match(None, end)
    return _Match(InlineNode(kind, text, color_key=color_key, title_url=title_url), end)


def _match_star(segment: str, pos: int) -> _Match | None:
    m = _BOLD_RE.match(segment, pos)
    if m:
        return _payload(NodeKind.BOLD, m.group(1), m.end())
    m = _ITALIC_RE.match(segment, pos)
    if m:
        return _payload(NodeKind.ITALIC, m.group(1), m.end())
    return None


def _match_underscore(segment: str, pos: int) -> _Match | None:
    m = _UNDERLINE_RE.match(segment, pos)
    if m:
        return _payload(NodeKind.UNDERLINE, m.group(1), m.end())
    m = _EMPHASIS_RE.match(segment, pos)
    if m is None:
        return None
    window = segment[max(0, pos - 1) : pos + _EMPHASIS_WINDOW]
    if _INTRAWORD_RE.search(window):
        return None
    return _payload(NodeKind.EMPHASIS, m.group(1), m.end())


def _match_code(segment: str, pos: int) -> _Match | None:
    m = _CODE_RE.match(segment, pos)
    if m:
        return _payload(NodeKind.CODE, m.group(1), m.end())
    return None


def _closer_after(
    segment: str, name: str, start: int, closers: dict[str, tuple[int, int] | None]
) -> tuple[int, int] | None:
    """Span of the first ``</name>`` at or after ``start``.

    Results are cached per tag name for one scan. Scanning only moves
    forward, so a cached miss, or a cached hit at or past ``start``, still holds.
    """
    if name in closers:
        cached = closers[name]
        if cached is None or cached[0] >= start:
            return cached
    m = re.compile(rf"</{re.escape(name)}\s*>", re.IGNORECASE).search(segment, start)
    closers[name] = (m.start(), m.end()) if m else None
    return closers[name]


def _match_tag(segment: str, pos: int, closers: dict[str, tuple[int, int] | None]) -> _Match | None:
    m = _OPEN_TAG_RE.match(segment, pos)
    if m:
        name = m.group(1).lower()
        decision = tag_sanitizer.sanitize(name, tag_sanitizer.parse_attributes(m.group(2)))
        if not decision.allowed:
            raise DisallowedTagError(name, position=pos)

        closer = _closer_after(segment, name, m.end(), closers)
        if closer is not None:
            inner = segment[m.end() : closer[0]]
            if name == "span" and "class" in decision.attributes:
                color_key = tag_sanitizer.color_key_from_class(decision.attributes["class"]) or ""
                return _payload(NodeKind.COLOR_SPAN, inner, closer[1], color_key=color_key)
            return _payload(_TAG_KINDS.get(name, NodeKind.PLAIN_TEXT), inner, closer[1])

        m = _SELF_CLOSING_RE.match(segment, pos)
        if m:
            if m.group(1).lower() == "br":
                return _Match(LINE_BREAK_NODE, m.end())
            return _Match(None, m.end())
        # Unpaired whitelisted tag: plain text.
        return None

    m = _TAG_LIKE_RE.match(segment, pos)
    name = (m.group(1) or m.group(2)) if m else None
    if name is None:
        m = _UNTERMINATED_TAG_RE.match(segment, pos)
        name = m.group(1) if m else None
    if name is not None and not tag_sanitizer.is_allowed_tag(name):
        raise DisallowedTagError(name.lower(), position=pos)
    # A "<" that starts no tag is plain text.
    return None


def _match_link(segment: str, pos: int) -> _Match | None:
    m = _LINK_RE.match(segment, pos)
    if m is None:
        return None
    safe_url = url_sanitizer.sanitize(m.group(2))
    if safe_url is None:
        # Not a link: re-scan the same span as plain text.
        return None
    return _payload(NodeKind.LINK, m.group(1), m.end(), title_url=escape(safe_url))


_DISPATCH = {
    "*": _match_star,
    "_": _match_underscore,
    "`": _match_code,
    "[": _match_link,
}


class _NodeBuilder:
    """Collects nodes, merging adjacent plain text runs in one join."""

    def __init__(self) -> None:
        self.nodes: list[InlineNode] = []
        self._run: list[str] = []

    def add(self, node: InlineNode) -> None:
        if node.kind is NodeKind.PLAIN_TEXT:
            self._run.append(node.text)
            return
        self._flush()
        self.nodes.append(node)

    def _flush(self) -> None:
        if self._run:
            self.nodes.append(InlineNode(NodeKind.PLAIN_TEXT, "".join(self._run)))
            self._run.clear()

    def build(self) -> list[InlineNode]:
        self._flush()
        return self.nodes


def scan(segment: str) -> list[InlineNode]:
    """Turn one segment into flat nodes.

    The caller must only pass segments of input the safety gate judged SAFE.

    Raises:
        DisallowedTagError: a tag outside the whitelist was encountered. The
            caller is expected to block the whole input, not just this tag.
    """
    builder = _NodeBuilder()
    dispatch = {**_DISPATCH, "<": partial(_match_tag, closers={})}
    pos = 0
    length = len(segment)

    while pos < length:
        matcher = dispatch.get(segment[pos])
        match = matcher(segment, pos) if matcher else None

        if match is not None and match.end > pos:
            if match.node is not None:
                builder.add(match.node)
            pos = match.end
            continue

        nxt = _SPECIAL_RE.search(segment, pos + 1)
        end = nxt.start() if nxt else length
        plain = _payload(NodeKind.PLAIN_TEXT, segment[pos:end], end)
        if plain.node is not None:
            builder.add(plain.node)
        pos = end

    return builder.build()
