# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""safeinline: secure inline content sanitization and rendering.

Turns untrusted chat text (model output, user input, stored history) into a
flat sequence of typed, pre-escaped display nodes:
- a small markdown subset (**bold**, *italic*, __underline__, _emphasis_, `code`)
- a whitelisted tag subset (<b>, <i>, <u>, <code>, <span class="color-*">, <br>)
- inert links ([text](url) rendered as styled text with a title only)

Anything that looks like script injection collapses to a single BLOCKED node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class SafetyVerdict(Enum):
    SAFE = auto()
    UNSAFE = auto()


class NodeKind(Enum):
    PLAIN_TEXT = auto()
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    EMPHASIS = auto()
    CODE = auto()
    COLOR_SPAN = auto()
    LINE_BREAK = auto()
    LINK = auto()
    BLOCKED = auto()


@dataclass(frozen=True, slots=True)
class InlineNode:
    """A single flat display node. ``text`` is always HTML-escaped."""

    kind: NodeKind
    text: str = ""
    color_key: str = ""  # COLOR_SPAN only, e.g. "red"
    title_url: str = ""  # LINK only, already URL-sanitized

    def __str__(self) -> str:
        if self.kind is NodeKind.COLOR_SPAN:
            return f"{self.kind.name}[{self.color_key}]({self.text!r})"
        if self.kind is NodeKind.LINK:
            return f"{self.kind.name}({self.text!r} -> {self.title_url})"
        if self.kind in (NodeKind.LINE_BREAK, NodeKind.BLOCKED):
            return self.kind.name
        return f"{self.kind.name}({self.text!r})"


BLOCKED_NODE = InlineNode(NodeKind.BLOCKED)
LINE_BREAK_NODE = InlineNode(NodeKind.LINE_BREAK)


@dataclass
class ParagraphBlock:
    """Nodes scanned from one blank-line-delimited segment."""

    nodes: list[InlineNode] = field(default_factory=list)


@dataclass
class RenderResult:
    """Outcome of one pipeline invocation."""

    paragraphs: list[ParagraphBlock] = field(default_factory=list)
    verdict: SafetyVerdict = SafetyVerdict.SAFE
    blocked: bool = False
    truncated: bool = False

    @property
    def nodes(self) -> list[InlineNode]:
        return [node for para in self.paragraphs for node in para.nodes]

    @property
    def is_multi_paragraph(self) -> bool:
        return len(self.paragraphs) > 1

    @property
    def plain_text(self) -> str:
        """Concatenated node text (escaped), mostly useful for tests and logs."""
        return "".join(node.text for node in self.nodes)

    @classmethod
    def blocked_result(cls, *, verdict: SafetyVerdict, truncated: bool = False) -> RenderResult:
        return cls(
            paragraphs=[ParagraphBlock(nodes=[BLOCKED_NODE])],
            verdict=verdict,
            blocked=True,
            truncated=truncated,
        )
