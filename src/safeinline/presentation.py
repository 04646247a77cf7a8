# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Node-to-presentation mapping.

Pure functions from InlineNode + Theme to display units (tag, text, style,
title). No validation happens here: by the time nodes arrive every safety
decision has been made, and text is already escaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import InlineNode, NodeKind, RenderResult
from .themes import Theme

BLOCKED_MESSAGE = "[Content blocked for security]"
CODE_FONT = 'JetBrains Mono, Monaco, Consolas, "Courier New", monospace'


@dataclass(frozen=True, slots=True)
class PresentationUnit:
    """One renderable element. ``title`` is only ever set for links."""

    kind: NodeKind
    tag: str  # span, strong, em, u, code, br
    text: str = ""
    style: dict[str, str] = field(default_factory=dict)
    title: str = ""


@dataclass
class Container:
    """Paragraph wrapper, only emitted for multi-paragraph content."""

    units: list[PresentationUnit]
    style: dict[str, str] = field(default_factory=dict)


@dataclass
class Presentation:
    units: list[PresentationUnit] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)
    blocked: bool = False
    truncated: bool = False

    @property
    def all_units(self) -> list[PresentationUnit]:
        if self.containers:
            return [u for c in self.containers for u in c.units]
        return list(self.units)


def _code_style(theme: Theme) -> dict[str, str]:
    return {
        "font-family": CODE_FONT,
        "background-color": theme.code_background,
        "color": theme.code_color,
        "padding": theme.code_padding,
        "border-radius": theme.code_radius,
        "font-size": "0.9em",
        "border": theme.code_border,
    }


def present_node(node: InlineNode, theme: Theme) -> PresentationUnit:
    """Map one node to its presentation unit."""
    kind = node.kind
    if kind is NodeKind.BOLD:
        return PresentationUnit(kind, "strong", node.text, {"font-weight": "bold"})
    if kind is NodeKind.ITALIC:
        return PresentationUnit(kind, "em", node.text, {"font-style": "italic"})
    if kind is NodeKind.UNDERLINE:
        return PresentationUnit(kind, "u", node.text, {"text-decoration": "underline"})
    if kind is NodeKind.EMPHASIS:
        return PresentationUnit(kind, "em", node.text, {"font-style": "italic", "opacity": theme.emphasis_opacity})
    if kind is NodeKind.CODE:
        return PresentationUnit(kind, "code", node.text, _code_style(theme))
    if kind is NodeKind.COLOR_SPAN:
        return PresentationUnit(kind, "span", node.text, {"color": theme.color(node.color_key)})
    if kind is NodeKind.LINE_BREAK:
        return PresentationUnit(kind, "br")
    if kind is NodeKind.LINK:
        # Looks like a link, is not one: no href, no pointer cursor.
        style = {"color": theme.link_color, "text-decoration": "underline", "cursor": "default"}
        return PresentationUnit(kind, "span", node.text, style, title=node.title_url)
    if kind is NodeKind.BLOCKED:
        return PresentationUnit(kind, "span", BLOCKED_MESSAGE, {"color": theme.color("red")})
    return PresentationUnit(NodeKind.PLAIN_TEXT, "span", node.text)


def present(result: RenderResult, theme: Theme) -> Presentation:
    """Map a whole render result.

    Single paragraph (or blocked) content stays flat; several paragraphs get
    one container each, with a bottom margin on all but the last.
    """
    presentation = Presentation(blocked=result.blocked, truncated=result.truncated)
    if not result.is_multi_paragraph:
        presentation.units = [present_node(n, theme) for n in result.nodes]
        return presentation

    last = len(result.paragraphs) - 1
    for i, para in enumerate(result.paragraphs):
        margin = theme.paragraph_margin if i < last else "0"
        presentation.containers.append(
            Container(units=[present_node(n, theme) for n in para.nodes], style={"margin-bottom": margin})
        )
    return presentation
