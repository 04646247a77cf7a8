# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Presentation serialization: JSON, inert HTML and plain terminal text.

Unit text is already HTML-escaped by the scanner, so to_html() inserts it
as-is and to_text() unescapes it for terminals. Style values come from the
theme and are escaped again at the attribute boundary.
"""

from __future__ import annotations

import html
import json
from typing import Any

from . import NodeKind
from .presentation import Presentation, PresentationUnit


def _unit_dict(unit: PresentationUnit) -> dict[str, Any]:
    return {
        "kind": unit.kind.name.lower(),
        "tag": unit.tag,
        **({"text": unit.text} if unit.text else {}),
        **({"style": dict(unit.style)} if unit.style else {}),
        **({"title": unit.title} if unit.title else {}),
    }


def to_dict(presentation: Presentation) -> dict[str, Any]:
    """Serialize a Presentation to a plain dictionary."""
    data: dict[str, Any] = {
        "blocked": presentation.blocked,
        "truncated": presentation.truncated,
    }
    if presentation.containers:
        data["paragraphs"] = [
            {"style": dict(c.style), "units": [_unit_dict(u) for u in c.units]} for c in presentation.containers
        ]
    else:
        data["units"] = [_unit_dict(u) for u in presentation.units]
    return data


def to_json(presentation: Presentation, indent: int = 2) -> str:
    return json.dumps(to_dict(presentation), ensure_ascii=False, indent=indent)


def _style_attr(style: dict[str, str]) -> str:
    if not style:
        return ""
    css = "; ".join(f"{prop}: {value}" for prop, value in style.items())
    return f' style="{html.escape(css, quote=True)}"'


def _unit_html(unit: PresentationUnit) -> str:
    if unit.tag == "br":
        return "<br>"
    title = f' title="{html.escape(html.unescape(unit.title), quote=True)}"' if unit.title else ""
    return f"<{unit.tag}{_style_attr(unit.style)}{title}>{unit.text}</{unit.tag}>"


def to_html(presentation: Presentation) -> str:
    """Render inert HTML: no href, no event attributes, only whitelisted tags."""
    if presentation.containers:
        body = "".join(
            f"<div{_style_attr(c.style)}>{''.join(_unit_html(u) for u in c.units)}</div>"
            for c in presentation.containers
        )
    else:
        body = "".join(_unit_html(u) for u in presentation.units)
    return f"<span>{body}</span>"


def to_text(presentation: Presentation) -> str:
    """Plain text for terminals: entities resolved, <br> as newline."""

    def _line(units: list[PresentationUnit]) -> str:
        return "".join("\n" if u.kind is NodeKind.LINE_BREAK else html.unescape(u.text) for u in units)

    if presentation.containers:
        return "\n\n".join(_line(c.units) for c in presentation.containers)
    return _line(presentation.units)
