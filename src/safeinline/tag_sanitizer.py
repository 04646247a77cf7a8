# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tag and attribute whitelist for the inline tag dialect.

Only ``class="color-<name>"`` on ``<span>`` survives; every other attribute
is dropped without error. Unknown tag names are reported as not allowed and
the scanner escalates that to a whole-input block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType

ALLOWED_TAGS = frozenset({"b", "strong", "i", "em", "u", "code", "span", "br", "hr"})

# Attributes honoured per tag. Everything not listed is dropped silently.
ALLOWED_ATTRIBUTES: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        "span": frozenset({"class"}),
    }
)

KNOWN_COLORS = frozenset(
    {
        "red",
        "green",
        "blue",
        "yellow",
        "cyan",
        "magenta",
        "orange",
        "purple",
        "gray",
        "grey",
        "accent",
        "success",
        "warning",
        "error",
    }
)

COLOR_CLASS_PREFIX = "color-"
_COLOR_CLASS_RE = re.compile(r"^color-([A-Za-z0-9_\-]+)$")
_ATTR_RE = re.compile(r"""([\w\-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


@dataclass(frozen=True, slots=True)
class TagDecision:
    allowed: bool
    attributes: dict[str, str] = field(default_factory=dict)


def parse_attributes(attr_str: str) -> dict[str, str]:
    """Extract quoted ``name="value"`` pairs. Names are lower-cased, last one wins."""
    attributes: dict[str, str] = {}
    for m in _ATTR_RE.finditer(attr_str):
        value = m.group(2) if m.group(2) is not None else m.group(3)
        attributes[m.group(1).lower()] = value
    return attributes


def is_allowed_tag(tag_name: str) -> bool:
    return tag_name.lower() in ALLOWED_TAGS


def color_key_from_class(class_value: str) -> str | None:
    """``"color-red"`` -> ``"red"``. Any token is accepted structurally."""
    m = _COLOR_CLASS_RE.match(class_value.strip())
    return m.group(1).lower() if m else None


def sanitize(tag_name: str, attributes: dict[str, str] | None = None) -> TagDecision:
    """Check a tag against the whitelist and keep only honoured attributes."""
    name = tag_name.lower()
    if name not in ALLOWED_TAGS:
        return TagDecision(allowed=False)

    honoured = ALLOWED_ATTRIBUTES.get(name, frozenset())
    kept: dict[str, str] = {}
    for attr_name, attr_value in (attributes or {}).items():
        attr = attr_name.lower()
        if attr not in honoured:
            continue
        if attr == "class":
            key = color_key_from_class(attr_value)
            if key is not None:
                kept["class"] = COLOR_CLASS_PREFIX + key

    return TagDecision(allowed=True, attributes=kept)
