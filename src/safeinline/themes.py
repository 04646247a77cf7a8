# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Color/style tables consumed by the presentation mapper.

Four built-in era themes plus user themes loaded from YAML. Theme values end
up in inline ``style`` attributes, so every value read from a file is checked
against a narrow CSS value pattern before it is accepted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import ThemeError

logger = logging.getLogger(__name__)

DEFAULT_FOREGROUND = "#ffffff"
DEFAULT_THEME_ID = "modern"

# Same palette for every built-in theme; the semantic keys come from the theme.
_CONTENT_PALETTE: dict[str, str] = {
    "red": "#ff6b6b",
    "green": "#51cf66",
    "blue": "#74c0fc",
    "yellow": "#ffd43b",
    "cyan": "#66d9e8",
    "magenta": "#f783ac",
    "orange": "#ffa94d",
    "purple": "#b197fc",
    "gray": "#adb5bd",
    "grey": "#adb5bd",
}

_CSS_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{3,8}|rgba?\([0-9\s.,%]+\)|[a-zA-Z]+)$")
_CSS_LENGTH_RE = re.compile(r"^(0|[0-9.]+(px|em|rem|%)(\s+[0-9.]+(px|em|rem|%)){0,3})$")
_CSS_BORDER_RE = re.compile(
    r"^(none|[0-9.]+px\s+(solid|dashed|dotted)\s+(#[0-9a-fA-F]{3,8}|rgba?\([0-9\s.,%]+\)|[a-zA-Z]+))$"
)
_OPACITY_RE = re.compile(r"^(0(\.[0-9]+)?|1(\.0+)?)$")


@dataclass(frozen=True, slots=True)
class Theme:
    id: str
    name: str
    era: str = ""
    foreground: str = DEFAULT_FOREGROUND
    colors: MappingProxyType[str, str] = field(default_factory=lambda: MappingProxyType({}))
    code_background: str = "rgba(255, 255, 255, 0.08)"
    code_color: str = DEFAULT_FOREGROUND
    code_border: str = "none"
    code_padding: str = "1px 4px"
    code_radius: str = "3px"
    link_color: str = DEFAULT_FOREGROUND
    emphasis_opacity: str = "0.85"
    paragraph_margin: str = "0.8em"

    def color(self, key: str) -> str:
        """Look up a color key, falling back to the theme foreground."""
        return self.colors.get(key, self.foreground or DEFAULT_FOREGROUND)


def _colors(accent: str, success: str, warning: str, error: str) -> MappingProxyType[str, str]:
    return MappingProxyType(
        {**_CONTENT_PALETTE, "accent": accent, "success": success, "warning": warning, "error": error}
    )


BUILTIN_THEMES: MappingProxyType[str, Theme] = MappingProxyType(
    {
        "mainframe70s": Theme(
            id="mainframe70s",
            name="70s Mainframe",
            era="1970s",
            foreground="#33FF33",
            colors=_colors("#44DD44", "#33FF33", "#FFFF33", "#FF3333"),
            code_background="#003300",
            code_color="#66FF66",
            code_border="1px solid #22AA22",
            link_color="#44DD44",
        ),
        "pc80s": Theme(
            id="pc80s",
            name="80s Personal Computer",
            era="1980s",
            foreground="#FFFFFF",
            colors=_colors("#55FFFF", "#55FF55", "#FFFF55", "#FF5555"),
            code_background="#000055",
            code_color="#FFFF00",
            code_border="1px solid #AAAAAA",
            code_radius="0",
            link_color="#55FFFF",
        ),
        "bbs90s": Theme(
            id="bbs90s",
            name="90s BBS",
            era="1990s",
            foreground="#CCCCCC",
            colors=_colors("#00AAAA", "#00FF00", "#FFFF00", "#FF0000"),
            code_background="#333333",
            code_color="#FF00FF",
            code_border="1px dashed #AAAA00",
            link_color="#00AAAA",
        ),
        "modern": Theme(
            id="modern",
            name="Modern Terminal",
            era="2020s",
            foreground="#D4D4D4",
            colors=_colors("#00AACC", "#4EC9B0", "#DCDCAA", "#F44747"),
            code_background="#264F78",
            code_color="#D4D4D4",
            code_border="1px solid #569CD6",
            link_color="#569CD6",
            paragraph_margin="1em",
        ),
    }
)


def get_theme(theme_id: str) -> Theme:
    """Return a built-in theme.

    Raises:
        ThemeError: unknown theme id.
    """
    theme = BUILTIN_THEMES.get(theme_id)
    if theme is None:
        raise ThemeError(
            f"unknown theme '{theme_id}' (available: {', '.join(sorted(BUILTIN_THEMES))})",
            theme_id=theme_id,
        )
    return theme


def list_themes() -> list[Theme]:
    return list(BUILTIN_THEMES.values())


def _checked(value: Any, pattern: re.Pattern[str], what: str, theme_id: str) -> str:
    if not isinstance(value, str) or not pattern.match(value.strip()):
        raise ThemeError(f"invalid {what} value {value!r} in theme '{theme_id}'", theme_id=theme_id)
    return value.strip()


def theme_from_mapping(data: dict[str, Any], *, base: Theme | None = None) -> Theme:
    """Build a Theme from a plain mapping, inheriting unset values from ``base``.

    Expected shape (every key optional except ``id``)::

        id: solarized
        name: Solarized Dark
        foreground: "#839496"
        colors: {red: "#dc322f", accent: "#268bd2"}
        code: {background: "#073642", color: "#93a1a1", border: "1px solid #586e75"}
        link: {color: "#268bd2"}
        emphasis_opacity: "0.8"
        paragraph_margin: "1em"
    """
    if not isinstance(data, dict):
        raise ThemeError("theme definition must be a mapping")
    theme_id = data.get("id")
    if not isinstance(theme_id, str) or not theme_id.strip():
        raise ThemeError("theme definition needs a non-empty 'id'")
    theme_id = theme_id.strip()
    base = base or BUILTIN_THEMES[DEFAULT_THEME_ID]

    raw_colors = data.get("colors") or {}
    if not isinstance(raw_colors, dict):
        raise ThemeError(f"'colors' must be a mapping in theme '{theme_id}'", theme_id=theme_id)
    colors = dict(base.colors)
    for key, value in raw_colors.items():
        colors[str(key).lower()] = _checked(value, _CSS_COLOR_RE, f"color '{key}'", theme_id)

    code = data.get("code") or {}
    link = data.get("link") or {}
    if not isinstance(code, dict) or not isinstance(link, dict):
        raise ThemeError(f"'code' and 'link' must be mappings in theme '{theme_id}'", theme_id=theme_id)

    updates: dict[str, Any] = {
        "id": theme_id,
        "name": str(data.get("name") or theme_id),
        "colors": MappingProxyType(colors),
    }
    if "era" in data:
        updates["era"] = str(data["era"])
    if "foreground" in data:
        updates["foreground"] = _checked(data["foreground"], _CSS_COLOR_RE, "foreground", theme_id)
    if "background" in code:
        updates["code_background"] = _checked(code["background"], _CSS_COLOR_RE, "code.background", theme_id)
    if "color" in code:
        updates["code_color"] = _checked(code["color"], _CSS_COLOR_RE, "code.color", theme_id)
    if "border" in code:
        updates["code_border"] = _checked(code["border"], _CSS_BORDER_RE, "code.border", theme_id)
    if "padding" in code:
        updates["code_padding"] = _checked(code["padding"], _CSS_LENGTH_RE, "code.padding", theme_id)
    if "radius" in code:
        updates["code_radius"] = _checked(code["radius"], _CSS_LENGTH_RE, "code.radius", theme_id)
    if "color" in link:
        updates["link_color"] = _checked(link["color"], _CSS_COLOR_RE, "link.color", theme_id)
    if "emphasis_opacity" in data:
        updates["emphasis_opacity"] = _checked(str(data["emphasis_opacity"]), _OPACITY_RE, "emphasis_opacity", theme_id)
    if "paragraph_margin" in data:
        updates["paragraph_margin"] = _checked(
            str(data["paragraph_margin"]), _CSS_LENGTH_RE, "paragraph_margin", theme_id
        )

    return replace(base, **updates)


def load_theme_file(path: str | Path) -> Theme:
    """Load a YAML theme definition.

    Raises:
        ThemeError: unreadable file, invalid YAML or invalid theme values.
    """
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ThemeError(f"cannot read theme file {p}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ThemeError(f"invalid YAML in theme file {p}") from e

    theme = theme_from_mapping(data)
    logger.info("Loaded theme '%s' from %s", theme.id, p)
    return theme
