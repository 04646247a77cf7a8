# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""safeinline exception hierarchy.

Content problems never escape ``pipeline.render``: a disallowed tag is raised
inside the scanner and turned into the BLOCKED marker by the pipeline.
Configuration and theme problems are operator errors and do propagate.
"""

from __future__ import annotations


class SafeInlineError(Exception):
    """Base exception for all safeinline errors."""


class DisallowedTagError(SafeInlineError):
    """A tag outside the whitelist was found while scanning a segment."""

    def __init__(self, tag: str, *, position: int = 0) -> None:
        super().__init__(f"disallowed tag <{tag}> at offset {position}")
        self.tag = tag
        self.position = position


class ThemeError(SafeInlineError):
    """Unknown theme id or malformed theme file."""

    def __init__(self, message: str, *, theme_id: str = "") -> None:
        super().__init__(message)
        self.theme_id = theme_id


class ConfigError(SafeInlineError):
    """Invalid SAFEINLINE_* environment configuration."""

    def __init__(self, message: str, *, variable: str = "") -> None:
        super().__init__(message)
        self.variable = variable
