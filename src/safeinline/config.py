# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Environment configuration (SAFEINLINE_* variables).

Only operational knobs live here. The whitelist tables are module constants.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError
from .text_validator import MAX_CONTENT_LENGTH
from .themes import BUILTIN_THEMES, DEFAULT_THEME_ID

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class Settings:
    max_length: int = MAX_CONTENT_LENGTH
    theme: str = DEFAULT_THEME_ID
    log_level: str = "INFO"
    log_json: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (got {raw!r})", variable=name)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read SAFEINLINE_* variables.

    Raises:
        ConfigError: a variable is set to an invalid value.
    """
    env = os.environ if environ is None else environ

    max_length = MAX_CONTENT_LENGTH
    raw_max = env.get("SAFEINLINE_MAX_LENGTH", "").strip()
    if raw_max:
        try:
            max_length = int(raw_max)
        except ValueError:
            raise ConfigError(
                f"SAFEINLINE_MAX_LENGTH must be an integer (got {raw_max!r})", variable="SAFEINLINE_MAX_LENGTH"
            ) from None
        if max_length <= 0:
            raise ConfigError("SAFEINLINE_MAX_LENGTH must be positive", variable="SAFEINLINE_MAX_LENGTH")

    theme = env.get("SAFEINLINE_THEME", "").strip() or DEFAULT_THEME_ID
    if theme not in BUILTIN_THEMES:
        raise ConfigError(f"SAFEINLINE_THEME: unknown theme '{theme}'", variable="SAFEINLINE_THEME")

    log_level = env.get("SAFEINLINE_LOG_LEVEL", "").strip().upper() or "INFO"
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"SAFEINLINE_LOG_LEVEL: unknown level '{log_level}'", variable="SAFEINLINE_LOG_LEVEL")

    log_json = _parse_bool("SAFEINLINE_LOG_JSON", env.get("SAFEINLINE_LOG_JSON", ""))

    return Settings(max_length=max_length, theme=theme, log_level=log_level, log_json=log_json)
