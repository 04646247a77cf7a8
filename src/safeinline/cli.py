# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""safeinline CLI: render, check and themes commands.

Usage:
    safeinline render [--file PATH] [--theme ID | --theme-file PATH] [--format json|html|text] [TEXT]
    safeinline check [--file PATH] [TEXT]
    safeinline themes
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import SafetyVerdict
from .config import Settings, load_settings
from .errors import SafeInlineError
from .logging_config import configure


def _read_input(args: argparse.Namespace) -> str:
    """Content from the positional TEXT, --file or stdin, in that order."""
    if getattr(args, "text", None) is not None:
        return args.text
    if getattr(args, "file", None):
        try:
            return Path(args.file).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SafeInlineError(f"cannot read {args.file}: {e.strerror}") from e
    return sys.stdin.read()


def cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    """Render content and print it in the requested format."""
    from .pipeline import render_presentation
    from .serializer import to_html, to_json, to_text
    from .themes import get_theme, load_theme_file

    theme = load_theme_file(args.theme_file) if args.theme_file else get_theme(args.theme or settings.theme)
    presentation = render_presentation(_read_input(args), theme, max_length=settings.max_length)

    if args.format == "html":
        print(to_html(presentation))
    elif args.format == "text":
        print(to_text(presentation))
    else:
        print(to_json(presentation))
    return 0


def cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    """Run the safety gate only. Exit code 2 when the content is unsafe."""
    from . import safety_gate
    from .text_validator import cap_length

    text, _ = cap_length(_read_input(args), settings.max_length)
    verdict = safety_gate.check(text)
    if args.json:
        print(json.dumps({"verdict": verdict.name, "rules": safety_gate.explain(text)}))
    else:
        print(verdict.name)
        for rule in safety_gate.explain(text):
            print(f"  - {rule}")
    return 2 if verdict is SafetyVerdict.UNSAFE else 0


def cmd_themes(args: argparse.Namespace, settings: Settings) -> int:
    """List built-in themes."""
    from .themes import list_themes

    for theme in list_themes():
        marker = "*" if theme.id == settings.theme else " "
        print(f"{marker} {theme.id:<14} {theme.name} ({theme.era})")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Secure inline content renderer", prog="safeinline")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_render = subparsers.add_parser("render", help="Sanitize and render content")
    p_render.add_argument("text", nargs="?", help="Content (default: --file or stdin)")
    p_render.add_argument("--file", type=str, metavar="PATH", help="Read content from file")
    p_theme = p_render.add_mutually_exclusive_group()
    p_theme.add_argument("--theme", type=str, metavar="ID", help="Built-in theme id")
    p_theme.add_argument("--theme-file", type=str, metavar="PATH", help="YAML theme definition")
    p_render.add_argument("--format", choices=["json", "html", "text"], default="json", help="Output format")

    p_check = subparsers.add_parser("check", help="Run the safety gate only")
    p_check.add_argument("text", nargs="?", help="Content (default: --file or stdin)")
    p_check.add_argument("--file", type=str, metavar="PATH", help="Read content from file")
    p_check.add_argument("--json", action="store_true", help="Machine-readable output")

    subparsers.add_parser("themes", help="List built-in themes")

    commands = {"render": cmd_render, "check": cmd_check, "themes": cmd_themes}
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except SafeInlineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure(json_output=settings.log_json, level="DEBUG" if args.verbose else settings.log_level)

    try:
        code = commands[args.command](args, settings)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except SafeInlineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
