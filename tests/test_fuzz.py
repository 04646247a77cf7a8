# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Property-based fuzz tests using Hypothesis.

Verifies invariants hold for arbitrary inputs across the validator, safety
gate, scanner and full pipeline.
"""

from __future__ import annotations

import re

import pytest
from hypothesis import HealthCheck, example, given, settings
from hypothesis import strategies as st

from safeinline import NodeKind, RenderResult, SafetyVerdict
from safeinline.errors import DisallowedTagError
from safeinline.pipeline import render, render_presentation
from safeinline.safety_gate import check
from safeinline.scanner import scan
from safeinline.serializer import to_html
from safeinline.text_validator import MAX_CONTENT_LENGTH, TRUNCATION_MARKER, escape, is_valid
from safeinline.url_sanitizer import sanitize as sanitize_url

# ---------------------------------------------------------------------------
# Module-level strategies
# ---------------------------------------------------------------------------

GENERAL_TEXT = st.text(min_size=0, max_size=3000)

MARKUP_TEXT = st.text(
    alphabet=st.characters(
        categories=("L", "N", "Zs"),
        include_characters="*_`<>/[]()=\"'&;#:. \n",
    ),
    min_size=0,
    max_size=2000,
)

WHITELIST_FRAGMENT = st.sampled_from(
    [
        "**bold**",
        "*it*",
        "__u__",
        " _em_ ",
        "`code`",
        "<b>b</b>",
        "<em>e</em>",
        '<span class="color-red">r</span>',
        "<br>",
        "[t](https://example.com)",
        " plain ",
        "\n\n",
    ]
)

_HTML_TAG_RE = re.compile(r"<[^<>]*>")
_TAG_NAME_RE = re.compile(r"</?([a-z]+)")
_ATTR_NAME_RE = re.compile(r"\s([a-z\-]+)=\"")
_EMITTED_TAGS = {"span", "strong", "em", "u", "code", "br", "div"}
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")

_fuzz_settings = settings(
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
)


# ---------------------------------------------------------------------------
# TestFuzzPipeline
# ---------------------------------------------------------------------------


@pytest.mark.fuzz
class TestFuzzPipeline:
    """render() is total and its output is always safe to display."""

    @_fuzz_settings
    @given(text=GENERAL_TEXT)
    @example("\x00<script>")
    @example("<" * 100)
    def test_render_never_raises(self, text: str) -> None:
        assert isinstance(render(text), RenderResult)

    @_fuzz_settings
    @given(text=MARKUP_TEXT)
    @example("<b<i>x</i>")
    @example("[a](b)(c)")
    def test_node_text_is_valid_and_unmarked(self, text: str) -> None:
        for node in render(text).nodes:
            assert is_valid(node.text)
            assert "<" not in node.text
            assert ">" not in node.text
            assert "<" not in node.title_url

    @_fuzz_settings
    @given(text=MARKUP_TEXT)
    def test_blocked_means_single_node(self, text: str) -> None:
        result = render(text)
        if result.blocked:
            assert [n.kind for n in result.nodes] == [NodeKind.BLOCKED]
            assert result.verdict is SafetyVerdict.UNSAFE

    @_fuzz_settings
    @given(text=GENERAL_TEXT)
    def test_unsafe_gate_always_blocks(self, text: str) -> None:
        if check(text) is SafetyVerdict.UNSAFE:
            assert render(text).blocked

    @_fuzz_settings
    @given(fragments=st.lists(WHITELIST_FRAGMENT, min_size=1, max_size=30))
    def test_whitelisted_markup_never_blocked(self, fragments: list[str]) -> None:
        assert not render("".join(fragments)).blocked

    @_fuzz_settings
    @given(text=MARKUP_TEXT)
    def test_html_has_no_active_content(self, text: str) -> None:
        # Unit text is escaped, so every "<...>" left in the output is a tag we emitted.
        for tag in _HTML_TAG_RE.findall(to_html(render_presentation(text))):
            assert _TAG_NAME_RE.match(tag).group(1) in _EMITTED_TAGS
            assert set(_ATTR_NAME_RE.findall(tag)) <= {"style", "title"}


# ---------------------------------------------------------------------------
# TestFuzzComponents
# ---------------------------------------------------------------------------


@pytest.mark.fuzz
class TestFuzzComponents:
    @_fuzz_settings
    @given(text=GENERAL_TEXT)
    def test_escape_output_has_no_markup(self, text: str) -> None:
        escaped = escape(text)
        for ch in "<>\"'":
            assert ch not in escaped

    @_fuzz_settings
    @given(text=MARKUP_TEXT)
    def test_scan_only_raises_disallowed_tag(self, text: str) -> None:
        try:
            scan(text)
        except DisallowedTagError as e:
            assert e.tag
            assert 0 <= e.position < len(text)

    @_fuzz_settings
    @given(url=st.text(max_size=300))
    @example("java\tscript:alert(1)")
    def test_sanitized_url_scheme_allowed(self, url: str) -> None:
        clean = sanitize_url(url)
        if clean is None:
            return
        m = _SCHEME_RE.match(clean)
        if m:
            assert m.group(1).lower() in {"http", "https", "mailto"}

    @settings(max_examples=20, suppress_health_check=[HealthCheck.too_slow])
    @given(extra=st.integers(1, 5000))
    def test_length_cap(self, extra: int) -> None:
        result = render("x" * (MAX_CONTENT_LENGTH + extra))
        assert result.truncated
        assert result.plain_text.endswith(TRUNCATION_MARKER)

    @_fuzz_settings
    @given(text=GENERAL_TEXT)
    def test_escape_preserves_validity(self, text: str) -> None:
        if is_valid(text):
            assert is_valid(escape(text))
