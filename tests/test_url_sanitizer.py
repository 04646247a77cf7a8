# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for safeinline.url_sanitizer: scheme whitelist for link titles."""

from __future__ import annotations

import pytest

from safeinline.url_sanitizer import MAX_URL_LENGTH, is_safe_url, sanitize


class TestAllowed:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://example.com/path?q=1",
            "HTTPS://EXAMPLE.COM",
            "mailto:someone@example.com",
            "/relative/path",
            "./sibling",
            "#anchor",
            "docs/page.html",
            "//cdn.example.com/lib",
        ],
    )
    def test_accepts(self, url):
        assert sanitize(url) == url

    def test_trims_whitespace(self):
        assert sanitize("  https://example.com  ") == "https://example.com"


class TestRejected:
    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            "java\tscript:alert(1)",
            " javascript:alert(1)",
            "data:text/html,<script>alert(1)</script>",
            "data:image/png;base64,AAAA",
            "vbscript:msgbox(1)",
            "file:///etc/passwd",
            "about:blank",
            "ftp://example.com/file",
            "localhost:8080/admin",
        ],
    )
    def test_rejects_scheme(self, url):
        assert sanitize(url) is None

    @pytest.mark.parametrize(
        "url",
        [
            'https://example.com/"onmouseover="x',
            "https://example.com/<b>",
            "https://example.com/a b",
            "https://example.com/`x`",
            "https://example.com/\x00",
        ],
    )
    def test_rejects_attribute_breaking_chars(self, url):
        assert sanitize(url) is None

    def test_rejects_empty(self):
        assert sanitize("") is None
        assert sanitize("   ") is None

    def test_rejects_overlong(self):
        assert sanitize("https://example.com/" + "a" * MAX_URL_LENGTH) is None


def test_is_safe_url():
    assert is_safe_url("https://example.com")
    assert not is_safe_url("javascript:void(0)")
