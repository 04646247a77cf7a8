# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for safeinline.paragraphs."""

from __future__ import annotations

from safeinline.paragraphs import split


def test_single_paragraph():
    assert split("just one") == ["just one"]


def test_single_newline_is_not_a_break():
    assert split("line one\nline two") == ["line one\nline two"]


def test_blank_lines_split():
    assert split("First\n\nSecond\n\n\nThird") == ["First", "Second", "Third"]


def test_whitespace_only_line_counts_as_blank():
    assert split("a\n   \t\nb") == ["a", "b"]


def test_segments_stripped_and_empty_dropped():
    assert split("\n\n  a  \n\n\n\n  b\n\n") == ["a", "b"]


def test_empty_and_blank_input():
    assert split("") == []
    assert split("\n\n\n") == []


def test_crlf_blank_line():
    assert split("a\r\n\r\nb") == ["a", "b"]
