# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for text hygiene helpers."""

from __future__ import annotations

import pytest

from contentprofile.sanitizer import normalize_text, strip_control_chars, tidy_punctuation


class TestStripControlChars:
    def test_passthrough_normal_text(self):
        assert strip_control_chars("Hello, world! 123") == "Hello, world! 123"

    def test_empty_string(self):
        assert strip_control_chars("") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "he\u200bllo",  # zero-width space
            "he\u200dllo",  # zero-width joiner
            "\ufeffhello",  # BOM
            "he\u202ello",  # bidi override
            "hel\u2066lo",  # bidi isolate
            "hel\x00lo",  # NUL
            "hel\x7flo",  # DEL
        ],
    )
    def test_strips_invisible(self, raw: str):
        assert strip_control_chars(raw) == "hello"

    def test_strips_ansi(self):
        assert strip_control_chars("\x1b[1;31mred\x1b[0m") == "red"

    def test_keeps_layout_whitespace(self):
        assert strip_control_chars("a\tb\nc\rd") == "a\tb\nc\rd"

    def test_keeps_non_latin_text(self):
        assert strip_control_chars("日本語 Ελληνικά") == "日本語 Ελληνικά"


class TestNormalizeText:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, ""),
            ("", ""),
            ("  padded  ", "padded"),
            ("many\n\n  lines\tand   tabs", "many lines and tabs"),
            ("zero\u200bwidth", "zerowidth"),
            ("\u00a0nbsp\u00a0", "nbsp"),
        ],
    )
    def test_normalization(self, raw, expected: str):
        assert normalize_text(raw) == expected

    def test_cap_by_character(self):
        assert normalize_text("abcdef", max_len=3) == "abc"

    def test_cap_trims_trailing_space(self):
        assert normalize_text("abc def", max_len=4) == "abc"

    def test_cap_never_splits_code_point(self):
        assert normalize_text("日本語テキスト", max_len=2) == "日本"


class TestTidyPunctuation:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Hello , world", "Hello, world"),
            ("Done .", "Done."),
            ("Wait ! Really ?", "Wait! Really?"),
            ("a ; b : c", "a; b: c"),
            ("no change.", "no change."),
        ],
    )
    def test_tidy(self, raw: str, expected: str):
        assert tidy_punctuation(raw) == expected
