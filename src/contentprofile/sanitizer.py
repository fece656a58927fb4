# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Text hygiene for every string that reaches a ContentProfile.

Page text is untrusted: it can carry zero-width characters, bidi overrides,
ANSI escapes and NUL bytes that confuse downstream scoring or break the
HTML parser outright.

1. strip_control_chars(): raw HTML before parsing (keeps newlines/tabs)
2. normalize_text(): short and long fields: strip, collapse, trim, cap
"""

from __future__ import annotations

import re

# Zero-width chars, bidi overrides, interlinear annotations, C0/C1 controls.
# \t \n \r are kept; they collapse as whitespace later.
_CONTROL_CHAR_RE = re.compile(
    r"[\u200B-\u200F\u202A-\u202E\u2060-\u2069\uFEFF\uFFF9-\uFFFB"
    r"\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]"
)

# Lone surrogates cannot be encoded for the parser
_SURROGATE_RE = re.compile(r"[\uD800-\uDFFF]")

_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")

_WHITESPACE_RE = re.compile(r"\s+")

# Whitespace directly before closing punctuation ("word ." -> "word.")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?;:])")


def strip_control_chars(text: str) -> str:
    """Remove ANSI escapes, control/zero-width characters and lone surrogates."""
    if not text:
        return text
    text = _ANSI_ESCAPE_RE.sub("", text)
    text = _CONTROL_CHAR_RE.sub("", text)
    return _SURROGATE_RE.sub("", text)


def normalize_text(text: str | None, max_len: int | None = None) -> str:
    """Sanitize a field value: strip controls, collapse whitespace, trim, cap.

    Truncation is by character, so it never splits a code point.
    """
    if not text:
        return ""
    text = strip_control_chars(text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if max_len is not None and len(text) > max_len:
        text = text[:max_len].rstrip()
    return text


def tidy_punctuation(text: str) -> str:
    """Drop stray whitespace preceding ``, . ! ? ; :``."""
    return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
