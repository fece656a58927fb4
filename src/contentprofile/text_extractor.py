# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Spacing-aware text extraction over a chosen root subtree.

Pipeline:
  1. Pick the root: main-content region if one matches, else <body>
  2. Walk depth-first (explicit stack, no recursion limit on deep trees),
     skipping noise subtrees (nav/header/footer/buttons, logo/icon/button
     class or id, ARIA navigation, script/style) but keeping their tail text
  3. Drop UI-glyph tokens ("menu", "close", "×", ...)
  4. Inject one space after every block-level child so adjacent elements
     never fuse ("<p>A</p><p>B</p>" -> "A B", not "AB")
  5. Collapse whitespace, tidy space before punctuation, cap length
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import lxml.html

from contentprofile.config import DEFAULT_LIMITS, ExtractionLimits
from contentprofile.document import Document, class_tokens, is_element
from contentprofile.sanitizer import normalize_text, tidy_punctuation
from contentprofile.vocabulary import (
    BLOCK_TAGS,
    NOISE_ARIA_LABEL_SUBSTRINGS,
    NOISE_CLASS_SUBSTRINGS,
    NOISE_CLASS_TOKENS,
    NOISE_ID_SUBSTRINGS,
    NOISE_IDS,
    NOISE_ROLES,
    NOISE_TAGS,
    SKIP_TEXT_PATTERNS,
)

logger = logging.getLogger(__name__)

# Stop collecting once this multiple of the cap is buffered; the cap is
# applied after normalization, which only ever shortens the text.
_COLLECT_HEADROOM = 2


@dataclass(frozen=True, slots=True)
class ExtractedText:
    """Normalized page text plus where it came from."""

    text: str
    region: lxml.html.HtmlElement | None  # None when the body fallback was used
    truncated: bool = False


def is_noise_element(el: lxml.html.HtmlElement) -> bool:
    """True if the element's subtree is navigation/UI chrome."""
    if el.tag in NOISE_TAGS:
        return True
    cls = el.get("class") or ""
    if cls:
        if any(t in NOISE_CLASS_TOKENS for t in class_tokens(el)):
            return True
        if any(s in cls for s in NOISE_CLASS_SUBSTRINGS):
            return True
    eid = el.get("id") or ""
    if eid and (eid in NOISE_IDS or any(s in eid for s in NOISE_ID_SUBSTRINGS)):
        return True
    if (el.get("role") or "").strip().lower() in NOISE_ROLES:
        return True
    label = el.get("aria-label") or ""
    return bool(label) and any(s in label for s in NOISE_ARIA_LABEL_SUBSTRINGS)


def should_skip_token(token: str) -> bool:
    """UI glyphs and chrome words that carry no content.

    Single characters are dropped unless alphanumeric, so stray bullets and
    separators disappear while one-letter words and digits survive.
    """
    if len(token) <= 1 and not token.isalnum():
        return True
    return any(p.fullmatch(token) for p in SKIP_TEXT_PATTERNS)


class _TokenBuffer:
    """Accumulates retained text tokens with a soft size ceiling."""

    __slots__ = ("parts", "size", "limit")

    def __init__(self, limit: int) -> None:
        self.parts: list[str] = []
        self.size = 0
        self.limit = limit

    @property
    def full(self) -> bool:
        return self.size >= self.limit

    def add_text(self, raw: str | None) -> None:
        if not raw:
            return
        token = normalize_text(raw)
        if not token or should_skip_token(token):
            return
        self.parts.append(token)
        self.size += len(token) + 1

    def add_break(self) -> None:
        self.parts.append(" ")


def walk_text(root: lxml.html.HtmlElement, max_chars: int) -> tuple[str, bool]:
    """Concatenate retained text under ``root``. Returns (raw_joined, stopped_early)."""
    buf = _TokenBuffer(max_chars * _COLLECT_HEADROOM)
    buf.add_text(root.text)
    stack = [(root, iter(root))]

    while stack and not buf.full:
        el, children = stack[-1]
        child = next(children, None)

        if child is None:
            stack.pop()
            if el is not root:
                if el.tag in BLOCK_TAGS:
                    buf.add_break()
                buf.add_text(el.tail)
            continue

        if not is_element(child):
            # comment / processing instruction: body is not text, tail is
            buf.add_text(child.tail)
            continue

        if is_noise_element(child):
            buf.add_text(child.tail)
            continue

        buf.add_text(child.text)
        stack.append((child, iter(child)))

    return " ".join(buf.parts), buf.full


def normalize_extracted(raw: str) -> str:
    """Collapse whitespace runs and drop whitespace before ``,.!?;:``."""
    return tidy_punctuation(normalize_text(raw)).strip()


def extract_text_with_spacing(root: lxml.html.HtmlElement, limits: ExtractionLimits = DEFAULT_LIMITS) -> str:
    """Spacing-aware, noise-filtered, capped text of one subtree."""
    raw, _ = walk_text(root, limits.max_text_chars)
    return normalize_extracted(raw)[: limits.max_text_chars]


def extract_page_text(doc: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> ExtractedText:
    """Extract text from the main-content region, falling back to <body>."""
    region = doc.main_region()
    root = region if region is not None else doc.body

    raw, stopped_early = walk_text(root, limits.max_text_chars)
    text = normalize_extracted(raw)

    truncated = stopped_early or len(text) > limits.max_text_chars
    if truncated:
        logger.warning(
            "Extracted text exceeds %d chars, truncating (collected %d)",
            limits.max_text_chars,
            len(text),
        )
        text = text[: limits.max_text_chars].rstrip()

    return ExtractedText(text=text, region=region, truncated=truncated)
