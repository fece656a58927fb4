# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Static detection vocabularies shared read-only across extraction calls.

Pure literal tables (tuples / frozensets): no locale parameter, no mutation.
Classifier-specific marker lists live next to their rules instead.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Stoplist, excluded from topic frequency, key terms and product names
# ---------------------------------------------------------------------------

COMMON_WORDS: frozenset[str] = frozenset(
    {
        "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
        "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
        "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
        "or", "an", "will", "my", "one", "all", "would", "there", "their",
        "what", "so", "up", "out", "if", "about", "who", "get", "which", "go",
        "me", "when", "make", "can", "like", "time", "no", "just", "him", "know",
        "take", "people", "into", "year", "your", "good", "some", "could", "them",
        "see", "other", "than", "then", "now", "look", "only", "come", "its", "over",
    }
)  # fmt: skip


def is_common_word(word: str) -> bool:
    return word.lower() in COMMON_WORDS


# ---------------------------------------------------------------------------
# Text extractor
# ---------------------------------------------------------------------------

# Closed list: one space token is injected after each of these
BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "p", "div", "section", "article",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "li", "td", "th", "blockquote", "pre",
    }
)  # fmt: skip

# Whole text tokens that are UI chrome, not content (case-insensitive full match)
SKIP_TEXT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:logo|icon|image|img|svg|close|open|toggle|menu|nav|navigation)", re.IGNORECASE),
    re.compile(r"(?:button|btn|link|click here|tap here|swipe)", re.IGNORECASE),
    re.compile(r"(?:loading|spinner|loader|processing)", re.IGNORECASE),
    re.compile(r"[<>×✕✖✗]"),
    re.compile(r"(?:show|hide|expand|collapse|more|less)", re.IGNORECASE),
)

# Noise subtrees skipped while walking. Checked on descendants of the
# chosen root only, never the root itself.
NOISE_TAGS: frozenset[str] = frozenset(
    {"nav", "header", "footer", "button", "script", "style", "noscript", "template"}
)
NOISE_CLASS_TOKENS: frozenset[str] = frozenset(
    {"nav", "navigation", "menu", "header", "footer", "mobile-nav", "mobile-menu"}
)
NOISE_CLASS_SUBSTRINGS: tuple[str, ...] = ("logo", "icon", "button")
NOISE_ID_SUBSTRINGS: tuple[str, ...] = ("logo", "icon", "button")
NOISE_IDS: frozenset[str] = frozenset({"mobile-nav", "mobile-menu"})
NOISE_ROLES: frozenset[str] = frozenset({"navigation"})
NOISE_ARIA_LABEL_SUBSTRINGS: tuple[str, ...] = ("navigation",)

# ---------------------------------------------------------------------------
# Error / blocked-page detector (lower-case substrings, scanned in order)
# ---------------------------------------------------------------------------

GENERIC_ERROR_INDICATORS: tuple[str, ...] = (
    # generic error terms and bare status codes
    "error",
    "404",
    "403",
    "500",
    "502",
    "503",
    "page not found",
    "access denied",
    "forbidden",
    "blocked",
    "rate limit",
    "too many requests",
    # bot challenges
    "captcha",
    "verify you are human",
    "robot check",
    "cloudflare",
    "security check",
    # script-gated shells
    "javascript is required",
    "enable javascript",
    "browser not supported",
)

# Vendor canned responses served in place of real content
CANNED_RESPONSE_INDICATORS: tuple[str, ...] = (
    "suite of apis powering online payment processing",
    "accept payments and scale faster",
)

ERROR_INDICATORS: tuple[str, ...] = CANNED_RESPONSE_INDICATORS + GENERIC_ERROR_INDICATORS

ERROR_PAGE_TOPIC = "Error Page"
ERROR_PAGE_TITLE = "Error"
ERROR_PAGE_PARAGRAPH = "This page appears to be blocked or returning an error."

# ---------------------------------------------------------------------------
# Title extractor
# ---------------------------------------------------------------------------

TITLE_UI_TOKENS: tuple[str, ...] = (
    "logo",
    "icon",
    "navigation",
    "menu",
    "close",
    "open",
    "toggle",
    "button",
    "click",
    "tap",
    "swipe",
)

TITLE_SEPARATORS: tuple[str, ...] = ("|", "-", "–", "—", "::")

# ---------------------------------------------------------------------------
# Topic families (secondary topics, evaluated in order)
# ---------------------------------------------------------------------------

TOPIC_FAMILIES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("payment processing", re.compile(r"\b(?:payment|transaction|checkout|billing|invoice)", re.IGNORECASE)),
    ("e-commerce", re.compile(r"\b(?:product|shop|cart|buy|price|sale)", re.IGNORECASE)),
    ("technical documentation", re.compile(r"\b(?:api|endpoint|integration|sdk|documentation)", re.IGNORECASE)),
    ("content publishing", re.compile(r"\b(?:blog|article|post|story|news)", re.IGNORECASE)),
)
