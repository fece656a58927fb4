# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content-sample extractors: title, headings, paragraphs, lists, statistics, comparisons.

Each extractor is independent and enforces its own output cap while it
collects, so pathological pages stop early instead of being sliced after
the fact. Regex extractors scan at most ``limits.scan_window_chars``.
The assembler runs each one through ``result.attempt``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from itertools import islice

from contentprofile import Heading, ListBlock, ListKind
from contentprofile.config import DEFAULT_LIMITS, ExtractionLimits
from contentprofile.document import Document, element_text, is_element
from contentprofile.sanitizer import normalize_text
from contentprofile.vocabulary import TITLE_SEPARATORS, TITLE_UI_TOKENS

logger = logging.getLogger(__name__)

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4")

_LANG_RE = re.compile(r"[a-z]{2}")


def unique(items: Iterable[str], limit: int) -> list[str]:
    """Order-preserving dedupe that stops as soon as ``limit`` items are kept."""
    seen: dict[str, None] = {}
    for item in items:
        if item and item not in seen:
            seen[item] = None
            if len(seen) >= limit:
                break
    return list(seen)


# --- Title ---


def clean_title(title: str) -> str:
    """Strip embedded UI chrome and site-name suffixes from a raw title.

    1. Truncate before the earliest UI token ("logo", "menu", ...) found past index 0
    2. Keep the first part of the first separator split whose head exceeds 5 chars
    """
    lowered = title.lower()
    cutoff = len(title)
    for token in TITLE_UI_TOKENS:
        idx = lowered.find(token)
        if 0 < idx < cutoff:
            cutoff = idx
    if cutoff < len(title):
        title = title[:cutoff].strip()

    for sep in TITLE_SEPARATORS:
        parts = title.split(sep)
        if len(parts) > 1 and len(parts[0].strip()) > 5:
            title = parts[0].strip()
            break

    return normalize_text(title)


def extract_title(doc: Document) -> str:
    """First non-empty of <title>, og:title, first <h1>; then cleaned."""
    candidate = doc.title_text or doc.meta_property("og:title")
    if not candidate:
        h1 = doc.first("h1")
        candidate = element_text(h1) if h1 is not None else ""
    return clean_title(candidate) if candidate else ""


# --- Headings ---


def _trailing_content(heading, limits: ExtractionLimits) -> str:
    """Text of the siblings following ``heading`` up to the next heading."""
    parts: list[str] = []
    collected = 0
    hops = 0
    for sib in heading.itersiblings():
        if not is_element(sib):
            continue
        if sib.tag in HEADING_TAGS or collected >= limits.heading_snippet_chars or hops >= limits.heading_sibling_hops:
            break
        text = element_text(sib, max_len=limits.heading_snippet_chars)
        parts.append(text)
        collected += len(text) + 1
        hops += 1
    return normalize_text(" ".join(parts), max_len=limits.heading_snippet_chars)


def extract_headings(doc: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[Heading]:
    headings: list[Heading] = []
    for el in doc.iter(*HEADING_TAGS):
        try:
            text = element_text(el)
            if not text:
                continue
            headings.append(Heading(level=int(el.tag[1]), text=text, content=_trailing_content(el, limits)))
        except (ValueError, TypeError, IndexError):
            logger.warning("Skipping malformed heading <%s>", el.tag, exc_info=True)
            continue
        if len(headings) >= limits.max_headings:
            break
    return headings


# --- Paragraphs ---


def extract_paragraphs(doc: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Substantial paragraphs (> min_paragraph_chars) in document order."""
    paragraphs: list[str] = []
    for el in doc.iter("p"):
        text = element_text(el)
        if len(text) > limits.min_paragraph_chars:
            paragraphs.append(text)
            if len(paragraphs) >= limits.max_paragraphs:
                break
    return paragraphs


# --- Lists ---


def extract_lists(doc: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[ListBlock]:
    lists: list[ListBlock] = []
    for el in doc.iter("ul", "ol"):
        items: list[str] = []
        for li in el.iterchildren("li"):
            text = element_text(li, max_len=limits.max_list_item_chars)
            if text:
                items.append(text)
                if len(items) >= limits.max_list_items:
                    break
        if items:
            lists.append(ListBlock(kind=ListKind(el.tag), items=tuple(items)))
            if len(lists) >= limits.max_lists:
                break
    return lists


# --- Statistics ---

# Anchored at token starts so a long word or digit run is scanned once.
_PERCENT_RE = re.compile(r"(?:(?<!\w)\w+\s+)?(?<![\d.])\d+(?:\.\d+)?%")
_MAGNITUDE_RE = re.compile(
    r"(?<![\d,.])\d+(?:,\d+)*(?:\.\d+)?\s*(?:million|billion|thousand|users|customers|transactions|requests|visitors|downloads|installs)",
    re.IGNORECASE,
)
_MONEY_RE = re.compile(r"[$€£¥]\d+(?:,\d+)*(?:\.\d+)?(?:\s*(?:million|billion|k|K|M|B))?")

STATISTIC_FAMILIES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("percentage", _PERCENT_RE),
    ("magnitude", _MAGNITUDE_RE),
    ("currency", _MONEY_RE),
)


def _matches(pattern: re.Pattern[str], text: str, limit: int) -> Iterator[str]:
    return (normalize_text(m.group(0)) for m in islice(pattern.finditer(text), limit))


def extract_statistics(text: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Percentages, magnitudes and currency amounts; <= 5 per family, <= 10 unique."""
    window = text[: limits.scan_window_chars]
    found: list[str] = []
    for family, pattern in STATISTIC_FAMILIES:
        try:
            found.extend(_matches(pattern, window, limits.max_statistics_per_family))
        except re.error:
            logger.warning("Statistic pattern %s failed", family, exc_info=True)
    return unique(found, limits.max_statistics)


# --- Comparisons ---

_COMPARISON_HEADING_RE = re.compile(
    r"\b(?:vs|versus|compared to|comparison|differences?|better than|alternative)\b",
    re.IGNORECASE,
)
_COMPARISON_PHRASE_RE = re.compile(r"\b\w+\s+(?:vs|versus|compared to)\s+\w+\b", re.IGNORECASE)


def extract_comparisons(doc: Document, text: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Comparison headings followed by "X vs Y" phrases from the page text."""

    def candidates() -> Iterator[str]:
        for el in doc.iter(*HEADING_TAGS):
            heading = element_text(el, max_len=limits.scan_window_chars)
            if heading and _COMPARISON_HEADING_RE.search(heading):
                yield heading
        for m in _COMPARISON_PHRASE_RE.finditer(text[: limits.scan_window_chars]):
            yield normalize_text(m.group(0))

    return unique(candidates(), limits.max_comparisons)


# --- Metadata ---


def extract_language(doc: Document) -> str:
    """Primary subtag of <html lang>, if it is a two-letter code."""
    primary = doc.lang.split("-")[0].split("_")[0].strip().lower()
    return primary if _LANG_RE.fullmatch(primary) else ""


def count_words(text: str) -> int:
    return len(text.split())
