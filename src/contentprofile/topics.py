# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Topic summary and business-type classification.

Topics come from title + heading word frequency plus fixed keyword families.
Business type is an ordered first-match rule table over page text, topic
labels and DOM class markers:

  payment > ecommerce > blog > news > documentation (DOM) >
  documentation (text) > corporate > educational > other
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from contentprofile import DEFAULT_TOPIC, BusinessType, Heading
from contentprofile.config import DEFAULT_LIMITS, ExtractionLimits
from contentprofile.document import Document
from contentprofile.fields import unique
from contentprofile.rules import Rule, RuleMatch, first_match
from contentprofile.terms import ranked_by_frequency
from contentprofile.vocabulary import COMMON_WORDS, TOPIC_FAMILIES

logger = logging.getLogger(__name__)

_TITLE_SPLIT_RE = re.compile(r"[\s\-–—:|]+")
_TOPIC_WORD_MIN_LEN = 3  # strictly longer
_TITLE_WORD_MIN_LEN = 2  # strictly longer
_PRIMARY_TITLE_WORDS = 3


@dataclass(frozen=True, slots=True)
class TopicSummary:
    primary: str = DEFAULT_TOPIC
    all: tuple[str, ...] = field(default_factory=tuple)


def top_content_words(text: str, limit: int) -> list[str]:
    """Most frequent non-stopword tokens longer than 3 chars, ties by first occurrence."""
    counts: Counter[str] = Counter()
    first_seen: dict[str, int] = {}
    for pos, word in enumerate(text.lower().split()):
        if len(word) > _TOPIC_WORD_MIN_LEN and word not in COMMON_WORDS:
            counts[word] += 1
            first_seen.setdefault(word, pos)
    return ranked_by_frequency(counts, first_seen)[:limit]


def primary_topic(title: str, top_words: Sequence[str]) -> str:
    title_words = [w for w in _TITLE_SPLIT_RE.split(title) if len(w) > _TITLE_WORD_MIN_LEN]
    if title_words:
        return " ".join(title_words[:_PRIMARY_TITLE_WORDS])
    return top_words[0] if top_words else DEFAULT_TOPIC


def detect_topics(title: str, headings: Sequence[Heading], limits: ExtractionLimits = DEFAULT_LIMITS) -> TopicSummary:
    all_text = " ".join([title, *(h.text for h in headings)])[: limits.scan_window_chars]
    top_words = top_content_words(all_text, limits.max_topic_words)
    primary = primary_topic(title, top_words)

    topics = [primary]
    topics.extend(label for label, pattern in TOPIC_FAMILIES if pattern.search(all_text))

    return TopicSummary(
        primary=primary,
        all=tuple(unique(topics, limits.max_topics)),
    )


# --- Business type ---

_DOC_CODE_THRESHOLD = 10  # strictly more code/pre elements


@dataclass(frozen=True, slots=True)
class BusinessSignals:
    doc: Document
    text_lower: str
    topics_lower: str


def _text_has(*needles: str):
    return lambda s: any(n in s.text_lower for n in needles)


BUSINESS_RULES: tuple[Rule, ...] = (
    Rule("payment_terms", BusinessType.PAYMENT, _text_has("payment", "transaction", "merchant")),
    Rule(
        "shop_markers",
        BusinessType.ECOMMERCE,
        lambda s: s.doc.has_class("product", "price", "add-to-cart", "shop") or "buy now" in s.text_lower,
    ),
    Rule(
        "blog_markers",
        BusinessType.BLOG,
        lambda s: s.doc.has_class("blog-post", "article-date", "author") or "blog" in s.topics_lower,
    ),
    Rule(
        "news_markers",
        BusinessType.NEWS,
        lambda s: s.doc.has_class("news-item", "press-release") or "news" in s.topics_lower,
    ),
    Rule("code_heavy", BusinessType.DOCUMENTATION, lambda s: s.doc.count("code", "pre") > _DOC_CODE_THRESHOLD),
    Rule("docs_terms", BusinessType.DOCUMENTATION, _text_has("api", "documentation")),
    Rule("corporate_terms", BusinessType.CORPORATE, _text_has("about us", "our services", "company")),
    Rule("learning_terms", BusinessType.EDUCATIONAL, _text_has("course", "tutorial", "learn")),
)


def classify_business(doc: Document, text: str, topics: TopicSummary) -> RuleMatch:
    signals = BusinessSignals(doc=doc, text_lower=text.lower(), topics_lower=" ".join(topics.all).lower())
    match = first_match(BUSINESS_RULES, signals, default=BusinessType.OTHER)
    logger.debug("Business type %s (rule=%s)", match.label, match.rule)
    return match


def detect_business_type(doc: Document, text: str, topics: TopicSummary) -> BusinessType:
    return BusinessType(classify_business(doc, text, topics).label)
