# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content Profile: bounded structured summaries of untrusted HTML pages.

Converts raw HTML (plus an optional source URL) into a ContentProfile:
- content samples: title, headings, paragraphs, lists, statistics, comparisons
- classification: primary topic, topic set, business type, page type
- key terms, product-name and technical-term candidates
- detected-feature flags, word count and declared language

Entry point: ``contentprofile.extractor.extract(html, page_url=None)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class BusinessType(StrEnum):
    """Commercial/content category of a page."""

    PAYMENT = "payment"
    ECOMMERCE = "ecommerce"
    BLOG = "blog"
    NEWS = "news"
    DOCUMENTATION = "documentation"
    CORPORATE = "corporate"
    EDUCATIONAL = "educational"
    OTHER = "other"


class PageType(StrEnum):
    """Structural role of a page within its site."""

    HOMEPAGE = "homepage"
    ARTICLE = "article"
    PRODUCT = "product"
    CATEGORY = "category"
    ABOUT = "about"
    CONTACT = "contact"
    DOCUMENTATION = "documentation"
    SEARCH = "search"
    GENERAL = "general"


class ListKind(StrEnum):
    UNORDERED = "ul"
    ORDERED = "ol"


DEFAULT_TOPIC = "general content"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True, slots=True)
class Heading:
    """An H1-H4 heading with a snippet of the content that follows it."""

    level: int  # 1-4
    text: str
    content: str = ""  # trailing sibling text, <= 200 chars


@dataclass(frozen=True, slots=True)
class ListBlock:
    """A ul/ol list with its direct item texts."""

    kind: ListKind
    items: tuple[str, ...]


@dataclass
class ContentSamples:
    title: str = ""
    headings: list[Heading] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)
    lists: list[ListBlock] = field(default_factory=list)
    statistics: list[str] = field(default_factory=list)
    comparisons: list[str] = field(default_factory=list)


@dataclass
class DetectedFeatures:
    """Coarse content-pattern flags. All False unless a signal fires."""

    has_payment_forms: bool = False
    has_product_listings: bool = False
    has_api_documentation: bool = False
    has_pricing_info: bool = False
    has_blog_posts: bool = False
    has_tutorials: bool = False
    has_comparisons: bool = False
    has_questions: bool = False


@dataclass
class ContentProfile:
    """Complete extraction result. Every field is always populated."""

    primary_topic: str = DEFAULT_TOPIC
    detected_topics: list[str] = field(default_factory=list)
    business_type: BusinessType = BusinessType.OTHER
    page_type: PageType = PageType.GENERAL
    samples: ContentSamples = field(default_factory=ContentSamples)
    features: DetectedFeatures = field(default_factory=DetectedFeatures)
    key_terms: list[str] = field(default_factory=list)
    product_names: list[str] = field(default_factory=list)
    technical_terms: list[str] = field(default_factory=list)
    word_count: int = 0
    language: str = DEFAULT_LANGUAGE

    @classmethod
    def default(cls) -> ContentProfile:
        """All-defaults profile returned when extraction fails outright."""
        return cls()

    @property
    def is_error_page(self) -> bool:
        return self.detected_topics == ["error"] and self.word_count == 0
