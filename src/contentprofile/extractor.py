# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""ContentProfile assembler: raw HTML (+ optional URL) -> ContentProfile.

Pipeline:
  1. Load the document (parse failure -> empty document)
  2. Extract spacing-aware page text and the title
  3. Error/blocked-page check; on a hit return the canned error profile
  4. Sample extractors, topic + business-type + page-type classifiers,
     feature flags, term candidates, word count, language

Each field runs through ``result.attempt`` so one failing extractor leaves
the others intact. The whole session sits under a single guard that falls
back to ``ContentProfile.default()``: ``extract()`` never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import structlog

from contentprofile import (
    DEFAULT_LANGUAGE,
    BusinessType,
    ContentProfile,
    ContentSamples,
    DetectedFeatures,
    PageType,
)
from contentprofile.config import DEFAULT_LIMITS, ExtractionLimits
from contentprofile.document import Document
from contentprofile.error_detector import detect_error_page
from contentprofile.features import detect_features
from contentprofile.fields import (
    count_words,
    extract_comparisons,
    extract_headings,
    extract_language,
    extract_lists,
    extract_paragraphs,
    extract_statistics,
    extract_title,
)
from contentprofile.page_classifier import detect_page_type
from contentprofile.result import attempt
from contentprofile.terms import extract_key_terms, extract_product_names, extract_technical_terms
from contentprofile.text_extractor import ExtractedText, extract_page_text
from contentprofile.topics import TopicSummary, detect_business_type, detect_topics
from contentprofile.vocabulary import ERROR_PAGE_PARAGRAPH, ERROR_PAGE_TITLE, ERROR_PAGE_TOPIC

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractionContext:
    """Everything one extraction session shares between field extractors."""

    doc: Document
    extracted: ExtractedText
    title: str
    page_url: str | None
    limits: ExtractionLimits

    @property
    def text(self) -> str:
        return self.extracted.text


def error_profile(title: str = "") -> ContentProfile:
    """Minimal profile for error, challenge and blocked pages."""
    return ContentProfile(
        primary_topic=ERROR_PAGE_TOPIC,
        detected_topics=["error"],
        business_type=BusinessType.OTHER,
        page_type=PageType.GENERAL,
        samples=ContentSamples(title=title or ERROR_PAGE_TITLE, paragraphs=[ERROR_PAGE_PARAGRAPH]),
        features=DetectedFeatures(),
        word_count=0,
        language=DEFAULT_LANGUAGE,
    )


def _build_samples(ctx: ExtractionContext) -> ContentSamples:
    doc, text, limits = ctx.doc, ctx.text, ctx.limits
    return ContentSamples(
        title=ctx.title,
        headings=attempt("headings", extract_headings, doc, limits).or_default([]),
        paragraphs=attempt("paragraphs", extract_paragraphs, doc, limits).or_default([]),
        lists=attempt("lists", extract_lists, doc, limits).or_default([]),
        statistics=attempt("statistics", extract_statistics, text, limits).or_default([]),
        comparisons=attempt("comparisons", extract_comparisons, doc, text, limits).or_default([]),
    )


def _assemble(ctx: ExtractionContext) -> ContentProfile:
    doc, text, limits = ctx.doc, ctx.text, ctx.limits
    samples = _build_samples(ctx)

    topics = attempt("topics", detect_topics, ctx.title, samples.headings, limits).or_default(TopicSummary())
    business = attempt("business_type", detect_business_type, doc, text, topics).or_default(BusinessType.OTHER)
    page_type = attempt("page_type", detect_page_type, doc, ctx.page_url).or_default(PageType.GENERAL)

    return ContentProfile(
        primary_topic=topics.primary,
        detected_topics=list(topics.all),
        business_type=business,
        page_type=page_type,
        samples=samples,
        features=attempt("features", detect_features, doc, text).or_default(DetectedFeatures()),
        key_terms=attempt("key_terms", extract_key_terms, text, limits).or_default([]),
        product_names=attempt("product_names", extract_product_names, text, limits).or_default([]),
        technical_terms=attempt("technical_terms", extract_technical_terms, text, limits).or_default([]),
        word_count=attempt("word_count", count_words, text).or_default(0),
        language=attempt("language", extract_language, doc).or_default("") or DEFAULT_LANGUAGE,
    )


def _extract(html: str | None, page_url: str | None, limits: ExtractionLimits) -> ContentProfile:
    doc = Document.load(html, max_chars=limits.max_html_chars)
    extracted = extract_page_text(doc, limits)
    title = attempt("title", extract_title, doc).or_default("")

    verdict = detect_error_page(doc, extracted, title, limits)
    if verdict.is_error:
        logger.info("Returning error profile (%s)", verdict.reason)
        return error_profile(title)

    ctx = ExtractionContext(doc=doc, extracted=extracted, title=title, page_url=page_url, limits=limits)
    return _assemble(ctx)


def extract(html: str | None, page_url: str | None = None, limits: ExtractionLimits | None = None) -> ContentProfile:
    """Build a ContentProfile from raw HTML. Never raises.

    Args:
        html: Raw page HTML. Empty or unparseable input yields a sparse profile.
        page_url: Source URL, used only by the page-type classifier.
        limits: Extraction caps. Defaults to ``DEFAULT_LIMITS``.

    Returns:
        A fully populated ContentProfile; ``ContentProfile.default()`` if the
        session itself failed.
    """
    with structlog.contextvars.bound_contextvars(page_url=page_url or ""):
        try:
            return _extract(html, page_url, limits or DEFAULT_LIMITS)
        except Exception:  # noqa: BLE001
            logger.exception("Content extraction failed, returning default profile")
            return ContentProfile.default()
