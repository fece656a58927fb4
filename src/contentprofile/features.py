# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Detected-feature flags.

Eight independent boolean probes over DOM markers and page text. Each flag
is evaluated in isolation: a probe that fails reports False and the other
seven are unaffected.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from contentprofile import DetectedFeatures
from contentprofile.document import Document, element_text
from contentprofile.fields import HEADING_TAGS

logger = logging.getLogger(__name__)

_PRICE_TEXT_RE = re.compile(r"[$€£¥]\d+")
_API_CODE_THRESHOLD = 5  # strictly more code/pre elements


@dataclass(frozen=True, slots=True)
class FeatureInput:
    doc: Document
    text_lower: str


def _has_payment_forms(f: FeatureInput) -> bool:
    for form in f.doc.iter("form"):
        form_text = element_text(form).lower()
        if "payment" in form_text or "card" in form_text or "checkout" in form_text:
            return True
    return False


def _has_product_listings(f: FeatureInput) -> bool:
    return f.doc.has_class("product", "item", "listing") or "add to cart" in f.text_lower


def _has_api_documentation(f: FeatureInput) -> bool:
    return f.doc.count("code", "pre") > _API_CODE_THRESHOLD or "endpoint" in f.text_lower or "api" in f.text_lower


def _has_pricing_info(f: FeatureInput) -> bool:
    return f.doc.has_class("price", "pricing") or _PRICE_TEXT_RE.search(f.text_lower) is not None


def _has_blog_posts(f: FeatureInput) -> bool:
    return f.doc.has_class("post", "article", "blog-entry") or f.doc.count("article") > 0


def _has_tutorials(f: FeatureInput) -> bool:
    return "how to" in f.text_lower or "step by step" in f.text_lower or "tutorial" in f.text_lower


def _has_comparisons(f: FeatureInput) -> bool:
    return " vs " in f.text_lower or "versus" in f.text_lower or "comparison" in f.text_lower


def _has_questions(f: FeatureInput) -> bool:
    return any("?" in element_text(el) for el in f.doc.iter(*HEADING_TAGS))


FEATURE_PROBES: dict[str, Callable[[FeatureInput], bool]] = {
    "has_payment_forms": _has_payment_forms,
    "has_product_listings": _has_product_listings,
    "has_api_documentation": _has_api_documentation,
    "has_pricing_info": _has_pricing_info,
    "has_blog_posts": _has_blog_posts,
    "has_tutorials": _has_tutorials,
    "has_comparisons": _has_comparisons,
    "has_questions": _has_questions,
}


def detect_features(doc: Document, text: str) -> DetectedFeatures:
    f = FeatureInput(doc=doc, text_lower=text.lower())
    flags: dict[str, bool] = {}
    for name, probe in FEATURE_PROBES.items():
        try:
            flags[name] = bool(probe(f))
        except Exception:  # noqa: BLE001
            logger.warning("Feature probe %s failed", name, exc_info=True)
            flags[name] = False
    return DetectedFeatures(**flags)
