# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""ContentProfile serialization to the camelCase wire shape."""

from __future__ import annotations

import json
from typing import Any

from contentprofile import ContentProfile, ContentSamples, DetectedFeatures


def _samples_dict(samples: ContentSamples) -> dict[str, Any]:
    return {
        "title": samples.title,
        "headings": [{"level": h.level, "text": h.text, "content": h.content} for h in samples.headings],
        "paragraphs": list(samples.paragraphs),
        "lists": [{"type": str(lst.kind), "items": list(lst.items)} for lst in samples.lists],
        "statistics": list(samples.statistics),
        "comparisons": list(samples.comparisons),
    }


def _features_dict(features: DetectedFeatures) -> dict[str, bool]:
    return {
        "hasPaymentForms": features.has_payment_forms,
        "hasProductListings": features.has_product_listings,
        "hasAPIDocumentation": features.has_api_documentation,
        "hasPricingInfo": features.has_pricing_info,
        "hasBlogPosts": features.has_blog_posts,
        "hasTutorials": features.has_tutorials,
        "hasComparisons": features.has_comparisons,
        "hasQuestions": features.has_questions,
    }


def to_dict(profile: ContentProfile) -> dict[str, Any]:
    """Convert a profile to plain JSON-compatible data with camelCase keys."""
    return {
        "primaryTopic": profile.primary_topic,
        "detectedTopics": list(profile.detected_topics),
        "businessType": str(profile.business_type),
        "pageType": str(profile.page_type),
        "contentSamples": _samples_dict(profile.samples),
        "detectedFeatures": _features_dict(profile.features),
        "keyTerms": list(profile.key_terms),
        "productNames": list(profile.product_names),
        "technicalTerms": list(profile.technical_terms),
        "wordCount": profile.word_count,
        "language": profile.language,
    }


def to_json(profile: ContentProfile, indent: int | None = 2) -> str:
    """Serialize a profile to a JSON string.

    Args:
        profile: ContentProfile to serialize
        indent: JSON indentation level, None for a single line

    Returns:
        JSON string
    """
    return json.dumps(to_dict(profile), ensure_ascii=False, indent=indent)
