# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Error / blocked-page detection.

Runs before any field extraction so that bot challenges, HTTP error shells,
rate-limit notices and "enable JavaScript" stubs never produce a misleading
profile.

Two checks:
  1. Indicator scan: an indicator substring in the text or title only counts
     when the page is short (total text < 500 chars, or the main-content
     region holds < 100 chars). Long legitimate pages that merely mention
     "error" or "404" pass.
  2. Fingerprints: known canned responses recognised by co-occurring
     phrases on a short body, regardless of the indicator scan.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from contentprofile.config import DEFAULT_FINGERPRINTS, DEFAULT_LIMITS, BlockedPageFingerprint, ExtractionLimits
from contentprofile.document import Document, element_text
from contentprofile.text_extractor import ExtractedText
from contentprofile.vocabulary import ERROR_INDICATORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorPageVerdict:
    is_error: bool
    reason: str = ""  # matched indicator or fingerprint name


_NOT_ERROR = ErrorPageVerdict(is_error=False)


def _is_short_page(extracted: ExtractedText, limits: ExtractionLimits) -> bool:
    if len(extracted.text) < limits.error_text_threshold:
        return True
    if extracted.region is None:
        return False
    # extracted.text is the region's noise-filtered text when a region matched
    return len(extracted.text) < limits.error_region_threshold


def detect_error_page(
    doc: Document,
    extracted: ExtractedText,
    title: str,
    limits: ExtractionLimits = DEFAULT_LIMITS,
    *,
    indicators: Sequence[str] = ERROR_INDICATORS,
    fingerprints: Sequence[BlockedPageFingerprint] = DEFAULT_FINGERPRINTS,
) -> ErrorPageVerdict:
    """Decide whether the page is an error, challenge or blocked page."""
    text_lower = extracted.text.lower()
    title_lower = title.lower()

    short_page: bool | None = None  # computed lazily, region text can be large
    for indicator in indicators:
        if indicator in text_lower or indicator in title_lower:
            if short_page is None:
                short_page = _is_short_page(extracted, limits)
            if short_page:
                logger.info("Detected error/blocked page: contains %r", indicator)
                return ErrorPageVerdict(is_error=True, reason=indicator)

    if fingerprints:
        body_chars = len(element_text(doc.body))
        for fp in fingerprints:
            if fp.matches(text_lower, body_chars):
                logger.info("Detected canned response page: %s", fp.name)
                return ErrorPageVerdict(is_error=True, reason=fp.name)

    return _NOT_ERROR
