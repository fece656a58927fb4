# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Extraction limits and blocked-page fingerprints.

Every cap that bounds CPU or memory on pathological input lives in
``ExtractionLimits``. Defaults reproduce the reference behaviour; each field
can be overridden from the environment as ``CONTENTPROFILE_<FIELD_NAME>``.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass

from contentprofile.errors import ConfigError

ENV_PREFIX = "CONTENTPROFILE_"


@dataclass(frozen=True, slots=True)
class ExtractionLimits:
    """Immutable extraction caps. Shared read-only across calls."""

    # Document loader
    max_html_chars: int = 2_000_000  # raw HTML is cut to this before parsing

    # Text extractor
    max_text_chars: int = 100_000
    scan_window_chars: int = 50_000  # regex extractors never scan more than this

    # Error / blocked-page detector
    error_text_threshold: int = 500
    error_region_threshold: int = 100

    # Field extractors
    max_headings: int = 20
    heading_snippet_chars: int = 200
    heading_sibling_hops: int = 10
    max_paragraphs: int = 10
    min_paragraph_chars: int = 50  # strictly longer than this
    max_lists: int = 5
    max_list_items: int = 10
    max_list_item_chars: int = 100
    max_statistics: int = 10
    max_statistics_per_family: int = 5
    max_comparisons: int = 5

    # Topics and terms
    max_topics: int = 5
    max_topic_words: int = 10
    max_key_terms: int = 15
    key_term_pair_window: int = 1000
    key_term_word_window: int = 5000
    max_product_names: int = 10
    product_match_window: int = 50
    max_technical_terms: int = 10
    technical_matches_per_pattern: int = 20

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExtractionLimits:
        """Build limits from ``CONTENTPROFILE_*`` overrides.

        Raises:
            ConfigError: an override is not a positive integer.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for f in dataclasses.fields(cls):
            var = ENV_PREFIX + f.name.upper()
            raw = env.get(var, "").strip()
            if not raw:
                continue
            try:
                value = int(raw.replace("_", ""))
            except ValueError:
                raise ConfigError(f"{var} must be an integer, got {raw!r}", variable=var) from None
            if value <= 0:
                raise ConfigError(f"{var} must be positive, got {value}", variable=var)
            overrides[f.name] = value
        return cls(**overrides)


@dataclass(frozen=True, slots=True)
class BlockedPageFingerprint:
    """A canned response recognised by co-occurring phrases on a short page.

    Matches when every phrase occurs in the lower-cased extracted text and
    the full body text is shorter than ``max_body_chars``.
    """

    name: str
    phrases: tuple[str, ...]
    max_body_chars: int = 1000

    def matches(self, text_lower: str, body_chars: int) -> bool:
        if body_chars >= self.max_body_chars or not self.phrases:
            return False
        return all(p in text_lower for p in self.phrases)


DEFAULT_LIMITS = ExtractionLimits()

DEFAULT_FINGERPRINTS: tuple[BlockedPageFingerprint, ...] = (
    BlockedPageFingerprint(
        name="payment-api-boilerplate",
        phrases=("stripe is a suite of apis", "powering online payment"),
        max_body_chars=1000,
    ),
)
