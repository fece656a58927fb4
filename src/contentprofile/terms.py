# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Key-term, product-name and technical-term candidates from page text.

All three are heuristics over capitalisation and fixed vocabularies; none
of them understand language. Inputs are bounded by word windows or the
regex scan window so repeated adversarial patterns cannot blow up matching.
"""

from __future__ import annotations

import re
from collections import Counter
from itertools import islice

from contentprofile.config import DEFAULT_LIMITS, ExtractionLimits
from contentprofile.fields import unique
from contentprofile.vocabulary import COMMON_WORDS, is_common_word

_CAPITALIZED_RE = re.compile(r"[A-Z]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

_KEY_TERM_MIN_LEN = 4  # strictly longer
_KEY_TERM_MIN_COUNT = 3  # strictly more
_KEY_TERM_TOP_WORDS = 10


def ranked_by_frequency(counts: Counter[str], first_seen: dict[str, int]) -> list[str]:
    """Most frequent first; ties broken by first occurrence."""
    return sorted(counts, key=lambda w: (-counts[w], first_seen[w]))


def extract_key_terms(text: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Adjacent capitalised word pairs, then frequently repeated significant words."""
    words = text.split()
    terms: list[str] = []

    pair_span = min(len(words) - 1, limits.key_term_pair_window)
    for i in range(max(pair_span, 0)):
        if _CAPITALIZED_RE.match(words[i]) and _CAPITALIZED_RE.match(words[i + 1]):
            terms.append(f"{words[i]} {words[i + 1]}")

    counts: Counter[str] = Counter()
    first_seen: dict[str, int] = {}
    for pos, word in enumerate(islice(words, limits.key_term_word_window)):
        cleaned = _NON_ALNUM_RE.sub("", word.lower())
        if len(cleaned) > _KEY_TERM_MIN_LEN and cleaned not in COMMON_WORDS:
            counts[cleaned] += 1
            first_seen.setdefault(cleaned, pos)

    frequent = Counter({w: c for w, c in counts.items() if c > _KEY_TERM_MIN_COUNT})
    terms.extend(ranked_by_frequency(frequent, first_seen)[:_KEY_TERM_TOP_WORDS])

    return unique(terms, limits.max_key_terms)


_PRODUCT_RE = re.compile(
    r"\b[A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+){0,2}"
    r"(?:\s+(?:Pro|Plus|Premium|Enterprise|Basic|Standard|v?\d+(?:\.\d+)?))?"
)


def extract_product_names(text: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Capitalised names of up to three words with an optional tier/version suffix."""
    window = text[: limits.scan_window_chars]
    candidates = (
        m.group(0)
        for m in islice(_PRODUCT_RE.finditer(window), limits.product_match_window)
        if len(m.group(0)) > 3 and not is_common_word(m.group(0))
    )
    return unique(candidates, limits.max_product_names)


TECHNICAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b[A-Z]{2,}(?:\s+[A-Z]{2,})*\b"),  # acronyms, "REST API"
    re.compile(r"\b\w+(?:js|JS|py|\.io|\.ai|\.com)\b"),  # tech names
    re.compile(r"\b(?:API|SDK|REST|JSON|XML|HTML|CSS|SQL)\b", re.IGNORECASE),
)


def extract_technical_terms(text: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    window = text[: limits.scan_window_chars]
    found: list[str] = []
    for pattern in TECHNICAL_PATTERNS:
        found.extend(m.group(0) for m in islice(pattern.finditer(window), limits.technical_matches_per_pattern))
    return unique(found, limits.max_technical_terms)
