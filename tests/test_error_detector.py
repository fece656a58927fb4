# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for error / blocked-page detection."""

from __future__ import annotations

import pytest

from contentprofile.config import BlockedPageFingerprint, ExtractionLimits
from contentprofile.document import Document
from contentprofile.error_detector import detect_error_page
from contentprofile.fields import extract_title
from contentprofile.text_extractor import extract_page_text
from tests._helpers import filler, html


def _verdict(page: str, **kwargs):
    d = Document.load(page)
    return detect_error_page(d, extract_page_text(d), extract_title(d), **kwargs)


class TestShortPages:
    @pytest.mark.parametrize(
        "body,title,reason",
        [
            ("<h1>404 Not Found</h1>", "404 Not Found", "404"),
            ("<p>Please verify you are human to continue.</p>", "", "verify you are human"),
            ("<p>Too many requests. Slow down.</p>", "", "too many requests"),
            ("<noscript></noscript><p>Please enable JavaScript to view this site.</p>", "", "enable javascript"),
            ("<p>Just a moment...</p>", "Cloudflare security check", "cloudflare"),
        ],
    )
    def test_detected(self, body: str, title: str, reason: str):
        verdict = _verdict(html(body, title=title))
        assert verdict.is_error
        assert verdict.reason == reason

    def test_indicator_in_title_only(self):
        verdict = _verdict(html("<p>Nothing to see here.</p>", title="Access Denied"))
        assert verdict.is_error
        assert verdict.reason == "access denied"

    def test_three_hundred_chars_with_error(self):
        body = f"<p>Something went wrong: error while loading. {filler(30)}</p>"
        assert _verdict(html(body)).is_error

    def test_clean_short_page(self):
        assert not _verdict(html("<p>Welcome to our small bakery.</p>")).is_error

    def test_empty_page(self):
        assert not _verdict(html("")).is_error


class TestLongPages:
    def test_long_article_mentioning_error_passes(self):
        prose = "This article discusses error handling in depth. " * 100
        page = html(f"<article><p>{prose}</p></article>", title="Error Handling Guide")
        assert len(prose) > 4000
        assert not _verdict(page).is_error

    def test_long_body_without_region_passes(self):
        page = html(f"<div><p>Status 404 pages explained. {filler(120)}</p></div>")
        assert not _verdict(page).is_error

    def test_short_region_on_long_body_flags(self):
        region = "<main><p>Error</p></main>"
        page = html(f"{region}<div>{filler(200)}</div>")
        assert _verdict(page).is_error

    def test_region_chrome_does_not_count_toward_length(self):
        nav = "<nav>" + "".join(f"<a href='/s{i}'>Section {i}</a>" for i in range(20)) + "</nav>"
        page = html(f"<main>{nav}<p>An error occurred.</p></main>")
        limits = ExtractionLimits(error_text_threshold=10)
        assert _verdict(page, limits=limits).is_error


class TestCannedResponses:
    BOILERPLATE = (
        "<p>Stripe is a suite of APIs powering online payment processing "
        "and commerce solutions for internet businesses of all sizes.</p>"
    )

    def test_vendor_indicator_on_short_page(self):
        verdict = _verdict(html(self.BOILERPLATE))
        assert verdict.is_error
        assert verdict.reason == "suite of apis powering online payment processing"

    def test_fingerprint_without_indicators(self):
        verdict = _verdict(html(self.BOILERPLATE), indicators=())
        assert verdict.is_error
        assert verdict.reason == "payment-api-boilerplate"

    def test_fingerprint_requires_short_body(self):
        page = html(self.BOILERPLATE + f"<p>{filler(200)}</p>")
        assert not _verdict(page, indicators=()).is_error

    def test_fingerprint_requires_both_phrases(self):
        page = html("<p>Stripe is a suite of APIs for developers.</p>")
        assert not _verdict(page, indicators=()).is_error

    def test_custom_fingerprint(self):
        fp = BlockedPageFingerprint(name="parked", phrases=("this domain is for sale",), max_body_chars=500)
        page = html("<p>This domain is for sale. Contact the owner.</p>")
        verdict = _verdict(page, indicators=(), fingerprints=(fp,))
        assert verdict.reason == "parked"

    def test_fingerprint_with_no_phrases_never_matches(self):
        fp = BlockedPageFingerprint(name="empty", phrases=())
        assert not fp.matches("anything", 10)
