# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for topic summary and business-type classification."""

from __future__ import annotations

import pytest

from contentprofile import DEFAULT_TOPIC, BusinessType, Heading
from contentprofile.topics import (
    BUSINESS_RULES,
    TopicSummary,
    classify_business,
    detect_business_type,
    detect_topics,
    primary_topic,
    top_content_words,
)
from tests._helpers import doc


def _h(text: str) -> Heading:
    return Heading(level=2, text=text)


class TestTopWords:
    def test_ranked_with_stopwords_removed(self):
        words = top_content_words("Kubernetes deployment Kubernetes scaling", 10)
        assert words == ["kubernetes", "deployment", "scaling"]

    def test_short_words_removed(self):
        assert top_content_words("the cat sat on a mat", 10) == []

    def test_limit(self):
        assert len(top_content_words(" ".join(f"word{i}" for i in range(30)), 10)) == 10


class TestPrimaryTopic:
    def test_first_three_title_words(self):
        assert primary_topic("Stripe Payments: Online Processing", []) == "Stripe Payments Online"

    def test_short_title_words_skipped(self):
        assert primary_topic("A Go | Rust of Zig", []) == "Rust Zig"

    def test_falls_back_to_top_word(self):
        assert primary_topic("A to Z", ["kubernetes"]) == "kubernetes"

    def test_default(self):
        assert primary_topic("", []) == DEFAULT_TOPIC


class TestDetectTopics:
    def test_from_headings_when_no_title(self):
        summary = detect_topics("", [_h("Kubernetes deployment guide"), _h("Kubernetes scaling")])
        assert summary.primary == "kubernetes"
        assert summary.all[0] == "kubernetes"

    def test_families_appended(self):
        summary = detect_topics("Checkout API Documentation", [])
        assert summary.all == ("Checkout API Documentation", "payment processing", "technical documentation")

    def test_all_families_capped_at_five(self):
        summary = detect_topics("Payment Shop API Blog", [])
        assert summary.all == (
            "Payment Shop API",
            "payment processing",
            "e-commerce",
            "technical documentation",
            "content publishing",
        )

    def test_empty(self):
        summary = detect_topics("", [])
        assert summary.primary == DEFAULT_TOPIC
        assert summary.all == (DEFAULT_TOPIC,)

    def test_deduplicated(self):
        summary = detect_topics("payment processing", [])
        assert summary.all == ("payment processing",)


class TestBusinessType:
    NEUTRAL = "hello world"

    @pytest.mark.parametrize(
        "body,text,topics,expected",
        [
            ("", "Learn to accept payment with our course", (), BusinessType.PAYMENT),
            ('<button class="add-to-cart">x</button>', NEUTRAL, (), BusinessType.ECOMMERCE),
            ("", "Buy now while stocks last", (), BusinessType.ECOMMERCE),
            ('<span class="author">x</span>', NEUTRAL, (), BusinessType.BLOG),
            ("", NEUTRAL, ("my blog",), BusinessType.BLOG),
            ('<li class="press-release">x</li>', NEUTRAL, (), BusinessType.NEWS),
            ("", NEUTRAL, ("world news",), BusinessType.NEWS),
            ("<code>x</code>" * 11, NEUTRAL, (), BusinessType.DOCUMENTATION),
            ("", "read the documentation", (), BusinessType.DOCUMENTATION),
            ("", "learn about us and our services", (), BusinessType.CORPORATE),
            ("", "a free tutorial", (), BusinessType.EDUCATIONAL),
            ("", NEUTRAL, (), BusinessType.OTHER),
        ],
    )
    def test_classification(self, body: str, text: str, topics: tuple[str, ...], expected: BusinessType):
        summary = TopicSummary(all=topics)
        assert detect_business_type(doc(body), text, summary) == expected

    def test_ten_code_blocks_not_enough(self):
        assert detect_business_type(doc("<code>x</code>" * 10), self.NEUTRAL, TopicSummary()) == BusinessType.OTHER

    def test_blog_beats_news(self):
        summary = TopicSummary(all=("blog news",))
        assert detect_business_type(doc(""), self.NEUTRAL, summary) == BusinessType.BLOG

    def test_match_reports_rule(self):
        match = classify_business(doc(""), "payment", TopicSummary())
        assert match.rule == "payment_terms"
        assert classify_business(doc(""), self.NEUTRAL, TopicSummary()).rule is None

    def test_rule_order(self):
        assert [r.label for r in BUSINESS_RULES][:4] == [
            BusinessType.PAYMENT,
            BusinessType.ECOMMERCE,
            BusinessType.BLOG,
            BusinessType.NEWS,
        ]
