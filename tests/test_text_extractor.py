# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for contentprofile.text_extractor: spacing, noise skipping, caps."""

from __future__ import annotations

import lxml.html
import pytest

from contentprofile.config import ExtractionLimits
from contentprofile.text_extractor import (
    extract_page_text,
    extract_text_with_spacing,
    is_noise_element,
    should_skip_token,
)
from tests._helpers import doc, filler


def _text(body: str) -> str:
    return extract_page_text(doc(body)).text


class TestSpacing:
    def test_adjacent_blocks_do_not_fuse(self):
        assert _text("<p>A</p><p>B</p>") == "A B"

    def test_nested_blocks(self):
        assert _text("<div><div>One</div><div>Two</div></div><p>Three</p>") == "One Two Three"

    def test_list_items_separated(self):
        assert _text("<ul><li>alpha</li><li>beta</li></ul>") == "alpha beta"

    def test_table_cells_separated(self):
        assert _text("<table><tr><td>cell1</td><td>cell2</td></tr></table>") == "cell1 cell2"

    def test_whitespace_collapsed(self):
        assert _text("<p>lots   of\n\n\tspace</p>") == "lots of space"

    def test_space_before_punctuation_removed(self):
        assert _text("<p>Hello <b>world</b>, friend</p>") == "Hello world, friend"


class TestNoise:
    @pytest.mark.parametrize(
        "fragment",
        [
            "<nav>x</nav>",
            "<header>x</header>",
            "<footer>x</footer>",
            "<button>x</button>",
            "<script>x</script>",
            "<style>x</style>",
            '<div class="navigation">x</div>',
            '<div class="mobile-menu">x</div>',
            '<div class="site-logo">x</div>',
            '<span class="icon-star">x</span>',
            '<a class="cta-button">x</a>',
            '<div id="main-logo">x</div>',
            '<div id="mobile-nav">x</div>',
            '<div role="navigation">x</div>',
            '<div aria-label="Primary navigation">x</div>',
        ],
    )
    def test_noise_elements(self, fragment: str):
        assert is_noise_element(lxml.html.fragment_fromstring(fragment))

    @pytest.mark.parametrize(
        "fragment",
        ['<div class="article-body">x</div>', "<p>x</p>", '<div id="content">x</div>', '<div role="main">x</div>'],
    )
    def test_content_elements(self, fragment: str):
        assert not is_noise_element(lxml.html.fragment_fromstring(fragment))

    def test_nav_and_footer_dropped(self):
        text = _text("<nav>Home About</nav><p>Real content here</p><footer>Copyright 2024</footer>")
        assert text == "Real content here"

    def test_tail_text_of_noise_kept(self):
        assert _text("<p>before <button>Press</button> after</p>") == "before after"

    def test_script_content_dropped(self):
        assert _text("<p>Visible</p><script>var secret = 1;</script>") == "Visible"

    def test_comment_dropped(self):
        text = _text("<p>A<!-- hidden -->B</p>")
        assert "hidden" not in text
        assert "A" in text and "B" in text

    def test_document_not_mutated(self):
        d = doc("<nav><a href='/'>Home</a></nav><p>Body</p>")
        extract_page_text(d)
        assert d.count("nav") == 1


class TestSkipTokens:
    @pytest.mark.parametrize("token", ["Menu", "close", "TOGGLE", "Loading", "×", "<", "•", "Show", "click here"])
    def test_skipped(self, token: str):
        assert should_skip_token(token)

    @pytest.mark.parametrize("token", ["A", "7", "Menus and dishes", "Hello", "Opening hours"])
    def test_kept(self, token: str):
        assert not should_skip_token(token)

    def test_ui_tokens_removed_from_text(self):
        assert _text("<p>Hello</p><span>Menu</span><span>×</span>") == "Hello"


class TestRegion:
    def test_main_region_preferred(self):
        result = extract_page_text(doc("<div>outside</div><main><p>inside</p></main>"))
        assert result.text == "inside"
        assert result.region is not None

    def test_body_fallback(self):
        result = extract_page_text(doc("<div>only body</div>"))
        assert result.text == "only body"
        assert result.region is None

    def test_empty_document(self):
        result = extract_page_text(doc(""))
        assert result.text == ""
        assert not result.truncated


class TestCaps:
    def test_truncates_to_ceiling(self, caplog):
        limits = ExtractionLimits(max_text_chars=50)
        result = extract_page_text(doc(f"<p>{filler(200)}</p>"), limits)
        assert len(result.text) <= 50
        assert result.truncated
        assert "truncating" in caplog.text

    def test_many_blocks_stop_early(self):
        limits = ExtractionLimits(max_text_chars=100)
        body = "".join(f"<p>paragraph number {i}</p>" for i in range(5000))
        result = extract_page_text(doc(body), limits)
        assert len(result.text) <= 100
        assert result.truncated

    def test_short_page_not_truncated(self):
        assert not extract_page_text(doc("<p>short</p>")).truncated

    def test_deep_nesting_no_recursion_error(self):
        body = "<div>" * 200 + "deep text" + "</div>" * 200
        assert "deep text" in extract_text_with_spacing(doc(body).body)
