# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Document loader: raw HTML -> read-only lxml tree with cheap lookups.

Parse failures never propagate: an empty but valid ``<html><body>`` tree is
substituted. The tree is owned by one extraction session and is never
mutated after load; extractors that need to ignore subtrees skip them during
traversal instead of removing them.

Class-token and tag lookups (``has_class``, ``count``) are served from an
index built in a single pass on first use, so the classifiers can probe many
markers without re-walking the tree each time.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator
from functools import cached_property

import lxml.html
from lxml import etree

from contentprofile.errors import DocumentParseError
from contentprofile.sanitizer import normalize_text, strip_control_chars

logger = logging.getLogger(__name__)

_EMPTY_HTML = "<html><head></head><body></body></html>"

# Priority order: semantic containers, then role/class/id content containers
MAIN_REGION_PROBES: tuple[tuple[str, str], ...] = (
    ("tag", "main"),
    ("tag", "article"),
    ("role", "main"),
    ("class", "content"),
    ("id", "content"),
)


def is_element(node: object) -> bool:
    """True for real elements; comments and processing instructions have callable tags."""
    return isinstance(getattr(node, "tag", None), str)


def class_tokens(el: lxml.html.HtmlElement) -> list[str]:
    return (el.get("class") or "").split()


def element_text(el: lxml.html.HtmlElement, max_len: int | None = None) -> str:
    """Whitespace-normalized text content of an element subtree."""
    try:
        return normalize_text(el.text_content(), max_len=max_len)
    except (ValueError, TypeError):
        return ""


def parse_html(html: str) -> lxml.html.HtmlElement:
    """Parse HTML into a document root.

    Raises:
        DocumentParseError: the input cannot be parsed even leniently.
    """
    cleaned = strip_control_chars(html or "")
    if not cleaned.strip():
        raise DocumentParseError("document is empty")
    try:
        return lxml.html.document_fromstring(cleaned)
    except ValueError:
        # lxml rejects str input that carries an XML encoding declaration
        try:
            parser = lxml.html.HTMLParser(encoding="utf-8")
            return lxml.html.document_fromstring(cleaned.encode("utf-8"), parser=parser)
        except (etree.ParserError, ValueError, UnicodeError) as e:
            raise DocumentParseError(str(e)) from e
    except (etree.ParserError, etree.XMLSyntaxError, UnicodeError) as e:
        raise DocumentParseError(str(e)) from e


class Document:
    """Read-only handle over one parsed page."""

    def __init__(self, root: lxml.html.HtmlElement) -> None:
        self.root = root

    @classmethod
    def load(cls, html: str | None, max_chars: int | None = None) -> Document:
        """Parse ``html``; on any failure return an empty valid document.

        Input longer than ``max_chars`` is cut before parsing. libxml2 drops
        oversized text nodes outright, so an uncapped page can lose its body.
        """
        if html and max_chars is not None and len(html) > max_chars:
            logger.warning("HTML exceeds %d chars, truncating before parse (got %d)", max_chars, len(html))
            html = html[:max_chars]
        try:
            return cls(parse_html(html or ""))
        except DocumentParseError as e:
            if html and html.strip():
                logger.warning("HTML parse failed, substituting empty document: %s", e)
            return cls.empty()

    @classmethod
    def empty(cls) -> Document:
        return cls(lxml.html.document_fromstring(_EMPTY_HTML))

    # --- structure ---

    @cached_property
    def body(self) -> lxml.html.HtmlElement:
        for el in self.root.iter("body"):
            return el
        return self.root

    @cached_property
    def _index(self) -> tuple[Counter[str], frozenset[str]]:
        tags: Counter[str] = Counter()
        classes: set[str] = set()
        for el in self.root.iter():
            if not is_element(el):
                continue
            tags[el.tag] += 1
            cls = el.get("class")
            if cls:
                classes.update(cls.split())
        return tags, frozenset(classes)

    def count(self, *tags: str) -> int:
        tag_counts = self._index[0]
        return sum(tag_counts.get(t, 0) for t in tags)

    def has_class(self, *tokens: str) -> bool:
        """True if any element carries any of the given class tokens (``.token``)."""
        classes = self._index[1]
        return any(t in classes for t in tokens)

    def iter(self, *tags: str) -> Iterator[lxml.html.HtmlElement]:
        """Elements with the given tags in document order."""
        return self.root.iter(*tags)

    def first(self, tag: str) -> lxml.html.HtmlElement | None:
        for el in self.root.iter(tag):
            return el
        return None

    def any_attr_contains(self, attr: str, needle: str, tag: str | None = None) -> bool:
        """``[attr*="needle"]``: case-sensitive substring match like CSS."""
        for el in self.root.iter(tag) if tag else self.root.iter():
            if not is_element(el):
                continue
            value = el.get(attr)
            if value and needle in value:
                return True
        return False

    def main_region(self) -> lxml.html.HtmlElement | None:
        """First element matched by the highest-priority main-content probe."""
        for kind, value in MAIN_REGION_PROBES:
            if kind == "tag":
                el = self.first(value)
                if el is not None:
                    return el
                continue
            if kind == "class" and not self.has_class(value):
                continue
            for el in self.root.iter():
                if not is_element(el):
                    continue
                if kind == "role" and (el.get("role") or "").strip().lower() == value:
                    return el
                if kind == "class" and value in class_tokens(el):
                    return el
                if kind == "id" and el.get("id") == value:
                    return el
        return None

    # --- head metadata ---

    @cached_property
    def title_text(self) -> str:
        el = self.first("title")
        return element_text(el) if el is not None else ""

    def meta_property(self, prop: str) -> str:
        for el in self.root.iter("meta"):
            if el.get("property") == prop:
                return normalize_text(el.get("content"))
        return ""

    @cached_property
    def lang(self) -> str:
        html_el = self.root if self.root.tag == "html" else self.first("html")
        if html_el is None:
            return ""
        return (html_el.get("lang") or "").strip()
