# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""First-match page-type classifier: URL path first, DOM structure second.

Rules are evaluated in strict precedence order; the first that fires wins:

   1. home_path      canonical home paths ("/", "", "/index.html", ...)
   2. home_dom       short/slash-free paths probed for hero, sections, home nav, brand title
   3. article        /blog/ /post/ /article/ /news/ /story/, /YYYY/MM/, article DOM markers
   4. product        /product /item /p/, product-detail markers, itemtype Product
   5. category       /category /shop /collection /catalog, listing grids
   6. about          /about /team /company /who-we-are /our-story
   7. contact        /contact /get-in-touch /reach-us, contact/mail form actions
   8. documentation  /docs /api /guide /manual /wiki, documentation markers
   9. search         /search /results, q= / query= parameters, search-result markers
  10. general        default

A missing or unparseable URL degrades to path "" (homepage candidate).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlsplit

from contentprofile import PageType
from contentprofile.document import Document
from contentprofile.rules import Rule, RuleMatch, first_match

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Marker tables
# ---------------------------------------------------------------------------

HOME_PATHS: frozenset[str] = frozenset(
    {"/", "", "/index", "/index.html", "/index.php", "/home", "/home.html", "/default.html", "/default.aspx"}
)

_SHORT_PATH_LEN = 20
_HOME_SECTION_COUNT = 3  # strictly more <section> elements

HERO_CLASSES = ("hero", "hero-section", "homepage-hero", "main-banner")
HOME_NAV_HREFS = frozenset({"/", "#home"})

ARTICLE_PATHS = ("/blog/", "/post/", "/article/", "/news/", "/story/")
ARTICLE_CLASSES = ("article", "post", "blog-post")
ARTICLE_DATE_CLASSES = ("publish-date", "post-date", "article-date", "byline", "author-info")
ARTICLE_ITEMTYPES = ("Article", "BlogPosting")
_DATE_SEGMENT_RE = re.compile(r"/\d{4}/\d{2}/")

PRODUCT_PATHS = ("/product", "/item", "/p/")
PRODUCT_CLASSES = ("product-page", "product-detail", "product-info")

CATEGORY_PATHS = ("/category", "/categories", "/shop", "/collection", "/catalog")
CATEGORY_CLASSES = ("category-grid", "product-grid", "listing-grid")

ABOUT_PATHS = ("/about", "/team", "/company", "/who-we-are", "/our-story")

CONTACT_PATHS = ("/contact", "/get-in-touch", "/reach-us")
CONTACT_FORM_ACTIONS = ("contact", "mail")

DOCS_PATHS = ("/docs", "/documentation", "/api", "/guide", "/manual", "/wiki")
DOCS_CLASSES = ("docs-content", "documentation", "api-reference")

SEARCH_PATHS = ("/search", "/results")
SEARCH_PARAMS = frozenset({"q", "query"})
SEARCH_CLASSES = ("search-results", "results-list")


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageSignals:
    """URL parts and document handle the page-type rules inspect."""

    doc: Document
    path: str  # lower-cased URL path, "" when unknown
    host: str  # lower-cased hostname, "" when unknown
    query_keys: frozenset[str]

    @classmethod
    def from_url(cls, doc: Document, page_url: str | None) -> PageSignals:
        path = host = ""
        keys: frozenset[str] = frozenset()
        if page_url:
            try:
                parts = urlsplit(page_url.strip())
                path = parts.path.lower()
                host = (parts.hostname or "").lower()
                keys = frozenset(k.lower() for k, _ in parse_qsl(parts.query, keep_blank_values=True))
            except ValueError:
                logger.debug("Unparseable page URL %r, treating as homepage candidate", page_url)
                path = host = ""
                keys = frozenset()
        return cls(doc=doc, path=path, host=host, query_keys=keys)

    def path_has(self, markers: tuple[str, ...]) -> bool:
        return any(m in self.path for m in markers)

    @property
    def domain_label(self) -> str:
        """Registered-name label of the host ("example" for www.example.com)."""
        host = self.host.removeprefix("www.")
        return host.split(".")[0] if host else ""


# ---------------------------------------------------------------------------
# Homepage
# ---------------------------------------------------------------------------


def _is_home_path(s: PageSignals) -> bool:
    return s.path in HOME_PATHS


def _is_home_candidate_path(s: PageSignals) -> bool:
    return len(s.path) <= 1 or (len(s.path) < _SHORT_PATH_LEN and "/" not in s.path)


def _has_home_nav_link(doc: Document) -> bool:
    for nav in doc.iter("nav"):
        for a in nav.iter("a"):
            if (a.get("href") or "").strip() in HOME_NAV_HREFS:
                return True
    return False


def _title_names_site(s: PageSignals) -> bool:
    label = s.domain_label
    return bool(label) and label in s.doc.title_text.lower()


def has_homepage_signals(s: PageSignals) -> bool:
    if not _is_home_candidate_path(s):
        return False
    return (
        s.doc.has_class(*HERO_CLASSES)
        or s.doc.count("section") > _HOME_SECTION_COUNT
        or _has_home_nav_link(s.doc)
        or _title_names_site(s)
    )


# ---------------------------------------------------------------------------
# Content types
# ---------------------------------------------------------------------------


def has_article_signals(s: PageSignals) -> bool:
    if s.path_has(ARTICLE_PATHS) or _DATE_SEGMENT_RE.search(s.path):
        return True
    doc = s.doc
    if doc.count("article") > 0 or doc.has_class(*ARTICLE_CLASSES):
        return True
    if any(doc.any_attr_contains("itemtype", t) for t in ARTICLE_ITEMTYPES):
        return True
    return doc.has_class(*ARTICLE_DATE_CLASSES)


def has_product_signals(s: PageSignals) -> bool:
    return (
        s.path_has(PRODUCT_PATHS)
        or s.doc.has_class(*PRODUCT_CLASSES)
        or s.doc.any_attr_contains("itemtype", "Product")
    )


def has_category_signals(s: PageSignals) -> bool:
    return s.path_has(CATEGORY_PATHS) or s.doc.has_class(*CATEGORY_CLASSES)


def has_about_signals(s: PageSignals) -> bool:
    return s.path_has(ABOUT_PATHS)


def has_contact_signals(s: PageSignals) -> bool:
    if s.path_has(CONTACT_PATHS):
        return True
    return any(s.doc.any_attr_contains("action", a, tag="form") for a in CONTACT_FORM_ACTIONS)


def has_documentation_signals(s: PageSignals) -> bool:
    return s.path_has(DOCS_PATHS) or s.doc.has_class(*DOCS_CLASSES)


def has_search_signals(s: PageSignals) -> bool:
    return s.path_has(SEARCH_PATHS) or bool(s.query_keys & SEARCH_PARAMS) or s.doc.has_class(*SEARCH_CLASSES)


PAGE_TYPE_RULES: tuple[Rule, ...] = (
    Rule("home_path", PageType.HOMEPAGE, _is_home_path),
    Rule("home_dom", PageType.HOMEPAGE, has_homepage_signals),
    Rule("article", PageType.ARTICLE, has_article_signals),
    Rule("product", PageType.PRODUCT, has_product_signals),
    Rule("category", PageType.CATEGORY, has_category_signals),
    Rule("about", PageType.ABOUT, has_about_signals),
    Rule("contact", PageType.CONTACT, has_contact_signals),
    Rule("documentation", PageType.DOCUMENTATION, has_documentation_signals),
    Rule("search", PageType.SEARCH, has_search_signals),
)


# ---------------------------------------------------------------------------
# Core classifier
# ---------------------------------------------------------------------------


def classify_page(doc: Document, page_url: str | None = None) -> RuleMatch:
    """Classify the page; returns the winning label and the rule that fired."""
    signals = PageSignals.from_url(doc, page_url)
    match = first_match(PAGE_TYPE_RULES, signals, default=PageType.GENERAL)
    if match.rule is None:
        logger.debug("No specific page type detected, defaulting to general: %s", page_url)
    else:
        logger.debug("Page type %s by rule %s (path=%r)", match.label, match.rule, signals.path)
    return match


def detect_page_type(doc: Document, page_url: str | None = None) -> PageType:
    return PageType(classify_page(doc, page_url).label)
