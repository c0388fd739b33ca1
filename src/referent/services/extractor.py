"""Heuristic article extraction from arbitrary HTML pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

import requests
from bs4 import BeautifulSoup, Tag

from referent.errors import NetworkError, UpstreamHttpError, UpstreamTimeout, classify_status
from referent.models import ExtractedArticle
from referent.services.cleanup import CSS_CLEANUP_RULES, CleanupRule, clean_text

__all__ = [
    "ArticleExtractor",
    "BODY_NOT_FOUND",
    "BODY_RULES",
    "DATE_NOT_FOUND",
    "DATE_RULES",
    "DEFAULT_HEADERS",
    "SelectorRule",
    "TITLE_NOT_FOUND",
    "TITLE_RULES",
    "extract_article",
]

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/129.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

FETCH_TIMEOUT = 30

TITLE_NOT_FOUND = "Title not found"
DATE_NOT_FOUND = "Date not found"
BODY_NOT_FOUND = "Content not found"

MIN_TITLE_LENGTH = 10
MIN_BODY_LENGTH = 100

# Subtrees that never hold article prose.
NON_CONTENT_SELECTORS = (
    "script, style, noscript, template, nav, header, footer, aside, form, button, "
    "input, select, textarea, dialog, iframe, video, audio, picture, svg, canvas, "
    "object, embed, .ad, .ads, .advertisement, [class*='advert'], [id*='advert'], "
    "[role='navigation'], [role='banner'], [style]"
)

BLOCK_TAGS = (
    "p", "div", "section", "li", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "pre", "tr", "table", "figcaption", "dd", "dt",
)

_STATUS_MESSAGES = {
    "NOT_FOUND": "The page was not found. Check the URL and try again.",
    "SERVER_ERROR": "The site returned a server error. Try again later.",
    "LOAD_ERROR": "The page could not be loaded.",
}


def _longer_than(limit: int) -> Callable[[str], bool]:
    return lambda text: len(text) > limit


def _non_empty(text: str) -> bool:
    return bool(text)


@dataclass(frozen=True, slots=True)
class SelectorRule:
    """A CSS selector paired with the predicate its extracted value must satisfy.

    When ``attributes`` are given, the first non-empty attribute of the matched
    element wins over its visible text.
    """

    selector: str
    accept: Callable[[str], bool] = _non_empty
    attributes: tuple[str, ...] = ()

    def value(self, element: Tag) -> str:
        for attribute in self.attributes:
            raw = element.get(attribute)
            if isinstance(raw, str) and raw.strip():
                return raw.strip()
        return element.get_text(" ", strip=True)


# Ordered from most article-specific to most generic.
TITLE_RULES: tuple[SelectorRule, ...] = tuple(
    SelectorRule(selector, _longer_than(MIN_TITLE_LENGTH))
    for selector in (
        "h1",
        "article h1",
        ".post-title",
        ".article-title",
        "[class*='title']",
        "title",
    )
)

DATE_RULES: tuple[SelectorRule, ...] = (
    SelectorRule("time[datetime]", attributes=("datetime",)),
    SelectorRule("meta[property='article:published_time']", attributes=("content",)),
    SelectorRule("[itemprop='datePublished']", attributes=("datetime", "content")),
    SelectorRule("time"),
    SelectorRule("[class*='date']"),
    SelectorRule("[class*='published']"),
    SelectorRule("[class*='time']"),
    SelectorRule("article time"),
    SelectorRule(".post-date"),
    SelectorRule(".article-date"),
)

BODY_RULES: tuple[SelectorRule, ...] = tuple(
    SelectorRule(selector, _longer_than(MIN_BODY_LENGTH))
    for selector in (
        "article",
        ".post",
        ".content",
        ".article-content",
        ".post-content",
        "[class*='article']",
        "[class*='post']",
        "main article",
        "[role='article']",
    )
)

MAIN_FALLBACK_SELECTORS = ("main", "[role='main']")


def _first_match(soup: BeautifulSoup, rules: Iterable[SelectorRule]) -> str | None:
    for rule in rules:
        element = soup.select_one(rule.selector)
        if element is None:
            continue
        value = rule.value(element)
        if rule.accept(value):
            return value
    return None


def find_title(soup: BeautifulSoup, rules: Sequence[SelectorRule] = TITLE_RULES) -> str:
    """Return the most plausible headline of the page."""

    title = _first_match(soup, rules)
    if title:
        return title
    if soup.title is not None:
        fallback = soup.title.get_text(" ", strip=True)
        if fallback:
            return fallback
    return TITLE_NOT_FOUND


def find_published_date(soup: BeautifulSoup, rules: Sequence[SelectorRule] = DATE_RULES) -> str:
    """Return the raw publication date text, preferring machine-readable attributes."""

    return _first_match(soup, rules) or DATE_NOT_FOUND


def _container_text(container: Tag, rules: Sequence[CleanupRule]) -> str:
    for element in container.select(NON_CONTENT_SELECTORS):
        # Nested matches are already gone with their ancestor.
        if not element.decomposed:
            element.decompose()
    for line_break in container.find_all("br"):
        line_break.replace_with("\n")
    for block in container.find_all(BLOCK_TAGS):
        block.append("\n")
    return clean_text(container.get_text(), rules)


def find_body(
    soup: BeautifulSoup,
    rules: Sequence[SelectorRule] = BODY_RULES,
    cleanup_rules: Sequence[CleanupRule] = CSS_CLEANUP_RULES,
) -> str:
    """Return the article body text, or :data:`BODY_NOT_FOUND`."""

    body = ""
    for rule in rules:
        container = soup.select_one(rule.selector)
        if container is None:
            continue
        body = _container_text(container, cleanup_rules)
        if rule.accept(body):
            return body

    for selector in MAIN_FALLBACK_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            body = _container_text(container, cleanup_rules)
            break

    return body or BODY_NOT_FOUND


def parse_article(html: str, cleanup_rules: Sequence[CleanupRule] = CSS_CLEANUP_RULES) -> ExtractedArticle:
    """Extract title, date and body from raw ``html``."""

    soup = BeautifulSoup(html, "lxml")
    return ExtractedArticle(
        title=find_title(soup),
        published_at=find_published_date(soup),
        body=find_body(soup, cleanup_rules=cleanup_rules),
    )


class ArticleExtractor:
    """Fetch web pages and extract their readable article content."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = FETCH_TIMEOUT,
        cleanup_rules: Sequence[CleanupRule] = CSS_CLEANUP_RULES,
    ) -> None:
        self._owns_session = session is None
        self._session = session or requests.Session()
        if self._owns_session:
            self._session.headers.update(DEFAULT_HEADERS)
        self._timeout = timeout
        self._cleanup_rules = tuple(cleanup_rules)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "ArticleExtractor":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def fetch(self, url: str) -> str:
        """Return the HTML served at ``url``, mapping failures onto pipeline errors."""

        logger.info("Fetching %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.Timeout as exc:
            raise UpstreamTimeout(
                f"The page did not respond within {self._timeout:g} seconds."
            ) from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Could not reach {url}: {exc}") from exc

        status = response.status_code
        if not 200 <= status < 300:
            logger.warning("Fetching %s failed with HTTP %s", url, status)
            code = classify_status(status)
            raise UpstreamHttpError(
                f"{_STATUS_MESSAGES[code]} (HTTP {status})", status_code=status, code=code
            )

        return response.text

    def extract(self, url: str) -> ExtractedArticle:
        """Fetch ``url`` and extract its title, publication date and body."""

        article = parse_article(self.fetch(url), self._cleanup_rules)
        logger.info("Extracted %d characters of body text from %s", len(article.body), url)
        return article


def extract_article(url: str, *, timeout: float = FETCH_TIMEOUT) -> ExtractedArticle:
    """Extract ``url`` with a short-lived :class:`ArticleExtractor`."""

    with ArticleExtractor(timeout=timeout) as extractor:
        return extractor.extract(url)
