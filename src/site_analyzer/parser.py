"""Structural markup parsing into a read-only document model."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_analyzer.errors import ParseFailure
from site_analyzer.models import RawDocument

logger = logging.getLogger(__name__)


class ParsedDocument:
    """Read-only view over a parsed page shared by every signal extractor.

    Query helpers return fresh lists or strings; the underlying tree is never
    handed out for mutation.
    """

    def __init__(self, markup: str, relay: str, soup: BeautifulSoup, url: str = "") -> None:
        self._markup = markup
        self._relay = relay
        self._soup = soup
        self._url = url

    @property
    def markup(self) -> str:
        return self._markup

    @property
    def relay(self) -> str:
        return self._relay

    @property
    def url(self) -> str:
        return self._url

    @property
    def host(self) -> str:
        return (urlparse(self._url).hostname or "").lower()

    def select(self, selector: str) -> list[Tag]:
        return list(self._soup.select(selector))

    def select_one(self, selector: str) -> Tag | None:
        return self._soup.select_one(selector)

    def count(self, selector: str) -> int:
        return len(self._soup.select(selector))

    @property
    def title(self) -> str:
        tag = self._soup.find("title")
        return tag.get_text().strip() if tag else ""

    def meta_content(self, name: str) -> str | None:
        tag = self._soup.find("meta", attrs={"name": name})
        if tag is None:
            return None
        content = tag.get("content")
        return content if isinstance(content, str) else None

    @property
    def style_text(self) -> str:
        """Concatenated bodies of all embedded <style> blocks."""
        return "\n".join(tag.get_text() for tag in self._soup.find_all("style"))

    @property
    def script_text(self) -> str:
        """Concatenated bodies of all <script> elements."""
        return "\n".join(tag.get_text() for tag in self._soup.find_all("script"))

    @property
    def inline_styles(self) -> list[str]:
        return [tag["style"] for tag in self._soup.find_all(style=True)]

    @property
    def script_sources(self) -> list[str]:
        return [tag["src"] for tag in self._soup.find_all("script", src=True)]

    @property
    def stylesheet_hrefs(self) -> list[str]:
        return [
            tag["href"]
            for tag in self._soup.find_all("link", href=True)
            if "stylesheet" in (tag.get("rel") or [])
        ]

    @property
    def link_hrefs(self) -> list[str]:
        return [tag["href"] for tag in self._soup.find_all("link", href=True)]


def parse_document(raw: RawDocument) -> ParsedDocument:
    """Parse raw markup. Raises ParseFailure when no element tree can be built."""
    if not raw.markup or not raw.markup.strip():
        raise ParseFailure(f"Empty document received from {raw.relay}")

    try:
        soup = BeautifulSoup(raw.markup, "html.parser")
    except Exception as exc:
        logger.error("Markup from %s could not be tokenized: %s", raw.relay, exc)
        raise ParseFailure(f"Failed to parse website content: {exc}") from exc

    if soup.find(True) is None:
        raise ParseFailure(f"No document root found in content from {raw.relay}")

    logger.info("Parsed document from %s (title: %s)", raw.relay, _title_or_unknown(soup))
    return ParsedDocument(raw.markup, raw.relay, soup, url=raw.url)


def _title_or_unknown(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    return tag.get_text().strip() if tag else "Unknown"
