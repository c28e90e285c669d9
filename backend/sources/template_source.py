"""
Template search-page link source

Pattern: keyword-templated search engine page (e.g. nowcoder, offershow)
URL template: https://www.nowcoder.com/search?query=${name}

The page is fetched once and scanned for anchor tags. An anchor is kept when
its text or href contains one of the configured keywords:

    <a href="https://jobs.example.com/apply/123">校招投递</a>   -> kept
    <a href="/about">About us</a>                             -> skipped

The scan is a best-effort regex pass, not a DOM parse, so it tolerates
broken or partial HTML.
"""

import html
import re
from typing import List
from urllib.parse import quote_plus, urljoin, urlsplit

from sourcing.models import Link
from .base_source import BaseLinkSource
from .config import KeywordFilters
from .enums import SourceKind
from .fetcher import HttpFetcher

NAME_PLACEHOLDERS = ("${name}", "{name}")
DEFAULT_TITLE = "Apply link"

ANCHOR_PATTERN = re.compile(
    r'<a\s[^>]*?(?<![\w-])href\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s>]+))[^>]*>(.*?)</a\s*>',
    re.IGNORECASE | re.DOTALL,
)
TAG_PATTERN = re.compile(r'<[^>]*>', re.DOTALL)
_WS = re.compile(r'\s+')


def source_name_from_template(template_url: str) -> str:
    """
    Derive the source tag from a template's host

    Example:
        >>> source_name_from_template("https://www.nowcoder.com/search?query=${name}")
        'nowcoder.com'
    """
    host = urlsplit(template_url).hostname
    if not host:
        # No scheme: take everything up to the first slash
        host = template_url.split("://")[-1].split("/")[0]
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def extract_anchors(page_html: str) -> List[tuple[str, str]]:
    """
    Scan HTML for anchors

    Returns:
        List of (href, text) pairs in document order. Text has tags
        stripped, entities unescaped and whitespace collapsed.
    """
    anchors = []
    for match in ANCHOR_PATTERN.finditer(page_html):
        href = next((g for g in match.group(1, 2, 3) if g is not None), "")
        text = TAG_PATTERN.sub("", match.group(4))
        text = _WS.sub(" ", html.unescape(text)).strip()
        anchors.append((html.unescape(href).strip(), text))
    return anchors


class TemplateSource(BaseLinkSource):
    """
    Extract apply links from a keyword-templated search page

    Example:
        source = TemplateSource(
            "https://www.nowcoder.com/search?query=${name}",
            KeywordFilters(["招聘", "apply"]),
            http=HttpFetcher(),
        )
        links = await source.fetch("字节跳动", limit=8)
    """
    SOURCE_KIND = SourceKind.TEMPLATE

    def __init__(self, template_url: str, keywords: KeywordFilters, http: HttpFetcher):
        super().__init__(http, source_name_from_template(template_url))
        self.template_url = template_url
        self.keywords = keywords

    def get_headers(self):
        return {'Accept': 'text/html'}

    def build_url(self, company_name: str) -> str:
        """Substitute the URL-escaped company name into the template."""
        url = self.template_url
        escaped = quote_plus(company_name)
        for placeholder in NAME_PLACEHOLDERS:
            url = url.replace(placeholder, escaped)
        return url

    async def _collect_links(self, company_name: str, limit: int) -> List[Link]:
        page_url = self.build_url(company_name)
        response = await self.make_request(page_url)
        page_html = response.text
        if not page_html or not page_html.strip():
            return []
        return self.extract_links(page_html, page_url, limit)

    def extract_links(self, page_html: str, page_url: str, limit: int) -> List[Link]:
        """
        Keep keyword-matching anchors until limit is reached

        Args:
            page_html: Search page HTML
            page_url: URL the page was fetched from (base for relative hrefs)
            limit: Maximum number of links

        Returns:
            List of Link objects
        """
        links: List[Link] = []
        for href, text in extract_anchors(page_html):
            if len(links) >= max(1, limit):
                break
            if not href:
                continue
            if not self.keywords.matches(f"{text} {href}"):
                continue

            url = urljoin(page_url, href)
            if urlsplit(url).scheme not in ("http", "https"):
                continue

            links.append(Link.create(
                title=text or DEFAULT_TITLE,
                url=url,
                source=self.source_name,
                description=f"Source: {self.source_name}",
            ))
        return links
