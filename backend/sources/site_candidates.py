"""
Site-candidate link source

Pattern: company's own site, discovered via robots.txt -> sitemap.
Only runs for companies whose official domain is known.

1. Sitemap URLs are pre-filtered by keyword (configured keywords plus
   generic hints like "careers" / "jobs" / "join") to bound request volume
2. At most max_pages candidates are fetched by a fixed-size pool, each
   with its own timeout
3. Every fetched page yields:
   a) one link per JSON-LD JobPosting / Organization URL ("sitemap/jsonld")
   b) one link for the page itself ("sitemap", lower confidence)

The call returns only after every scheduled fetch finished or timed out.
"""

import asyncio
import html
import re
from typing import List, Optional

from sourcing.models import Link
from utils.jsonld import extract_apply_urls
from .base_source import BaseLinkSource
from .config import KeywordFilters, SiteCandidateConfig
from .domains import DomainResolver
from .enums import SourceKind
from .fetcher import HttpFetcher
from .sitemap import SitemapDiscovery

SOURCE_NAME = "sitemap"
JSONLD_SOURCE_NAME = "sitemap/jsonld"

URL_HINTS = ("careers", "career", "jobs", "job", "join", "recruit", "hiring", "zhaopin")

JSONLD_TITLE = "Apply link (structured data)"
PAGE_TITLE = "Careers page"

TITLE_PATTERN = re.compile(r'<title[^>]*>(.*?)</title\s*>', re.IGNORECASE | re.DOTALL)
_WS = re.compile(r'\s+')


def page_title(page_html: str) -> str:
    """Return the page's <title> text, or empty string."""
    match = TITLE_PATTERN.search(page_html or "")
    if not match:
        return ""
    return _WS.sub(" ", html.unescape(match.group(1))).strip()


class SiteCandidateSource(BaseLinkSource):
    """
    Extract apply links from a company's official site

    Example:
        source = SiteCandidateSource(
            StaticDomainResolver({"字节跳动": "jobs.bytedance.com"}),
            KeywordFilters(),
            SiteCandidateConfig(max_pages=5, pool_size=3, task_timeout=10.0),
            HttpFetcher(),
        )
        links = await source.fetch("字节跳动", limit=8)
    """
    SOURCE_KIND = SourceKind.SITE_CANDIDATE

    def __init__(
        self,
        resolver: DomainResolver,
        keywords: KeywordFilters,
        config: SiteCandidateConfig,
        http: HttpFetcher,
    ):
        super().__init__(http, SOURCE_NAME)
        self.resolver = resolver
        self.keywords = keywords
        self.config = config
        self.sitemap = SitemapDiscovery(http)
        self._hints = KeywordFilters(list(URL_HINTS))

    def get_headers(self):
        return {'Accept': 'text/html,application/xhtml+xml'}

    def filter_candidates(self, urls: List[str]) -> List[str]:
        """Keep sitemap URLs that look like career pages, first max_pages only."""
        candidates = [
            url for url in urls
            if self.keywords.matches(url) or self._hints.matches(url)
        ]
        return candidates[:max(0, self.config.max_pages)]

    async def _collect_links(self, company_name: str, limit: int) -> List[Link]:
        domain = self.resolver.resolve_domain(company_name)
        if not domain:
            return []

        sitemap_urls = await self.sitemap.extract_urls_from_sitemap(domain)
        candidates = self.filter_candidates(sitemap_urls)
        if not candidates:
            self.log_debug(f"No candidate pages in sitemap of {domain}")
            return []

        semaphore = asyncio.Semaphore(max(1, self.config.pool_size))
        tasks = [self._fetch_candidate(url, semaphore) for url in candidates]
        # Barrier: every task has completed or hit its own timeout here
        per_page = await asyncio.gather(*tasks)

        links = [link for page_links in per_page for link in page_links]
        return links[:limit]

    async def _fetch_candidate(self, url: str, semaphore: asyncio.Semaphore) -> List[Link]:
        """Fetch one candidate page inside the pool; failures yield []."""
        async with semaphore:
            try:
                response = await asyncio.wait_for(
                    self.make_request(url),
                    timeout=self.config.task_timeout,
                )
            except Exception as e:
                self.log_debug(f"Dropping candidate {url}: {type(e).__name__}: {e}")
                return []

        return self.links_from_page(url, response.text)

    def links_from_page(self, url: str, page_html: Optional[str]) -> List[Link]:
        """Structured-data links first, then the page itself."""
        links = [
            Link.create(
                title=JSONLD_TITLE,
                url=apply_url,
                source=JSONLD_SOURCE_NAME,
                description=f"Source: structured data on {url}",
            )
            for apply_url in extract_apply_urls(page_html or "")
        ]
        links.append(Link.create(
            title=page_title(page_html or "") or PAGE_TITLE,
            url=url,
            source=SOURCE_NAME,
            description="Source: company sitemap (unverified)",
        ))
        return links
