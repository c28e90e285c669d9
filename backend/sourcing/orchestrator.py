"""
Async orchestrator for apply-link aggregation for one company

Pipeline (per uncached company):
    partner API + template sources (concurrent, merged in priority order)
    -> approved submissions
    -> site candidates (only while still below the cap)
    -> dedupe by canonical URL -> cap -> cache

No source failure ever reaches the caller; a failing source simply
contributes nothing. search_links_with_status() exposes what happened
per source without changing the plain-list contract of search_links().
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Tuple

import httpx

from sources.base_source import BaseLinkSource, SourceResult, map_source_error
from sources.config import AggregationConfig
from sources.registry import build_fetcher, build_site_source, build_sources
from utils.company_key import company_key
from utils.url_normalizer import normalize
from .cache import LinkCache
from .models import Link, SourceStatus

logger = logging.getLogger(__name__)

SUBMISSIONS_SOURCE = "submitted"
CACHE_SOURCE = "cache"


class ApprovedLinkProvider(Protocol):
    """Read side of the moderated link submission store."""

    def list_approved_apply_links(self, company_name: str) -> List[Link]:
        ...

    def list_approved_announcement_links(self, company_name: str) -> List[Link]:
        ...


def dedupe_links(links: List[Link]) -> List[Link]:
    """
    Drop links whose canonical URL was already seen

    First occurrence wins, so earlier (higher priority) sources win ties.
    Links without a URL are dropped.
    """
    seen = set()
    unique = []
    for link in links:
        if not link.url:
            continue
        key = normalize(link.url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(link)
    return unique


def _to_status(result: SourceResult) -> SourceStatus:
    return SourceStatus(
        source=result.source,
        status=result.status,
        links_count=len(result.links),
        error=result.error,
    )


class LinkAggregator:
    """
    Aggregates apply links for a company across all configured sources

    Example:
        >>> aggregator = build_aggregator(AggregationConfig.from_settings(settings))
        >>> links = await aggregator.search_links("字节跳动")
        >>> print(f"Found {len(links)} links")
        Found 8 links
    """

    def __init__(
        self,
        sources: List[BaseLinkSource],
        site_source: Optional[BaseLinkSource] = None,
        submissions: Optional[ApprovedLinkProvider] = None,
        max_per_company: int = 8,
        cache: Optional[LinkCache] = None,
    ):
        self.sources = list(sources)
        self.site_source = site_source
        self.submissions = submissions
        self.max_per_company = max_per_company
        self.cache = cache if cache is not None else LinkCache()

    @property
    def cap(self) -> int:
        return max(1, self.max_per_company)

    async def search_links(self, company_name: str) -> List[Link]:
        """
        Return deduplicated, capped links for a company

        Args:
            company_name: Company display name

        Returns:
            Ordered list of Link objects (empty for blank input)
        """
        links, _ = await self.search_links_with_status(company_name)
        return links

    async def search_links_with_status(
        self, company_name: str
    ) -> Tuple[List[Link], List[SourceStatus]]:
        """Same as search_links(), plus the per-source outcome."""
        if not company_name or not company_name.strip():
            return [], []

        key = company_key(company_name)
        cached = self.cache.get(key)
        if cached:
            status = SourceStatus(source=CACHE_SOURCE, status="cached", links_count=len(cached))
            return cached[:self.cap], [status]

        return await self._aggregate(company_name, key)

    async def refresh(self, company_name: str) -> List[Link]:
        """Recompute a company's links ignoring the cache, then overwrite it."""
        if not company_name or not company_name.strip():
            return []
        links, _ = await self._aggregate(company_name, company_key(company_name))
        return links

    async def _aggregate(
        self, company_name: str, key: str
    ) -> Tuple[List[Link], List[SourceStatus]]:
        merged: List[Link] = []
        statuses: List[SourceStatus] = []

        # Run all primary sources in parallel, merge in list order
        results = await asyncio.gather(
            *(source.fetch_with_status(company_name, self.cap) for source in self.sources),
            return_exceptions=True,
        )
        for source, result in zip(self.sources, results):
            if isinstance(result, BaseException):
                logger.error(f"Unexpected error from {source!r} for '{company_name}': {result!r}")
                result = SourceResult(source=source.source_name, error="Unexpected error occurred")
            merged.extend(result.links)
            statuses.append(_to_status(result))

        if self.submissions is not None:
            submitted = await self._approved_links(company_name)
            merged.extend(submitted.links)
            statuses.append(_to_status(submitted))

        if self.site_source is not None and len(merged) < self.cap:
            site_result = await self.site_source.fetch_with_status(company_name, self.cap)
            merged.extend(site_result.links)
            statuses.append(_to_status(site_result))

        limited = dedupe_links(merged)[:self.cap]
        self.cache.put(key, limited)

        logger.info(
            f"Aggregated {len(limited)} links for '{company_name}' "
            f"({len(merged)} before dedup, {len(statuses)} sources)"
        )
        return limited, statuses

    async def _approved_links(self, company_name: str) -> SourceResult:
        """Read approved submissions (sync store) without blocking the loop."""
        loop = asyncio.get_running_loop()
        try:
            links = await loop.run_in_executor(
                None, self.submissions.list_approved_apply_links, company_name
            )
        except Exception as e:
            logger.warning(f"Approved submissions lookup failed for '{company_name}': {e}")
            return SourceResult(source=SUBMISSIONS_SOURCE, error=map_source_error(e))
        return SourceResult(source=SUBMISSIONS_SOURCE, links=list(links or []))


def build_aggregator(
    config: AggregationConfig,
    submissions: Optional[ApprovedLinkProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    cache: Optional[LinkCache] = None,
) -> LinkAggregator:
    """
    Build an aggregator and its sources from configuration

    Args:
        config: Aggregation configuration
        submissions: Approved-submission provider (optional)
        transport: httpx transport override (tests use httpx.MockTransport)
        cache: Cache instance to share (a fresh one by default)

    Returns:
        Configured LinkAggregator
    """
    http = build_fetcher(config, transport=transport)
    return LinkAggregator(
        sources=build_sources(config, http),
        site_source=build_site_source(config, http),
        submissions=submissions,
        max_per_company=config.max_per_company,
        cache=cache,
    )


_aggregator: Optional[LinkAggregator] = None


def get_aggregator() -> LinkAggregator:
    """
    Process-wide aggregator built from settings (FastAPI dependency)

    The cache lives as long as this instance, i.e. the process.
    """
    global _aggregator
    if _aggregator is None:
        from config.settings import settings
        from db.session import SessionLocal
        from db.submission_service import SubmissionLinkProvider

        _aggregator = build_aggregator(
            AggregationConfig.from_settings(settings),
            submissions=SubmissionLinkProvider(SessionLocal),
        )
    return _aggregator


def search_links_sync(company_name: str, aggregator: Optional[LinkAggregator] = None) -> List[Link]:
    """
    Synchronous wrapper for search_links (for non-async contexts)

    Example:
        >>> links = search_links_sync("字节跳动")
        >>> print(f"Found {len(links)} links")
    """
    return asyncio.run((aggregator or get_aggregator()).search_links(company_name))
