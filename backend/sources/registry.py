"""
Link source registry

Builds the ordered source list for an aggregator from AggregationConfig.
Order is priority order: partner API first, then template sources in
configuration order. The site-candidate source is built separately
because the aggregator only runs it when the earlier sources fell short.

Usage:
    from sources.registry import build_sources, build_site_source

    fetcher = build_fetcher(config)
    sources = build_sources(config, fetcher)
    site = build_site_source(config, fetcher)
"""

from typing import List, Optional

import httpx

from .base_source import BaseLinkSource
from .config import AggregationConfig
from .domains import StaticDomainResolver
from .fetcher import HttpFetcher
from .partner_api import PartnerApiAdapter
from .site_candidates import SiteCandidateSource
from .template_source import TemplateSource


def build_fetcher(
    config: AggregationConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HttpFetcher:
    """Create the shared fetcher with configured user agent and timeouts."""
    return HttpFetcher(
        user_agent=config.user_agent,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        transport=transport,
    )


def build_sources(config: AggregationConfig, http: HttpFetcher) -> List[BaseLinkSource]:
    """
    Build the primary sources in priority order

    Returns:
        [PartnerApiAdapter, TemplateSource(template_1), TemplateSource(template_2), ...]
    """
    sources: List[BaseLinkSource] = [PartnerApiAdapter(config.partner_api, http)]
    for template in config.templates:
        if template and template.strip():
            sources.append(TemplateSource(template.strip(), config.keywords, http))
    return sources


def build_site_source(config: AggregationConfig, http: HttpFetcher) -> Optional[SiteCandidateSource]:
    """Build the site-candidate source, or None when no domains are configured."""
    resolver = StaticDomainResolver(config.domain_map)
    if not len(resolver):
        return None
    return SiteCandidateSource(resolver, config.keywords, config.site, http)
