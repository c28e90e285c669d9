"""
Link sources package

This package contains the base source class and the concrete strategies
for discovering apply links for a company:

- TemplateSource: keyword scan of a templated search page
- PartnerApiAdapter: Moka recruiting-platform API with search fallback
- SiteCandidateSource: official site via sitemap + JSON-LD
"""

from .base_source import BaseLinkSource, SourceResult
from .config import AggregationConfig, KeywordFilters, PartnerApiConfig, SiteCandidateConfig
from .enums import AuthMode, SourceKind
from .fetcher import HttpFetcher
from .registry import build_fetcher, build_sources, build_site_source

__all__ = [
    'BaseLinkSource',
    'SourceResult',
    'AggregationConfig',
    'KeywordFilters',
    'PartnerApiConfig',
    'SiteCandidateConfig',
    'AuthMode',
    'SourceKind',
    'HttpFetcher',
    'build_fetcher',
    'build_sources',
    'build_site_source',
]
