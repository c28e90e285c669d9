"""
Base link source class for the aggregation pipeline

Every source (template search page, partner API, company site) is a
variant of BaseLinkSource and exposes the same operation:

    links = await source.fetch(company_name, limit)

fetch() never raises. Transport failures, timeouts and malformed payloads
reduce to an empty contribution; fetch_with_status() additionally reports
what went wrong for the diagnostics side channel.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx

from sourcing.models import Link
from utils.source_logging import SourceLoggerMixin
from .enums import SourceKind
from .fetcher import HttpFetcher


@dataclass
class SourceResult:
    """Result from one source invocation."""
    source: str
    links: List[Link] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def status(self) -> str:
        if self.error:
            return "error"
        return "success" if self.links else "empty"


def map_source_error(e: Exception) -> str:
    """Map source exceptions to short diagnostic messages."""
    if isinstance(e, httpx.TimeoutException):
        return "Request timed out - source may be slow"
    elif isinstance(e, httpx.HTTPStatusError):
        status_code = e.response.status_code
        if status_code == 403:
            return "Access denied - site may have rate limiting"
        elif status_code == 404:
            return "Page not found - URL may have changed"
        elif status_code >= 500:
            return "Source server error - try again later"
        else:
            return f"HTTP error: {status_code}"
    elif isinstance(e, httpx.TransportError):
        return f"Connection failed: {type(e).__name__}"
    elif isinstance(e, (KeyError, TypeError, ValueError)):
        return "Unexpected response format - source may have changed"
    else:
        return f"Fetch failed: {type(e).__name__}"


class BaseLinkSource(SourceLoggerMixin, ABC):
    """
    Abstract base class for link sources

    Each concrete source must define:
    1. SOURCE_KIND: SourceKind enum value
    2. source_name: identifier stamped on produced links (set in __init__)
    3. _collect_links(): fetch and parse; may raise, the base class
       turns any exception into an empty result
    """

    SOURCE_KIND: SourceKind

    def __init__(self, http: HttpFetcher, source_name: str):
        if not hasattr(self.__class__, 'SOURCE_KIND'):
            raise NotImplementedError(
                f"{self.__class__.__name__} must define SOURCE_KIND class variable"
            )
        self.http = http
        self.source_name = source_name

    @abstractmethod
    async def _collect_links(self, company_name: str, limit: int) -> List[Link]:
        """
        Fetch and extract links for one company

        Args:
            company_name: Company display name
            limit: Maximum number of links (already clamped to >= 1)

        Returns:
            List of Link objects (at most limit)

        Raises:
            Any transport or parse exception; fetch_with_status() absorbs it.
        """
        pass

    async def fetch_with_status(self, company_name: str, limit: int) -> SourceResult:
        """Run the source and report links plus any swallowed error."""
        limit = max(1, limit)
        try:
            links = await self._collect_links(company_name, limit)
        except Exception as e:
            self.log_warning(f"Fetch failed for '{company_name}': {type(e).__name__}: {e}")
            return SourceResult(source=self.source_name, error=map_source_error(e))

        self.log_debug(f"Collected {len(links)} links for '{company_name}'")
        return SourceResult(source=self.source_name, links=links[:limit])

    async def fetch(self, company_name: str, limit: int) -> List[Link]:
        """Fetch up to limit links for a company. Never raises."""
        result = await self.fetch_with_status(company_name, limit)
        return result.links

    async def crawl_by_company_name(self, company_name: str, limit: int) -> List[Link]:
        """Alias of fetch()."""
        return await self.fetch(company_name, limit)

    def get_headers(self) -> Dict[str, str]:
        """
        Source-specific HTTP headers, merged over the fetcher defaults.

        Override this method if a source needs specific headers.
        """
        return {}

    async def make_request(
        self,
        url: str,
        method: str = 'GET',
        json: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> httpx.Response:
        """
        Helper method to make HTTP requests through the shared fetcher

        Raises:
            httpx.HTTPStatusError: On HTTP error responses
            httpx.TimeoutException: On request timeout
            httpx.ConnectError: On connection failure
        """
        request_headers = self.get_headers()
        if headers:
            request_headers.update(headers)
        return await self.http.request(url, method=method, json=json, headers=request_headers)

    def _log_context(self) -> str:
        return f"source={self.source_name}"

    def __repr__(self) -> str:
        """String representation of source"""
        return f"{self.__class__.__name__}(source={self.source_name!r})"
