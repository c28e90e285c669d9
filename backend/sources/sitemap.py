"""
Sitemap discovery for a company's official site.

robots.txt -> first "Sitemap:" line -> sitemap XML -> every <loc> value.

    discovery = SitemapDiscovery(HttpFetcher())
    urls = await discovery.extract_urls_from_sitemap("jobs.bytedance.com")

Never raises; any failure along the chain yields an empty list.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Union
from urllib.parse import urlsplit

from .fetcher import HttpFetcher

logger = logging.getLogger(__name__)


def normalize_origin(domain: str) -> str:
    """
    Turn a configured domain into an absolute origin

    Example:
        >>> normalize_origin("www.example.com/")
        'https://www.example.com'
    """
    domain = domain.strip()
    # "httpbin.org" has no scheme even though it starts with "http"
    if urlsplit(domain).scheme.lower() not in ("http", "https"):
        domain = f"https://{domain}"
    return domain.rstrip("/")


def find_sitemap_url(robots_txt: str) -> Optional[str]:
    """Return the first declared sitemap URL in a robots.txt body."""
    for line in robots_txt.splitlines():
        line = line.strip()
        if line.lower().startswith("sitemap:"):
            url = line[len("sitemap:"):].strip()
            return url or None
    return None


def parse_sitemap_xml(xml_text: Union[str, bytes]) -> List[str]:
    """
    Return the text of every <loc> element in document order

    Namespace-agnostic: matches both <loc> and {namespace}loc.

    Raises:
        ET.ParseError: If the document is not well-formed XML
    """
    root = ET.fromstring(xml_text)
    urls = []
    for element in root.iter():
        tag = element.tag
        if not isinstance(tag, str):
            continue
        if tag == "loc" or tag.endswith("}loc"):
            text = (element.text or "").strip()
            if text:
                urls.append(text)
    return urls


class SitemapDiscovery:
    """Reads robots.txt, follows the declared sitemap and flattens it."""

    def __init__(self, http: HttpFetcher):
        self.http = http

    async def extract_urls_from_sitemap(self, domain: str) -> List[str]:
        """
        Discover a site's URLs via its sitemap

        Args:
            domain: Official domain, with or without scheme

        Returns:
            Flat list of sitemap URLs (empty on any failure)
        """
        try:
            origin = normalize_origin(domain)
            robots = await self.http.request(f"{origin}/robots.txt")
            sitemap_url = find_sitemap_url(robots.text or "")
            if not sitemap_url:
                logger.debug(f"No sitemap declared in {origin}/robots.txt")
                return []

            sitemap = await self.http.request(sitemap_url)
            if not sitemap.content.strip():
                return []
            return parse_sitemap_xml(sitemap.content)
        except Exception as e:
            logger.warning(f"Sitemap discovery failed for {domain}: {type(e).__name__}: {e}")
            return []
