"""
Tests for robots.txt / sitemap discovery.

Run: python3 -m pytest sources/__tests__/test_sitemap.py -v
"""

import asyncio

import httpx
import pytest

from sources.fetcher import HttpFetcher
from sources.sitemap import (
    SitemapDiscovery,
    find_sitemap_url,
    normalize_origin,
    parse_sitemap_xml,
)

SITEMAP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://acme.com/</loc></url>
  <url><loc> https://acme.com/careers </loc></url>
  <url><loc></loc></url>
</urlset>
"""


class TestHelpers:

    @pytest.mark.parametrize("domain, expected", [
        ("acme.com", "https://acme.com"),
        ("www.acme.com/", "https://www.acme.com"),
        ("http://acme.com", "http://acme.com"),
        (" https://acme.com/ ", "https://acme.com"),
        ("httpbin.org", "https://httpbin.org"),
        ("HTTP://acme.com", "HTTP://acme.com"),
    ])
    def test_normalize_origin(self, domain, expected):
        assert normalize_origin(domain) == expected

    def test_find_sitemap_url_first_declared(self):
        robots = "User-agent: *\nDisallow: /tmp\nsitemap: https://acme.com/a.xml\nSitemap: https://acme.com/b.xml\n"
        assert find_sitemap_url(robots) == "https://acme.com/a.xml"

    def test_find_sitemap_url_missing(self):
        assert find_sitemap_url("User-agent: *\nDisallow:") is None

    def test_parse_namespaced(self):
        assert parse_sitemap_xml(SITEMAP_XML.encode("utf-8")) == [
            "https://acme.com/",
            "https://acme.com/careers",
        ]

    def test_parse_without_namespace(self):
        xml = "<urlset><url><loc>https://acme.com/jobs</loc></url></urlset>"
        assert parse_sitemap_xml(xml) == ["https://acme.com/jobs"]


class TestSitemapDiscovery:

    def make_discovery(self, site) -> SitemapDiscovery:
        return SitemapDiscovery(HttpFetcher(transport=site.transport))

    def test_follows_robots_to_sitemap(self, mock_site):
        mock_site.add("https://acme.com/robots.txt", text="Sitemap: https://acme.com/sitemap.xml")
        mock_site.add("https://acme.com/sitemap.xml", text=SITEMAP_XML)

        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("acme.com"))

        assert urls == ["https://acme.com/", "https://acme.com/careers"]

    def test_bare_domain_starting_with_http(self, mock_site):
        mock_site.add("https://httpbin.org/robots.txt", text="Sitemap: https://httpbin.org/sitemap.xml")
        mock_site.add("https://httpbin.org/sitemap.xml", text=SITEMAP_XML)

        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("httpbin.org"))

        assert urls == ["https://acme.com/", "https://acme.com/careers"]
        assert mock_site.count("https://httpbin.org/robots.txt") == 1

    def test_no_sitemap_declared(self, mock_site):
        mock_site.add("https://acme.com/robots.txt", text="User-agent: *")

        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("acme.com"))

        assert urls == []
        assert mock_site.count() == 1

    def test_missing_robots(self, mock_site):
        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("acme.com"))

        assert urls == []

    def test_malformed_sitemap(self, mock_site):
        mock_site.add("https://acme.com/robots.txt", text="Sitemap: https://acme.com/sitemap.xml")
        mock_site.add("https://acme.com/sitemap.xml", text="<urlset><url><loc>broken")

        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("acme.com"))

        assert urls == []

    def test_connection_error(self, mock_site):
        mock_site.fail("https://acme.com/robots.txt", httpx.ConnectError("refused"))

        urls = asyncio.run(self.make_discovery(mock_site).extract_urls_from_sitemap("acme.com"))

        assert urls == []
