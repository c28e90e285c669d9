"""
Tests for the site-candidate source (sitemap + JSON-LD).

Run: python3 -m pytest sources/__tests__/test_site_candidates.py -v
"""

import asyncio

from sources.config import KeywordFilters, SiteCandidateConfig
from sources.domains import StaticDomainResolver
from sources.fetcher import HttpFetcher
from sources.site_candidates import SiteCandidateSource, page_title

ROBOTS_URL = "https://acme.com/robots.txt"
SITEMAP_URL = "https://acme.com/sitemap.xml"

CAREERS_HTML = """
<html><head><title>Careers at Acme</title>
<script type="application/ld+json">
{"@type": "JobPosting", "applicationUrl": "https://acme.com/apply/42"}
</script></head><body>...</body></html>
"""


def sitemap(*urls: str) -> str:
    entries = "".join(f"<url><loc>{url}</loc></url>" for url in urls)
    return f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def make_source(site, **config) -> SiteCandidateSource:
    return SiteCandidateSource(
        StaticDomainResolver({"Acme Inc.": "acme.com"}),
        KeywordFilters(),
        SiteCandidateConfig(**config),
        HttpFetcher(transport=site.transport),
    )


class TestHelpers:

    def test_page_title(self):
        assert page_title("<title>\n Jobs &amp; Careers </title>") == "Jobs & Careers"
        assert page_title("<p>no title</p>") == ""

    def test_filter_candidates(self, mock_site):
        source = make_source(mock_site, max_pages=3)
        urls = [
            "https://acme.com/about",
            "https://acme.com/careers",
            "https://acme.com/news/how-to-apply",
            "https://acme.com/zh/招聘",
            "https://acme.com/jobs/1",
        ]
        assert source.filter_candidates(urls) == [
            "https://acme.com/careers",
            "https://acme.com/news/how-to-apply",
            "https://acme.com/zh/招聘",
        ]


class TestFetch:

    def test_jsonld_then_page_links(self, mock_site):
        mock_site.add(ROBOTS_URL, text=f"Sitemap: {SITEMAP_URL}")
        mock_site.add(SITEMAP_URL, text=sitemap(
            "https://acme.com/about",
            "https://acme.com/careers",
            "https://acme.com/jobs/1",
        ))
        mock_site.add("https://acme.com/careers", text=CAREERS_HTML)
        mock_site.add("https://acme.com/jobs/1", text="<html><body>open roles</body></html>")

        links = asyncio.run(make_source(mock_site).fetch("Acme", limit=8))

        assert [(link.url, link.source) for link in links] == [
            ("https://acme.com/apply/42", "sitemap/jsonld"),
            ("https://acme.com/careers", "sitemap"),
            ("https://acme.com/jobs/1", "sitemap"),
        ]
        assert links[1].title == "Careers at Acme"
        assert links[2].title == "Careers page"
        assert mock_site.count("https://acme.com/about") == 0

    def test_unknown_company_makes_no_requests(self, mock_site):
        links = asyncio.run(make_source(mock_site).fetch("Globex", limit=8))

        assert links == []
        assert mock_site.count() == 0

    def test_domain_lookup_uses_company_key(self, mock_site):
        mock_site.add(ROBOTS_URL, text="User-agent: *")

        asyncio.run(make_source(mock_site).fetch("ACME", limit=8))

        assert mock_site.count(ROBOTS_URL) == 1

    def test_max_pages(self, mock_site):
        pages = [f"https://acme.com/jobs/{i}" for i in range(6)]
        mock_site.add(ROBOTS_URL, text=f"Sitemap: {SITEMAP_URL}")
        mock_site.add(SITEMAP_URL, text=sitemap(*pages))
        for page in pages:
            mock_site.add(page, text="<title>Job</title>")

        links = asyncio.run(make_source(mock_site, max_pages=2).fetch("Acme", limit=8))

        assert [link.url for link in links] == pages[:2]
        assert mock_site.count() == 4

    def test_limit(self, mock_site):
        pages = [f"https://acme.com/jobs/{i}" for i in range(4)]
        mock_site.add(ROBOTS_URL, text=f"Sitemap: {SITEMAP_URL}")
        mock_site.add(SITEMAP_URL, text=sitemap(*pages))
        for page in pages:
            mock_site.add(page, text="<title>Job</title>")

        links = asyncio.run(make_source(mock_site).fetch("Acme", limit=3))

        assert [link.url for link in links] == pages[:3]

    def test_slow_and_failing_pages_dropped(self, mock_site):
        mock_site.add(ROBOTS_URL, text=f"Sitemap: {SITEMAP_URL}")
        mock_site.add(SITEMAP_URL, text=sitemap(
            "https://acme.com/jobs/slow",
            "https://acme.com/jobs/gone",
            "https://acme.com/jobs/ok",
        ))
        mock_site.add("https://acme.com/jobs/slow", text="<title>Slow</title>", delay=2.0)
        mock_site.add("https://acme.com/jobs/ok", text="<title>OK</title>")

        links = asyncio.run(make_source(mock_site, task_timeout=0.2).fetch("Acme", limit=8))

        assert [link.url for link in links] == ["https://acme.com/jobs/ok"]

    def test_pool_bounds_concurrency(self, mock_site):
        pages = [f"https://acme.com/jobs/{i}" for i in range(5)]
        mock_site.add(ROBOTS_URL, text=f"Sitemap: {SITEMAP_URL}")
        mock_site.add(SITEMAP_URL, text=sitemap(*pages))
        for page in pages:
            mock_site.add(page, text="<title>Job</title>", delay=0.05)

        links = asyncio.run(make_source(mock_site, pool_size=2).fetch("Acme", limit=8))

        assert len(links) == 5
        assert mock_site.max_in_flight == 2

    def test_no_sitemap(self, mock_site):
        mock_site.add(ROBOTS_URL, text="User-agent: *")

        result = asyncio.run(make_source(mock_site).fetch_with_status("Acme", limit=8))

        assert result.links == []
        assert result.status == "empty"
