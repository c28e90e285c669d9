"""
Tests for the JSON-LD apply-URL extractor.

Run: python3 -m pytest utils/__tests__/test_jsonld.py -v
"""

from utils.jsonld import extract_apply_urls


def ld(body: str) -> str:
    return f'<script type="application/ld+json">{body}</script>'


class TestExtractApplyUrls:

    def test_job_posting_url_and_application_url(self):
        html = ld('{"@type": "JobPosting", "url": "https://e.com/job/1", '
                  '"applicationUrl": "https://e.com/apply/1"}')
        assert extract_apply_urls(html) == ["https://e.com/job/1", "https://e.com/apply/1"]

    def test_organization_url(self):
        html = ld('{"@type": "Organization", "url": "https://e.com"}')
        assert extract_apply_urls(html) == ["https://e.com"]

    def test_type_list(self):
        html = ld('{"@type": ["JobPosting", "Thing"], "url": "https://e.com/job/2"}')
        assert extract_apply_urls(html) == ["https://e.com/job/2"]

    def test_graph_and_top_level_list(self):
        html = ld('[{"@graph": [{"@type": "Organization", "url": "https://e.com"}, '
                  '{"@type": "JobPosting", "applicationUrl": "https://e.com/apply"}]}]')
        assert extract_apply_urls(html) == ["https://e.com", "https://e.com/apply"]

    def test_other_types_ignored(self):
        html = ld('{"@type": "WebPage", "url": "https://e.com/page"}')
        assert extract_apply_urls(html) == []

    def test_blank_values_ignored(self):
        html = ld('{"@type": "JobPosting", "url": "  ", "applicationUrl": 42}')
        assert extract_apply_urls(html) == []

    def test_malformed_block_skipped(self):
        """A broken block does not affect the blocks after it."""
        html = (
            ld('{"@type": "JobPosting", "url": ')
            + "<p>text</p>"
            + ld('{"@type": "JobPosting", "url": "https://e.com/ok"}')
        )
        assert extract_apply_urls(html) == ["https://e.com/ok"]

    def test_single_quoted_type_attribute(self):
        html = "<script type='application/ld+json'>{\"@type\": \"Organization\", \"url\": \"https://e.com\"}</script>"
        assert extract_apply_urls(html) == ["https://e.com"]

    def test_type_with_charset_parameter(self):
        html = (
            '<script type="application/ld+json; charset=utf-8">'
            '{"@type": "JobPosting", "url": "https://e.com/job/3"}</script>'
        )
        assert extract_apply_urls(html) == ["https://e.com/job/3"]

    def test_unquoted_type_attribute(self):
        html = '<script id=ld type=application/ld+json>{"@type": "Organization", "url": "https://e.com"}</script>'
        assert extract_apply_urls(html) == ["https://e.com"]

    def test_other_script_types_ignored(self):
        html = '<script type="application/json">{"@type": "Organization", "url": "https://e.com"}</script>'
        assert extract_apply_urls(html) == []

    def test_no_blocks(self):
        assert extract_apply_urls("<html><body>nothing</body></html>") == []
        assert extract_apply_urls("") == []
