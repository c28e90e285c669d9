"""
JSON-LD (schema.org) apply-URL extractor.

Pulls candidate apply URLs out of <script type="application/ld+json"> blocks:
- JobPosting: url, applicationUrl
- Organization: url

Blocks are parsed independently; a block with broken JSON contributes nothing
and does not affect the others.
"""

import json
import logging
import re
from typing import Any, List

logger = logging.getLogger(__name__)

# type may be quoted with parameters ("application/ld+json; charset=utf-8") or unquoted
JSON_LD_PATTERN = re.compile(
    r'<script[^>]*?\btype\s*=\s*'
    r'(?:"application/ld\+json[^"]*"|\'application/ld\+json[^\']*\'|application/ld\+json)'
    r'[^>]*>(.*?)</script\s*>',
    re.IGNORECASE | re.DOTALL,
)

JOB_POSTING_FIELDS = ("url", "applicationUrl")
ORGANIZATION_FIELDS = ("url",)


def _types_of(node: dict) -> List[str]:
    """Return the lower-cased @type values of a node (string or list form)."""
    raw = node.get("@type")
    if isinstance(raw, str):
        return [raw.lower()]
    if isinstance(raw, list):
        return [t.lower() for t in raw if isinstance(t, str)]
    return []


def _collect(node: Any, urls: List[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _collect(item, urls)
        return
    if not isinstance(node, dict):
        return

    types = _types_of(node)
    if "jobposting" in types:
        fields = JOB_POSTING_FIELDS
    elif "organization" in types:
        fields = ORGANIZATION_FIELDS
    else:
        fields = ()

    for field in fields:
        value = node.get(field)
        if isinstance(value, str) and value.strip():
            urls.append(value.strip())

    _collect(node.get("@graph"), urls)


def extract_apply_urls(html: str) -> List[str]:
    """
    Extract apply / organization URLs from embedded JSON-LD.

    Args:
        html: Raw HTML page

    Returns:
        Candidate URLs in document order (may be empty)
    """
    urls: List[str] = []
    if not html:
        return urls

    for match in JSON_LD_PATTERN.finditer(html):
        try:
            data = json.loads(match.group(1).strip())
        except ValueError as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
            continue
        _collect(data, urls)

    return urls
