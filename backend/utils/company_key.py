"""
Company name normalization.

The company key is the cache and domain-lookup key. Display names that only
differ by case, whitespace or a legal-entity suffix map to the same key:

    company_key("字节跳动有限公司") == company_key("字节跳动")
    company_key("Acme Co., Ltd.") == company_key("acme")

This is a best-effort heuristic, not an identity mapping.
"""

import re

# Longest first so "股份有限公司" is not left as "股份"
_CJK_SUFFIXES = ("股份有限公司", "有限责任公司", "有限公司", "公司", "集团")

_LATIN_SUFFIX = re.compile(
    r"[\s,.]*\b(co\.?,?\s*ltd|company\s+limited|limited|ltd|inc|corp|corporation|llc|group)\.?\s*$"
)
_WS = re.compile(r"\s+")


def company_key(name: str) -> str:
    """
    Normalize a company display name into its cache key.

    Args:
        name: Company display name

    Returns:
        Case-folded name without legal-entity suffixes or whitespace
        (empty string for blank input)
    """
    key = (name or "").strip().casefold()
    for suffix in _CJK_SUFFIXES:
        key = key.replace(suffix, "")

    # Strip stacked suffixes such as "Acme Group Co., Ltd."
    previous = None
    while previous != key:
        previous = key
        stripped = _LATIN_SUFFIX.sub("", key)
        # Never strip the whole name ("Group" on its own stays "group")
        if stripped.strip():
            key = stripped

    return _WS.sub("", key)
