"""
URL canonicalization for link deduplication.

Two links point at the same resource when their canonical forms are equal.
The canonical form is only ever used as a comparison key; links keep the URL
exactly as it was discovered.

Rules (applied in order):
1. Lower-case scheme and host, default scheme is https
2. Strip trailing slashes from the path (a lone "/" is kept)
3. Decode query pairs, sort them by "key=value", re-encode
4. Reassemble as scheme://host[:port]<path>[?query]
   (opaque URLs such as mailto: keep the scheme:<path>[?query] form)

Usage:
    from utils.url_normalizer import normalize

    normalize("HTTPS://Example.com/a/?b=2&a=1")
    # 'https://example.com/a?a=1&b=2'
"""

from urllib.parse import quote_plus, unquote_plus, urlsplit

DEFAULT_SCHEME = "https"


def _decode_pair(segment: str) -> tuple[str, str]:
    """Split one query segment at the first '=' and percent-decode both halves."""
    key, sep, value = segment.partition("=")
    if not sep:
        return unquote_plus(segment), ""
    return unquote_plus(key), unquote_plus(value)


def _normalize_query(query: str) -> str:
    pairs = [_decode_pair(segment) for segment in query.split("&") if segment]
    pairs.sort(key=lambda pair: f"{pair[0]}={pair[1]}")
    return "&".join(f"{quote_plus(key)}={quote_plus(value)}" for key, value in pairs)


def normalize(url: str) -> str:
    """
    Normalize a URL string for equality comparison.

    Never raises: a string that cannot be parsed is returned unchanged.

    Args:
        url: URL as discovered (absolute, or a bare "host/path")

    Returns:
        Canonical URL string
    """
    try:
        parts = urlsplit(url)
        if not parts.scheme and not parts.netloc and not parts.path.startswith("/"):
            # "example.com/a" has no scheme, so its host lands in the path
            parts = urlsplit(f"//{url}")

        scheme = (parts.scheme or DEFAULT_SCHEME).lower()
        host = (parts.hostname or "").lower()
        if parts.port is not None:
            host = f"{host}:{parts.port}"

        path = parts.path
        while len(path) > 1 and path.endswith("/"):
            path = path[:-1]

        query = _normalize_query(parts.query) if parts.query else ""
    except ValueError:
        return url

    if parts.scheme and not parts.netloc:
        # Opaque URL (mailto:, urn:) has no authority to rebuild
        canonical = f"{scheme}:{path}"
    else:
        canonical = f"{scheme}://{host}{path}"
    if query:
        canonical = f"{canonical}?{query}"
    return canonical
