"""
Moka recruiting-platform adapter

API: https://api.mokahr.com (international: hire-r1-api.mokahr.com)
Auth: OAuth2 client credentials, or a static API key sent as HTTP Basic
      ("<key>:" with an empty password)

Token endpoint: POST /api-platform/v1/auth/oauth2/getToken
Request:  {"clientID": "...", "clientSecret": "...", "grantType": "client_credentials"}
Response: {"data": {"accessToken": "..."}}

Job listing (path configured per organization), accepted shapes:
{
  "jobs": [            # or "data" / "items"
    {
      "title": "Backend Engineer",       # or "name" / "jobTitle"
      "applyUrl": "https://app.mokahr.com/apply/acme/123"   # or "apply_url" / "url" / "jobUrl"
    }
  ]
}

When the adapter is not configured, or the API yields nothing usable, a
single search-page link on app.mokahr.com is returned instead.
"""

import base64
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from sourcing.models import Link
from .base_source import BaseLinkSource, SourceResult, map_source_error
from .config import PartnerApiConfig
from .enums import AuthMode, SourceKind
from .fetcher import HttpFetcher

TOKEN_PATH = "/api-platform/v1/auth/oauth2/getToken"
SEARCH_URL = "https://app.mokahr.com/search?keyword="

JOB_ARRAY_KEYS = ("jobs", "data", "items")
TITLE_KEYS = ("title", "name", "jobTitle")
APPLY_URL_KEYS = ("applyUrl", "apply_url", "url", "jobUrl")
DEFAULT_TITLE = "Job posting"

SOURCE_NAME = "moka"
FALLBACK_SOURCE_NAME = "moka/search"


def first_text(entry: Dict[str, Any], keys: tuple) -> str:
    """Return the first non-empty scalar value among keys, as a string."""
    for key in keys:
        value = entry.get(key)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (str, int, float)):
            text = str(value).strip()
            if text:
                return text
    return ""


def find_job_array(body: Any) -> List[Any]:
    """Return the first non-empty list under jobs / data / items."""
    if not isinstance(body, dict):
        return []
    for key in JOB_ARRAY_KEYS:
        value = body.get(key)
        if isinstance(value, list) and value:
            return value
    return []


class PartnerApiAdapter(BaseLinkSource):
    """
    Extract apply links from the Moka partner API

    Example:
        adapter = PartnerApiAdapter(PartnerApiConfig(enabled=True, ...), HttpFetcher())
        links = await adapter.search_by_company_name("Acme", limit=5)
    """
    SOURCE_KIND = SourceKind.PARTNER_API

    def __init__(self, config: PartnerApiConfig, http: HttpFetcher):
        super().__init__(http, SOURCE_NAME)
        self.config = config

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def get_headers(self):
        return {'Accept': 'application/json'}

    async def search_by_company_name(self, company_name: str, limit: int) -> List[Link]:
        """Alias of fetch(): API links, or the search-page fallback."""
        return await self.fetch(company_name, limit)

    async def fetch_with_status(self, company_name: str, limit: int) -> SourceResult:
        """
        Run the state machine: configured -> token -> list -> normalize,
        falling back to the search-page link when nothing usable comes back.
        """
        limit = max(1, limit)
        error = None

        if self.is_configured():
            try:
                links = await self._collect_links(company_name, limit)
            except Exception as e:
                self.log_warning(f"API call failed for '{company_name}': {type(e).__name__}: {e}")
                links = []
                error = map_source_error(e)

            if links:
                return SourceResult(source=self.source_name, links=links[:limit])
        else:
            self.log_debug("Not configured, using search fallback")

        return SourceResult(
            source=self.source_name,
            links=[self.build_fallback_link(company_name)],
            error=error,
        )

    async def _collect_links(self, company_name: str, limit: int) -> List[Link]:
        auth_header = await self._resolve_auth_header()
        if not auth_header:
            return []

        url = f"https://{self.config.domain}{self.config.jobs_endpoint}"
        response = await self.make_request(url, headers={'Authorization': auth_header})
        return self.parse_jobs(response.json(), limit)

    async def _resolve_auth_header(self) -> Optional[str]:
        """Return the Authorization header value, or None if no credential."""
        if self.config.auth_mode == AuthMode.API_KEY:
            raw = f"{self.config.api_key}:".encode("utf-8")
            return f"Basic {base64.b64encode(raw).decode('ascii')}"

        token = await self.get_access_token()
        return f"Bearer {token}" if token else None

    async def get_access_token(self) -> str:
        """
        Acquire an OAuth2 access token (client credentials)

        Returns:
            Access token, or empty string on any failure
        """
        url = f"https://{self.config.domain}{TOKEN_PATH}"
        payload = {
            "clientID": self.config.client_id,
            "clientSecret": self.config.client_secret,
            "grantType": "client_credentials",
        }
        try:
            response = await self.make_request(url, method='POST', json=payload)
            body = response.json()
        except Exception as e:
            self.log_warning(f"Token request failed: {type(e).__name__}: {e}")
            return ""

        data = body.get("data") if isinstance(body, dict) else None
        token = data.get("accessToken") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token.strip():
            self.log_warning("Token response has no data.accessToken")
            return ""
        return token.strip()

    def parse_jobs(self, body: Any, limit: int) -> List[Link]:
        """
        Normalize a job listing response into links

        Args:
            body: Decoded JSON response
            limit: Maximum number of links

        Returns:
            List of Link objects; entries without an apply URL are skipped
        """
        links: List[Link] = []
        for entry in find_job_array(body):
            if len(links) >= max(1, limit):
                break
            if not isinstance(entry, dict):
                continue

            apply_url = first_text(entry, APPLY_URL_KEYS)
            if not apply_url:
                continue

            links.append(Link.create(
                title=first_text(entry, TITLE_KEYS) or DEFAULT_TITLE,
                url=apply_url,
                source=SOURCE_NAME,
                description="Source: Moka API",
            ))
        return links

    def build_fallback_link(self, company_name: str) -> Link:
        """Constructed search-page link (lower confidence than API results)."""
        return Link.create(
            title=f"Moka search: {company_name}",
            url=f"{SEARCH_URL}{quote_plus(company_name)}",
            source=FALLBACK_SOURCE_NAME,
            description="Source: Moka search page (unverified)",
        )
