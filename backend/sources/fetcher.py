"""
Shared HTTP fetch capability for all link sources.

Every outbound call goes through HttpFetcher.request(), which:
- sends the fixed identifying user agent
- applies independent connect and read timeouts
- raises on non-2xx responses (callers treat that like any other failure)

Tests pass an httpx.MockTransport to avoid real network calls.
"""

from typing import Dict, Optional

import httpx


class HttpFetcher:
    """Thin wrapper around httpx.AsyncClient with fixed headers and timeouts."""

    def __init__(
        self,
        user_agent: str = "HireRadar/1.0",
        connect_timeout: float = 5.0,
        read_timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_agent = user_agent
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self.transport = transport

    def get_headers(self) -> Dict[str, str]:
        """Default headers sent with every request."""
        return {'User-Agent': self.user_agent}

    async def request(
        self,
        url: str,
        method: str = 'GET',
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> httpx.Response:
        """
        Make one HTTP request

        Args:
            url: Absolute URL
            method: HTTP method (GET, POST, etc.)
            params: Query parameters
            json: JSON body (for POST requests)
            headers: Additional headers (merged over the defaults)

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPStatusError: On HTTP error responses
            httpx.TimeoutException: On connect/read timeout
            httpx.ConnectError: On connection failure
        """
        request_headers = self.get_headers()
        if headers:
            request_headers.update(headers)

        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=self.timeout,
            follow_redirects=True,
        ) as client:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=request_headers,
            )
            response.raise_for_status()
            return response

    def __repr__(self) -> str:
        return f"HttpFetcher(user_agent={self.user_agent!r}, timeout={self.timeout})"
