"""
Pytest configuration and fixtures for testing.

- Database tests run against a fresh in-memory SQLite database per test.
- Network tests never leave the process: sources are built with an
  httpx.MockTransport whose handler is a MockSite route table. MockSite
  records every request so tests can assert on call counts.
"""
import asyncio
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base

BACKEND_DIR = Path(__file__).parent

# Load environment variables (.env.local takes precedence over .env)
env_local = BACKEND_DIR / ".env.local"
env_file = BACKEND_DIR / ".env"

if env_local.exists():
    load_dotenv(env_local)
elif env_file.exists():
    load_dotenv(env_file)


# =============================================================================
# HTTP stubs
# =============================================================================

RouteResult = Union[httpx.Response, Exception]


class MockSite:
    """
    Route table for httpx.MockTransport.

    Usage:
        site = MockSite()
        site.add("https://e.com/robots.txt", text="Sitemap: https://e.com/sm.xml")
        site.fail("https://e.com/down", httpx.ConnectError("refused"))
        fetcher = HttpFetcher(transport=site.transport)
        ...
        assert site.count("https://e.com/robots.txt") == 1

    Unknown URLs answer 404.
    """

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], RouteResult]] = {}
        self.delays: Dict[str, float] = {}
        self.requests: List[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add(
        self,
        url: str,
        text: Optional[str] = None,
        json: Optional[object] = None,
        status_code: int = 200,
        delay: float = 0.0,
    ) -> "MockSite":
        def respond(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status_code, json=json)
            return httpx.Response(status_code, text=text or "")
        self.routes[url] = respond
        if delay:
            self.delays[url] = delay
        return self

    def fail(self, url: str, error: Exception) -> "MockSite":
        self.routes[url] = lambda request: error
        return self

    def count(self, url: Optional[str] = None) -> int:
        """Number of requests made (to url, or in total)."""
        if url is None:
            return len(self.requests)
        return sum(1 for r in self.requests if str(r.url) == url)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(url, 0.0)
            if delay:
                await asyncio.sleep(delay)
            route = self.routes.get(url)
            if route is None:
                return httpx.Response(404, text="not found")
            result = route(request)
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.in_flight -= 1

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def mock_site() -> MockSite:
    """Fresh route table per test."""
    return MockSite()


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def test_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so the in-memory database is shared
    by every session and thread (TestClient runs sync endpoints in a pool).
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """sessionmaker bound to the test database (for SubmissionLinkProvider / get_db overrides)."""
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def test_db(session_factory):
    """
    Database session for one test.

    Usage:
        def test_submit(test_db):
            link = submit_link(test_db, "Acme", "https://acme.com/jobs")
            assert link.id is not None
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
