"""
Configuration objects for link sources

Each source is built from one of these dataclasses. AggregationConfig
bundles them and is the only object the aggregator factory needs, so tests
can build it directly without touching environment variables.

    config = AggregationConfig(
        templates=["https://www.nowcoder.com/search?query=${name}"],
        keywords=KeywordFilters(["招聘", "apply"]),
        max_per_company=8,
    )

    config = AggregationConfig.from_settings(settings)
"""

from typing import Dict, List, TYPE_CHECKING
from dataclasses import dataclass, field

from .enums import AuthMode

if TYPE_CHECKING:
    from config.settings import Settings

DEFAULT_KEYWORDS = ["招聘", "投递", "职位", "校招", "社招", "apply", "career", "join"]


@dataclass
class KeywordFilters:
    """
    Keyword matching configuration.

    A text matches when it contains at least one keyword (case-insensitive
    substring, OR logic). An empty keyword list matches nothing.
    """
    keywords: List[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))

    def __post_init__(self):
        self._lowered = [k.lower() for k in self.keywords if k and k.strip()]

    def matches(self, text: str) -> bool:
        """Return True if text contains any keyword (case-insensitive)."""
        lowered = (text or "").lower()
        return any(k in lowered for k in self._lowered)


@dataclass
class PartnerApiConfig:
    """Moka partner API configuration (disabled by default)."""
    enabled: bool = False
    auth_mode: AuthMode = AuthMode.OAUTH2
    domain: str = "api.mokahr.com"
    api_key: str = ""
    client_id: str = ""
    client_secret: str = ""
    jobs_endpoint: str = ""

    def is_configured(self) -> bool:
        """
        Check whether the API can be called at all.

        Requires the adapter enabled, a jobs endpoint path, and credentials
        for the selected auth mode (API key, or client id + secret).
        """
        if not self.enabled or not self.jobs_endpoint.strip():
            return False
        if self.auth_mode == AuthMode.API_KEY:
            return bool(self.api_key.strip())
        return bool(self.client_id.strip()) and bool(self.client_secret.strip())


@dataclass
class SiteCandidateConfig:
    """Bounds for sitemap-based candidate extraction."""
    max_pages: int = 5
    pool_size: int = 3
    task_timeout: float = 10.0  # seconds, per page fetch


@dataclass
class AggregationConfig:
    """Everything the aggregator factory needs to build its sources."""
    templates: List[str] = field(default_factory=list)
    keywords: KeywordFilters = field(default_factory=KeywordFilters)
    max_per_company: int = 8
    domain_map: Dict[str, str] = field(default_factory=dict)
    partner_api: PartnerApiConfig = field(default_factory=PartnerApiConfig)
    site: SiteCandidateConfig = field(default_factory=SiteCandidateConfig)
    user_agent: str = "HireRadar/1.0"
    connect_timeout: float = 5.0
    read_timeout: float = 8.0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AggregationConfig":
        """Build from the pydantic Settings singleton."""
        return cls(
            templates=settings.get_templates(),
            keywords=KeywordFilters(settings.get_keywords()),
            max_per_company=settings.JOBS_CRAWLER_MAX_PER_COMPANY,
            domain_map=dict(settings.JOBS_COMPANY_DOMAINS),
            partner_api=PartnerApiConfig(
                enabled=settings.MOKA_ENABLED,
                auth_mode=AuthMode.from_string(settings.MOKA_AUTH),
                domain=settings.MOKA_API_DOMAIN,
                api_key=settings.MOKA_API_KEY,
                client_id=settings.MOKA_CLIENT_ID,
                client_secret=settings.MOKA_CLIENT_SECRET,
                jobs_endpoint=settings.MOKA_JOBS_ENDPOINT,
            ),
            site=SiteCandidateConfig(
                max_pages=settings.JOBS_SITE_MAX_PAGES,
                pool_size=settings.JOBS_SITE_POOL_SIZE,
                task_timeout=settings.JOBS_SITE_TASK_TIMEOUT,
            ),
            user_agent=settings.HTTP_USER_AGENT,
            connect_timeout=settings.HTTP_CONNECT_TIMEOUT,
            read_timeout=settings.HTTP_READ_TIMEOUT,
        )
