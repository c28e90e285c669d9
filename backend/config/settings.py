from pydantic_settings import BaseSettings
from typing import Dict, List
from pathlib import Path

# Get absolute path to backend directory (config/settings.py -> backend/)
_backend_dir = Path(__file__).parent.parent
_env_local = _backend_dir / '.env.local'
_env_file = _backend_dir / '.env'


class Settings(BaseSettings):
    """Application settings"""

    # CORS - Will be parsed from environment variable string
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Moderation endpoints compare X-Admin-Token against this value (empty = locked)
    ADMIN_TOKEN: str = ""

    # Submitted-link store
    DATABASE_URL: str = "sqlite:///./hire_radar.db"

    # Template sources - comma-separated, ${name} is replaced by the company name
    JOBS_CRAWLER_TEMPLATES: str = (
        "https://www.nowcoder.com/search?query=${name},"
        "https://www.offershow.cn/search?keyword=${name}"
    )
    JOBS_CRAWLER_KEYWORDS: str = "招聘,投递,职位,校招,社招,apply,career,join"
    JOBS_CRAWLER_MAX_PER_COMPANY: int = 8

    # Official domains, JSON object: {"字节跳动": "jobs.bytedance.com"}
    JOBS_COMPANY_DOMAINS: Dict[str, str] = {}

    # Site-candidate extraction bounds
    JOBS_SITE_MAX_PAGES: int = 5
    JOBS_SITE_POOL_SIZE: int = 3
    JOBS_SITE_TASK_TIMEOUT: float = 10.0  # seconds

    # Outbound HTTP
    HTTP_USER_AGENT: str = "HireRadar/1.0"
    HTTP_CONNECT_TIMEOUT: float = 5.0  # seconds
    HTTP_READ_TIMEOUT: float = 8.0  # seconds

    # Moka partner API
    MOKA_ENABLED: bool = False
    MOKA_AUTH: str = "oauth2"  # oauth2 | apiKey
    MOKA_API_DOMAIN: str = "api.mokahr.com"
    MOKA_API_KEY: str = ""
    MOKA_CLIENT_ID: str = ""
    MOKA_CLIENT_SECRET: str = ""
    MOKA_JOBS_ENDPOINT: str = ""

    # Warm-up worker
    JOBS_SCHEDULER_COMPANY_NAMES: str = "腾讯,阿里巴巴,字节跳动,美团"

    class Config:
        # Prioritize .env.local for local development, fallback to .env
        # Use absolute paths to avoid working directory issues
        env_file = str(_env_local) if _env_local.exists() else str(_env_file)
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from environment file

    def get_allowed_origins(self) -> List[str]:
        """Parse and return CORS origins as a list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    def get_templates(self) -> List[str]:
        """Parse and return URL templates as a list (blank entries dropped)"""
        return _split_csv(self.JOBS_CRAWLER_TEMPLATES)

    def get_keywords(self) -> List[str]:
        """Parse and return match keywords as a list (blank entries dropped)"""
        return _split_csv(self.JOBS_CRAWLER_KEYWORDS)

    def get_scheduler_company_names(self) -> List[str]:
        """Parse and return the companies the warm-up worker refreshes"""
        return _split_csv(self.JOBS_SCHEDULER_COMPANY_NAMES)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


settings = Settings()
