"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote payment API
    api_base: str = "https://api.konacash.com/v1/"
    api_key: str = ""

    # Service
    service_name: str = "visiofex-reports"
    log_level: str = "INFO"
    admin_token: str = ""

    # HTTP Client
    http_timeout_seconds: float = 30.0

    # Cache
    cache_ttl_seconds: int = 3600
    cache_key_prefix: str = "vxf_"

    # Reports
    fallback_page_size: int = 250
    fallback_max_pages: int = 20  # 5000 transactions at most
    recent_label: str = "Recent Days"


settings = Settings()
