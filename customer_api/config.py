"""
Configuration management for the customer API
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Customer REST API"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Database
    database_url: str = "sqlite:///./customer_api.db"

    # Basic Auth gate for the whole API (disabled when empty)
    api_user: str = ""
    api_pass: str = ""

    # Store scoping: 0 = resolve from the request host
    current_store_id: int = 0

    # Newsletter subscriber emails are cached process-wide
    newsletter_cache_ttl_seconds: int = 300

    # What to do with search fields that are not filterable
    search_unknown_field_policy: Literal["ignore", "reject"] = "ignore"

    # Paging
    default_limit: int = 50
    min_limit: int = 1
    max_limit: int = 250

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
