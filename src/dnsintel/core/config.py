"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # DoH query deadlines (milliseconds)
    doh_timeout_ms: int = Field(default=5000, ge=100, le=60000)
    propagation_timeout_ms: int = Field(default=8000, ge=100, le=60000)
    resolution_timeout_ms: int = Field(default=3000, ge=100, le=60000)
    ssl_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # Resolver used for record fetches and subdomain resolution
    health_resolver: str = Field(default="cloudflare_us")

    # Certificate Transparency
    crtsh_url: str = Field(default="https://crt.sh/")
    http_timeout: int = Field(default=30, ge=1, le=120)

    # WHOIS
    whois_timeout: int = Field(default=15, ge=1, le=120)

    # Subdomain discovery
    subdomain_max_results: int = Field(default=100, ge=1, le=1000)
    subdomain_limit_cap: int = Field(default=200, ge=1, le=1000)
    full_scan_subdomain_limit: int = Field(default=50, ge=1, le=1000)
    subdomain_probe_concurrency: int = Field(default=15, ge=1, le=100)

    # Rate Limiting
    doh_queries_per_second: int = Field(default=50, ge=1, le=500)

    user_agent: str = Field(default="DNS-Intel-API/1.0")

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "text"] = Field(default="json")

    # CORS Configuration (set CORS_ORIGINS env var, comma-separated)
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins. Set to ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(default=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
