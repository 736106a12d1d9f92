"""
Report settings and configuration.

Credentials come from the environment (DD_API_KEY, DD_APP_KEY, DD_SITE)
via pydantic-settings; per-run options live in ReportOptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings

from sloreport.core.errors import ConfigurationError

DEFAULT_REPORT_PATH = "/tmp/slo_report.csv"
DEFAULT_PAGE_LIMIT = 1000
DEFAULT_DELAY_SECONDS = 0.1
DEFAULT_PAGE_DELAY_SECONDS = 1.0


class DatadogSettings(BaseSettings):
    """Datadog credentials and site."""

    api_key: str | None = None
    app_key: str | None = None
    site: str = "datadoghq.com"

    # HTTP client settings
    http_timeout: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "DD_"
        extra = "ignore"

    @property
    def base_url(self) -> str:
        return f"https://api.{self.site}"

    def require_credentials(self) -> tuple[str, str]:
        """Return (api_key, app_key) or raise if either is unset."""
        missing = [
            name
            for name, value in (("DD_API_KEY", self.api_key), ("DD_APP_KEY", self.app_key))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Datadog credentials are not set",
                details={"missing": ",".join(missing)},
            )
        return self.api_key, self.app_key  # type: ignore[return-value]


@lru_cache
def get_settings() -> DatadogSettings:
    """Get cached settings instance."""
    return DatadogSettings()


@dataclass(frozen=True)
class ReportOptions:
    """Options for a single report run."""

    path: str = DEFAULT_REPORT_PATH
    tags_query: str = ""
    limit: int = DEFAULT_PAGE_LIMIT
    delay: float = DEFAULT_DELAY_SECONDS  # seconds between history calls
    page_delay: float = DEFAULT_PAGE_DELAY_SECONDS  # seconds between listing pages

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ConfigurationError("limit must be positive", details={"limit": self.limit})
        if self.delay < 0 or self.page_delay < 0:
            raise ConfigurationError("delays must not be negative")
