"""Site configuration.

Built once at process start (by the app factory or the CLI) and passed to
the content client and the subscription form. Every value is optional;
missing identifiers disable the feature that needs them.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SITE_URL = "https://cohortai.co"
DEFAULT_API_HOST = "api.sanity.io"
DEFAULT_API_VERSION = "v2023-10-01"
DEFAULT_HONEYPOT = "b_xxx_xxx"
DEFAULT_TAGS = "The Plan,Early Access"


class SiteConfig(BaseSettings):
    """Environment-backed settings for the site."""

    # Content API
    sanity_project_id: str | None = None
    sanity_dataset: str | None = None
    sanity_api_read_token: str | None = None
    sanity_api_host: str = DEFAULT_API_HOST
    sanity_api_version: str = DEFAULT_API_VERSION

    # Mailing list
    mc_form_action: str | None = None
    mc_honeypot: str = DEFAULT_HONEYPOT
    mc_tags: str = DEFAULT_TAGS

    # Comments
    giscus_repo: str | None = None
    giscus_repo_id: str | None = None
    giscus_category: str | None = None
    giscus_category_id: str | None = None

    # Serving
    site_url: str = DEFAULT_SITE_URL
    revalidate_seconds: int = 60
    request_timeout: float = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def content_configured(self) -> bool:
        return bool(self.sanity_project_id and self.sanity_dataset)

    @property
    def content_base_url(self) -> str | None:
        """Base URL of the content API, or None when unconfigured."""
        if not self.content_configured:
            return None
        return f"https://{self.sanity_project_id}.{self.sanity_api_host}"

    @property
    def content_query_path(self) -> str | None:
        if not self.content_configured:
            return None
        return f"/{self.sanity_api_version}/data/query/{self.sanity_dataset}"

    @property
    def comments_configured(self) -> bool:
        return all(
            (
                self.giscus_repo,
                self.giscus_repo_id,
                self.giscus_category,
                self.giscus_category_id,
            )
        )

    @property
    def base_url(self) -> str:
        """Public site URL without a trailing slash."""
        return self.site_url.rstrip("/")

    def content_client_config(self) -> dict:
        """Build the dict config consumed by ContentClient."""
        headers = {"Accept": "application/json"}
        if self.sanity_api_read_token:
            headers["Authorization"] = f"Bearer {self.sanity_api_read_token}"
        return {
            "base_url": self.content_base_url,
            "query_path": self.content_query_path,
            "timeout": self.request_timeout,
            "retry_attempts": 2,
            "retry_delay": 0.5,
            "headers": headers,
        }
