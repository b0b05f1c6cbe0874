"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - WEBFLOW_API_KEY and SITE_ID are required: Settings() raises without them
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Settings object handed to create_app() instead of module globals
    - Optional upstreams (Airtable, FoxyCart) switch themselves off when their
      credentials are missing; routes answer 503 instead of failing at boot
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Webflow (CMS)
    webflow_api_key: str
    site_id: str
    webflow_api_base_url: str = "https://api.webflow.com"
    webflow_item_collection_id: str = "6494e10f7a143f705f4db1d2"
    cms_collection_id: str = "6494e10f7a143f705f4db1d2"
    # output key -> dotted source path; empty dict returns the raw payload
    cms_item_fields: dict[str, str] = {
        "id": "id",
        "name": "fieldData.name",
        "slug": "fieldData.slug",
    }
    cms_page_size: int = 100

    # Airtable (spreadsheet database)
    airtable_api_key: str | None = None
    airtable_base_id: str | None = None
    airtable_table_id: str = "Table 1"
    airtable_api_base_url: str = "https://api.airtable.com"

    # FoxyCart (cart/checkout)
    foxycart_client_id: str | None = None
    foxycart_client_secret: str | None = None
    foxycart_refresh_token: str | None = None
    foxycart_api_base_url: str = "https://api.foxycart.com"
    foxycart_token_expiry_skew_seconds: int = 60

    # Generic proxy; an empty list disables the route
    proxy_allowed_hosts: list[str] = []

    # Outbound HTTP
    upstream_timeout_seconds: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["https://www.sportdogfood.com"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "webflow_api_base_url", "airtable_api_base_url", "foxycart_api_base_url",
    )
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("proxy_allowed_hosts")
    @classmethod
    def normalize_hosts(cls, v: list[str]) -> list[str]:
        return [h.strip().lower() for h in v if h.strip()]

    @property
    def airtable_configured(self) -> bool:
        return bool(self.airtable_api_key and self.airtable_base_id)

    @property
    def foxycart_configured(self) -> bool:
        return bool(
            self.foxycart_client_id
            and self.foxycart_client_secret
            and self.foxycart_refresh_token
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
