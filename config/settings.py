"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SHOPIFY
    # ===================
    shopify_shop: Optional[str] = Field(
        None,
        description="Shop domain, e.g. my-store.myshopify.com"
    )
    shopify_access_token: Optional[str] = Field(
        None,
        description="Admin API access token"
    )
    shopify_api_version: str = Field(
        default="2025-01",
        description="Admin GraphQL API version"
    )
    catalog_page_size: int = Field(
        default=50,
        ge=1,
        le=250,
        description="Collections, products and variants fetched per level"
    )

    # ===================
    # STORAGE
    # ===================
    storage_backend: str = Field(
        default="file",
        pattern="^(file|supabase|memory)$",
        description="Backend for the persisted pricing configuration"
    )
    storage_dir: str = Field(
        default="data",
        description="Directory used by the file backend"
    )
    pricing_storage_key: str = Field(
        default="jpm_pricing",
        min_length=1,
        description="Key under which the pricing mapping is stored"
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key"
    )
    supabase_kv_table: str = Field(
        default="kv_store",
        description="Table with key/value columns used by the supabase backend"
    )

    # ===================
    # PRICING
    # ===================
    price_dead_band: float = Field(
        default=0.01,
        gt=0,
        le=100,
        description="Price differences at or below this amount are not submitted"
    )
    clamp_negative_prices: bool = Field(
        default=False,
        description="Clamp computed prices at zero when a discount overshoots"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Symbol used when formatting prices for display"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def shopify_configured(self) -> bool:
        """Check if the Shopify Admin API is configured."""
        return bool(self.shopify_shop and self.shopify_access_token)

    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
