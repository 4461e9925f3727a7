"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="foodista-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    max_request_body_size: int = Field(default=10 * 1024 * 1024, description="Maximum request body size in bytes")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:5174",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")

    # Auth
    jwt_secret_key: str = Field(..., description="Secret used to verify actor JWTs")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    auth_cookie_name: str = Field(default="token", description="Cookie carrying the JWT when no Authorization header is sent")

    # Stripe
    stripe_secret_key: str = Field(default="", description="Stripe secret API key")
    stripe_webhook_secret: str = Field(default="", description="Stripe webhook signing secret")
    stripe_timeout_seconds: float = Field(default=10.0, description="Timeout for outbound Stripe API calls")
    stripe_max_network_retries: int = Field(default=2, description="Automatic retries for failed Stripe connections")
    currency: str = Field(default="inr", description="Currency for checkout line items")
    shipping_countries: str = Field(
        default="GB,US,CA",
        description="Comma-separated ISO country codes allowed for shipping addresses",
    )

    # Email (Resend)
    resend_api_key: str = Field(default="", description="Resend API key for sending emails")
    email_from_address: str = Field(
        default="Foodista <orders@foodista.app>",
        description="From address for transactional emails",
    )

    # Frontend
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Frontend application URL for checkout redirects and email links",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def shipping_countries_list(self) -> list[str]:
        """Parse shipping countries string into a list of upper-case codes."""
        return [code.strip().upper() for code in self.shipping_countries.split(",") if code.strip()]

    @property
    def is_stripe_test_mode(self) -> bool:
        """Check if using Stripe test keys."""
        return self.stripe_secret_key.startswith("sk_test_")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
