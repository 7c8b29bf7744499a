"""
ScholarBeacon Backend: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are coerced
       and validated on load, and are exposed through the `settings` singleton.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again in the app lifespan.
"""

from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults target local development against a MongoDB on localhost.
    Deployments against Atlas set DB_USER / DB_PASS / MONGODB_CLUSTER_HOST
    and STRIPE_SECRET_KEY.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Used as-is unless Atlas credentials below are all present
    mongodb_uri: str = Field(default="mongodb://localhost:27017")

    db_user: Optional[str] = Field(default=None)
    db_pass: Optional[str] = Field(default=None)
    mongodb_cluster_host: Optional[str] = Field(
        default=None,
        description="Atlas SRV host, e.g. cluster0.abcde.mongodb.net",
    )
    mongodb_app_name: str = Field(default="Cluster0")

    database_name: str = Field(default="ScholarBeaconDB")

    # Fail a request after this long if no server is selectable
    mongodb_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    @property
    def mongo_connection_uri(self) -> str:
        """Atlas SRV URI when credentials are configured, else `mongodb_uri`."""
        if self.db_user and self.db_pass and self.mongodb_cluster_host:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.mongodb_cluster_host}/"
                f"?retryWrites=true&w=majority&appName={self.mongodb_app_name}"
            )
        return self.mongodb_uri

    # ── Stripe ────────────────────────────────────────────────────────────
    stripe_secret_key: str = Field(
        default="",
        description="Stripe secret key used to create payment intents",
    )

    # Processor currency is fixed; only card payments are accepted
    payment_currency: str = Field(default="usd")

    # Tenacity settings for transient Stripe connection errors
    payment_retry_max_attempts: int = Field(default=3, ge=1, le=10)
    payment_retry_min_wait: float = Field(default=0.5, ge=0, le=30)
    payment_retry_max_wait: float = Field(default=4.0, ge=0, le=120)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Checks that settings needed by every feature are present.
        When:  Called during app startup (lifespan).
        Raises ValueError listing each missing value.
        """
        errors = []
        if not self.stripe_secret_key:
            errors.append(
                "STRIPE_SECRET_KEY is not set. "
                "POST /create-payment-intent will fail until it is configured."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
