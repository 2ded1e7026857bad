# khidmaat/config.py
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read from the environment (and .env) once at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Stripe
    stripe_secret_key: str = Field(..., min_length=1, description="Stripe API secret key")
    stripe_webhook_secret: str = Field(..., min_length=1, description="Webhook signing secret")

    # Frontend origin, also the base for checkout redirect URLs
    client_url: Optional[str] = Field(default=None)

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    @field_validator("client_url")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @property
    def cors_origins(self) -> list[str]:
        return [self.client_url] if self.client_url else ["*"]
