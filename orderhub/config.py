"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./orderhub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="America/Chicago",
        description="IANA timezone (or UTC offset) used for notification timestamps",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    twilio_account_sid: str | None = Field(
        default=None, description="Twilio account SID used for SMS delivery"
    )
    twilio_auth_token: str | None = Field(
        default=None, description="Twilio auth token paired with the account SID"
    )
    twilio_from_number: str | None = Field(
        default=None, description="Twilio phone number (E.164) used as SMS sender"
    )
    company_name: str = Field(default="Gokul Wholesale Inc.")
    company_phone: str = Field(default="(630) 540-9910")
    support_email: str = Field(default="info@gokulwholesaleinc.com")
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of origins allowed to call the API",
    )

    @model_validator(mode="after")
    def _validate_provider_credentials(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")

        twilio_values = (
            self.twilio_account_sid,
            self.twilio_auth_token,
            self.twilio_from_number,
        )
        if any(twilio_values) and not all(twilio_values):
            raise ValueError(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER "
                "must all be provided to enable SMS"
            )
        return self

    @property
    def email_enabled(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)

    @property
    def sms_enabled(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_from_number
        )

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
