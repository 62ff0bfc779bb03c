"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when required configuration values are missing."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    # Auth
    google_client_id: str = Field(
        "", validation_alias=AliasChoices("GOOGLE_CLIENT_ID", "VITE_GOOGLE_CLIENT_ID")
    )
    jwt_issuer: str = ""
    jwt_audience: str = ""
    jwt_signing_key: str = ""
    jwt_expiration_minutes: int = Field(60, gt=0)

    # Storage
    storage_backend: Literal["s3", "memory"] = "s3"
    aws_bucket_name: str = ""
    aws_region: str = ""
    storage_prefix: str = "clipboard"
    s3_endpoint_url: str | None = None
    presigned_url_ttl_minutes: int = Field(15, gt=0)

    # Uploads (bytes)
    max_upload_bytes: int = Field(25 * 1024 * 1024, gt=0)

    # CORS (comma-separated)
    cors_allowed_origins: str = ""

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def allowed_origins(self) -> list[str]:
        """Parsed CORS origins."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_required(self) -> None:
        """Fail fast when auth, storage or CORS configuration is incomplete.

        Raises:
            ConfigurationError: Listing every missing environment variable
        """
        missing: list[str] = []

        required = {
            "GOOGLE_CLIENT_ID": self.google_client_id,
            "JWT_ISSUER": self.jwt_issuer,
            "JWT_AUDIENCE": self.jwt_audience,
            "JWT_SIGNING_KEY": self.jwt_signing_key,
        }
        if self.storage_backend == "s3":
            required["AWS_BUCKET_NAME"] = self.aws_bucket_name
            required["AWS_REGION"] = self.aws_region

        for name, value in required.items():
            if not value.strip():
                missing.append(name)

        if not self.allowed_origins:
            missing.append("CORS_ALLOWED_ORIGINS")

        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
