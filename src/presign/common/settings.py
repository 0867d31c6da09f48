"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PRESIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signing
    secret: SecretStr | None = Field(
        default=None,
        description="Shared secret used to sign and validate URLs",
    )
    hmac_algorithm: Literal["sha1", "sha256", "sha512"] = Field(
        default="sha256",
        description="Digest used for the HMAC (sha1 matches legacy signers)",
    )
    default_expires_seconds: int = Field(
        default=300,
        description="Lifetime of URLs signed by the CLI when no expiry is given",
    )

    # Middleware
    exempt_paths: tuple[str, ...] = Field(
        default=("/health",),
        description="Paths that bypass pre-signed URL validation",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level name",
    )
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON",
    )

    @property
    def secret_value(self) -> str | None:
        """Plain secret string, or None when not configured."""
        return self.secret.get_secret_value() if self.secret is not None else None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
