"""Configuration management for the ING payment gateway."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngSettings(BaseSettings):
    """ING Open Banking connection settings."""

    host: str = Field(
        default="https://api.sandbox.ing.com",
        description="ING API base URL"
    )
    client_id: str = Field(
        default="",
        description="OAuth2 client id registered with ING"
    )
    merchant_id: str = Field(
        default="",
        description="Merchant identifier"
    )
    cert_path: str = Field(
        default="config/certificates/example_client_tls.cer",
        description="Client TLS certificate (PEM)"
    )
    key_path: str = Field(
        default="config/certificates/example_client_tls.key",
        description="Client TLS private key (PEM)"
    )
    timeout_seconds: float = Field(default=10.0, description="Request timeout")

    model_config = SettingsConfigDict(env_prefix="ING__", case_sensitive=False)


class AuditLogSettings(BaseSettings):
    """Audit trace file settings."""

    directory: str = Field(
        default="var/log/payments",
        description="Root directory for per-provider daily audit files"
    )
    enabled: bool = Field(default=True, description="Write audit trace files")

    model_config = SettingsConfigDict(env_prefix="AUDIT_LOG__", case_sensitive=False)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    webshop_base_url: str = Field(
        default="https://www.webshop.com",
        description="Base URL the payer is sent back to after payment"
    )

    # ING Open Banking
    ing: IngSettings = Field(default_factory=IngSettings)

    # Audit trace files
    audit_log: AuditLogSettings = Field(default_factory=AuditLogSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
