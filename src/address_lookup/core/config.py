"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
Provider option values (filter, format, language, country) are kept as plain
strings here and validated by ``LookupOptions`` so that an invalid value
surfaces as ``ConfigurationError``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PCA Predict: credentials
    pca_api_key: str = Field(
        default="",
        description="PCA Predict account key",
    )
    pca_user_name: str = Field(
        default="",
        description="Username associated with a Royal Mail licence (not required for click licences)",
    )

    # PCA Predict: endpoint
    pca_host: str = Field(
        default="services.postcodeanywhere.co.uk",
        description="PCA Predict API host",
    )
    pca_use_https: bool = Field(
        default=True,
        description="Call the API over HTTPS",
    )
    pca_timeout: float = Field(
        default=10.0,
        description="PCA Predict request timeout in seconds",
        gt=0,
    )

    # PCA Predict: lookup options
    pca_result_filter: str = Field(
        default="Everything",
        description="Find result filter: Everything, PostalCodes, Companies or Places",
    )
    pca_country: str = Field(
        default="GB",
        description="ISO2 code of the country to search in",
    )
    pca_response_format: str = Field(
        default="json",
        description="Response format requested from the API: json or xml",
    )
    pca_preferred_language: str = Field(
        default="English",
        description="Language version of returned addresses: English or Welsh",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
