"""Client configuration.

Values can be passed directly or read from ``CONTENTFUL_*`` environment
variables (and an optional ``.env`` file).
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContentfulConfig(BaseSettings):
    """Configuration for the management API client.

    Example:
        >>> config = ContentfulConfig(
        ...     management_token="CFPAT-xxxx",
        ...     space_id="abc123",
        ... )
        >>> config.base_url
        'https://api.contentful.com'
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENTFUL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    management_token: SecretStr = Field(..., description="Content management API token")
    space_id: str | None = Field(None, description="Default space for space-scoped calls")
    environment_id: str | None = Field(
        None, description="Environment within the space (omitted from URLs when unset)"
    )
    base_url: str = Field("https://api.contentful.com", description="Management API host")
    upload_url: str = Field("https://upload.contentful.com", description="Upload API host")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    max_connections: int = Field(10, ge=1, description="Connection pool size")
    verify_ssl: bool = True
    processing_max_delay: int = Field(
        2000, ge=0, description="Default asset processing delay ceiling in milliseconds"
    )

    @field_validator("base_url", "upload_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def get_base_url(self) -> str:
        return self.base_url

    def get_upload_url(self) -> str:
        return self.upload_url

    def get_management_token(self) -> str:
        """Return the raw token value."""
        return self.management_token.get_secret_value()
