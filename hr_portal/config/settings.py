"""
Configuration management for the HR portal client.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HrPortalConfig(BaseSettings):
    """Configuration settings for the HR portal client."""

    # Backend API Configuration
    api_base_url: str = Field(
        default="http://localhost:8081/web/api/v1", alias="HR_API_BASE_URL"
    )
    api_timeout: float = Field(default=30.0, alias="HR_API_TIMEOUT")
    verify_ssl: bool = Field(default=True, alias="HR_VERIFY_SSL")

    # Credentials (either a token pair or a login key/password)
    access_token: Optional[str] = Field(default=None, alias="HR_ACCESS_TOKEN")
    refresh_token: Optional[str] = Field(default=None, alias="HR_REFRESH_TOKEN")
    login_key: Optional[str] = Field(default=None, alias="HR_LOGIN_KEY")
    login_password: Optional[str] = Field(default=None, alias="HR_LOGIN_PASSWORD")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Request Configuration
    max_retries: int = Field(default=3, alias="MAX_RETRIES")
    retry_delay: float = Field(default=1.0, alias="RETRY_DELAY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Ensure the base URL is an http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_timeout")
    @classmethod
    def validate_timeout(cls, v):
        """Ensure the request timeout is positive."""
        if v <= 0:
            raise ValueError("API timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    def has_credentials(self) -> bool:
        """Whether a session can be opened from this configuration."""
        if self.access_token:
            return True
        return bool(self.login_key and self.login_password)


def load_config(env_file: Optional[str] = None) -> HrPortalConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return HrPortalConfig()


# Global configuration instance
_config: Optional[HrPortalConfig] = None


def get_config() -> HrPortalConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> HrPortalConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
