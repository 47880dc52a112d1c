# hello_app/core/config.py
"""
Runtime settings for the hello service.

Everything is read from environment variables so the same image
can be reconfigured at `docker run -e ...` time:

- APP_HOST, APP_GREETING, APP_MESSAGE, APP_VERSION
- PORT, LOG_LEVEL (unprefixed)
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GREETING = (
    "🚀 Node.js App Deployed using Docker & Terraform!--update-ansible- "
    "Node.js App Deployed using Docker + Ansible + EC2"
)
DEFAULT_MESSAGE = "Updated version deployed successfully ✅"
DEFAULT_VERSION = "v2 test"
DEFAULT_PORT = 3000

SERVICE_NAME = "hello-app"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class AppSettings(BaseSettings):
    """Service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "PORT"),
    )
    greeting: str = DEFAULT_GREETING
    message: str = DEFAULT_MESSAGE
    version: str = DEFAULT_VERSION
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
