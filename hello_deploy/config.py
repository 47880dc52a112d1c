"""Deployment settings: CLI flags over ``DEPLOY_*`` env vars over defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from hello_deploy import __version__
from hello_deploy.errors import ConfigError, MutableTagError

DEFAULT_PLATFORMS = ("linux/amd64", "linux/arm64")
MUTABLE_TAGS = frozenset({"latest"})


def default_tag() -> str:
    return f"v{__version__}"


def validate_tag(tag: str, *, allow_mutable: bool = False) -> str:
    """Reject empty tags, and ``latest`` unless explicitly allowed."""
    tag = tag.strip()
    if not tag:
        raise MutableTagError("Image tag must not be empty")
    if tag in MUTABLE_TAGS and not allow_mutable:
        raise MutableTagError(
            f"Tag {tag!r} is mutable; use a version tag like {default_tag()!r} "
            "or pass --allow-mutable-tag"
        )
    return tag


class DeployConfig(BaseSettings):
    """Everything the four deployment steps need.

    Stored in ``click.Context.obj`` at the CLI root level.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEPLOY_",
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    image: str | None = None
    tag: str | None = None
    host: str | None = None
    ssh_user: str = "ubuntu"
    ssh_key: Path = Field(default_factory=lambda: Path("~/.ssh/id_rsa").expanduser())
    container_name: str = Field(
        default="hello-app",
        validation_alias=AliasChoices("container_name", "DEPLOY_CONTAINER"),
    )
    port: int = Field(default=3000, ge=1, le=65535)
    # comma-separated in the environment
    platforms: Annotated[tuple[str, ...], NoDecode] = DEFAULT_PLATFORMS
    release_file: Path = Path(".deploy/release.json")
    allow_mutable_tag: bool = False

    @field_validator("image", "tag", "host", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("ssh_key", mode="after")
    @classmethod
    def _expand_key(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("platforms", mode="before")
    @classmethod
    def _split_platforms(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(p.strip() for p in value.split(",") if p.strip())
        return value

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> DeployConfig:
        """Build settings with non-None CLI flags as highest-priority overrides."""
        overrides = {k: v for k, v in cli_flags.items() if v is not None}
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigError(f"Invalid deployment settings:\n{exc}") from exc

    def require_image(self) -> str:
        if not self.image:
            raise ConfigError("Image repository is required (--image or DEPLOY_IMAGE)")
        return self.image

    def require_host(self) -> str:
        if not self.host:
            raise ConfigError("Target host is required (--host or DEPLOY_HOST)")
        return self.host

    def resolved_tag(self) -> str:
        return validate_tag(self.tag or default_tag(), allow_mutable=self.allow_mutable_tag)

    def image_ref(self, tag: str | None = None) -> str:
        return f"{self.require_image()}:{tag or self.resolved_tag()}"
