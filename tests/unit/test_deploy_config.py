"""Tests for deployment settings and the image tag policy."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from hello_deploy import __version__
from hello_deploy.config import DeployConfig, default_tag, validate_tag
from hello_deploy.errors import ConfigError, MutableTagError


def test_default_tag_is_package_version() -> None:
    assert default_tag() == f"v{__version__}"


def test_latest_is_rejected_by_default() -> None:
    with pytest.raises(MutableTagError, match="mutable"):
        validate_tag("latest")


def test_latest_allowed_when_opted_in() -> None:
    assert validate_tag("latest", allow_mutable=True) == "latest"


def test_empty_tag_rejected() -> None:
    with pytest.raises(MutableTagError):
        validate_tag("   ", allow_mutable=True)


def test_env_fills_every_field(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPLOY_IMAGE", "user/hello-app")
    monkeypatch.setenv("DEPLOY_TAG", "v2")
    monkeypatch.setenv("DEPLOY_HOST", "203.0.113.10")
    monkeypatch.setenv("DEPLOY_SSH_USER", "ec2-user")
    monkeypatch.setenv("DEPLOY_SSH_KEY", "/keys/demo.pem")
    monkeypatch.setenv("DEPLOY_CONTAINER", "web")
    monkeypatch.setenv("DEPLOY_PORT", "8080")
    monkeypatch.setenv("DEPLOY_PLATFORMS", "linux/amd64")
    monkeypatch.setenv("DEPLOY_RELEASE_FILE", "/tmp/release.json")

    config = DeployConfig()
    assert config.image_ref() == "user/hello-app:v2"
    assert config.host == "203.0.113.10"
    assert config.ssh_user == "ec2-user"
    assert config.ssh_key == Path("/keys/demo.pem")
    assert config.container_name == "web"
    assert config.port == 8080
    assert config.platforms == ("linux/amd64",)
    assert config.release_file == Path("/tmp/release.json")


def test_platform_list_is_split_on_commas(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPLOY_PLATFORMS", "linux/amd64, linux/arm64,")
    assert DeployConfig().platforms == ("linux/amd64", "linux/arm64")


def test_defaults() -> None:
    config = DeployConfig()
    assert config.tag is None
    assert config.resolved_tag() == default_tag()
    assert config.platforms == ("linux/amd64", "linux/arm64")
    assert config.port == 3000
    assert config.container_name == "hello-app"
    assert config.ssh_key == Path("~/.ssh/id_rsa").expanduser()


def test_bad_port_fails_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPLOY_PORT", "abc")
    with pytest.raises(ValidationError):
        DeployConfig()


def test_from_cli_reports_bad_env_as_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPLOY_PORT", "abc")
    with pytest.raises(ConfigError, match="port"):
        DeployConfig.from_cli(host="h")


def test_cli_flags_beat_env_and_none_is_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEPLOY_HOST", "from-env")
    monkeypatch.setenv("DEPLOY_PORT", "8000")
    config = DeployConfig.from_cli(host=None, port=9000)
    assert config.host == "from-env"
    assert config.port == 9000


def test_missing_image_and_host_raise() -> None:
    config = DeployConfig()
    with pytest.raises(ConfigError):
        config.require_image()
    with pytest.raises(ConfigError):
        config.require_host()
