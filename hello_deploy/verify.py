"""Step 4: check the live service from outside."""

from __future__ import annotations

import click
import httpx

from hello_app.core.logger import get_logger
from hello_deploy.config import DeployConfig
from hello_deploy.errors import VerificationError

logger = get_logger("hello-deploy")

PROBE_PATH = "/test"
PROBE_KEYS = {"message", "version"}


def probe_url(config: DeployConfig) -> str:
    return f"http://{config.require_host()}:{config.port}{PROBE_PATH}"


def verify(
    config: DeployConfig,
    expect_version: str | None = None,
    timeout: float = 10.0,
    dry_run: bool = False,
) -> dict:
    """GET the probe route once and validate its body."""
    url = probe_url(config)
    click.echo(f"  GET {url}")
    if dry_run:
        return {}

    try:
        response = httpx.get(url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise VerificationError(f"GET {url} failed: {exc}") from exc

    if response.status_code != 200:
        raise VerificationError(f"GET {url} returned HTTP {response.status_code}")

    try:
        body = response.json()
    except ValueError as exc:
        raise VerificationError(f"GET {url} did not return JSON") from exc

    if not isinstance(body, dict) or set(body) != PROBE_KEYS:
        raise VerificationError(f"Unexpected probe body from {url}: {body!r}")

    if expect_version is not None and body["version"] != expect_version:
        raise VerificationError(
            f"Expected version {expect_version!r}, service reports {body['version']!r}"
        )

    logger.info(f"VERIFY | {url} | version={body['version']}")
    return body
