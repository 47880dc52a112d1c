"""Step 1: build the image for every target platform and push it."""

from __future__ import annotations

from pathlib import Path

from hello_app.core.logger import get_logger
from hello_deploy import runner
from hello_deploy.config import DeployConfig
from hello_deploy.errors import BuildError

logger = get_logger("hello-deploy")


def build_command(image_ref: str, platforms: tuple[str, ...], context: Path) -> list[str]:
    return [
        "docker", "buildx", "build",
        "--platform", ",".join(platforms),
        "-t", image_ref,
        "--push",
        str(context),
    ]


def build_and_push(config: DeployConfig, context: Path = Path("."), dry_run: bool = False) -> str:
    """Build and publish ``image:tag``; returns the pushed reference."""
    if not config.platforms:
        raise BuildError("At least one target platform is required")

    image_ref = config.image_ref()
    logger.info(f"BUILD | {image_ref} | {','.join(config.platforms)}")

    result = runner.run(build_command(image_ref, config.platforms, context), dry_run=dry_run)
    if result.returncode != 0:
        raise BuildError(
            f"docker buildx build exited with {result.returncode}: {result.stderr.strip()}"
        )
    return image_ref
