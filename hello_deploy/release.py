"""Step 2: record which image tag the next rollout should run."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ValidationError

from hello_app.core.logger import get_logger
from hello_deploy.config import DeployConfig
from hello_deploy.errors import MalformedReleaseError, ReleaseNotDeclaredError

logger = get_logger("hello-deploy")


class Release(BaseModel):
    """The release record stored as JSON between runs."""

    model_config = {"frozen": True}

    image: str
    tag: str
    declared_at: datetime

    @property
    def image_ref(self) -> str:
        return f"{self.image}:{self.tag}"


def declare_release(config: DeployConfig, dry_run: bool = False) -> Release:
    release = Release(
        image=config.require_image(),
        tag=config.resolved_tag(),
        declared_at=datetime.now(timezone.utc),
    )
    logger.info(f"DECLARE | {release.image_ref} -> {config.release_file}")

    if not dry_run:
        config.release_file.parent.mkdir(parents=True, exist_ok=True)
        config.release_file.write_text(release.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return release


def load_release(path: Path) -> Release:
    if not path.exists():
        raise ReleaseNotDeclaredError(
            f"No release declared at {path}; run `hello-deploy declare` first"
        )
    try:
        return Release.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise MalformedReleaseError(
            f"Release record {path} is malformed; run `hello-deploy declare` again:\n{exc}"
        ) from exc
