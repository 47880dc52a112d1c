"""
Step 3: replace the running container on the remote host.

The sequence is fixed:

1. stop the old container        (absent container is fine)
2. remove it                     (absent container is fine)
3. remove the cached image       (absent image is fine)
4. pull the tag fresh
5. run a new container with a restart policy

Step 3 always runs, even for version tags. A tag that was pushed
twice would otherwise be served from the host's stale local copy.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from hello_app.core.logger import get_logger
from hello_deploy import runner
from hello_deploy.config import DeployConfig
from hello_deploy.errors import ArchitectureMismatchError, RemoteCommandError, SSHConnectionError

logger = get_logger("hello-deploy")

SSH_FAILURE_EXIT = 255
RESTART_POLICY = "always"

# docker's wording when the pulled image lacks the host's platform
MANIFEST_MISMATCH_MARKERS = (
    "no matching manifest",
    "does not match the detected host platform",
    "exec format error",
)


@dataclass(frozen=True)
class RemoteStep:
    name: str
    args: list[str]
    # stderr fragment that means "nothing to do"
    tolerate: str | None = None


def rollout_steps(config: DeployConfig, image_ref: str) -> list[RemoteStep]:
    name = config.container_name
    port = f"{config.port}:{config.port}"
    return [
        RemoteStep("stop", ["docker", "stop", name], tolerate="No such container"),
        RemoteStep("remove", ["docker", "rm", name], tolerate="No such container"),
        RemoteStep("remove-image", ["docker", "rmi", "-f", image_ref], tolerate="No such image"),
        RemoteStep("pull", ["docker", "pull", image_ref]),
        RemoteStep(
            "run",
            [
                "docker", "run", "-d",
                "--name", name,
                "-p", port,
                "-e", f"PORT={config.port}",
                "--restart", RESTART_POLICY,
                image_ref,
            ],
        ),
    ]


def ssh_command(config: DeployConfig, remote_args: list[str]) -> list[str]:
    """Key-based, non-interactive ssh invocation for one remote command."""
    return [
        "ssh",
        "-i", str(config.ssh_key),
        "-o", "BatchMode=yes",
        "-o", "IdentitiesOnly=yes",
        "-o", "StrictHostKeyChecking=accept-new",
        f"{config.ssh_user}@{config.require_host()}",
        shlex.join(remote_args),
    ]


def _is_manifest_mismatch(output: str) -> bool:
    lowered = output.lower()
    return any(marker in lowered for marker in MANIFEST_MISMATCH_MARKERS)


def run_step(config: DeployConfig, step: RemoteStep, dry_run: bool = False) -> None:
    result = runner.run(ssh_command(config, step.args), dry_run=dry_run)
    if result.returncode == 0:
        return

    output = f"{result.stderr}\n{result.stdout}".strip()

    if result.returncode == SSH_FAILURE_EXIT:
        raise SSHConnectionError(
            f"ssh to {config.ssh_user}@{config.host} failed: {result.stderr.strip()}"
        )

    if step.tolerate and step.tolerate in output:
        logger.info(f"ROLLOUT | {step.name} | nothing to do")
        return

    if step.name in {"pull", "run"} and _is_manifest_mismatch(output):
        raise ArchitectureMismatchError(step.name, result.returncode, output)

    raise RemoteCommandError(step.name, result.returncode, output)


def rollout(config: DeployConfig, image_ref: str, dry_run: bool = False) -> None:
    """Run every rollout step in order; the first failure aborts."""
    host = config.require_host()
    logger.info(f"ROLLOUT | {image_ref} -> {config.ssh_user}@{host} | container={config.container_name}")

    for step in rollout_steps(config, image_ref):
        run_step(config, step, dry_run=dry_run)

    logger.info(f"ROLLOUT | done | {config.container_name} on port {config.port}")
