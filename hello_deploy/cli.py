"""Root CLI group for hello-deploy: build, declare, rollout, verify."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click

from hello_app.core.logger import get_logger
from hello_deploy import __version__
from hello_deploy.config import DeployConfig
from hello_deploy.errors import DeployError
from hello_deploy.image import build_and_push
from hello_deploy.release import declare_release, load_release
from hello_deploy.remote import rollout as remote_rollout
from hello_deploy.verify import verify as verify_service


@dataclass
class DeployContext:
    config: DeployConfig
    dry_run: bool


@contextmanager
def _aborting_on_failure():
    try:
        yield
    except DeployError as exc:
        raise click.ClickException(str(exc)) from exc


def _rollout_ref(ctx: DeployContext) -> str:
    """Explicit tag wins; otherwise the declared release."""
    if ctx.config.tag:
        return ctx.config.image_ref()
    release = load_release(ctx.config.release_file)
    return release.image_ref


@click.group()
@click.version_option(version=__version__, prog_name="hello-deploy")
@click.option("-n", "--dry-run", is_flag=True, help="Print commands without running them.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--image", default=None, help="Image repository, e.g. user/hello-app.")
@click.option("--tag", default=None, help="Image tag (default: v<version>).")
@click.option("--host", default=None, help="Target host address.")
@click.option("--user", "ssh_user", default=None, help="SSH user.")
@click.option("--key", "ssh_key", type=click.Path(path_type=Path), default=None, help="SSH private key.")
@click.option("--port", type=int, default=None, help="Published app port.")
@click.option("--container", "container_name", default=None, help="Container name.")
@click.option("--release-file", type=click.Path(path_type=Path), default=None, help="Release record path.")
@click.option("--allow-mutable-tag", is_flag=True, help="Permit tags such as 'latest'.")
@click.pass_context
def cli(
    ctx: click.Context,
    dry_run: bool,
    verbose: bool,
    image: str | None,
    tag: str | None,
    host: str | None,
    ssh_user: str | None,
    ssh_key: Path | None,
    port: int | None,
    container_name: str | None,
    release_file: Path | None,
    allow_mutable_tag: bool,
) -> None:
    """hello-deploy: ship the hello service to its EC2 host."""
    if verbose:
        get_logger("hello-deploy", level="DEBUG")

    with _aborting_on_failure():
        config = DeployConfig.from_cli(
            image=image,
            tag=tag,
            host=host,
            ssh_user=ssh_user,
            ssh_key=ssh_key.expanduser() if ssh_key else None,
            port=port,
            container_name=container_name,
            release_file=release_file,
            allow_mutable_tag=allow_mutable_tag or None,
        )
    ctx.obj = DeployContext(config=config, dry_run=dry_run)

    if dry_run:
        click.echo("DRY RUN - no changes will be made\n")


@cli.command()
@click.option("--context", "build_context", type=click.Path(path_type=Path), default=Path("."),
              help="Docker build context.")
@click.pass_obj
def build(ctx: DeployContext, build_context: Path) -> None:
    """Build the image for every platform and push it."""
    with _aborting_on_failure():
        ref = build_and_push(ctx.config, context=build_context, dry_run=ctx.dry_run)
    click.echo(f"Pushed {ref}")


@cli.command()
@click.pass_obj
def declare(ctx: DeployContext) -> None:
    """Record the tag the next rollout should run."""
    with _aborting_on_failure():
        release = declare_release(ctx.config, dry_run=ctx.dry_run)
    click.echo(f"Declared {release.image_ref}")


@cli.command()
@click.pass_obj
def rollout(ctx: DeployContext) -> None:
    """Replace the remote container with a fresh pull of the tag."""
    with _aborting_on_failure():
        ref = _rollout_ref(ctx)
        remote_rollout(ctx.config, ref, dry_run=ctx.dry_run)
    click.echo(f"Rolled out {ref}")


@cli.command()
@click.option("--expect-version", default=None, help="Fail unless /test reports this version.")
@click.pass_obj
def verify(ctx: DeployContext, expect_version: str | None) -> None:
    """GET /test on the host and check the answer."""
    with _aborting_on_failure():
        body = verify_service(ctx.config, expect_version=expect_version, dry_run=ctx.dry_run)
    if body:
        click.echo(f"Live: {body['message']} ({body['version']})")


@cli.command(name="all")
@click.option("--context", "build_context", type=click.Path(path_type=Path), default=Path("."),
              help="Docker build context.")
@click.option("--expect-version", default=None, help="Fail unless /test reports this version.")
@click.pass_obj
def deploy_all(ctx: DeployContext, build_context: Path, expect_version: str | None) -> None:
    """Build, declare, roll out and verify, stopping at the first failure."""
    with _aborting_on_failure():
        build_and_push(ctx.config, context=build_context, dry_run=ctx.dry_run)
        release = declare_release(ctx.config, dry_run=ctx.dry_run)
        remote_rollout(ctx.config, release.image_ref, dry_run=ctx.dry_run)
        verify_service(ctx.config, expect_version=expect_version, dry_run=ctx.dry_run)
    click.echo(f"Deployed {release.image_ref}")


def main() -> None:
    cli()
