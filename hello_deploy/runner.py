"""Thin wrapper around subprocess with a dry-run mode."""

from __future__ import annotations

import shlex
import subprocess

import click

from hello_app.core.logger import get_logger

logger = get_logger("hello-deploy")


def run(cmd: list[str], dry_run: bool = False) -> subprocess.CompletedProcess[str]:
    """Run a command, optionally as dry-run.

    Never raises on a non-zero exit; callers decide what a failure means.
    """
    click.echo(f"  $ {shlex.join(cmd)}")
    if dry_run:
        return subprocess.CompletedProcess(cmd, 0, "", "")

    result = subprocess.run(cmd, check=False, capture_output=True, text=True)
    logger.debug(f"exit={result.returncode} | {cmd[0]} | {result.stdout.strip()}")
    return result
