"""Shared fixtures: keep the caller's environment out of settings."""

import os

import pytest

SERVICE_VARS = ("PORT", "LOG_LEVEL", "APP_HOST", "APP_GREETING", "APP_MESSAGE", "APP_VERSION")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in SERVICE_VARS:
        monkeypatch.delenv(var, raising=False)
    for var in list(os.environ):
        if var.startswith("DEPLOY_"):
            monkeypatch.delenv(var, raising=False)
