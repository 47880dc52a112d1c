"""Checks on the service Dockerfile."""

from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent.parent
DOCKERFILE = (ROOT / "Dockerfile").read_text(encoding="utf-8")


def test_image_installs_service_dependencies_only():
    assert "--no-deps ." in DOCKERFILE
    for tooling in ("aws-cdk-lib", "constructs", "click", "httpx"):
        assert tooling not in DOCKERFILE
    assert "COPY hello_infra" not in DOCKERFILE
    assert "COPY hello_deploy" not in DOCKERFILE


def test_healthcheck_follows_port_variable():
    healthcheck = DOCKERFILE[DOCKERFILE.index("HEALTHCHECK"):]
    assert "os.environ.get('PORT'" in healthcheck
