"""Repository hygiene checks over the Python sources."""

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent.parent
SOURCES = sorted(
    p for pkg in ("hello_app", "hello_infra", "hello_deploy", "tests")
    for p in (ROOT / pkg).rglob("*.py")
)


@pytest.mark.parametrize("path", SOURCES, ids=lambda p: str(p.relative_to(ROOT)))
def test_sources_use_plain_punctuation(path: Path):
    assert "\u2014" not in path.read_text(encoding="utf-8")
