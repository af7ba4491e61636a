from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)


def completed(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def listing_runner():
    """Build a fake eos-packagelist runner that records the commands it sees."""

    def factory(returncode: int = 0, stdout: str = "", stderr: str = ""):
        calls: list[list[str]] = []

        def runner(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
            calls.append(list(cmd))
            return completed(returncode, stdout, stderr)

        runner.calls = calls  # type: ignore[attr-defined]
        return runner

    return factory
