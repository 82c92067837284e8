"""Shared pytest fixtures and test-run configuration."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom pytest options for integration test execution."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration (external dependencies).",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly enabled."""
    run_integration = config.getoption("--run-integration")
    env_enabled = os.getenv("RUN_INTEGRATION_TESTS") == "1"
    if run_integration or env_enabled:
        return

    skip_marker = pytest.mark.skip(
        reason=(
            "Integration tests are disabled by default. "
            "Use --run-integration or set RUN_INTEGRATION_TESTS=1."
        )
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_marker)


def _git(repo_path: Path, *args: str) -> None:
    """Run a git command in a test repository and fail loudly on error."""
    subprocess.run(["git", *args], cwd=repo_path, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create an empty git repository with a configured test identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable is not installed.")
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    _git(repo_path, "init", "--quiet")
    _git(repo_path, "config", "user.email", "test@example.com")
    _git(repo_path, "config", "user.name", "Test User")
    _git(repo_path, "config", "commit.gpgsign", "false")
    return repo_path


@pytest.fixture
def commit_files() -> Callable[[Path, dict[str, str]], None]:
    """Return a helper that writes files and commits them."""

    def _commit(repo_path: Path, files: dict[str, str]) -> None:
        for name, content in files.items():
            file_path = repo_path / name
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        _git(repo_path, "add", ".")
        _git(repo_path, "commit", "--quiet", "-m", "Initial commit")

    return _commit
