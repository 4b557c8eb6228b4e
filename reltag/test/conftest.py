from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from reltag.core.config import GitHubRepo, ReleaseConfig, TriggerInfo
from reltag.test._utils import git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An initialised repository with one commit on `main`."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q", "-b", "main")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    (repo / "README.md").write_text("hello\n", encoding="utf-8")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "initial commit")
    return repo


@pytest.fixture
def commit(git_repo: Path) -> Callable[[str], str]:
    """Add an empty commit with `message`; returns its sha."""

    def _commit(message: str) -> str:
        git(git_repo, "commit", "-q", "--allow-empty", "-m", message)
        return git(git_repo, "rev-parse", "HEAD")

    return _commit


@pytest.fixture
def release_config() -> ReleaseConfig:
    return ReleaseConfig(
        token="t0ken",
        repo=GitHubRepo(owner="acme", name="monorepo"),
        trigger=TriggerInfo(ref_name="web-app@1.2.0", event_name="push"),
    )
