"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from semver_release.config import ReleaseConfig

SHA = "a" * 40


@pytest.fixture
def config() -> ReleaseConfig:
    """A minimal valid configuration."""
    return ReleaseConfig(repo="octo/widgets", sha=SHA)


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a pyproject.toml with a [tool.semver-release] table."""
    content = """\
[project]
name = "test-package"
version = "1.0.0"

[tool.semver-release]
bump-version-scheme = "patch"
tag-prefix = "release-"
max_commits = 10
use-github-release-notes = true
"""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


def commit_payload(sha: str, message: str) -> dict:
    """A commit object as returned by the GitHub REST API."""
    return {"sha": sha, "commit": {"message": message}}
