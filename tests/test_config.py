"""Tests for semver_release.config and semver_release.toml."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit
from pydantic import ValidationError

from semver_release.config import ReleaseConfig, build_config
from semver_release.errors import ConfigError
from semver_release.models import BumpScheme, CommitOrder
from semver_release.toml import get_tool_config, load_pyproject

from conftest import SHA

REQUIRED = {"repo": "octo/widgets", "sha": SHA}


class TestGetToolConfig:
    def test_normalizes_keys(self, tmp_pyproject: Path) -> None:
        values = get_tool_config(load_pyproject(tmp_pyproject))
        assert values == {
            "bump_version_scheme": "patch",
            "tag_prefix": "release-",
            "max_commits": 10,
            "use_github_release_notes": True,
        }

    def test_returns_plain_python_values(self, tmp_pyproject: Path) -> None:
        values = get_tool_config(load_pyproject(tmp_pyproject))
        assert type(values["use_github_release_notes"]) is bool
        assert type(values["tag_prefix"]) is str

    def test_missing_table(self) -> None:
        assert get_tool_config(tomlkit.parse('[project]\nname = "x"')) == {}

    def test_empty_document(self) -> None:
        assert get_tool_config(tomlkit.parse("")) == {}


class TestReleaseConfigDefaults:
    def test_defaults(self) -> None:
        config = ReleaseConfig(**REQUIRED)
        assert config.bump_version_scheme is BumpScheme.MINOR
        assert config.tag_prefix == "v"
        assert config.release_name == "<RELEASE_TAG>"
        assert config.release_body == ""
        assert config.use_github_release_notes is False
        assert config.max_commits == 50
        assert config.commit_order is CommitOrder.NEWEST_FIRST
        assert config.skip_marker == "[norelease]"
        assert config.dry_run is False

    def test_is_frozen(self) -> None:
        config = ReleaseConfig(**REQUIRED)
        with pytest.raises(ValidationError):
            config.dry_run = True  # type: ignore[misc]


class TestBuildConfig:
    def test_overrides_only(self) -> None:
        config = build_config({**REQUIRED, "bump_version_scheme": "major"})
        assert config.bump_version_scheme is BumpScheme.MAJOR

    def test_none_overrides_are_ignored(self) -> None:
        config = build_config({**REQUIRED, "tag_prefix": None, "max_commits": None})
        assert config.tag_prefix == "v"
        assert config.max_commits == 50

    def test_pyproject_supplies_defaults(self, tmp_pyproject: Path) -> None:
        config = build_config(REQUIRED, tmp_pyproject)
        assert config.bump_version_scheme is BumpScheme.PATCH
        assert config.tag_prefix == "release-"
        assert config.max_commits == 10
        assert config.use_github_release_notes is True

    def test_overrides_beat_pyproject(self, tmp_pyproject: Path) -> None:
        config = build_config({**REQUIRED, "max_commits": 3}, tmp_pyproject)
        assert config.max_commits == 3

    def test_missing_pyproject_is_fine(self, tmp_path: Path) -> None:
        config = build_config(REQUIRED, tmp_path / "pyproject.toml")
        assert config.tag_prefix == "v"

    def test_string_inputs_are_coerced(self) -> None:
        config = build_config(
            {**REQUIRED, "dry_run": "true", "max_commits": "5"}
        )
        assert config.dry_run is True
        assert config.max_commits == 5

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"bump_version_scheme": "huge"}, "bump_version_scheme"),
            ({"commit_order": "random"}, "commit_order"),
            ({"max_commits": 0}, "max_commits"),
            ({"release_name": "v<RELEASE_NUMBER>"}, "release_name"),
            ({"release_name": ""}, "release_name"),
            ({"sha": ""}, "sha"),
        ],
    )
    def test_invalid_values(self, overrides: dict, field: str) -> None:
        with pytest.raises(ConfigError, match=field):
            build_config({**REQUIRED, **overrides})

    def test_missing_repo(self) -> None:
        with pytest.raises(ConfigError, match="repo"):
            build_config({"sha": SHA})

    def test_unknown_pyproject_key(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.semver-release]\nbump-scheme = "major"\n')

        with pytest.raises(ConfigError, match="bump_scheme"):
            build_config(REQUIRED, pyproject)

    def test_unparseable_pyproject(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.semver-release\n")

        with pytest.raises(ConfigError, match="Cannot parse"):
            build_config(REQUIRED, pyproject)
