"""Run configuration.

ReleaseConfig is built once at the CLI boundary from, in increasing
precedence: model defaults, ``[tool.semver-release]`` in pyproject.toml, and
CLI options / ``INPUT_*`` environment variables. It is then passed
explicitly to every step; nothing downstream reads the environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import tomlkit.exceptions
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import BumpScheme, CommitOrder
from .notes import validate_name_template
from .toml import get_tool_config, load_pyproject


class ReleaseConfig(BaseModel):
    """Everything one release run needs to know.

    Attributes:
        repo: "owner/name" of the repository to release.
        sha: Commit to tag; defaults to the triggering commit in CI.
        token: GitHub token handed to gh; gh's own auth is used when None.
        bump_version_scheme: Default bump when no override applies.
        tag_prefix: Literal prefix of every tag name.
        release_name: Name template with <RELEASE_VERSION>/<RELEASE_TAG>.
        release_body: Text placed at the top of the release body.
        use_github_release_notes: Let GitHub generate the notes instead of
            summarizing commits.
        max_commits: Cap on the number of commits listed in the body.
        commit_order: Order of the commit list.
        skip_marker: Commit title token that suppresses the release.
        dry_run: Compute and render everything but do not create the release.
        github_output: Path of the GitHub Actions step output file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    repo: str = Field(min_length=1)
    sha: str = Field(min_length=1)
    token: str | None = None
    bump_version_scheme: BumpScheme = BumpScheme.MINOR
    tag_prefix: str = "v"
    release_name: str = "<RELEASE_TAG>"
    release_body: str = ""
    use_github_release_notes: bool = False
    max_commits: int = Field(default=50, ge=1)
    commit_order: CommitOrder = CommitOrder.NEWEST_FIRST
    skip_marker: str = "[norelease]"
    dry_run: bool = False
    github_output: str | None = None

    @field_validator("release_name")
    @classmethod
    def _check_release_name(cls, value: str) -> str:
        try:
            return validate_name_template(value)
        except ConfigError as exc:
            raise ValueError(str(exc)) from exc


def _describe(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "config"
        lines.append(f"  {loc}: {err['msg']}")
    return "Invalid configuration:\n" + "\n".join(lines)


def build_config(
    overrides: Mapping[str, object], pyproject: Path | None = None
) -> ReleaseConfig:
    """Merge pyproject defaults with explicit overrides and validate.

    Args:
        overrides: Values from CLI options or environment. None means unset.
        pyproject: pyproject.toml to read [tool.semver-release] from; skipped
            if None or missing.

    Raises:
        ConfigError: If the merged values do not form a valid ReleaseConfig.
    """
    values: dict[str, object] = {}
    if pyproject is not None and pyproject.exists():
        try:
            values.update(get_tool_config(load_pyproject(pyproject)))
        except tomlkit.exceptions.TOMLKitError as exc:
            raise ConfigError(f"Cannot parse {pyproject}: {exc}") from exc
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ReleaseConfig(**values)
    except ValidationError as exc:
        raise ConfigError(_describe(exc)) from exc
