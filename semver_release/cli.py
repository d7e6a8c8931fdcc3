"""CLI entry point for semver-release."""

from __future__ import annotations

from importlib.metadata import version as pkg_version
from pathlib import Path

import click

from semver_release.config import build_config
from semver_release.errors import ReleaseError
from semver_release.models import BumpScheme, CommitOrder
from semver_release.pipeline import run_release

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _version_range() -> str:
    """Compute pip version range: >=current,<next_minor."""
    v = pkg_version("semver-release")
    major, minor, *_ = v.split(".")
    return f'"semver-release>={v},<{major}.{int(minor) + 1}.0"'


@click.group()
@click.version_option(package_name="semver-release")
def cli() -> None:
    """Tag and release the next semantic version on every push."""


@cli.command()
@click.option(
    "--workflow-dir",
    type=click.Path(),
    default=".github/workflows",
    show_default=True,
    help="Directory to write the workflow file.",
)
@click.option(
    "--scheme",
    type=click.Choice([s.value for s in BumpScheme]),
    default=BumpScheme.MINOR.value,
    show_default=True,
    help="Default bump_version_scheme for the generated workflow.",
)
@click.option(
    "--branch",
    default="main",
    show_default=True,
    help="Default branch whose pushes trigger a release.",
)
def init(workflow_dir: str, scheme: str, branch: str) -> None:
    """Scaffold the GitHub Actions release workflow into your repo."""
    root = Path.cwd()

    if not (root / ".git").exists():
        raise click.ClickException("Not a git repository. Run from the repo root.")

    dest_dir = root / workflow_dir
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / "release.yml"

    rendered = (
        (TEMPLATES_DIR / "release.yml")
        .read_text()
        .replace("__BUMP_VERSION_SCHEME__", scheme)
        .replace("__DEFAULT_BRANCH__", branch)
        .replace("__SEMVER_RELEASE_VERSION__", _version_range())
    )
    dest.write_text(rendered)

    click.echo(f"✓ Wrote workflow to {dest.relative_to(root)}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Commit and push the workflow file")
    click.echo("  2. Every push to the default branch now creates a release")
    click.echo("  3. Label PRs release:major / release:patch / norelease to override")


@cli.command()
@click.option(
    "--repo",
    envvar=["INPUT_REPO", "GITHUB_REPOSITORY"],
    help="Repository as owner/name.  [env: GITHUB_REPOSITORY]",
)
@click.option(
    "--sha",
    envvar=["INPUT_SHA", "GITHUB_SHA"],
    help="Commit to release.  [env: GITHUB_SHA]",
)
@click.option(
    "--token",
    envvar=["INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"],
    help="GitHub token passed to gh.  [env: GITHUB_TOKEN]",
)
@click.option(
    "--bump-version-scheme",
    envvar="INPUT_BUMP_VERSION_SCHEME",
    type=click.Choice([s.value for s in BumpScheme]),
    help="Default bump when no label overrides it.  [default: minor]",
)
@click.option("--tag-prefix", envvar="INPUT_TAG_PREFIX", help="[default: v]")
@click.option(
    "--release-name",
    envvar="INPUT_RELEASE_NAME",
    help="Name template; supports <RELEASE_VERSION> and <RELEASE_TAG>.",
)
@click.option(
    "--release-body", envvar="INPUT_RELEASE_BODY", help="Text prepended to the body."
)
@click.option(
    "--use-github-release-notes",
    envvar="INPUT_USE_GITHUB_RELEASE_NOTES",
    type=click.BOOL,
    help="Let GitHub generate the release notes.",
)
@click.option(
    "--max-commits",
    envvar="INPUT_MAX_COMMITS",
    type=click.IntRange(min=1),
    help="Maximum commits listed in the body.  [default: 50]",
)
@click.option(
    "--commit-order",
    envvar="INPUT_COMMIT_ORDER",
    type=click.Choice([o.value for o in CommitOrder]),
    help="[default: newest-first]",
)
@click.option(
    "--skip-marker",
    envvar="INPUT_SKIP_MARKER",
    help="Commit title token that skips the release.  [default: [norelease]]",
)
@click.option(
    "--dry-run",
    envvar="INPUT_DRY_RUN",
    type=click.BOOL,
    help="Compute and print the release without creating it.",
)
@click.option(
    "--github-output",
    envvar="GITHUB_OUTPUT",
    type=click.Path(dir_okay=False),
    help="File to append step outputs to.  [env: GITHUB_OUTPUT]",
)
@click.option(
    "--pyproject",
    type=click.Path(dir_okay=False, path_type=Path),
    default="pyproject.toml",
    show_default=True,
    help="Read defaults from [tool.semver-release] in this file.",
)
def release(pyproject: Path, **options: object) -> None:
    """Release the next version (usually called from CI)."""
    try:
        config = build_config(options, pyproject)
        run_release(config)
    except ReleaseError as exc:
        raise click.ClickException(str(exc)) from exc
