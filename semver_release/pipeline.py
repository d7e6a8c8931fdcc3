"""Release pipeline: lookup → decide → publish → outputs.

This module orchestrates one semver-release run:
1. Find the latest release and parse its tag into a version
2. Read the override signals (commit title marker, PR labels)
3. Decide the next version, or skip
4. Render the release name and body (commit summary or GitHub notes)
5. Create the release, unless this is a dry run
6. Emit tag_name / version / upload_url for downstream steps

Steps run strictly in order; each needs the previous step's result.
"""

from __future__ import annotations

from pathlib import Path

from .config import ReleaseConfig
from .decision import OverrideSignals, decide_release
from .github import GitHub
from .models import PriorRelease, Publish, ReleaseOutputs, ReleaseRequest, Skip
from .notes import compose_body, render_commit_summary, render_release_name
from .shell import step
from .versions import parse_tag


def find_latest_version(client: GitHub, tag_prefix: str) -> PriorRelease | None:
    """Look up the latest release and parse its tag.

    Returns None when the repository has no releases yet.

    Raises:
        TagParseError: If the latest tag does not match <prefix>X.Y.Z. An
            unparseable tag is never treated as "no prior release".
    """
    step("Finding latest release")
    release = client.latest_release()
    if release is None:
        print("  <none — first release>")
        return None

    tag = release["tag_name"]
    prior = PriorRelease(tag_name=tag, version=parse_tag(tag, tag_prefix))
    print(f"  {tag} (version {prior.version})")
    return prior


def gather_signals(client: GitHub, config: ReleaseConfig) -> OverrideSignals:
    """Collect the commit title and PR labels that can override the scheme."""
    step("Reading override signals")
    commit = client.commit(config.sha)
    pull_request = client.pull_request_for(config.sha)
    print(f"  commit {commit.short_sha}: {commit.title}")
    if pull_request is None:
        print("  no associated pull request")
    else:
        labels = ", ".join(sorted(pull_request.labels)) or "<no labels>"
        print(f"  PR #{pull_request.number}: {labels}")

    return OverrideSignals(
        default_scheme=config.bump_version_scheme,
        commit_title=commit.title,
        skip_marker=config.skip_marker,
        pull_request=pull_request,
    )


def summarize_commits(
    client: GitHub, prior: PriorRelease | None, config: ReleaseConfig
) -> str:
    """Render the commits since ``prior`` (exclusive) up to config.sha.

    Only ``max_commits`` commits are fetched beyond what is needed to detect
    truncation; the summary says how many were left out when known.
    """
    if prior is None:
        commits = client.list_commits(config.sha, config.max_commits + 1)
        total = None
    else:
        commits, total = client.compare(prior.tag_name, config.sha)
        if total > len(commits):
            # compare only returns the oldest commits of a large range; never
            # walk past the previous tag
            commits = client.list_commits(config.sha, min(config.max_commits, total))

    return render_commit_summary(
        commits,
        max_commits=config.max_commits,
        total=total,
        order=config.commit_order,
    )


def build_release_request(
    client: GitHub,
    decision: Publish,
    prior: PriorRelease | None,
    config: ReleaseConfig,
) -> ReleaseRequest:
    """Render the name and body of the release to create."""
    step("Rendering release")
    version = str(decision.version)
    if config.use_github_release_notes:
        summary = None
    else:
        summary = summarize_commits(client, prior, config)

    return ReleaseRequest(
        tag_name=decision.tag_name,
        target_commitish=config.sha,
        name=render_release_name(config.release_name, version, decision.tag_name),
        body=compose_body(config.release_body, summary),
        generate_release_notes=config.use_github_release_notes,
    )


def publish_release(
    client: GitHub, request: ReleaseRequest, decision: Publish, dry_run: bool
) -> ReleaseOutputs:
    """Create the release, or print the request in dry-run mode.

    Raises:
        ConflictError: If the tag already exists.
    """
    if dry_run:
        step("Dry run: release not created")
        print(f"  Would create release {request.name!r}")
        print(f"  tag:    {request.tag_name}")
        print(f"  target: {request.target_commitish}")
        print(f"  generate_release_notes: {request.generate_release_notes}")
        print("  body:")
        for line in request.body.splitlines() or [""]:
            print(f"    {line}")
        return ReleaseOutputs(tag_name=request.tag_name, version=str(decision.version))

    step("Creating GitHub release")
    created = client.create_release(request)
    print(f"  {request.tag_name} → {created.get('html_url', '')}")
    return ReleaseOutputs(
        tag_name=request.tag_name,
        version=str(decision.version),
        upload_url=created.get("upload_url", ""),
    )


def write_outputs(outputs: ReleaseOutputs, github_output: str | None) -> None:
    """Print the outputs and append them to the GitHub step output file."""
    step("Outputs")
    values = outputs.model_dump()
    for name, value in values.items():
        print(f"  {name}={value}")

    if github_output:
        with Path(github_output).open("a") as fh:
            for name, value in values.items():
                fh.write(f"{name}={value}\n")


def run_release(
    config: ReleaseConfig, client: GitHub | None = None
) -> ReleaseOutputs | None:
    """Execute the full release run.

    Args:
        config: Validated configuration.
        client: GitHub client; built from config.repo/config.token if omitted.

    Returns:
        The outputs of the new release, or None if the run was skipped.
    """
    client = client or GitHub(config.repo, token=config.token)

    prior = find_latest_version(client, config.tag_prefix)
    signals = gather_signals(client, config)

    step("Deciding next version")
    decision = decide_release(
        prior.version if prior else None, signals, config.tag_prefix
    )
    if isinstance(decision, Skip):
        print(f"  Skipping release: {decision.reason}")
        return None
    print(f"  {prior.tag_name if prior else '<none>'} → {decision.tag_name}")

    request = build_release_request(client, decision, prior, config)
    outputs = publish_release(client, request, decision, config.dry_run)
    write_outputs(outputs, config.github_output)

    print(f"\n{'=' * 60}\nDone!\n{'=' * 60}")
    return outputs
