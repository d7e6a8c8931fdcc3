"""Release name and body rendering."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .errors import ConfigError
from .models import Commit, CommitOrder

VERSION_PLACEHOLDER = "<RELEASE_VERSION>"
TAG_PLACEHOLDER = "<RELEASE_TAG>"
_PLACEHOLDER_RE = re.compile(r"<RELEASE_[A-Za-z0-9_]*>")


def validate_name_template(template: str) -> str:
    """Check that a release name template only uses known placeholders.

    Raises:
        ConfigError: If the template is blank or uses an unknown
            ``<RELEASE_...>`` placeholder.
    """
    if not template.strip():
        raise ConfigError("release_name must not be empty")
    unknown = sorted(
        set(_PLACEHOLDER_RE.findall(template)) - {VERSION_PLACEHOLDER, TAG_PLACEHOLDER}
    )
    if unknown:
        raise ConfigError(
            f"release_name uses unknown placeholder(s): {', '.join(unknown)}. "
            f"Supported: {VERSION_PLACEHOLDER}, {TAG_PLACEHOLDER}"
        )
    return template


def render_release_name(template: str, version: str, tag_name: str) -> str:
    """Substitute <RELEASE_VERSION> and <RELEASE_TAG> into ``template``."""
    return template.replace(VERSION_PLACEHOLDER, version).replace(
        TAG_PLACEHOLDER, tag_name
    )


def render_commit_summary(
    commits: Sequence[Commit],
    *,
    max_commits: int,
    total: int | None = None,
    order: CommitOrder = CommitOrder.NEWEST_FIRST,
) -> str:
    """Render a bulleted commit list capped at ``max_commits`` entries.

    Args:
        commits: Commits in chronological order (oldest first). Only the
            newest ``max_commits`` are listed.
        max_commits: Maximum number of bullet entries.
        total: True number of commits in the range. None means the range is
            at least ``len(commits)`` long but its exact size is unknown.
        order: Whether the list reads newest-first or oldest-first.

    Returns:
        One "- <short sha> <title>" line per commit, followed by a truncation
        line when commits were left out.
    """
    if not commits:
        return "No new commits."

    shown = list(commits[-max_commits:])
    if order is CommitOrder.NEWEST_FIRST:
        shown.reverse()
    lines = [f"- {c.short_sha} {c.title}" for c in shown]

    known_total = total if total is not None else len(commits)
    omitted = known_total - len(shown)
    if omitted > 0 and total is not None:
        noun = "commit" if omitted == 1 else "commits"
        lines.append(f"... and {omitted} more {noun} not shown")
    elif omitted > 0:
        lines.append("... and more commits not shown")
    return "\n".join(lines)


def compose_body(extra: str, summary: str | None) -> str:
    """Join the configured release_body and the commit summary.

    ``summary`` is None in auto-generated notes mode, where GitHub appends
    its own notes after ``extra``.
    """
    parts: list[str] = []
    if extra.strip():
        parts.append(extra.strip())
    if summary is not None:
        parts.append(f"### Commits\n\n{summary}")
    return "\n\n".join(parts)
