"""Bump decision: prior version + override signals → ReleaseDecision.

Resolution is an ordered table of (predicate, outcome) rules; the first rule
whose predicate holds decides the scheme or skips the release:

1. Skip marker in the triggering commit's title → Skip("commit marker")
2. ``norelease`` label on the associated PR → Skip("pr label")
3. A ``release:<scheme>`` label on the PR → that scheme
4. Otherwise → the configured default scheme

A resolved scheme of ``norelease`` skips with reason "configured default".
When several bump labels are present the most severe wins (major > minor >
patch).

Everything here is pure: no I/O, no environment reads.
"""

from __future__ import annotations

from collections.abc import Callable

import semver
from pydantic import BaseModel, ConfigDict

from .models import BumpScheme, Publish, PullRequestContext, ReleaseDecision, Skip
from .versions import ZERO, bump, render_tag

SKIP_LABEL = "norelease"
BUMP_LABELS: dict[str, BumpScheme] = {
    "release:major": BumpScheme.MAJOR,
    "release:minor": BumpScheme.MINOR,
    "release:patch": BumpScheme.PATCH,
}
# Most severe first; used to break ties between several bump labels
SEVERITY = (BumpScheme.MAJOR, BumpScheme.MINOR, BumpScheme.PATCH)


class OverrideSignals(BaseModel):
    """Inputs that may override the configured default scheme.

    Attributes:
        default_scheme: The configured bump_version_scheme.
        commit_title: Title line of the triggering commit.
        skip_marker: Token that suppresses the release when found in the
            commit title. An empty marker never matches.
        pull_request: The PR associated with the commit, if any.
    """

    model_config = ConfigDict(frozen=True)

    default_scheme: BumpScheme
    commit_title: str = ""
    skip_marker: str = ""
    pull_request: PullRequestContext | None = None

    @property
    def labels(self) -> frozenset[str]:
        return self.pull_request.labels if self.pull_request else frozenset()


def label_scheme(labels: frozenset[str]) -> BumpScheme | None:
    """Return the most severe bump scheme named by ``labels``, if any."""
    found = {BUMP_LABELS[label] for label in labels if label in BUMP_LABELS}
    for scheme in SEVERITY:
        if scheme in found:
            return scheme
    return None


def _has_skip_marker(s: OverrideSignals) -> bool:
    return bool(s.skip_marker) and s.skip_marker in s.commit_title


def _has_skip_label(s: OverrideSignals) -> bool:
    return SKIP_LABEL in s.labels


def _has_bump_label(s: OverrideSignals) -> bool:
    return label_scheme(s.labels) is not None


_Outcome = Callable[[OverrideSignals], "BumpScheme | Skip"]

RULES: tuple[tuple[Callable[[OverrideSignals], bool], _Outcome], ...] = (
    (_has_skip_marker, lambda s: Skip(reason="commit marker")),
    (_has_skip_label, lambda s: Skip(reason="pr label")),
    (_has_bump_label, lambda s: label_scheme(s.labels)),
    (lambda s: True, lambda s: s.default_scheme),
)


def resolve_scheme(signals: OverrideSignals) -> BumpScheme | Skip:
    """Walk RULES in order and return the first matching outcome."""
    for predicate, outcome in RULES:
        if predicate(signals):
            return outcome(signals)
    # The last rule always matches
    raise AssertionError("unreachable")


def decide_release(
    prior: semver.Version | None,
    signals: OverrideSignals,
    tag_prefix: str,
) -> ReleaseDecision:
    """Compute the next version, or decide to skip.

    Args:
        prior: Version of the latest release, or None for the first release.
            None is treated as 0.0.0 before bumping, so a first ``minor``
            release is 0.1.0.
        signals: Configured scheme plus commit/PR overrides.
        tag_prefix: Prefix for the rendered tag name.

    Returns:
        Skip with a reason, or Publish with the next version and tag.
    """
    resolved = resolve_scheme(signals)
    if isinstance(resolved, Skip):
        return resolved
    if resolved is BumpScheme.NORELEASE:
        return Skip(reason="configured default")

    version = bump(prior if prior is not None else ZERO, resolved)
    return Publish(version=version, tag_name=render_tag(version, tag_prefix))
