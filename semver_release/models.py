"""Data models for semver-release.

These Pydantic models represent the values that flow through one release run:
lookup → decision → publish. All of them are immutable and rebuilt from
GitHub responses and configuration on every invocation.
"""

from __future__ import annotations

from enum import Enum

import semver
from pydantic import BaseModel, ConfigDict, Field


class BumpScheme(str, Enum):
    """How to increment the prior version, or whether to release at all."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NORELEASE = "norelease"


class CommitOrder(str, Enum):
    """Ordering of the commit summary in the release body."""

    NEWEST_FIRST = "newest-first"
    OLDEST_FIRST = "oldest-first"


class Commit(BaseModel):
    """A commit, reduced to what the release body and skip marker need.

    Attributes:
        sha: Full commit SHA.
        title: First line of the commit message.
    """

    model_config = ConfigDict(frozen=True)

    sha: str
    title: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class PullRequestContext(BaseModel):
    """The pull request associated with the triggering commit.

    Attributes:
        number: PR number, when known.
        labels: Label names attached to the PR.
    """

    model_config = ConfigDict(frozen=True)

    number: int | None = None
    labels: frozenset[str] = Field(default_factory=frozenset)


class PriorRelease(BaseModel):
    """The most recent published release and its parsed version."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag_name: str
    version: semver.Version


class Skip(BaseModel):
    """Decision: do not release on this run."""

    model_config = ConfigDict(frozen=True)

    reason: str


class Publish(BaseModel):
    """Decision: release ``version`` under ``tag_name``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: semver.Version
    tag_name: str


ReleaseDecision = Skip | Publish


class ReleaseRequest(BaseModel):
    """Payload of the single release-creation call."""

    model_config = ConfigDict(frozen=True)

    tag_name: str
    target_commitish: str
    name: str
    body: str
    generate_release_notes: bool = False


class ReleaseOutputs(BaseModel):
    """Values handed to downstream CI steps.

    Attributes:
        tag_name: The created tag, including prefix.
        version: The bare ``major.minor.patch`` string.
        upload_url: Asset upload URL returned by GitHub (empty on dry run).
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str
    version: str
    upload_url: str = ""
