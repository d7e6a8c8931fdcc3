"""Version parsing, rendering and bumping.

Tags are ``<prefix><major>.<minor>.<patch>``. Parsing is strict: a tag that
does not match exactly raises TagParseError rather than falling back to 0.0.0.
"""

from __future__ import annotations

import re

import semver

from .errors import TagParseError
from .models import BumpScheme

_CORE_RE = re.compile(r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)")

ZERO = semver.Version(0, 0, 0)


def parse_tag(tag: str, prefix: str) -> semver.Version:
    """Parse a tag name into a semver.Version.

    Examples:
        parse_tag("v1.2.3", "v") → Version(1, 2, 3)
        parse_tag("1.2.3", "") → Version(1, 2, 3)
        parse_tag("release-1.2", "v") → TagParseError

    Raises:
        TagParseError: If the prefix is missing or the remainder is not three
            dot-separated non-negative integers (no pre-release or build data).
    """
    if not tag.startswith(prefix):
        raise TagParseError(f"Tag {tag!r} does not start with prefix {prefix!r}")

    match = _CORE_RE.fullmatch(tag[len(prefix) :])
    if match is None:
        raise TagParseError(
            f"Tag {tag!r} is not of the form {prefix}MAJOR.MINOR.PATCH"
        )
    major, minor, patch = (int(part) for part in match.groups())
    return semver.Version(major, minor, patch)


def render_tag(version: semver.Version, prefix: str) -> str:
    """Render a version as a tag name, e.g. Version(1, 2, 3) → "v1.2.3"."""
    return f"{prefix}{version.major}.{version.minor}.{version.patch}"


def bump(version: semver.Version, scheme: BumpScheme) -> semver.Version:
    """Return a new version bumped by ``scheme``.

    Examples:
        1.4.2 + major → 2.0.0
        1.4.2 + minor → 1.5.0
        1.4.2 + patch → 1.4.3

    Raises:
        ValueError: For BumpScheme.NORELEASE, which has no next version.
    """
    if scheme is BumpScheme.MAJOR:
        return version.bump_major()
    if scheme is BumpScheme.MINOR:
        return version.bump_minor()
    if scheme is BumpScheme.PATCH:
        return version.bump_patch()
    raise ValueError(f"Cannot bump a version with scheme {scheme.value!r}")
