"""Error taxonomy for the release run.

Every fatal condition is a ReleaseError; the CLI turns them into a non-zero
exit. An intentional skip is not an error and never raises.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for fatal release errors."""


class ConfigError(ReleaseError):
    """Invalid configuration, detected before any network call."""


class TagParseError(ReleaseError):
    """An existing tag does not match the expected <prefix>X.Y.Z format."""


class PlatformError(ReleaseError):
    """GitHub could not be reached or rejected a request."""


class ConflictError(PlatformError):
    """The tag or release being created already exists."""

    def __init__(self, tag: str) -> None:
        super().__init__(
            f"Release conflict: tag {tag!r} already exists. Another run may have "
            "released this commit, or the tag was pushed manually."
        )
        self.tag = tag
