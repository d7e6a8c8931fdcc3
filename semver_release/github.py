"""GitHub REST access through the gh CLI.

Each method issues one ``gh api`` call (or a short run of paged calls) and
converts the JSON payload into models. Nothing is retried: a failed call
raises PlatformError with gh's message, since release creation is not safe
to repeat blindly.
"""

from __future__ import annotations

import json
import re
import subprocess

from .errors import ConflictError, PlatformError
from .models import Commit, PullRequestContext, ReleaseRequest
from .shell import gh

_STATUS_RE = re.compile(r"HTTP (\d{3})")
PAGE_SIZE = 100


class GitHubAPIError(PlatformError):
    """A gh api call exited non-zero.

    Attributes:
        status: HTTP status parsed from gh's stderr, if present.
        body: Raw response body gh printed to stdout.
    """

    def __init__(self, message: str, status: int | None, body: str) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


def _title(message: str) -> str:
    """First line of a commit message."""
    return message.splitlines()[0].strip() if message else ""


def _commit_from_payload(item: dict) -> Commit:
    return Commit(sha=item["sha"], title=_title(item["commit"]["message"]))


class GitHub:
    """Minimal GitHub client scoped to one repository.

    Args:
        repo: "owner/name".
        token: Token passed to gh as GH_TOKEN. When None, gh uses whatever
               authentication it already has.
    """

    def __init__(self, repo: str, token: str | None = None) -> None:
        self.repo = repo
        self._env = {"GH_TOKEN": token} if token else None

    def api(self, endpoint: str, *fields: str, method: str = "GET") -> object:
        """Call ``gh api`` and return the decoded JSON response.

        Raises:
            GitHubAPIError: If gh exits non-zero.
            PlatformError: If gh is missing or prints invalid JSON.
        """
        try:
            out = gh("api", "--method", method, endpoint, *fields, env=self._env)
        except FileNotFoundError as exc:
            raise PlatformError(
                "gh CLI not found. Install it from https://cli.github.com/"
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            match = _STATUS_RE.search(stderr)
            detail = stderr or f"gh exited with status {exc.returncode}"
            raise GitHubAPIError(
                f"{method} {endpoint} failed: {detail}",
                status=int(match.group(1)) if match else None,
                body=exc.stdout or "",
            ) from exc

        if not out:
            return None
        try:
            return json.loads(out)
        except json.JSONDecodeError as exc:
            raise PlatformError(
                f"{method} {endpoint} returned invalid JSON: {exc}"
            ) from exc

    def latest_release(self) -> dict | None:
        """Return the latest published release, or None if there is none."""
        try:
            return self.api(f"repos/{self.repo}/releases/latest")
        except GitHubAPIError as exc:
            if exc.status == 404:
                return None
            raise

    def commit(self, sha: str) -> Commit:
        """Fetch a single commit."""
        return _commit_from_payload(self.api(f"repos/{self.repo}/commits/{sha}"))

    def pull_request_for(self, sha: str) -> PullRequestContext | None:
        """Return the merged PR associated with ``sha``, if any.

        The PR whose merge commit is ``sha`` wins; otherwise any merged PR
        containing it. Open PRs that merely contain the commit are ignored.
        """
        pulls = self.api(f"repos/{self.repo}/commits/{sha}/pulls") or []
        if not pulls:
            return None
        merged = [pr for pr in pulls if pr.get("merged_at")]
        exact = [pr for pr in merged if pr.get("merge_commit_sha") == sha]
        if not (exact or merged):
            return None
        pr = (exact or merged)[0]
        return PullRequestContext(
            number=pr.get("number"),
            labels=frozenset(label["name"] for label in pr.get("labels", [])),
        )

    def compare(self, base: str, head: str) -> tuple[list[Commit], int]:
        """Commits in base...head (base exclusive), oldest first, and their count.

        GitHub returns at most 250 commits here; ``total`` is always exact.
        """
        data = self.api(f"repos/{self.repo}/compare/{base}...{head}")
        commits = [_commit_from_payload(item) for item in data.get("commits", [])]
        return commits, int(data.get("total_commits", len(commits)))

    def list_commits(self, sha: str, limit: int) -> list[Commit]:
        """Up to ``limit`` commits reachable from ``sha``, oldest first."""
        newest_first: list[Commit] = []
        per_page = min(PAGE_SIZE, limit)
        page = 1
        while len(newest_first) < limit:
            batch = self.api(
                f"repos/{self.repo}/commits?sha={sha}&per_page={per_page}&page={page}"
            )
            if not batch:
                break
            newest_first.extend(_commit_from_payload(item) for item in batch)
            if len(batch) < per_page:
                break
            page += 1
        return list(reversed(newest_first[:limit]))

    def tag_exists(self, tag: str) -> bool:
        """Whether ``tag`` already exists in the repository."""
        try:
            self.api(f"repos/{self.repo}/git/ref/tags/{tag}")
        except GitHubAPIError as exc:
            if exc.status == 404:
                return False
            raise
        return True

    def create_release(self, request: ReleaseRequest) -> dict:
        """Create the release (and its tag) described by ``request``.

        GitHub attaches a new release to an existing tag without complaint,
        ignoring target_commitish, so the tag is checked first.

        Raises:
            ConflictError: If the tag or release already exists.
            GitHubAPIError: For any other failure.
        """
        if self.tag_exists(request.tag_name):
            raise ConflictError(request.tag_name)
        try:
            return self.api(
                f"repos/{self.repo}/releases",
                "-f",
                f"tag_name={request.tag_name}",
                "-f",
                f"target_commitish={request.target_commitish}",
                "-f",
                f"name={request.name}",
                "-f",
                f"body={request.body}",
                "-F",
                f"generate_release_notes={str(request.generate_release_notes).lower()}",
                method="POST",
            )
        except GitHubAPIError as exc:
            if exc.status == 422 and "already_exists" in exc.body:
                raise ConflictError(request.tag_name) from exc
            raise
