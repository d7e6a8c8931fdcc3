"""Shell utilities.

Provides a thin wrapper around the GitHub CLI plus output formatting helpers.
"""

from __future__ import annotations

import os
import subprocess


def gh(*args: str, check: bool = True, env: dict[str, str] | None = None) -> str:
    """Run a gh command and return stdout.

    Args:
        *args: Arguments to pass to gh (e.g., "api", "repos/o/r/releases").
        check: If True (default), raise CalledProcessError on non-zero exit.
               The exception carries gh's stdout and stderr.
        env: Extra environment variables for this invocation only
             (e.g., {"GH_TOKEN": ...}).

    Returns:
        Stripped stdout from the gh command.
    """
    full_env = {**os.environ, **env} if env else None
    result = subprocess.run(
        ["gh", *args], capture_output=True, text=True, check=check, env=full_env
    )
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the lookup, decision and publish phases in CI logs.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
