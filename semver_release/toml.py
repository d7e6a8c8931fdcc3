"""pyproject.toml reading.

Projects may keep release defaults in a ``[tool.semver-release]`` table.
tomlkit is used so the same parser handles every pyproject the tool touches.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit

TOOL_TABLE = "semver-release"


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_tool_config(doc: tomlkit.TOMLDocument) -> dict[str, object]:
    """Extract [tool.semver-release] as plain Python values.

    Keys are normalized to underscores so ``max-commits`` and ``max_commits``
    are equivalent. Returns an empty dict when the table is absent.
    """
    table = doc.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        return {}
    return {str(key).replace("-", "_"): value for key, value in table.unwrap().items()}
