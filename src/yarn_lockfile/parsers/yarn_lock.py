"""Parse yarn.lock to capture resolved dependencies."""

from __future__ import annotations

from pathlib import Path

from ..core import parse_to_lockfile


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from yarn lock file.

    Alias keys sharing one entry (``a@^1, a@^1.2``) yield a single pair.
    """
    lockfile = parse_to_lockfile(path.read_text(encoding="utf-8"), file_loc=path.name)
    return lockfile.packages()
