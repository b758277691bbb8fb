"""Typed view over a parsed lockfile."""

from __future__ import annotations

import re
from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import UnsupportedVersionError
from ..parsers.lockfile import LOCKFILE_VERSION
from .dependency import Dependency

_VERSION_COMMENT = re.compile(r"^[ ]?yarn lockfile v(\d+)$")


def find_version(comments: Iterable[str]) -> int | None:
    """Return the version declared by the first ``yarn lockfile vN`` comment."""
    for comment in comments:
        match = _VERSION_COMMENT.match(comment)
        if match is not None:
            return int(match.group(1))
    return None


@dataclass(frozen=True)
class Lockfile:
    """Lockfile version, entries and comments."""

    version: int | None
    dependencies: tuple[Dependency, ...]
    comments: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "comments": list(self.comments),
        }

    def packages(self) -> list[tuple[str, str]]:
        """Return distinct ``(package, version)`` pairs in lockfile order."""
        seen: dict[tuple[str, str], None] = {}
        for dep in self.dependencies:
            if dep.version is not None:
                seen.setdefault((dep.package_name, dep.version), None)
        return list(seen)

    def unsatisfied(self) -> list[Dependency]:
        """Return entries whose resolved version falls outside their key's range."""
        return [dep for dep in self.dependencies if not dep.satisfies_constraint()]

    @classmethod
    def from_parse_result(
        cls, mapping: Mapping[str, Any], comments: Iterable[str]
    ) -> Lockfile:
        comments = tuple(comments)
        version = find_version(comments)
        if version is not None and version > LOCKFILE_VERSION:
            raise UnsupportedVersionError(
                f"Invalid lockfile version {version}. "
                f"Only version <= {LOCKFILE_VERSION} is supported",
                version=version,
            )

        dependencies = tuple(
            Dependency.from_result_map(str(name), data)
            for name, data in mapping.items()
            if isinstance(data, Mapping)
        )
        return cls(version=version, dependencies=dependencies, comments=comments)
