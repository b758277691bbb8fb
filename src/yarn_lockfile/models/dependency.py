"""Dependency model for a single lockfile entry."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

from ..parsers.semver import satisfies


def split_key(key: str) -> tuple[str, str]:
    """Split ``name@range`` into its parts; scoped names keep their leading ``@``."""
    at = key.find("@", 1)
    if at == -1:
        return key, ""
    return key[:at], key[at + 1 :]


def _sub_dependencies(value: Any) -> tuple[tuple[str, str], ...]:
    if not isinstance(value, Mapping):
        return ()
    return tuple((str(name), str(spec)) for name, spec in value.items())


@dataclass(frozen=True)
class Dependency:
    """One resolved entry of a lockfile, keyed by the ``name@range`` it satisfies."""

    name: str
    version: str | None
    resolved: str | None
    integrity: str | None = None
    dependencies: tuple[tuple[str, str], ...] = ()
    optional_dependencies: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")

    @property
    def package_name(self) -> str:
        return split_key(self.name)[0]

    @property
    def constraint(self) -> str:
        return split_key(self.name)[1]

    def satisfies_constraint(self) -> bool:
        """Return True when the resolved version lies inside the key's range."""
        if self.version is None:
            return False
        return satisfies(self.version, self.constraint)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "version": self.version,
            "resolved": self.resolved,
            "dependencies": dict(self.dependencies),
            "optionalDependencies": dict(self.optional_dependencies),
        }
        if self.integrity is not None:
            data["integrity"] = self.integrity
        return data

    @classmethod
    def from_result_map(cls, name: str, data: Mapping[str, Any]) -> Dependency:
        def text(field: str) -> str | None:
            value = data.get(field)
            return None if value is None else str(value)

        return cls(
            name=name,
            version=text("version"),
            resolved=text("resolved"),
            integrity=text("integrity"),
            dependencies=_sub_dependencies(data.get("dependencies")),
            optional_dependencies=_sub_dependencies(data.get("optionalDependencies")),
        )
