"""Typed models built from parse results."""

from __future__ import annotations

from .dependency import Dependency, split_key
from .lockfile import Lockfile, find_version

__all__ = [
    "Dependency",
    "Lockfile",
    "find_version",
    "split_key",
]
