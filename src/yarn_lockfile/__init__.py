"""yarn-lockfile-parser core package.

Parses yarn v1 lockfiles (including ones with unresolved merge conflicts) into
nested mappings, with typed ``Lockfile``/``Dependency`` views on top.
"""

from __future__ import annotations

from .config import ConfigError, ParserSettings, load_settings
from .core import parse, parse_or_raise, parse_to_lockfile, try_parse_to_lockfile
from .errors import (
    ConflictStructureError,
    LockfileError,
    ScanError,
    TruncatedInputError,
    UnexpectedTokenError,
    UnsupportedVersionError,
    YamlParseError,
)
from .models import Dependency, Lockfile
from .outcome import ParseOutcome, ParseStatus
from .parsers.yarn_lock import parse as yarn_lock_packages

__all__ = [
    "ConfigError",
    "ConflictStructureError",
    "Dependency",
    "Lockfile",
    "LockfileError",
    "ParseOutcome",
    "ParseStatus",
    "ParserSettings",
    "ScanError",
    "TruncatedInputError",
    "UnexpectedTokenError",
    "UnsupportedVersionError",
    "YamlParseError",
    "load_settings",
    "parse",
    "parse_or_raise",
    "parse_to_lockfile",
    "try_parse_to_lockfile",
    "yarn_lock_packages",
]
