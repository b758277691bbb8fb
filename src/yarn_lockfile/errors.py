"""Error hierarchy for lockfile parsing.

Every failure raised while scanning, parsing or resolving a lockfile is a
``LockfileError``. Callers that want to special-case a file needing manual
conflict resolution should catch ``ConflictStructureError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parsers.token import Token


class LockfileError(RuntimeError):
    """Base error for failures while parsing a lockfile."""

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message}: {self.token.describe()}"


class ScanError(LockfileError):
    """Raised when the input cannot be split into tokens."""


class UnexpectedTokenError(LockfileError):
    """Raised when a token of the wrong kind appears at a grammar position."""


class UnsupportedVersionError(LockfileError):
    """Raised when a version pragma declares a lockfile version newer than supported."""

    def __init__(self, message: str, version: int, token: Token | None = None) -> None:
        super().__init__(message, token)
        self.version = version


class TruncatedInputError(LockfileError):
    """Raised when the token stream ends before the grammar expected it to."""


class ConflictStructureError(LockfileError):
    """Raised when merge conflict markers are malformed or a variant fails to parse.

    ``variant`` is 1 or 2 when one of the extracted variants failed, and None
    when the markers themselves could not be matched up.
    """

    def __init__(
        self, message: str, token: Token | None = None, variant: int | None = None
    ) -> None:
        super().__init__(message, token)
        self.variant = variant


class YamlParseError(LockfileError):
    """Raised when a file parsed as YAML is not a YAML document holding a mapping."""
