"""Result type shared by every parsing entrypoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import LockfileError


class ParseStatus(str, Enum):
    SUCCESS = "success"
    MERGE = "merge"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Mapping and comments produced by a parse, or the error that stopped it.

    ``status`` is ``merge`` when the input held merge conflicts and the result
    is a best-effort union of both sides.
    """

    status: ParseStatus
    mapping: dict[str, Any] = field(default_factory=dict)
    comments: list[str] = field(default_factory=list)
    error: LockfileError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def merged(self) -> bool:
        return self.status is ParseStatus.MERGE

    def unwrap(self) -> ParseOutcome:
        """Return self, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self

    @classmethod
    def failure(cls, error: LockfileError) -> ParseOutcome:
        return cls(status=ParseStatus.ERROR, error=error)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"status": self.status.value}
        if self.error is not None:
            data["error"] = {"type": type(self.error).__name__, "message": str(self.error)}
            return data
        data["mapping"] = self.mapping
        data["comments"] = list(self.comments)
        return data
