from __future__ import annotations

import enum
from dataclasses import dataclass


class IssueKind(str, enum.Enum):
    EMPTY_FIELD = "empty_field"
    INVALID_FORMAT = "invalid_format"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


@dataclass(frozen=True)
class FieldIssue:
    """A validation failure tied to one submitted field.

    ``path`` follows pydantic's error ``loc`` so the form can match an issue
    to its input by name.
    """

    path: tuple[str, ...]
    message: str
    kind: IssueKind

    @property
    def field(self) -> str:
        return self.path[0] if self.path else ""
