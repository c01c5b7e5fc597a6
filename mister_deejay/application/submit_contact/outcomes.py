"""What a contact submission resolved to; the web layer maps each to a response."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from mister_deejay.domain.errors import StoreError
from mister_deejay.domain.models.field_issue import FieldIssue


@dataclass(frozen=True)
class Redirect:
    path: str


@dataclass(frozen=True)
class ValidationFailure:
    issues: list[FieldIssue]

    def messages_for(self, field_name: str) -> list[str]:
        return [issue.message for issue in self.issues if field_name in issue.path]


@dataclass(frozen=True)
class Fatal:
    error: StoreError


SubmitOutcome = Union[Redirect, ValidationFailure, Fatal]
