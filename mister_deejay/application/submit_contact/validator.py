from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from pydantic import ValidationError

from mister_deejay.domain.models.field_issue import FieldIssue, IssueKind
from mister_deejay.domain.models.message import Message, MessageBounds

from .models import ContactForm

_KINDS = {kind.value: kind for kind in IssueKind}


@dataclass
class ValidationResult:
    value: Message | None = None
    issues: list[FieldIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None


class ContactFormValidator:
    """Checks a submitted contact form and reports every failing field.

    Pure and synchronous. The message length bounds are fixed at
    construction time.
    """

    def __init__(self, bounds: MessageBounds) -> None:
        self._bounds = bounds

    @property
    def bounds(self) -> MessageBounds:
        return self._bounds

    def validate(self, raw: Mapping[str, str | None]) -> ValidationResult:
        data = {key: raw.get(key) for key in ContactForm.model_fields}
        try:
            form = ContactForm.model_validate(data, context={"bounds": self._bounds})
        except ValidationError as e:
            return ValidationResult(issues=[self._to_issue(err) for err in e.errors()])
        return ValidationResult(
            # An empty form field arrives as None; the entity always carries text
            value=Message(name=form.name, email=form.email, message=form.message or ""),
        )

    @staticmethod
    def _to_issue(error) -> FieldIssue:
        # Anything pydantic raises on its own (e.g. a non-string value) is a format problem
        kind = _KINDS.get(error["type"], IssueKind.INVALID_FORMAT)
        return FieldIssue(
            path=tuple(str(part) for part in error["loc"]),
            message=error["msg"],
            kind=kind,
        )
