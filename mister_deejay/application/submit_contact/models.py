from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from mister_deejay.domain.models.field_issue import IssueKind
from mister_deejay.domain.models.message import MessageBounds


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _bounds(info: ValidationInfo) -> MessageBounds:
    context = info.context or {}
    return context.get("bounds") or MessageBounds()


class ContactForm(BaseModel):
    """Raw contact form fields.

    Every field may be missing; the validators turn that into a field-level
    issue instead of pydantic's ``missing`` error. Validate with
    ``context={"bounds": MessageBounds(...)}`` to override the default
    message length bounds.
    """

    model_config = ConfigDict(validate_default=True)

    name: str | None = None
    email: str | None = None
    message: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        if _is_blank(value):
            raise PydanticCustomError(IssueKind.EMPTY_FIELD.value, "Name cannot be blank")
        return value

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, value: str | None) -> str | None:
        if _is_blank(value):
            raise PydanticCustomError(IssueKind.EMPTY_FIELD.value, "Email cannot be blank")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError(IssueKind.INVALID_FORMAT.value, "Invalid email") from None
        return value

    @field_validator("message")
    @classmethod
    def message_within_bounds(cls, value: str | None, info: ValidationInfo) -> str | None:
        bounds = _bounds(info)
        length = len(value or "")
        if length < bounds.min_length:
            raise PydanticCustomError(
                IssueKind.TOO_SHORT.value,
                "Message must contain at least {min_length} characters",
                {"min_length": bounds.min_length},
            )
        if length > bounds.max_length:
            raise PydanticCustomError(
                IssueKind.TOO_LONG.value,
                "Message must contain at most {max_length} characters",
                {"max_length": bounds.max_length},
            )
        return value
