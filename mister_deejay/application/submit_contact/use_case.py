from __future__ import annotations

from collections.abc import Mapping

import structlog

from mister_deejay.domain.errors import StoreError
from mister_deejay.domain.ports.message_store import MessageWriter, SchemaProvisioner
from mister_deejay.infrastructure.timing import log_execution

from .outcomes import Fatal, Redirect, SubmitOutcome, ValidationFailure
from .validator import ContactFormValidator

log = structlog.stdlib.get_logger()

LANDING_PAGE = "/"


def _extract_context(_self, raw: Mapping[str, str | None]) -> dict:
    # Field values are personal data; only record which ones were sent
    return {"fields": sorted(key for key, value in raw.items() if value)}


class SubmitContactUseCase:
    def __init__(
        self,
        validator: ContactFormValidator,
        provisioner: SchemaProvisioner,
        writer: MessageWriter,
        redirect_to: str = LANDING_PAGE,
    ) -> None:
        self._validator = validator
        self._provisioner = provisioner
        self._writer = writer
        self._redirect_to = redirect_to

    @log_execution("use_case.submit_contact", _extract_context)
    async def execute(self, raw: Mapping[str, str | None]) -> SubmitOutcome:
        result = self._validator.validate(raw)
        if not result.ok:
            log.info(
                "use_case.submit_contact.invalid",
                issues=[f"{issue.field}:{issue.kind.value}" for issue in result.issues],
            )
            return ValidationFailure(result.issues)

        try:
            await self._provisioner.ensure_schema()
            await self._writer.insert(result.value)
        except StoreError as e:
            log.error(
                "use_case.submit_contact.store_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return Fatal(e)
        return Redirect(self._redirect_to)
