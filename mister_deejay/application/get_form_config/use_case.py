from __future__ import annotations

from mister_deejay.domain.models.message import MessageBounds

from .models import FormConfigResponse, MessageLengthConfig


class GetFormConfigUseCase:
    """Reports the message length bounds shown in the form's helper text."""

    def __init__(self, bounds: MessageBounds) -> None:
        self._bounds = bounds

    def execute(self) -> FormConfigResponse:
        return FormConfigResponse(
            message=MessageLengthConfig(
                min=self._bounds.min_length,
                max=self._bounds.max_length,
            )
        )
