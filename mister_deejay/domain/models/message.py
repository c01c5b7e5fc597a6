from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

DEFAULT_MIN_LENGTH = 20
DEFAULT_MAX_LENGTH = 500


@dataclass
class Message:
    name: str
    email: str
    message: str
    # Assigned by the store on insert
    id: uuid.UUID | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MessageBounds:
    """Inclusive length bounds for the free-text ``message`` field."""

    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH

    def __post_init__(self) -> None:
        if self.min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {self.min_length}")
        if self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) cannot exceed max_length ({self.max_length})"
            )
