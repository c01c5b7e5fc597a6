"""Request-scoped context for log correlation.

Every log entry emitted while a request is being served carries the same
``request_id``; the id is echoed back to the client in ``X-Request-ID``.
"""
from __future__ import annotations

import uuid
from typing import Any

import structlog

REQUEST_ID_HEADER = "X-Request-ID"


def _generate_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: str | None = None) -> str:
    """Use the client's request ID when it sent one, otherwise generate one."""
    return header_value or _generate_id()


def bind_request_context(**context: Any) -> None:
    """Bind key-value pairs to every subsequent log entry of this request.

    Example:
        bind_request_context(request_id=rid, path="/contact")
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
