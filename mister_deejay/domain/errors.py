"""Store failures raised while persisting a contact submission.

Both are fatal for the request that hit them; nothing retries.
"""
from __future__ import annotations


class StoreError(Exception):
    """Base class for failures of the backing store."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class ProvisioningFailed(StoreError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__("Could not provision the messages table", cause)


class WriteFailed(StoreError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__("Could not insert into the messages table", cause)
