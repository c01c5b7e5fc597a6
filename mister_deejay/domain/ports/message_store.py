from __future__ import annotations

import abc

from mister_deejay.domain.models.message import Message


class SchemaProvisioner(abc.ABC):
    @abc.abstractmethod
    async def ensure_schema(self) -> None: ...


class MessageWriter(abc.ABC):
    @abc.abstractmethod
    async def insert(self, message: Message) -> None: ...
