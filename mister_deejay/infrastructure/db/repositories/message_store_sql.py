from __future__ import annotations

import structlog
from sqlalchemy import insert, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.schema import CreateTable

from mister_deejay.domain.errors import ProvisioningFailed, WriteFailed
from mister_deejay.domain.models.message import Message
from mister_deejay.domain.ports.message_store import MessageWriter, SchemaProvisioner
from mister_deejay.infrastructure.db.orm import MessageRow
from mister_deejay.infrastructure.timing import timed_operation

log = structlog.stdlib.get_logger()

UUID_EXTENSION = "uuid-ossp"


class SqlSchemaProvisioner(SchemaProvisioner):
    """Creates the ``messages`` table if it is missing.

    Every statement is ``IF NOT EXISTS``, so concurrent first submissions
    race harmlessly.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def ensure_schema(self) -> None:
        table = MessageRow.__table__
        try:
            with timed_operation("db.ensure_schema", table=table.name):
                async with self._engine.begin() as conn:
                    if conn.dialect.name == "postgresql":
                        await conn.execute(
                            text(f'CREATE EXTENSION IF NOT EXISTS "{UUID_EXTENSION}"')
                        )
                    await conn.execute(CreateTable(table, if_not_exists=True))
        except SQLAlchemyError as e:
            raise ProvisioningFailed(e) from e
        log.info("db.schema.ensured", table=table.name)


class SqlMessageWriter(MessageWriter):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, message: Message) -> None:
        stmt = insert(MessageRow).values(
            name=message.name,
            email=message.email,
            message=message.message,
        )
        try:
            with timed_operation("db.insert", table=MessageRow.__tablename__):
                await self._session.execute(stmt)
                await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise WriteFailed(e) from e
        log.info("db.message.inserted", table=MessageRow.__tablename__)
