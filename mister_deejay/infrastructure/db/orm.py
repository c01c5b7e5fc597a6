from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.expression import FunctionElement

# Width of every text column. Narrower than the default maximum message
# length (500); kept as-is, see DESIGN.md.
TEXT_COLUMN_WIDTH = 250


class gen_random_uuid(FunctionElement):
    """Server-side UUID default, rendered per dialect."""

    type = Uuid()
    inherit_cache = True


@compiles(gen_random_uuid)
def _gen_random_uuid_default(element, compiler, **kw):
    return "gen_random_uuid()"


@compiles(gen_random_uuid, "sqlite")
def _gen_random_uuid_sqlite(element, compiler, **kw):
    # Uuid is stored as 32 hex characters on SQLite
    return "lower(hex(randomblob(16)))"


class Base(DeclarativeBase):
    pass


class MessageRow(Base):
    """ORM model for contact form submissions.

    ``id`` and ``created_at`` are always assigned by the database.
    """

    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        server_default=gen_random_uuid(),
    )
    name: Mapped[str | None] = mapped_column(String(TEXT_COLUMN_WIDTH))
    email: Mapped[str | None] = mapped_column(String(TEXT_COLUMN_WIDTH))
    message: Mapped[str | None] = mapped_column(String(TEXT_COLUMN_WIDTH))
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
