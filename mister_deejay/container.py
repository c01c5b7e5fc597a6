from __future__ import annotations

from dependency_injector import containers, providers
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from mister_deejay.application.get_form_config.use_case import GetFormConfigUseCase
from mister_deejay.application.submit_contact.use_case import SubmitContactUseCase
from mister_deejay.application.submit_contact.validator import ContactFormValidator
from mister_deejay.domain.models.message import MessageBounds
from mister_deejay.infrastructure.db.engine import build_engine, build_session_factory
from mister_deejay.infrastructure.db.repositories.message_store_sql import (
    SqlMessageWriter,
    SqlSchemaProvisioner,
)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "mister_deejay.container",
            "mister_deejay.infrastructure.web.pages",
        ],
    )

    config = providers.Configuration()

    engine = providers.Singleton(build_engine, config.database_url)
    session_factory = providers.Singleton(build_session_factory, engine)

    bounds = providers.Singleton(
        MessageBounds,
        min_length=config.message_min_length,
        max_length=config.message_max_length,
    )
    validator = providers.Singleton(ContactFormValidator, bounds)


@inject
async def get_session(
    factory: async_sessionmaker = Depends(Provide[Container.session_factory]),
) -> AsyncSession:  # type: ignore[misc]
    async with factory() as session:
        yield session


@inject
async def get_schema_provisioner(
    engine: AsyncEngine = Depends(Provide[Container.engine]),
) -> SqlSchemaProvisioner:
    return SqlSchemaProvisioner(engine)


async def get_message_writer(
    session: AsyncSession = Depends(get_session),
) -> SqlMessageWriter:
    return SqlMessageWriter(session)


@inject
async def get_submit_contact_use_case(
    provisioner: SqlSchemaProvisioner = Depends(get_schema_provisioner),
    writer: SqlMessageWriter = Depends(get_message_writer),
    validator: ContactFormValidator = Depends(Provide[Container.validator]),
) -> SubmitContactUseCase:
    return SubmitContactUseCase(validator, provisioner, writer)


@inject
async def get_form_config_use_case(
    bounds: MessageBounds = Depends(Provide[Container.bounds]),
) -> GetFormConfigUseCase:
    return GetFormConfigUseCase(bounds)
