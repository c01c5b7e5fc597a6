"""Tests for the DI container."""
from __future__ import annotations

import inspect

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mister_deejay.application.get_form_config.use_case import GetFormConfigUseCase
from mister_deejay.application.submit_contact.use_case import SubmitContactUseCase
from mister_deejay.application.submit_contact.validator import ContactFormValidator
from mister_deejay.container import (
    Container,
    get_form_config_use_case,
    get_message_writer,
    get_schema_provisioner,
    get_session,
    get_submit_contact_use_case,
)
from mister_deejay.domain.models.message import MessageBounds
from mister_deejay.infrastructure.db.repositories.message_store_sql import (
    SqlMessageWriter,
    SqlSchemaProvisioner,
)


def _configured_container(database_url: str, min_length: int = 20, max_length: int = 500) -> Container:
    container = Container()
    container.config.from_dict(
        {
            "database_url": database_url,
            "sql_echo": False,
            "message_min_length": min_length,
            "message_max_length": max_length,
        }
    )
    return container


class TestContainerConfiguration:
    def test_container_has_providers(self):
        container = Container()
        for name in ("config", "engine", "session_factory", "bounds", "validator"):
            assert hasattr(container, name)

    def test_container_wiring_config_includes_pages(self):
        assert "mister_deejay.infrastructure.web.pages" in Container.wiring_config.modules

    async def test_bounds_come_from_config(self, database_url):
        container = _configured_container(database_url, min_length=5, max_length=50)

        assert container.bounds() == MessageBounds(min_length=5, max_length=50)

    async def test_validator_is_a_singleton(self, database_url):
        container = _configured_container(database_url)

        validator = container.validator()
        assert isinstance(validator, ContactFormValidator)
        assert container.validator() is validator
        assert validator.bounds is container.bounds()

    async def test_engine_is_a_singleton(self, database_url):
        container = _configured_container(database_url)
        try:
            assert container.engine() is container.engine()
            assert isinstance(container.session_factory(), async_sessionmaker)
        finally:
            await container.engine().dispose()


class TestDependencies:
    def test_get_session_is_async_generator(self):
        assert inspect.isasyncgenfunction(get_session.__wrapped__)

    async def test_get_session_yields_session(self, test_engine):
        factory = async_sessionmaker(test_engine, expire_on_commit=False)

        session_gen = get_session.__wrapped__(factory=factory)
        session = await session_gen.__anext__()

        assert isinstance(session, AsyncSession)
        await session_gen.aclose()

    async def test_get_schema_provisioner(self, test_engine):
        provisioner = await get_schema_provisioner.__wrapped__(engine=test_engine)
        assert isinstance(provisioner, SqlSchemaProvisioner)

    async def test_get_message_writer(self, test_session):
        writer = await get_message_writer(session=test_session)
        assert isinstance(writer, SqlMessageWriter)

    async def test_get_submit_contact_use_case(self, mock_provisioner, mock_writer):
        uc = await get_submit_contact_use_case.__wrapped__(
            provisioner=mock_provisioner,
            writer=mock_writer,
            validator=ContactFormValidator(MessageBounds()),
        )
        assert isinstance(uc, SubmitContactUseCase)

    async def test_get_form_config_use_case(self):
        uc = await get_form_config_use_case.__wrapped__(bounds=MessageBounds(3, 9))

        assert isinstance(uc, GetFormConfigUseCase)
        assert uc.execute().message.max == 9
