"""Shared test fixtures for the mister_deejay package."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mister_deejay.application.app import App
from mister_deejay.domain.models.message import Message
from mister_deejay.domain.ports.message_store import MessageWriter, SchemaProvisioner
from mister_deejay.infrastructure.db.orm import MessageRow
from mister_deejay.infrastructure.settings import Settings


def make_message(**overrides) -> Message:
    """Factory for a Message that passes validation with default bounds."""
    defaults = dict(
        name="Ada",
        email="ada@example.com",
        message="Play Autobahn, all of it.",
    )
    defaults.update(overrides)
    return Message(**defaults)


async def fetch_rows(engine) -> list[MessageRow]:
    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        return list((await session.execute(select(MessageRow))).scalars().all())


@pytest.fixture
def mock_provisioner():
    return AsyncMock(spec=SchemaProvisioner)


@pytest.fixture
def mock_writer():
    return AsyncMock(spec=MessageWriter)


@pytest.fixture
def database_url(tmp_path) -> str:
    # One SQLite file per test; in-memory databases are per-connection
    return f"sqlite+aiosqlite:///{tmp_path / 'mister_deejay.db'}"


@pytest.fixture
async def test_engine(database_url):
    engine = create_async_engine(database_url, echo=False)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(database_url=database_url, _env_file=None)


@pytest.fixture
async def app(settings):
    app = App(settings)
    yield app
    app.fastapi.dependency_overrides.clear()
    await app.container.engine().dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
