"""Pytest configuration and fixtures."""

import os

# Must be set before carecompanion.core.config is imported
os.environ["ENV"] = "test"
os.environ["INIT_DB_ON_STARTUP"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CHAT_API_KEY"] = ""

from collections.abc import AsyncGenerator, Callable, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from carecompanion.api.deps import get_assistant_service, get_session_store
from carecompanion.assessment import (
    AnswerOption,
    AssessmentItem,
    Category,
    QuestionBank,
    ResourceCatalog,
    ResourceEntry,
    get_question_bank,
    get_resource_catalog,
)
from carecompanion.db.base import Base
from carecompanion.db.session import get_db
from carecompanion.main import app
from carecompanion.models import Appointment, Medication  # noqa: F401
from carecompanion.services.assessment import AssessmentSessionStore
from carecompanion.services.assistant import AssistantService, ChatProviderError

FREQUENCY = (
    AnswerOption("Not at all", 0),
    AnswerOption("Several days", 1),
    AnswerOption("More than half the days", 2),
    AnswerOption("Nearly every day", 3),
)


@pytest.fixture
def make_item() -> Callable[..., AssessmentItem]:
    """Factory for assessment items with a 0-3 frequency scale by default."""

    def _make_item(
        item_id: str,
        category: Category,
        audience: tuple[str, ...] = ("all",),
        options: tuple[AnswerOption, ...] = FREQUENCY,
    ) -> AssessmentItem:
        return AssessmentItem(
            id=item_id,
            text=f"Question {item_id}",
            category=category,
            category_label=category.value.title(),
            audience=frozenset(audience),
            options=options,
        )

    return _make_item


@pytest.fixture
def make_resource() -> Callable[..., ResourceEntry]:
    """Factory for resource entries."""

    def _make_resource(
        resource_id: str,
        recommended_for: tuple[str, ...] = (),
        audience: tuple[str, ...] = ("all",),
    ) -> ResourceEntry:
        return ResourceEntry(
            id=resource_id,
            title=f"Resource {resource_id}",
            category="General",
            description="",
            link=f"https://example.org/{resource_id}",
            recommended_for=frozenset(recommended_for),
            audience=frozenset(audience),
        )

    return _make_resource


@pytest.fixture
def bank() -> QuestionBank:
    """The bundled question bank."""
    return get_question_bank()


@pytest.fixture
def catalog() -> ResourceCatalog:
    """The bundled resource catalog."""
    return get_resource_catalog()


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Async session on a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def session_store() -> AssessmentSessionStore:
    """A fresh assessment session store."""
    return AssessmentSessionStore(ttl_minutes=60)


@pytest.fixture
def offline_assistant() -> AssistantService:
    """Assistant whose provider is always unreachable."""
    provider = AsyncMock()
    provider.complete = AsyncMock(side_effect=ChatProviderError("offline"))
    return AssistantService(provider=provider)


@pytest.fixture(scope="function")
def client(
    tmp_path,
    session_store: AssessmentSessionStore,
    offline_assistant: AssistantService,
) -> Generator[TestClient, None, None]:
    """FastAPI test client on a per-test SQLite file."""
    db_path = tmp_path / "test.db"

    # Create the schema synchronously; requests use the async driver
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_assistant_service] = lambda: offline_assistant

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
