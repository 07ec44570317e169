"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- An in-memory content repository implementing the search, content type,
  location and content services
- A ContentProjector wired to that repository
- HTTP client for API testing
- PostgreSQL test database sessions (skipped when no database is reachable)
"""

import os
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.database import Base
from app.main import app
from app.repositories.exceptions import NotFoundError, UnauthorizedError
from app.repositories.query import (
    ContentId,
    Criterion,
    LanguageCode,
    LogicalAnd,
    Query,
    Visibility,
    VisibilityState,
)
from app.repositories.values import (
    Content,
    ContentInfo,
    ContentType,
    Field,
    FieldDefinition,
    Location,
    SearchHit,
    SearchResult,
)
from app.routes.content import get_content_projector
from app.services.content_projector import ContentProjector
from app.services.field_value import FieldValueResolver
from app.services.url_generator import LocationUrlGenerator

PUBLISHED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
DEFAULT_AUTHOR_ID = 14
FIELD_IDENTIFIERS = {"author": {"article": "byline"}}


# =============================================================================
# In-memory repository
# =============================================================================


class InMemoryRepository:
    """Content repository double implementing every collaborator interface."""

    def __init__(self):
        self.content_types: dict[int, ContentType] = {}
        self.contents: dict[int, Content] = {}
        self.locations: dict[int, Location] = {}
        self.hidden_ids: set[int] = set()
        self.unreadable_ids: set[int] = set()
        self.queries: list[Query] = []

    def add_content_type(self, type_id: int, identifier: str, fields: list[str]) -> ContentType:
        content_type = ContentType(
            id=type_id,
            identifier=identifier,
            name=identifier.title(),
            field_definitions=tuple(
                FieldDefinition(id=type_id * 100 + i, identifier=f, field_type="ezstring", position=i)
                for i, f in enumerate(fields)
            ),
        )
        self.content_types[type_id] = content_type
        return content_type

    def add_content(
        self,
        content_id: int,
        content_type_id: int,
        name: str,
        fields: dict[str, dict[str, object]] | None = None,
        owner_id: int | None = 0,
        main_language_code: str = "eng-GB",
        path_string: str | None = None,
        location_id: int | None = None,
        url_alias: str | None = None,
        hidden: bool = False,
    ) -> Content:
        location_id = location_id if location_id is not None else content_id
        content_info = ContentInfo(
            id=content_id,
            content_type_id=content_type_id,
            name=name,
            owner_id=owner_id,
            section_id=1,
            main_location_id=location_id,
            main_language_code=main_language_code,
            published_date=PUBLISHED,
        )
        content = Content(
            content_info=content_info,
            fields=tuple(
                Field(field_def_identifier=identifier, language_code=language, value=value)
                for language, values in (fields or {}).items()
                for identifier, value in values.items()
            ),
        )
        self.contents[content_id] = content
        self.locations[location_id] = Location(
            id=location_id,
            path_string=path_string or f"/1/2/{location_id}/",
            content_info=content_info,
            url_alias=url_alias,
        )
        if hidden:
            self.hidden_ids.add(content_id)
        return content

    def _languages(self, content: Content) -> set[str]:
        return {f.language_code for f in content.fields} | {content.content_info.main_language_code}

    def _matches(self, criterion: Criterion, content: Content) -> bool:
        if isinstance(criterion, LogicalAnd):
            return all(self._matches(c, content) for c in criterion.criteria)
        if isinstance(criterion, ContentId):
            return str(content.id) in {str(v).strip() for v in criterion.values}
        if isinstance(criterion, Visibility):
            visible = content.id not in self.hidden_ids
            return visible if criterion.value == VisibilityState.VISIBLE else not visible
        if isinstance(criterion, LanguageCode):
            return criterion.value in self._languages(content)
        raise ValueError(f"Unsupported criterion: {criterion!r}")

    async def find_content(self, query: Query) -> SearchResult:
        self.queries.append(query)
        return SearchResult(
            search_hits=[
                SearchHit(value_object=content)
                for content_id, content in sorted(self.contents.items())
                if self._matches(query.filter, content)
            ]
        )

    async def load_content_type(self, content_type_id: int) -> ContentType:
        if content_type_id not in self.content_types:
            raise NotFoundError("ContentType", content_type_id)
        return self.content_types[content_type_id]

    async def load_location(self, location_id: int | None) -> Location:
        if location_id not in self.locations:
            raise NotFoundError("Location", location_id)
        location = self.locations[location_id]
        if location.content_id in self.unreadable_ids:
            raise UnauthorizedError("content", "read", location.content_id)
        return location

    async def load_content_info(self, content_id: int) -> ContentInfo:
        if content_id not in self.contents:
            raise NotFoundError("Content", content_id)
        if content_id in self.unreadable_ids:
            raise UnauthorizedError("content", "read", content_id)
        return self.contents[content_id].content_info


@pytest.fixture
def repository() -> InMemoryRepository:
    """Demo content tree.

    - 14, 42: users ("Administrator User", "Jane Editor")
    - 52: folder with French main language
    - 76: article owned by 42 without byline
    - 77: article with a byline, translated to French
    - 78: hidden article
    - 80: article without owner and without byline
    """
    repo = InMemoryRepository()
    repo.add_content_type(4, "user", ["first_name", "last_name"])
    repo.add_content_type(1, "folder", ["name", "short_description"])
    repo.add_content_type(16, "article", ["title", "intro", "byline"])

    repo.add_content(14, 4, "Administrator User", {"eng-GB": {"first_name": "Administrator"}})
    repo.add_content(42, 4, "Jane Editor", {"eng-GB": {"first_name": "Jane"}})
    repo.add_content(
        52,
        1,
        "Actualités",
        {"fre-FR": {"name": "Actualités", "short_description": {"text": "Dernières nouvelles"}}},
        owner_id=14,
        main_language_code="fre-FR",
        path_string="/1/2/55/",
        location_id=55,
        url_alias="News",
    )
    repo.add_content(
        76,
        16,
        "Spring release",
        {"eng-GB": {"title": "Spring release", "intro": {"text": "What is new."}}},
        owner_id=42,
        path_string="/2/55/76/",
        url_alias="News/Spring-release",
    )
    repo.add_content(
        77,
        16,
        "Autumn roadmap",
        {
            "eng-GB": {"title": "Autumn roadmap", "intro": "Plans.", "byline": "John Writer"},
            "fre-FR": {"title": "Feuille de route", "intro": "Projets.", "byline": "John Writer"},
        },
        owner_id=42,
        path_string="/1/2/55/77/",
    )
    repo.add_content(
        78,
        16,
        "Hidden announcement",
        {"eng-GB": {"title": "Hidden announcement"}},
        owner_id=42,
        hidden=True,
    )
    repo.add_content(80, 16, "Orphan article", {"eng-GB": {"title": "Orphan"}}, owner_id=0)
    return repo


@pytest.fixture
def projector(repository) -> ContentProjector:
    """ContentProjector backed by the in-memory repository."""
    return ContentProjector(
        search_service=repository,
        content_type_service=repository,
        location_service=repository,
        content_service=repository,
        url_generator=LocationUrlGenerator("https://example.com"),
        field_values=FieldValueResolver(FIELD_IDENTIFIERS),
        default_author_id=DEFAULT_AUTHOR_ID,
    )


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(projector):
    """Async test client for the FastAPI app with the in-memory projector."""
    app.dependency_overrides[get_content_projector] = lambda: projector

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.pop(get_content_projector, None)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers with valid API key for authenticated requests."""
    return {"X-API-Key": settings.api_key}


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with automatic schema management.

    Creates all tables before tests, drops them after. Uses DATABASE_TEST_URL
    env var if set, otherwise derives from settings. Skips when PostgreSQL is
    not reachable.
    """
    db_url = os.environ.get("DATABASE_TEST_URL")
    if not db_url:
        db_url = settings.database_url.rsplit("/", 1)[0] + "/content_export_test"

    engine = create_async_engine(db_url, echo=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not available: {e}")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncSession:
    """Create test database session with automatic rollback.

    Each test gets a fresh session that rolls back on completion,
    ensuring test isolation.
    """
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()
