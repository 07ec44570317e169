"""Collaborator interfaces consumed by the content projection.

The SQLAlchemy services in this package implement them; tests substitute
in-memory versions.
"""

from __future__ import annotations

from typing import Protocol

from app.repositories.query import Query
from app.repositories.values import ContentInfo, ContentType, Location, SearchResult


class SearchService(Protocol):
    async def find_content(self, query: Query) -> SearchResult: ...


class ContentTypeService(Protocol):
    async def load_content_type(self, content_type_id: int) -> ContentType: ...


class LocationService(Protocol):
    async def load_location(self, location_id: int | None) -> Location: ...


class ContentService(Protocol):
    async def load_content_info(self, content_id: int) -> ContentInfo: ...
