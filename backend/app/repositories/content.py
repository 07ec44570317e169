"""Content, content type and location repositories.

Read-only services over the content schema. Each load either returns a
detached value object or raises NotFoundError / UnauthorizedError; callers
are expected to let those propagate.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from app.models.content import (
    CONTENT_STATUS_PUBLISHED,
    ContentObjectModel,
    ContentTypeModel,
    LocationModel,
)
from app.repositories.exceptions import NotFoundError, UnauthorizedError
from app.repositories.values import (
    Content,
    ContentInfo,
    ContentType,
    Field,
    FieldDefinition,
    Location,
)


def to_content_info(model: ContentObjectModel) -> ContentInfo:
    """Convert a content object row to a ContentInfo value."""
    return ContentInfo(
        id=model.id,
        content_type_id=model.content_type_id,
        name=model.name,
        owner_id=model.owner_id,
        section_id=model.section_id,
        main_location_id=model.main_location_id,
        main_language_code=model.main_language_code,
        published_date=model.published_date,
        published=model.status == CONTENT_STATUS_PUBLISHED,
    )


def to_content(model: ContentObjectModel) -> Content:
    """Convert a content object row with loaded fields to a Content value."""
    return Content(
        content_info=to_content_info(model),
        fields=tuple(
            Field(
                field_def_identifier=field.field_definition.identifier,
                language_code=field.language_code,
                value=field.value,
            )
            for field in model.fields
        ),
    )


def to_content_type(model: ContentTypeModel) -> ContentType:
    """Convert a content type row with loaded definitions to a ContentType value."""
    return ContentType(
        id=model.id,
        identifier=model.identifier,
        name=model.name,
        field_definitions=tuple(
            FieldDefinition(
                id=definition.id,
                identifier=definition.identifier,
                field_type=definition.field_type,
                position=definition.position,
            )
            for definition in model.field_definitions
        ),
    )


class ReadPolicy:
    """Decides whether the API caller may read a content item.

    Content in a restricted section is not readable at all; content without a
    published version needs version read access, which the API caller lacks.
    """

    def __init__(self, restricted_section_ids: Iterable[int] = ()):
        self.restricted_section_ids = frozenset(restricted_section_ids)

    def ensure_can_read(self, content_info: ContentInfo) -> None:
        """Raise UnauthorizedError if the content item cannot be read."""
        if content_info.section_id in self.restricted_section_ids:
            raise UnauthorizedError("content", "read", content_info.id)
        if not content_info.published:
            raise UnauthorizedError("content", "versionread", content_info.id)


class SqlContentService:
    """Loads content metadata by id."""

    def __init__(self, db: AsyncSession, policy: ReadPolicy):
        self.db = db
        self.policy = policy

    async def load_content_info(self, content_id: int) -> ContentInfo:
        """Load content metadata.

        Raises:
            NotFoundError: If no content object has this id.
            UnauthorizedError: If the caller may not read it.
        """
        model = await self.db.get(ContentObjectModel, content_id)
        if model is None:
            raise NotFoundError("Content", content_id)

        content_info = to_content_info(model)
        self.policy.ensure_can_read(content_info)
        return content_info


class SqlContentTypeService:
    """Loads content types with their field definitions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_content_type(self, content_type_id: int) -> ContentType:
        """Load a content type.

        Raises:
            NotFoundError: If no content type has this id.
        """
        result = await self.db.execute(
            select(ContentTypeModel)
            .options(selectinload(ContentTypeModel.field_definitions))
            .where(ContentTypeModel.id == content_type_id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("ContentType", content_type_id)
        return to_content_type(model)


class SqlLocationService:
    """Loads locations together with the content info they place."""

    def __init__(self, db: AsyncSession, policy: ReadPolicy):
        self.db = db
        self.policy = policy

    async def load_location(self, location_id: int | None) -> Location:
        """Load a location.

        Raises:
            NotFoundError: If the location does not exist.
            UnauthorizedError: If the caller may not read the placed content.
        """
        if location_id is None:
            raise NotFoundError("Location", location_id)

        result = await self.db.execute(
            select(LocationModel)
            .options(joinedload(LocationModel.content))
            .where(LocationModel.id == location_id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Location", location_id)

        content_info = to_content_info(model.content)
        self.policy.ensure_can_read(content_info)

        return Location(
            id=model.id,
            path_string=model.path_string,
            content_info=content_info,
            url_alias=model.url_alias,
            hidden=model.hidden,
            invisible=model.invisible,
        )
