"""Read-only value objects returned by the repository services.

These are detached from the database session so the projection layer can work
with them without touching SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class FieldDefinition:
    """A field declared by a content type."""

    id: int
    identifier: str
    field_type: str
    position: int


@dataclass(frozen=True)
class ContentType:
    """Content type with field definitions in definition order."""

    id: int
    identifier: str
    name: str
    field_definitions: tuple[FieldDefinition, ...] = ()

    def get_field_definition(self, identifier: str) -> FieldDefinition | None:
        for definition in self.field_definitions:
            if definition.identifier == identifier:
                return definition
        return None


@dataclass(frozen=True)
class ContentInfo:
    """Metadata of a content item, without field values."""

    id: int
    content_type_id: int
    name: str
    owner_id: int | None
    section_id: int
    main_location_id: int | None
    main_language_code: str
    published_date: datetime
    published: bool = True


@dataclass(frozen=True)
class Field:
    """Value of one field in one language."""

    field_def_identifier: str
    language_code: str
    value: Any


@dataclass(frozen=True)
class Content:
    """A content item together with its field values in every language."""

    content_info: ContentInfo
    fields: tuple[Field, ...] = ()

    @property
    def id(self) -> int:
        return self.content_info.id

    def get_field(self, identifier: str, language_code: str | None = None) -> Field | None:
        """Return the field in the given language, or in the main language."""
        language_code = language_code or self.content_info.main_language_code
        for content_field in self.fields:
            if (
                content_field.field_def_identifier == identifier
                and content_field.language_code == language_code
            ):
                return content_field
        return None

    def get_field_value(self, identifier: str, language_code: str | None = None) -> Any:
        """Return the raw field value, or None when the field is absent."""
        content_field = self.get_field(identifier, language_code)
        return content_field.value if content_field is not None else None


@dataclass(frozen=True)
class Location:
    """A placement of a content item in the content tree."""

    id: int
    path_string: str
    content_info: ContentInfo
    url_alias: str | None = None
    hidden: bool = False
    invisible: bool = False

    @property
    def content_id(self) -> int:
        return self.content_info.id


@dataclass(frozen=True)
class SearchHit:
    value_object: Content


@dataclass(frozen=True)
class SearchResult:
    search_hits: list[SearchHit] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.search_hits)
