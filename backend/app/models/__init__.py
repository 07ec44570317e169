"""SQLAlchemy models."""

from app.models.content import (
    CONTENT_STATUS_DRAFT,
    CONTENT_STATUS_PUBLISHED,
    ContentFieldModel,
    ContentLanguageModel,
    ContentObjectModel,
    ContentTypeModel,
    FieldDefinitionModel,
    LocationModel,
)

__all__ = [
    "CONTENT_STATUS_DRAFT",
    "CONTENT_STATUS_PUBLISHED",
    "ContentFieldModel",
    "ContentLanguageModel",
    "ContentObjectModel",
    "ContentTypeModel",
    "FieldDefinitionModel",
    "LocationModel",
]
