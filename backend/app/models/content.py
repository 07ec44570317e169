"""SQLAlchemy models for the content repository.

The schema mirrors the CMS concepts the export API reads: content types with
ordered field definitions, content objects with per-language field values,
and locations placing content objects in the content tree. Users are content
objects as well; an owner's display name is the name of its content object.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

CONTENT_STATUS_PUBLISHED = "published"
CONTENT_STATUS_DRAFT = "draft"


class ContentTypeModel(Base):
    """Schema definition shared by content objects of one type."""

    __tablename__ = "content_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    identifier: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
    )

    field_definitions: Mapped[list[FieldDefinitionModel]] = relationship(
        back_populates="content_type",
        order_by="FieldDefinitionModel.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ContentTypeModel(id={self.id}, identifier={self.identifier})>"


class FieldDefinitionModel(Base):
    """A field declared by a content type, in definition order."""

    __tablename__ = "field_definitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content_type_id: Mapped[int] = mapped_column(
        ForeignKey("content_types.id", ondelete="CASCADE"),
        nullable=False,
    )
    identifier: Mapped[str] = mapped_column(String(100), nullable=False)
    field_type: Mapped[str] = mapped_column(String(50), nullable=False, default="ezstring")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    content_type: Mapped[ContentTypeModel] = relationship(back_populates="field_definitions")

    __table_args__ = (
        UniqueConstraint("content_type_id", "identifier", name="uq_field_definition_identifier"),
    )


class ContentObjectModel(Base):
    """A stored content item with its metadata."""

    __tablename__ = "content_objects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content_type_id: Mapped[int] = mapped_column(
        ForeignKey("content_types.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 0 or NULL means the item has no owner
    owner_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    section_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    main_location_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    main_language_code: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CONTENT_STATUS_PUBLISHED,
    )
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    content_type: Mapped[ContentTypeModel] = relationship()
    languages: Mapped[list[ContentLanguageModel]] = relationship(
        back_populates="content",
        cascade="all, delete-orphan",
    )
    fields: Mapped[list[ContentFieldModel]] = relationship(
        back_populates="content",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_content_objects_status_section", "status", "section_id"),
    )

    def __repr__(self) -> str:
        return f"<ContentObjectModel(id={self.id}, name={self.name!r})>"


class ContentLanguageModel(Base):
    """A language version available for a content object."""

    __tablename__ = "content_object_languages"

    content_id: Mapped[int] = mapped_column(
        ForeignKey("content_objects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    language_code: Mapped[str] = mapped_column(String(20), primary_key=True)

    content: Mapped[ContentObjectModel] = relationship(back_populates="languages")


class ContentFieldModel(Base):
    """The value of one field definition for one content object and language."""

    __tablename__ = "content_fields"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content_id: Mapped[int] = mapped_column(
        ForeignKey("content_objects.id", ondelete="CASCADE"),
        nullable=False,
    )
    field_definition_id: Mapped[int] = mapped_column(
        ForeignKey("field_definitions.id", ondelete="CASCADE"),
        nullable=False,
    )
    language_code: Mapped[str] = mapped_column(String(20), nullable=False)
    value: Mapped[Any | None] = mapped_column(JSONB, nullable=True)

    content: Mapped[ContentObjectModel] = relationship(back_populates="fields")
    field_definition: Mapped[FieldDefinitionModel] = relationship()

    __table_args__ = (
        Index("idx_content_fields_content_language", "content_id", "language_code"),
        UniqueConstraint(
            "content_id",
            "field_definition_id",
            "language_code",
            name="uq_content_field_language",
        ),
    )


class LocationModel(Base):
    """Placement of a content object in the content tree."""

    __tablename__ = "content_locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content_id: Mapped[int] = mapped_column(
        ForeignKey("content_objects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_location_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Materialized path of location ids, e.g. "/1/2/55/"
    path_string: Mapped[str] = mapped_column(String(255), nullable=False)
    url_alias: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Set when an ancestor location is hidden
    invisible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    content: Mapped[ContentObjectModel] = relationship()

    def __repr__(self) -> str:
        return f"<LocationModel(id={self.id}, path_string={self.path_string})>"
