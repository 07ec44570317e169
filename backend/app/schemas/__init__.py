"""Pydantic schemas."""

from app.schemas.content import ContentRecord, FieldDescriptor, Link

__all__ = [
    "ContentRecord",
    "FieldDescriptor",
    "Link",
]
