"""Pydantic schemas for the content export API.

Field names are snake_case in Python and serialized in camelCase, matching
the JSON consumed by recommendation engines.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FieldDescriptor(BaseModel):
    """One exported field: the requested identifier and its string value."""

    key: str
    value: str = ""


class Link(BaseModel):
    """Reference to a resource of the CMS REST API."""

    href: str


class ContentRecord(BaseModel):
    """Denormalized content item as returned by the export endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content_id: int
    content_type_id: int
    identifier: str = Field(description="Content type identifier")
    language: str
    published_date: str = Field(description="ISO-8601 publication date")
    author: str
    uri: str
    main_location: Link
    locations: Link
    category_path: str
    fields: list[FieldDescriptor] = Field(default_factory=list)
