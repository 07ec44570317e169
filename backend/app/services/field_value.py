"""Field value resolution for exported content.

Maps generic field names to the concrete field identifiers of a content type
and turns stored field values into strings. The content type is passed into
every call, so a single resolver can serve concurrent requests.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from app.repositories.values import Content, ContentType
from app.schemas.content import FieldDescriptor

logger = logging.getLogger(__name__)


def stringify_value(value: Any) -> str:
    """Convert a stored field value to its exported string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        if "text" in value:
            return stringify_value(value["text"])
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(stringify_value(item) for item in value)
    return str(value)


class FieldValueResolver:
    """Resolves configured field identifiers and field values."""

    def __init__(self, field_identifiers: Mapping[str, Mapping[str, str]] | None = None):
        """Initialize resolver.

        Args:
            field_identifiers: Generic field name mapped to a dict of
                content type identifier -> concrete field identifier.
        """
        self.field_identifiers = field_identifiers or {}

    def configured_field_identifier(self, field_name: str, content_type: ContentType) -> str:
        """Return the field identifier configured for field_name on this content type.

        Falls back to field_name when no mapping exists.
        """
        return self.field_identifiers.get(field_name, {}).get(content_type.identifier, field_name)

    def field_value(
        self,
        content: Content,
        identifier: str,
        language: str,
        content_type: ContentType,
    ) -> FieldDescriptor:
        """Return the value of a field in the given language.

        Identifiers unknown to the content type and fields without a value in
        that language yield an empty string.
        """
        if content_type.get_field_definition(identifier) is None:
            logger.debug(
                "Field %r is not defined on content type %r",
                identifier,
                content_type.identifier,
            )
            return FieldDescriptor(key=identifier, value="")

        content_field = content.get_field(identifier, language)
        if content_field is None:
            return FieldDescriptor(key=identifier, value="")

        return FieldDescriptor(key=identifier, value=stringify_value(content_field.value))
