"""Content projection for the export API.

Resolves a list of content identifiers into denormalized records: the search
service selects the items, then each item's content type, main location,
author and field values are looked up and flattened into a ContentRecord.

Errors raised by the repository services (NotFoundError, UnauthorizedError)
are not caught here; a single failing item aborts the whole projection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from app.repositories.interfaces import (
    ContentService,
    ContentTypeService,
    LocationService,
    SearchService,
)
from app.repositories.query import (
    ContentId,
    Criterion,
    LanguageCode,
    LogicalAnd,
    Query,
    Visibility,
    VisibilityState,
)
from app.repositories.values import Content, ContentType
from app.schemas.content import ContentRecord, Link
from app.services.field_value import FieldValueResolver, stringify_value
from app.services.url_generator import LocationUrlGenerator

logger = logging.getLogger(__name__)

AUTHOR_FIELD = "author"
DEFAULT_REST_PREFIX = "/api/ezp/v2"


def parse_id_list(raw: str) -> list[str]:
    """Split a comma-separated id list, dropping blanks and duplicates in order."""
    return list(dict.fromkeys(part.strip() for part in raw.split(",") if part.strip()))


def is_truthy_flag(value: str | None) -> bool:
    """Interpret a query flag: absent, empty and "0" are false, anything else true."""
    return value not in (None, "", "0")


def format_published_date(published: datetime) -> str:
    """Format a date as ISO-8601 with seconds and UTC offset."""
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published.isoformat(timespec="seconds")


@dataclass(frozen=True)
class ContentOptions:
    """Request options controlling the projection."""

    language: str | None = None
    include_hidden: bool = False
    requested_fields: tuple[str, ...] | None = None

    @classmethod
    def from_request(
        cls,
        lang: str | None = None,
        hidden: str | None = None,
        fields: str | None = None,
    ) -> ContentOptions:
        """Build options from raw query parameters."""
        return cls(
            language=lang or None,
            include_hidden=is_truthy_flag(hidden),
            requested_fields=tuple(fields.split(",")) if fields else None,
        )


def build_query(content_ids: list[str], options: ContentOptions) -> Query:
    """Build the search query for the requested ids and options."""
    criteria: list[Criterion] = [ContentId(content_ids)]

    if not options.include_hidden:
        criteria.append(Visibility(VisibilityState.VISIBLE))
    if options.language:
        criteria.append(LanguageCode(options.language))

    return Query(filter=LogicalAnd(criteria))


class ContentProjector:
    """Projects content items into ContentRecord objects."""

    def __init__(
        self,
        search_service: SearchService,
        content_type_service: ContentTypeService,
        location_service: LocationService,
        content_service: ContentService,
        url_generator: LocationUrlGenerator,
        field_values: FieldValueResolver,
        default_author_id: int,
        rest_prefix: str = DEFAULT_REST_PREFIX,
    ):
        self.search_service = search_service
        self.content_type_service = content_type_service
        self.location_service = location_service
        self.content_service = content_service
        self.url_generator = url_generator
        self.field_values = field_values
        self.default_author_id = default_author_id
        self.rest_prefix = rest_prefix.rstrip("/")

    async def resolve(
        self,
        content_ids: list[str],
        options: ContentOptions,
    ) -> dict[str, ContentRecord]:
        """Resolve content ids into records keyed by content id.

        Args:
            content_ids: Raw content identifiers, passed to search as given.
            options: Language, visibility and field selection.

        Returns:
            Records in search result order.

        Raises:
            NotFoundError: If a content type or location cannot be loaded.
            UnauthorizedError: If the caller may not read a location or owner.
        """
        query = build_query(content_ids, options)
        result = await self.search_service.find_content(query)

        records: dict[str, ContentRecord] = {}
        for hit in result.search_hits:
            record = await self._project(hit.value_object, options)
            records[str(record.content_id)] = record

        if len(records) < len(content_ids):
            logger.info(
                "Resolved %d of %d requested content items",
                len(records),
                len(content_ids),
            )
        return records

    async def _project(self, content: Content, options: ContentOptions) -> ContentRecord:
        content_info = content.content_info
        content_type = await self.content_type_service.load_content_type(
            content_info.content_type_id
        )
        location = await self.location_service.load_location(content_info.main_location_id)

        language = options.language or location.content_info.main_language_code

        fields = []
        for identifier in self._field_identifiers(content_type, options.requested_fields):
            identifier = self.field_values.configured_field_identifier(identifier, content_type)
            fields.append(
                self.field_values.field_value(content, identifier, language, content_type)
            )

        logger.debug(
            "Projected content %s (%s) with %d fields",
            content.id,
            content_type.identifier,
            len(fields),
        )

        return ContentRecord(
            content_id=content.id,
            content_type_id=content_type.id,
            identifier=content_type.identifier,
            language=language,
            published_date=format_published_date(content_info.published_date),
            author=await self._author(content, content_type),
            uri=self.url_generator.generate(location, {}, absolute=False),
            main_location=Link(href=f"{self.rest_prefix}/content/locations{location.path_string}"),
            locations=Link(href=f"{self.rest_prefix}/content/objects/{content.id}/locations"),
            category_path=location.path_string,
            fields=fields,
        )

    @staticmethod
    def _field_identifiers(
        content_type: ContentType,
        requested_fields: tuple[str, ...] | None,
    ) -> list[str]:
        """Requested fields as given, or every field of the content type in order."""
        if requested_fields is not None:
            return list(requested_fields)
        return [definition.identifier for definition in content_type.field_definitions]

    async def _author(self, content: Content, content_type: ContentType) -> str:
        """Author field value, or the owner's name when the item has no author field."""
        author = content.get_field_value(
            self.field_values.configured_field_identifier(AUTHOR_FIELD, content_type)
        )

        if author is None:
            owner_id = content.content_info.owner_id or self.default_author_id
            owner_info = await self.content_service.load_content_info(owner_id)
            author = owner_info.name

        return stringify_value(author)
