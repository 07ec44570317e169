"""Content export API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.config import settings
from app.database import get_db
from app.repositories import (
    ReadPolicy,
    SqlContentService,
    SqlContentTypeService,
    SqlLocationService,
    SqlSearchService,
)
from app.schemas.content import ContentRecord
from app.services.content_projector import ContentOptions, ContentProjector, parse_id_list
from app.services.field_value import FieldValueResolver
from app.services.url_generator import LocationUrlGenerator

router = APIRouter(prefix="/content", tags=["content"])

# Stateless collaborators shared by every request
field_value_resolver = FieldValueResolver(settings.field_identifiers)
url_generator = LocationUrlGenerator(settings.site_url)
read_policy = ReadPolicy(settings.restricted_section_ids)


def get_content_projector(db: AsyncSession = Depends(get_db)) -> ContentProjector:
    """Build a projector wired to request-scoped repository services."""
    return ContentProjector(
        search_service=SqlSearchService(db, read_policy),
        content_type_service=SqlContentTypeService(db),
        location_service=SqlLocationService(db, read_policy),
        content_service=SqlContentService(db, read_policy),
        url_generator=url_generator,
        field_values=field_value_resolver,
        default_author_id=settings.default_author_id,
        rest_prefix=settings.rest_prefix,
    )


@router.get("/{content_id_list}", response_model=dict[str, ContentRecord])
async def get_content(
    content_id_list: str,
    lang: str | None = Query(None, description="Language code, e.g. eng-GB"),
    hidden: str | None = Query(None, description="Include hidden content when set"),
    fields: str | None = Query(None, description="Comma-separated field identifiers"),
    _api_key: str = Depends(verify_api_key),
    projector: ContentProjector = Depends(get_content_projector),
) -> dict[str, ContentRecord]:
    """Export content items as flat records.

    Args:
        content_id_list: Comma-separated content ids.
        lang: Language to export; defaults to each item's main language.
        hidden: Any value other than empty or "0" disables the visibility filter.
        fields: Field identifiers to export; defaults to all fields of the type.

    Returns:
        Records keyed by content id, in search result order.

    Raises:
        NotFoundError: Mapped to 404 by the application.
        UnauthorizedError: Mapped to 403 by the application.
    """
    options = ContentOptions.from_request(lang=lang, hidden=hidden, fields=fields)
    return await projector.resolve(parse_id_list(content_id_list), options)
