"""Content search repository.

Translates a criterion tree into a SQL WHERE clause and returns matching
content items with their field values. Permission filtering is applied
silently: unreadable content is left out of the results rather than raising.
"""

from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, and_, exists, false, not_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from app.models.content import (
    CONTENT_STATUS_PUBLISHED,
    ContentFieldModel,
    ContentLanguageModel,
    ContentObjectModel,
    LocationModel,
)
from app.repositories.content import ReadPolicy, to_content
from app.repositories.query import (
    ContentId,
    Criterion,
    LanguageCode,
    LogicalAnd,
    Query,
    Visibility,
    VisibilityState,
)
from app.repositories.values import SearchHit, SearchResult

logger = logging.getLogger(__name__)


MAX_CONTENT_ID = 2**31 - 1


def _parse_content_ids(values: tuple[str | int, ...]) -> list[int]:
    """Keep identifiers that can name a stored content object.

    Only plain ASCII decimal ids within the integer column range are kept.
    """
    content_ids = []
    for value in values:
        text = str(value).strip()
        if text.isascii() and text.isdigit() and int(text) <= MAX_CONTENT_ID:
            content_ids.append(int(text))
        else:
            logger.debug("Ignoring invalid content id %r", value)
    return content_ids


def _visible_clause() -> ColumnElement[bool]:
    main_location_visible = exists(
        select(LocationModel.id).where(
            LocationModel.id == ContentObjectModel.main_location_id,
            LocationModel.hidden.is_(False),
            LocationModel.invisible.is_(False),
        )
    )
    return and_(ContentObjectModel.hidden.is_(False), main_location_visible)


def criterion_to_clause(criterion: Criterion) -> ColumnElement[bool]:
    """Translate a criterion tree into a SQLAlchemy boolean expression.

    Raises:
        ValueError: If the criterion type is not supported.
    """
    if isinstance(criterion, LogicalAnd):
        return and_(*(criterion_to_clause(c) for c in criterion.criteria))

    if isinstance(criterion, ContentId):
        content_ids = _parse_content_ids(criterion.values)
        if not content_ids:
            return false()
        return ContentObjectModel.id.in_(content_ids)

    if isinstance(criterion, Visibility):
        if criterion.value == VisibilityState.VISIBLE:
            return _visible_clause()
        return not_(_visible_clause())

    if isinstance(criterion, LanguageCode):
        return exists(
            select(ContentLanguageModel.content_id).where(
                ContentLanguageModel.content_id == ContentObjectModel.id,
                ContentLanguageModel.language_code == criterion.value,
            )
        )

    raise ValueError(f"Unsupported criterion: {type(criterion).__name__}")


class SqlSearchService:
    """Finds content items matching a query, ordered by content id."""

    def __init__(self, db: AsyncSession, policy: ReadPolicy):
        self.db = db
        self.policy = policy

    def _permission_clause(self) -> ColumnElement[bool]:
        clause = ContentObjectModel.status == CONTENT_STATUS_PUBLISHED
        if self.policy.restricted_section_ids:
            clause = and_(
                clause,
                ContentObjectModel.section_id.not_in(sorted(self.policy.restricted_section_ids)),
            )
        return clause

    async def find_content(self, query: Query) -> SearchResult:
        """Execute a content search.

        Args:
            query: Query whose filter selects the content items.

        Returns:
            SearchResult with one hit per matching content item.
        """
        stmt = (
            select(ContentObjectModel)
            .options(
                selectinload(ContentObjectModel.fields).joinedload(
                    ContentFieldModel.field_definition
                )
            )
            .where(self._permission_clause(), criterion_to_clause(query.filter))
            .order_by(ContentObjectModel.id)
        )

        result = await self.db.execute(stmt)
        models = result.scalars().unique().all()

        return SearchResult(search_hits=[SearchHit(value_object=to_content(m)) for m in models])
