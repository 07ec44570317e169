"""Seed the content repository with a small demo content tree.

Creates the schema if needed and loads content types, users, a folder and a
few articles so the export endpoint can be tried locally:

    curl -H "X-API-Key: $API_KEY" http://localhost:8000/api/content/52,76,77

Usage:
    uv run python -m app.scripts.seed_database

The script is idempotent - it can be run multiple times safely.
Existing rows are updated via merge semantics.
"""

import asyncio
from datetime import datetime, timezone

from sqlalchemy import text

from app.database import Base, async_session_maker, engine
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

USERS_SECTION_ID = 2

# identifier -> (id, name, [(field id, field identifier, field type)])
CONTENT_TYPES = {
    "user": (4, "User", [(8, "first_name", "ezstring"), (9, "last_name", "ezstring")]),
    "folder": (1, "Folder", [(4, "name", "ezstring"), (155, "short_description", "ezrichtext")]),
    "article": (
        16,
        "Article",
        [
            (152, "title", "ezstring"),
            (153, "intro", "ezrichtext"),
            (154, "byline", "ezauthor"),
            (156, "tags", "ezkeyword"),
        ],
    ),
}

# Demo content objects. Users live in the users section.
CONTENT_OBJECTS = [
    {
        "id": 14,
        "type": "user",
        "name": "Administrator User",
        "owner_id": 14,
        "section_id": USERS_SECTION_ID,
        "location": (15, "/1/5/13/15/", None),
        "fields": {"eng-GB": {"first_name": "Administrator", "last_name": "User"}},
    },
    {
        "id": 42,
        "type": "user",
        "name": "Jane Editor",
        "owner_id": 14,
        "section_id": USERS_SECTION_ID,
        "location": (44, "/1/5/13/44/", None),
        "fields": {"eng-GB": {"first_name": "Jane", "last_name": "Editor"}},
    },
    {
        "id": 52,
        "type": "folder",
        "name": "News",
        "owner_id": 14,
        "location": (55, "/1/2/55/", "News"),
        "fields": {
            "eng-GB": {"name": "News", "short_description": {"text": "Latest news"}},
            "fre-FR": {"name": "Actualités", "short_description": {"text": "Dernières nouvelles"}},
        },
    },
    {
        "id": 76,
        "type": "article",
        "name": "Spring release",
        "owner_id": 42,
        "location": (76, "/1/2/55/76/", "News/Spring-release"),
        "fields": {
            "eng-GB": {
                "title": "Spring release",
                "intro": {"text": "What is new this spring."},
                "tags": ["release", "spring"],
            },
        },
    },
    {
        "id": 77,
        "type": "article",
        "name": "Autumn roadmap",
        "owner_id": 0,
        "location": (77, "/1/2/55/77/", "News/Autumn-roadmap"),
        "fields": {
            "eng-GB": {
                "title": "Autumn roadmap",
                "intro": {"text": "Plans for the autumn."},
                "byline": "John Writer",
            },
            "fre-FR": {
                "title": "Feuille de route d'automne",
                "intro": {"text": "Les projets pour l'automne."},
                "byline": "John Writer",
            },
        },
    },
    {
        "id": 78,
        "type": "article",
        "name": "Hidden announcement",
        "owner_id": 42,
        "hidden": True,
        "location": (78, "/1/2/55/78/", "News/Hidden-announcement"),
        "fields": {"eng-GB": {"title": "Hidden announcement"}},
    },
    {
        "id": 79,
        "type": "article",
        "name": "Unpublished draft",
        "owner_id": 42,
        "status": CONTENT_STATUS_DRAFT,
        "location": (79, "/1/2/55/79/", None),
        "fields": {"eng-GB": {"title": "Unpublished draft"}},
    },
]

DEMO_PUBLISHED_DATE = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


async def verify_connection() -> bool:
    """Verify the database connection is working."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("  PostgreSQL: connected")
    except Exception as e:
        print(f"  PostgreSQL: FAILED - {e}")
        return False
    return True


def build_demo_rows() -> list:
    """Build ORM rows for the demo content tree, parents before children."""
    rows: list = []
    field_ids: dict[tuple[str, str], int] = {}

    for identifier, (type_id, name, definitions) in CONTENT_TYPES.items():
        rows.append(ContentTypeModel(id=type_id, identifier=identifier, name=name))
        for position, (field_id, field_identifier, field_type) in enumerate(definitions):
            field_ids[(identifier, field_identifier)] = field_id
            rows.append(
                FieldDefinitionModel(
                    id=field_id,
                    content_type_id=type_id,
                    identifier=field_identifier,
                    field_type=field_type,
                    position=position,
                )
            )

    field_row_id = 1
    for item in CONTENT_OBJECTS:
        location_id, path_string, url_alias = item["location"]
        languages = list(item["fields"])
        rows.append(
            ContentObjectModel(
                id=item["id"],
                content_type_id=CONTENT_TYPES[item["type"]][0],
                name=item["name"],
                owner_id=item["owner_id"],
                section_id=item.get("section_id", 1),
                main_location_id=location_id,
                main_language_code=languages[0],
                status=item.get("status", CONTENT_STATUS_PUBLISHED),
                hidden=item.get("hidden", False),
                published_date=DEMO_PUBLISHED_DATE,
            )
        )
        rows.append(
            LocationModel(
                id=location_id,
                content_id=item["id"],
                path_string=path_string,
                url_alias=url_alias,
            )
        )
        for language_code, values in item["fields"].items():
            rows.append(ContentLanguageModel(content_id=item["id"], language_code=language_code))
            for field_identifier, value in values.items():
                rows.append(
                    ContentFieldModel(
                        id=field_row_id,
                        content_id=item["id"],
                        field_definition_id=field_ids[(item["type"], field_identifier)],
                        language_code=language_code,
                        value=value,
                    )
                )
                field_row_id += 1

    return rows


async def seed_database() -> int:
    """Create the schema and merge the demo rows.

    Returns:
        Number of rows merged.
    """
    print("\nVerifying database connection...")
    if not await verify_connection():
        raise RuntimeError("Database connection verification failed")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    rows = build_demo_rows()
    async with async_session_maker() as session:
        for row in rows:
            await session.merge(row)
        await session.commit()

    return len(rows)


def main() -> None:
    """Main entry point for the seed script."""
    print("=" * 50)
    print("Content Repository Seeding")
    print("=" * 50)

    row_count = asyncio.run(seed_database())

    print("\n" + "=" * 50)
    print("Summary")
    print("=" * 50)
    print(f"  Content types: {len(CONTENT_TYPES)}")
    print(f"  Content objects: {len(CONTENT_OBJECTS)}")
    print(f"  Rows merged: {row_count}")
    print("\nDatabase seeding complete!")


if __name__ == "__main__":
    main()
