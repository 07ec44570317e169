"""initial_content_repository

Revision ID: initial_content_repository
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "initial_content_repository"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create content type, content object, field and location tables."""
    op.create_table(
        "content_types",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("identifier", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("identifier"),
    )

    op.create_table(
        "field_definitions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("content_type_id", sa.Integer(), nullable=False),
        sa.Column("identifier", sa.String(100), nullable=False),
        sa.Column("field_type", sa.String(50), nullable=False),
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Definition order within the content type",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["content_type_id"],
            ["content_types.id"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "content_type_id",
            "identifier",
            name="uq_field_definition_identifier",
        ),
    )

    op.create_table(
        "content_objects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("content_type_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "owner_id",
            sa.Integer(),
            nullable=True,
            comment="User content id; 0 or NULL when unowned",
        ),
        sa.Column("section_id", sa.Integer(), nullable=False),
        sa.Column("main_location_id", sa.Integer(), nullable=True),
        sa.Column("main_language_code", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("hidden", sa.Boolean(), nullable=False),
        sa.Column(
            "published_date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["content_type_id"], ["content_types.id"]),
    )
    op.create_index(
        "ix_content_objects_content_type_id",
        "content_objects",
        ["content_type_id"],
        unique=False,
    )
    op.create_index(
        "idx_content_objects_status_section",
        "content_objects",
        ["status", "section_id"],
        unique=False,
    )

    op.create_table(
        "content_object_languages",
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("language_code", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("content_id", "language_code"),
        sa.ForeignKeyConstraint(
            ["content_id"],
            ["content_objects.id"],
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "content_fields",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("field_definition_id", sa.Integer(), nullable=False),
        sa.Column("language_code", sa.String(20), nullable=False),
        sa.Column("value", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["content_id"],
            ["content_objects.id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["field_definition_id"],
            ["field_definitions.id"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "content_id",
            "field_definition_id",
            "language_code",
            name="uq_content_field_language",
        ),
    )
    op.create_index(
        "idx_content_fields_content_language",
        "content_fields",
        ["content_id", "language_code"],
        unique=False,
    )

    op.create_table(
        "content_locations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("parent_location_id", sa.Integer(), nullable=True),
        sa.Column(
            "path_string",
            sa.String(255),
            nullable=False,
            comment="Materialized path of location ids, e.g. /1/2/55/",
        ),
        sa.Column("url_alias", sa.String(255), nullable=True),
        sa.Column("hidden", sa.Boolean(), nullable=False),
        sa.Column(
            "invisible",
            sa.Boolean(),
            nullable=False,
            comment="Set when an ancestor location is hidden",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["content_id"],
            ["content_objects.id"],
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_content_locations_content_id",
        "content_locations",
        ["content_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop content repository tables."""
    op.drop_index("ix_content_locations_content_id", table_name="content_locations")
    op.drop_table("content_locations")
    op.drop_index("idx_content_fields_content_language", table_name="content_fields")
    op.drop_table("content_fields")
    op.drop_table("content_object_languages")
    op.drop_index("idx_content_objects_status_section", table_name="content_objects")
    op.drop_index("ix_content_objects_content_type_id", table_name="content_objects")
    op.drop_table("content_objects")
    op.drop_table("field_definitions")
    op.drop_table("content_types")
