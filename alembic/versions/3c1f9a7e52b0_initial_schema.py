"""initial_schema

Revision ID: 3c1f9a7e52b0
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the farmer profile and uploaded dataset tables plus the dataset_type
enum. Requires the uuid-ossp extension for server-side UUID defaults.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e52b0"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENUM_DATASET_TYPE = postgresql.ENUM("csv", name="dataset_type", create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')
    ENUM_DATASET_TYPE.create(op.get_bind(), checkfirst=True)

    # farmer_profiles
    op.create_table(
        "farmer_profiles",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("farm_size", sa.String(100), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("experience", sa.String(100), nullable=True),
        sa.Column(
            "crop_types",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "main_challenges",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("soil_type", sa.String(100), nullable=True),
        sa.Column("planting_date", sa.String(100), nullable=True),
        sa.Column("irrigation_type", sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # farming_datasets
    op.create_table(
        "farming_datasets",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("profile_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "dataset_type",
            ENUM_DATASET_TYPE,
            server_default=sa.text("'csv'"),
            nullable=False,
        ),
        sa.Column("columns", postgresql.JSONB(), nullable=False),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column("size_bytes", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["farmer_profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_farming_datasets_profile", "farming_datasets", ["profile_id"])


def downgrade() -> None:
    op.drop_index("ix_farming_datasets_profile", table_name="farming_datasets")
    op.drop_table("farming_datasets")
    op.drop_table("farmer_profiles")
    ENUM_DATASET_TYPE.drop(op.get_bind(), checkfirst=True)
