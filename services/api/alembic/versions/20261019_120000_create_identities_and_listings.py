"""Create identities, listings and saved_listings tables.

Revision ID: artmarket_001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "artmarket_001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    """Create marketplace tables."""
    op.create_table(
        "identities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.Enum("USER", "ARTIST", name="role", native_enum=False), nullable=False),
        sa.Column("firstname", sa.String(100), nullable=False),
        sa.Column("lastname", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("profile_pic", sa.String(1024), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_identities_email", "identities", ["email"], unique=True)

    op.create_table(
        "listings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "owner_id",
            sa.String(36),
            sa.ForeignKey("identities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("type_of_art", sa.String(100), nullable=False),
        sa.Column("price", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_listings_owner_id", "listings", ["owner_id"])

    op.create_table(
        "saved_listings",
        sa.Column(
            "identity_id",
            sa.String(36),
            sa.ForeignKey("identities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "listing_id",
            sa.String(36),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    """Drop marketplace tables."""
    op.drop_table("saved_listings")
    op.drop_index("ix_listings_owner_id", table_name="listings")
    op.drop_table("listings")
    op.drop_index("ix_identities_email", table_name="identities")
    op.drop_table("identities")
