"""Create marketplace tables

Revision ID: 3b1f0c9a7d21
Revises:
Create Date: 2026-10-17 15:40:12.118204

"""

import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3b1f0c9a7d21"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("image", sa.String(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "listings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("image_src", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=False, index=True),
        sa.Column("room_count", sa.Integer(), nullable=False),
        sa.Column("bathroom_count", sa.Integer(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("location_value", sa.String(), nullable=False, index=True),
        sa.Column("price", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price > 0", name="ck_listings_price_positive"),
        sa.CheckConstraint("room_count > 0", name="ck_listings_room_count_positive"),
        sa.CheckConstraint("bathroom_count > 0", name="ck_listings_bathroom_count_positive"),
        sa.CheckConstraint("guest_count > 0", name="ck_listings_guest_count_positive"),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "listing_id",
            sa.Uuid(),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "guest_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("total_price", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.CheckConstraint("end_date > start_date", name="ck_reservations_positive_length"),
    )

    op.create_table(
        "blocked_periods",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "listing_id",
            sa.Uuid(),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("end_date > start_date", name="ck_blocked_periods_positive_length"),
    )

    # One row per held night; the primary key is the storage-level overlap guard
    op.create_table(
        "occupied_nights",
        sa.Column(
            "listing_id",
            sa.Uuid(),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("night", sa.Date(), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Uuid(),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "blocked_period_id",
            sa.Uuid(),
            sa.ForeignKey("blocked_periods.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
        sa.CheckConstraint(
            "(reservation_id IS NULL) <> (blocked_period_id IS NULL)",
            name="ck_occupied_nights_single_owner",
        ),
    )

    op.create_table(
        "favorites",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "listing_id",
            sa.Uuid(),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("user_id", "listing_id", name="uq_favorites_user_listing"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("favorites")
    op.drop_table("occupied_nights")
    op.drop_table("blocked_periods")
    op.drop_table("reservations")
    op.drop_table("listings")
    op.drop_table("users")
