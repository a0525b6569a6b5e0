"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("profile_picture", sa.JSON(), nullable=True),
        sa.Column("verification_otp", sa.String(length=6), nullable=True),
        sa.Column("reset_password_otp", sa.String(length=6), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reset_otp_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_role", "accounts", ["role"])

    op.create_table(
        "user_profiles",
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("gender", sa.String(length=10), nullable=False, server_default=""),
        sa.Column("phone_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("marital_status", sa.String(length=20), nullable=True),
        sa.Column("anniversary_date", sa.Date(), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("instagram_username", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_registered", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("two_factor_enabled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )

    op.create_table(
        "admin_profiles",
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("gender", sa.String(length=10), nullable=False, server_default=""),
        sa.Column("phone_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("address", sa.String(length=500), nullable=False, server_default=""),
    )

    op.create_table(
        "destinations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.UniqueConstraint("city", "country", name="uq_destination_city_country"),
    )
    op.create_index("ix_destinations_city", "destinations", ["city"])
    op.create_index("ix_destinations_country", "destinations", ["country"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("booking_id", sa.String(length=40), nullable=False),
        sa.Column("package_name", sa.String(length=40), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("destination_id", sa.String(length=36), sa.ForeignKey("destinations.id"), nullable=False),
        sa.Column("travel_date", sa.Date(), nullable=False),
        sa.Column("return_date", sa.Date(), nullable=False),
        sa.Column("booking_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("booking_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="naira"),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("documents", sa.JSON(), nullable=True),
        sa.Column("itineraries", sa.JSON(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_bookings_booking_id", "bookings", ["booking_id"], unique=True)
    op.create_index("ix_bookings_package_name", "bookings", ["package_name"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_destination_id", "bookings", ["destination_id"])
    op.create_index("ix_bookings_travel_date", "bookings", ["travel_date"])
    op.create_index("ix_bookings_currency", "bookings", ["currency"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_is_primary", "bookings", ["is_primary"])
    op.create_index("ix_bookings_is_active", "bookings", ["is_active"])

    op.create_table(
        "companions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("relationship", sa.String(length=20), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("temp_password_hash", sa.String(length=255), nullable=True),
        sa.Column("is_registered", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("booking_id", sa.String(length=36), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("booking_status", sa.String(length=20), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.UniqueConstraint("email", "booking_id", name="uq_companion_email_booking"),
    )
    op.create_index("ix_companions_email", "companions", ["email"])
    op.create_index("ix_companions_user_id", "companions", ["user_id"])
    op.create_index("ix_companions_booking_id", "companions", ["booking_id"])
    op.create_index("ix_companions_account_id", "companions", ["account_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("review", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])
    op.create_index("ix_reviews_rating", "reviews", ["rating"])

    op.create_table(
        "waitlist_entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("trip_type", sa.String(length=100), nullable=False),
        sa.Column("additional_information", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_waitlist_entries_email", "waitlist_entries", ["email"])
    op.create_index("ix_waitlist_entries_trip_type", "waitlist_entries", ["trip_type"])
    op.create_index("ix_waitlist_entries_is_active", "waitlist_entries", ["is_active"])

    op.create_table(
        "newsletter_subscriptions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("subscribed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("unsubscribed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_newsletter_subscriptions_email", "newsletter_subscriptions", ["email"], unique=True)
    op.create_index("ix_newsletter_subscriptions_is_active", "newsletter_subscriptions", ["is_active"])

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("dream_destination", sa.String(length=100), nullable=False),
        sa.Column("travel_date", sa.Date(), nullable=False),
        sa.Column("story", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_contact_submissions_email", "contact_submissions", ["email"])
    op.create_index("ix_contact_submissions_dream_destination", "contact_submissions", ["dream_destination"])
    op.create_index("ix_contact_submissions_is_active", "contact_submissions", ["is_active"])

    op.create_table(
        "email_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("to_email", sa.String(length=320), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("template", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="queued"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("related_booking_ref", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_email_logs_to_email", "email_logs", ["to_email"])
    op.create_index("ix_email_logs_status", "email_logs", ["status"])


def downgrade() -> None:
    op.drop_table("email_logs")
    op.drop_table("contact_submissions")
    op.drop_table("newsletter_subscriptions")
    op.drop_table("waitlist_entries")
    op.drop_table("reviews")
    op.drop_table("companions")
    op.drop_table("bookings")
    op.drop_table("destinations")
    op.drop_table("admin_profiles")
    op.drop_table("user_profiles")
    op.drop_table("accounts")
