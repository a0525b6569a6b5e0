from sqlalchemy import String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class Companion(Base):
    """A traveler attached to someone else's booking. One row per (email, booking)."""

    __tablename__ = "companions"
    __table_args__ = (
        UniqueConstraint("email", "booking_id", name="uq_companion_email_booking"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(320), index=True)
    phone_number: Mapped[str] = mapped_column(String(40), default="")
    relationship: Mapped[str] = mapped_column(String(20))  # friend, family, spouse, colleague, other

    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_registered: Mapped[bool] = mapped_column(Boolean, default=False)

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id"), index=True)  # primary traveler
    booking_id: Mapped[str] = mapped_column(String(36), ForeignKey("bookings.id"), index=True)  # primary booking
    account_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    booking_status: Mapped[str] = mapped_column(String(20), default="pending")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
