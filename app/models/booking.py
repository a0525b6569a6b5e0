from sqlalchemy import String, Numeric, Date, DateTime, Boolean, Text, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from datetime import date, datetime, timezone
from decimal import Decimal
from app.db.session import Base

class Booking(Base):
    """One record per participant. Records of one trip share package_name."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(40), unique=True, index=True)
    package_name: Mapped[str] = mapped_column(String(40), index=True)

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id"), index=True)
    destination_id: Mapped[str] = mapped_column(String(36), ForeignKey("destinations.id"), index=True)

    travel_date: Mapped[date] = mapped_column(Date, index=True)
    return_date: Mapped[date] = mapped_column(Date)
    booking_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)
    booking_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0)  # deposit
    currency: Mapped[str] = mapped_column(String(10), default="naira", index=True)  # naira | usd
    description: Mapped[str] = mapped_column(Text, default="")

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)  # pending, paid, cancelled
    documents: Mapped[list] = mapped_column(JSON, default=list)
    itineraries: Mapped[list] = mapped_column(JSON, default=list)

    is_primary: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
