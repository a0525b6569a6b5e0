from sqlalchemy import String, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class Destination(Base):
    __tablename__ = "destinations"
    __table_args__ = (
        UniqueConstraint("city", "country", name="uq_destination_city_country"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # both stored lower-cased
    city: Mapped[str] = mapped_column(String(120), index=True)
    country: Mapped[str] = mapped_column(String(120), index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
