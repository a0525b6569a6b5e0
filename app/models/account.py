from datetime import date, datetime, timezone

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.enums import Role


class Account(Base):
    """Shared identity. Role-specific data lives in UserProfile / AdminProfile."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), index=True)  # admin | user
    profile_picture: Mapped[list] = mapped_column(JSON, default=list)

    verification_otp: Mapped[str | None] = mapped_column(String(6), nullable=True)
    reset_password_otp: Mapped[str | None] = mapped_column(String(6), nullable=True)
    otp_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reset_otp_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user_profile: Mapped["UserProfile | None"] = relationship(
        back_populates="account", uselist=False, cascade="all, delete-orphan", lazy="joined"
    )
    admin_profile: Mapped["AdminProfile | None"] = relationship(
        back_populates="account", uselist=False, cascade="all, delete-orphan", lazy="joined"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UserProfile(Base):
    __tablename__ = "user_profiles"

    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    gender: Mapped[str] = mapped_column(String(10), default="")  # male | female | others
    phone_number: Mapped[str] = mapped_column(String(40), default="")
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    marital_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    anniversary_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str] = mapped_column(String(500), default="")
    instagram_username: Mapped[str] = mapped_column(String(100), default="")
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    # False for accounts auto-created when attached as a companion
    is_registered: Mapped[bool] = mapped_column(Boolean, default=True)
    two_factor_enabled: Mapped[bool] = mapped_column(Boolean, default=False)

    account: Mapped[Account] = relationship(back_populates="user_profile")


class AdminProfile(Base):
    __tablename__ = "admin_profiles"

    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    gender: Mapped[str] = mapped_column(String(10), default="")
    phone_number: Mapped[str] = mapped_column(String(40), default="")
    address: Mapped[str] = mapped_column(String(500), default="")

    account: Mapped[Account] = relationship(back_populates="admin_profile")


def account_kind(account: Account) -> UserProfile | AdminProfile:
    """Return the role payload for an account, creating an empty one if missing."""
    match Role(account.role):
        case Role.USER:
            if account.user_profile is None:
                account.user_profile = UserProfile()
            return account.user_profile
        case Role.ADMIN:
            if account.admin_profile is None:
                account.admin_profile = AdminProfile()
            return account.admin_profile
        case Role.COMPANION:
            raise ValueError("companions are not stored as accounts")
