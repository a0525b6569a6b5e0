import uuid
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.security import create_access_token, generate_otp, hash_password, verify_password
from app.models.account import Account, AdminProfile, UserProfile, account_kind
from app.models.enums import Role
from app.services.email_service import notify
from app.services.pagination import paginate

logger = logging.getLogger(__name__)

_LABEL = {Role.USER: "User", Role.ADMIN: "Admin"}

# request field -> (model attribute, lives on role payload?)
_PROFILE_FIELDS = {
    "firstName": ("first_name", False),
    "lastName": ("last_name", False),
    "phoneNumber": ("phone_number", True),
    "gender": ("gender", True),
    "dateOfBirth": ("date_of_birth", True),
    "maritalStatus": ("marital_status", True),
    "anniversaryDate": ("anniversary_date", True),
    "address": ("address", True),
    "instagramUsername": ("instagram_username", True),
    "isVerified": ("is_verified", True),
    "twoFactorEnabled": ("two_factor_enabled", True),
    "isActive": ("is_active", False),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(v: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


def find_by_email(db: Session, email: str, role: Role | None = None) -> Account | None:
    q = db.query(Account).filter(Account.email == (email or "").strip().lower())
    if role is not None:
        q = q.filter(Account.role == role.value)
    return q.first()


def get_account(db: Session, account_id: str, role: Role) -> Account:
    a = db.get(Account, account_id)
    if not a or a.role != role.value:
        raise NotFoundError(f"{_LABEL[role]} not found")
    return a


def create_account(db: Session, role: Role, first_name: str, last_name: str, email: str, password: str,
                   **profile) -> Account:
    """Insert an account with its role payload. Caller commits."""
    account = Account(
        id=str(uuid.uuid4()),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role=role.value,
        profile_picture=[],
        is_active=True,
        reset_otp_verified=False,
    )
    match role:
        case Role.USER:
            account.user_profile = UserProfile(
                gender=profile.get("gender") or "",
                phone_number=profile.get("phone_number") or "",
                date_of_birth=profile.get("date_of_birth"),
                address="",
                instagram_username="",
                is_verified=False,
                is_registered=profile.get("is_registered", True),
                two_factor_enabled=False,
            )
        case Role.ADMIN:
            account.admin_profile = AdminProfile(
                gender=profile.get("gender") or "",
                phone_number=profile.get("phone_number") or "",
                address="",
            )
        case _:
            raise ValidationError("invalid role")
    db.add(account)
    return account


def signup(db: Session, role: Role, first_name: str, last_name: str, email: str, password: str, **profile) -> Account:
    if find_by_email(db, email):
        raise ConflictError(f"{_LABEL[role]} with this email already exists.")
    account = create_account(db, role, first_name, last_name, email, password, **profile)
    otp = None
    if role is Role.USER:
        otp = generate_otp()
        account.verification_otp = otp
        account.otp_expires_at = _now() + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
    db.commit()
    db.refresh(account)
    logger.info("%s signed up: %s", role.value, account.id)

    template = "welcomeEmail" if role is Role.USER else "adminWelcome"
    notify(db, account.email, template, {"firstName": account.first_name, "otp": otp or ""})
    return account


def login(db: Session, role: Role, email: str, password: str) -> tuple[Account, str]:
    account = find_by_email(db, email, role)
    if not account or not account.is_active or not verify_password(password, account.password_hash):
        raise ValidationError("Invalid email or password")
    if account.user_profile is not None and not account.user_profile.is_registered:
        # companion-created accounts sign in through the companion flow until registered
        raise ValidationError("Complete your companion registration before logging in")
    token = create_access_token(account.id, role.value)
    return account, token


def _issue_otp(db: Session, account: Account, field: str, template: str) -> None:
    otp = generate_otp()
    setattr(account, field, otp)
    account.otp_expires_at = _now() + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
    db.commit()
    notify(db, account.email, template, {"otp": otp, "expiresMinutes": settings.OTP_EXPIRE_MINUTES})


def _check_otp(account: Account, field: str, otp: str) -> None:
    expected = getattr(account, field)
    if not expected or expected != (otp or "").strip():
        raise ValidationError("Invalid OTP")
    expires = _aware(account.otp_expires_at)
    if expires is not None and expires < _now():
        raise ValidationError("OTP has expired")


def forgot_password(db: Session, role: Role, email: str) -> dict:
    account = find_by_email(db, email, role)
    if not account:
        raise NotFoundError(f"{_LABEL[role]} with that email not found")
    account.reset_otp_verified = False
    _issue_otp(db, account, "reset_password_otp", "passwordReset")
    return {"message": "Steps to reset password has been sent to email"}


def verify_reset_otp(db: Session, role: Role, email: str, otp: str) -> dict:
    account = find_by_email(db, email, role)
    if not account:
        raise NotFoundError(f"{_LABEL[role]} not found")
    _check_otp(account, "reset_password_otp", otp)
    account.reset_password_otp = None
    account.otp_expires_at = None
    account.reset_otp_verified = True
    db.commit()
    return {"message": "OTP verified successfully"}


def reset_password(db: Session, role: Role, email: str, new_password: str) -> dict:
    account = find_by_email(db, email, role)
    if not account:
        raise NotFoundError(f"{_LABEL[role]} not found")
    if not account.reset_otp_verified:
        raise ValidationError("Password reset OTP has not been verified")
    if verify_password(new_password, account.password_hash):
        raise ValidationError("New password cannot be the same as the old password")
    account.password_hash = hash_password(new_password)
    account.reset_otp_verified = False
    db.commit()
    return {"message": "Password reset successfully"}


def resend_verification_otp(db: Session, email: str) -> dict:
    account = find_by_email(db, email, Role.USER)
    if not account:
        raise NotFoundError("User not found")
    _issue_otp(db, account, "verification_otp", "accountVerification")
    return {"message": "New OTP sent to email"}


def verify_account(db: Session, email: str, otp: str) -> dict:
    account = find_by_email(db, email, Role.USER)
    if not account:
        raise NotFoundError("User not found")
    _check_otp(account, "verification_otp", otp)
    account_kind(account).is_verified = True
    account.verification_otp = None
    account.otp_expires_at = None
    db.commit()
    return {"message": "Account verified successfully"}


def change_password(db: Session, account: Account, old_password: str, new_password: str) -> dict:
    if not verify_password(old_password, account.password_hash):
        raise ValidationError("Old password is incorrect")
    if verify_password(new_password, account.password_hash):
        raise ValidationError("New password cannot be the same as the old password")
    account.password_hash = hash_password(new_password)
    db.commit()
    return {"message": "Password changed successfully"}


def update_profile(db: Session, account: Account, patch: dict) -> Account:
    """Apply camelCase profile fields, routing each to the identity or the role payload."""
    payload = account_kind(account)
    for key, value in patch.items():
        if key not in _PROFILE_FIELDS:
            continue
        attr, on_payload = _PROFILE_FIELDS[key]
        target = payload if on_payload else account
        if not hasattr(target, attr):
            continue
        if hasattr(value, "value"):
            value = value.value
        setattr(target, attr, value)
    db.commit()
    db.refresh(account)
    return account


def set_profile_picture(db: Session, account: Account, attachment: dict) -> Account:
    account.profile_picture = [attachment]
    db.commit()
    db.refresh(account)
    return account


def list_users(db: Session, page: int = 1, limit: int = 10, search: str | None = None):
    q = db.query(Account).filter(Account.role == Role.USER.value)
    if search:
        like = f"%{search.strip()}%"
        q = q.filter(or_(
            Account.first_name.ilike(like),
            Account.last_name.ilike(like),
            Account.email.ilike(like),
        ))
    return paginate(q.order_by(Account.created_at.desc()), page, limit)


def count_users(db: Session) -> int:
    return db.query(func.count(Account.id)).filter(Account.role == Role.USER.value).scalar() or 0
