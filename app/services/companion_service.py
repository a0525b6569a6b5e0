import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.account import account_kind
from app.models.booking import Booking
from app.models.companion import Companion
from app.models.destination import Destination
from app.models.enums import Role
from app.services import account_service
from app.services.serializers import booking_out, companion_out

logger = logging.getLogger(__name__)


def _records(db: Session, email: str) -> list[Companion]:
    return (
        db.query(Companion)
        .filter(Companion.email == (email or "").strip().lower())
        .order_by(Companion.created_at.asc())
        .all()
    )


def get_companion(db: Session, companion_id: str) -> Companion:
    c = db.get(Companion, companion_id)
    if not c:
        raise NotFoundError("Companion not found")
    return c


def _companion_token(c: Companion, temp: bool) -> str:
    minutes = settings.TEMP_TOKEN_EXPIRE_MINUTES if temp else settings.COMPANION_TOKEN_EXPIRE_MINUTES
    return create_access_token(
        c.id, Role.COMPANION.value, expires_minutes=minutes,
        extra={"temp": temp, "userId": c.account_id},
    )


def companion_login(db: Session, email: str, password: str) -> dict:
    """Temp credential is tried before the permanent one, across every record for the email."""
    records = _records(db, email)
    for c in records:
        if verify_password(password, c.temp_password_hash):
            logger.info("companion %s logged in with temporary password", c.id)
            return {"token": _companion_token(c, temp=True), "companion": companion_out(c), "requiresPasswordChange": True}
    for c in records:
        if verify_password(password, c.password_hash):
            return {"token": _companion_token(c, temp=False), "companion": companion_out(c), "requiresPasswordChange": False}
    raise ValidationError("Invalid email or password")


def get_companion_profile(db: Session, companion_id: str) -> dict:
    c = get_companion(db, companion_id)
    out = companion_out(c)
    booking = db.get(Booking, c.booking_id)
    if booking is not None:
        out["booking"] = booking_out(booking, destination=db.get(Destination, booking.destination_id))
    return out


def _set_password(db: Session, email: str, new_password: str) -> None:
    """Set the permanent password on every record for the email and on the backing user account."""
    new_hash = hash_password(new_password)
    account = account_service.find_by_email(db, email, Role.USER)
    if account is not None:
        account.password_hash = new_hash
        account_kind(account).is_registered = True
    for c in _records(db, email):
        c.password_hash = new_hash
        c.temp_password_hash = None
        c.is_registered = True


def update_companion_profile(db: Session, companion_id: str, patch: dict) -> dict:
    c = get_companion(db, companion_id)
    if patch.get("firstName"):
        c.first_name = patch["firstName"].strip()
    if patch.get("lastName"):
        c.last_name = patch["lastName"].strip()
    if patch.get("phoneNumber") is not None:
        c.phone_number = patch["phoneNumber"]
    if patch.get("password"):
        _set_password(db, c.email, patch["password"])
    db.commit()
    db.refresh(c)
    return companion_out(c)


def change_companion_password(db: Session, companion_id: str, old_password: str, new_password: str) -> dict:
    c = get_companion(db, companion_id)
    if not (verify_password(old_password, c.password_hash) or verify_password(old_password, c.temp_password_hash)):
        raise ValidationError("Old password is incorrect")
    _set_password(db, c.email, new_password)
    db.commit()
    return {"message": "Password changed successfully"}


def complete_registration(db: Session, email: str, temp_password: str, new_password: str) -> dict:
    """Turn a temp-authenticated companion into a registered user and return a user session."""
    records = _records(db, email)
    matched = next((c for c in records if verify_password(temp_password, c.temp_password_hash)), None)
    if matched is None:
        raise ValidationError("Invalid email or temporary password")

    account = account_service.find_by_email(db, matched.email)
    if account is None:
        account = account_service.create_account(
            db, Role.USER, matched.first_name, matched.last_name, matched.email, new_password,
            phone_number=matched.phone_number,
        )
        db.flush()

    _set_password(db, matched.email, new_password)
    for c in records:
        c.account_id = account.id
    db.commit()
    db.refresh(account)
    logger.info("companion %s completed registration as account %s", matched.email, account.id)

    token = create_access_token(account.id, Role.USER.value)
    return {"account": account, "token": token}
