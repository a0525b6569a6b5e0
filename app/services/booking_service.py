import uuid
import time
import random
import secrets
import string
import logging
from collections import defaultdict
from datetime import date

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ServiceError, ValidationError
from app.core.security import generate_temp_password, hash_password
from app.models.account import Account, account_kind
from app.models.booking import Booking
from app.models.companion import Companion
from app.models.destination import Destination
from app.models.enums import BookingStatus, Role
from app.services import account_service
from app.services.email_service import notify
from app.services.pagination import paginate
from app.services.serializers import account_out, booking_out

logger = logging.getLogger(__name__)

_B36 = string.digits + string.ascii_uppercase

# request field -> Booking attribute
_TRIP_FIELDS = {
    "destinationId": "destination_id",
    "travelDate": "travel_date",
    "returnDate": "return_date",
    "totalAmount": "total_amount",
    "bookingAmount": "booking_amount",
    "currency": "currency",
    "description": "description",
    "status": "status",
}


def _base36(n: int) -> str:
    out = ""
    while n:
        n, r = divmod(n, 36)
        out = _B36[r] + out
    return out or "0"


def make_reference(prefix: str) -> str:
    ts = _base36(int(time.time() * 1000))
    return f"{prefix}-{ts}-" + "".join(random.choices(string.ascii_uppercase + string.digits, k=5))


def _allocate(db: Session, prefix: str, column) -> str:
    # must be unique across all records
    for _ in range(10):
        ref = make_reference(prefix)
        if not db.query(Booking.id).filter(column == ref).first():
            return ref
    raise ServiceError("could not allocate booking reference")


def _status_value(status) -> str:
    try:
        return BookingStatus(getattr(status, "value", status)).value
    except ValueError:
        raise ValidationError(f"Invalid booking status: {status}")


def _check_trip(travel_date: date, return_date: date, total_amount, booking_amount) -> None:
    if return_date < travel_date:
        raise ValidationError("Return date cannot be before travel date")
    if float(booking_amount or 0) > float(total_amount or 0):
        raise ValidationError("Booking amount cannot exceed total amount")


def get_booking_record(db: Session, booking_ref: str) -> Booking:
    """Resolve by internal id or public booking id. Inactive records are returned too."""
    b = db.get(Booking, booking_ref)
    if not b:
        b = db.query(Booking).filter(Booking.booking_id == (booking_ref or "").upper()).first()
    if not b:
        raise NotFoundError("Booking not found")
    return b


def primary_of(db: Session, booking: Booking) -> Booking:
    if booking.is_primary:
        return booking
    primary = (
        db.query(Booking)
        .filter(Booking.package_name == booking.package_name, Booking.is_primary == True)
        .first()
    )
    if not primary:
        raise NotFoundError("Primary booking not found")
    return primary


def package_mirrors(db: Session, primary: Booking, active_only: bool = True) -> list[Booking]:
    q = db.query(Booking).filter(
        Booking.package_name == primary.package_name,
        Booking.is_primary == False,
        Booking.id != primary.id,
    )
    if active_only:
        q = q.filter(Booking.is_active == True)
    return q.all()


def _mirror_for(db: Session, primary: Booking, account_id: str) -> Booking | None:
    return (
        db.query(Booking)
        .filter(
            Booking.package_name == primary.package_name,
            Booking.user_id == account_id,
            Booking.is_primary == False,
        )
        .first()
    )


def _copy_trip(src: Booking, dst: Booking) -> None:
    dst.package_name = src.package_name
    dst.destination_id = src.destination_id
    dst.travel_date = src.travel_date
    dst.return_date = src.return_date
    dst.total_amount = src.total_amount
    dst.booking_amount = src.booking_amount
    dst.currency = src.currency
    dst.description = src.description
    dst.status = src.status
    dst.documents = list(src.documents or [])
    dst.itineraries = list(src.itineraries or [])


def _prepare_companions(db: Session, owner: Account, companions: list[dict]) -> list[tuple[dict, Account | None]]:
    """Validate every entry before anything is written; collapse duplicate emails."""
    by_email: dict[str, dict] = {}
    for c in companions:
        email = (c.get("email") or "").strip().lower()
        if not email:
            raise ValidationError("Companion email is required")
        if email == owner.email.lower():
            raise ConflictError("Companion email cannot be the same as the primary traveler's email")
        by_email[email] = {**c, "email": email}

    prepared = []
    for email, c in by_email.items():
        existing = account_service.find_by_email(db, email)
        if existing is not None and existing.role != Role.USER.value:
            raise ConflictError(f"{email} belongs to an account that cannot travel as a companion")
        prepared.append((c, existing))
    return prepared


def _trip_data(primary: Booking, owner: Account, destination: Destination | None) -> dict:
    return {
        "primaryName": owner.full_name,
        "packageName": primary.package_name,
        "bookingId": primary.booking_id,
        "destination": f"{destination.city.title()}, {destination.country.title()}" if destination else "",
        "travelDate": primary.travel_date.isoformat() if primary.travel_date else "",
        "description": primary.description or "",
    }


def _attach(db: Session, primary: Booking, owner: Account, destination: Destination | None,
            prepared: list[tuple[dict, Account | None]]) -> list[Companion]:
    """Each companion is one idempotent unit keyed by (primary booking, email), committed on its own."""
    attached = []
    for c, account in prepared:
        email = c["email"]
        temp_password = None

        if account is None:
            temp_password = generate_temp_password()
            account = account_service.create_account(
                db, Role.USER, c["firstName"], c["lastName"], email, secrets.token_urlsafe(32),
                phone_number=c.get("phoneNumber") or "", is_registered=False,
            )
            db.flush()
        else:
            account.first_name = c["firstName"].strip()
            account.last_name = c["lastName"].strip()
            if c.get("phoneNumber"):
                account_kind(account).phone_number = c["phoneNumber"]

        companion = (
            db.query(Companion)
            .filter(Companion.email == email, Companion.booking_id == primary.id)
            .first()
        )
        if companion is None:
            companion = Companion(
                id=str(uuid.uuid4()),
                email=email,
                user_id=primary.user_id,
                booking_id=primary.id,
                is_registered=bool(account.user_profile and account.user_profile.is_registered),
            )
            db.add(companion)
        companion.first_name = c["firstName"].strip()
        companion.last_name = c["lastName"].strip()
        companion.phone_number = c.get("phoneNumber") or ""
        companion.relationship = getattr(c.get("relationship"), "value", c.get("relationship")) or "other"
        companion.account_id = account.id
        companion.booking_status = primary.status
        if temp_password:
            companion.temp_password_hash = hash_password(temp_password)
            companion.is_registered = False

        mirror = _mirror_for(db, primary, account.id)
        if mirror is None:
            mirror = Booking(
                id=str(uuid.uuid4()),
                booking_id=_allocate(db, "ID", Booking.booking_id),
                user_id=account.id,
                is_primary=False,
            )
            db.add(mirror)
        _copy_trip(primary, mirror)
        mirror.is_active = True

        db.commit()
        attached.append(companion)
        logger.info("companion %s attached to booking %s", companion.id, primary.booking_id)

        data = {**_trip_data(primary, owner, destination), "companionName": companion.full_name, "email": email}
        if temp_password:
            notify(db, email, "companionWelcome", {**data, "tempPassword": temp_password}, related_booking_ref=primary.booking_id)
        else:
            notify(db, email, "companionAdded", data, related_booking_ref=primary.booking_id)
    return attached


def create_booking(db: Session, user_id: str, destination_id: str, travel_date: date, return_date: date,
                   total_amount: float, booking_amount: float, currency: str = "naira", description: str = "",
                   companions: list[dict] | None = None) -> Booking:
    user = db.get(Account, user_id)
    if not user or user.role != Role.USER.value:
        raise NotFoundError("User not found")
    destination = db.get(Destination, destination_id)
    if not destination or not destination.is_active:
        raise NotFoundError("Destination not found")
    _check_trip(travel_date, return_date, total_amount, booking_amount)
    prepared = _prepare_companions(db, user, companions or [])

    booking = Booking(
        id=str(uuid.uuid4()),
        booking_id=_allocate(db, "ID", Booking.booking_id),
        package_name=_allocate(db, "TB", Booking.package_name),
        user_id=user.id,
        destination_id=destination.id,
        travel_date=travel_date,
        return_date=return_date,
        total_amount=total_amount,
        booking_amount=booking_amount,
        currency=getattr(currency, "value", currency),
        description=description or "",
        status=BookingStatus.PENDING.value,
        documents=[],
        itineraries=[],
        is_primary=True,
        is_active=True,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("booking %s created for user %s", booking.booking_id, user.id)

    if prepared:
        _attach(db, booking, user, destination, prepared)
        db.refresh(booking)
    return booking


def _active_primary(db: Session, booking_ref: str, not_primary_message: str) -> tuple[Booking, Account]:
    booking = get_booking_record(db, booking_ref)
    if not booking.is_active:
        raise NotFoundError("Booking not found")
    if not booking.is_primary:
        raise ValidationError(not_primary_message)
    owner = db.get(Account, booking.user_id)
    if not owner:
        raise NotFoundError("User not found")
    return booking, owner


def add_companions_to_booking(db: Session, booking_ref: str, companions: list[dict]) -> Booking:
    booking, owner = _active_primary(db, booking_ref, "Companions can only be added to a primary booking")
    prepared = _prepare_companions(db, owner, companions)
    _attach(db, booking, owner, db.get(Destination, booking.destination_id), prepared)
    db.refresh(booking)
    return booking


def remove_companion_from_booking(db: Session, booking_ref: str, companion_id: str) -> None:
    booking = get_booking_record(db, booking_ref)
    companion = db.get(Companion, companion_id)
    if not companion or companion.booking_id != booking.id:
        raise NotFoundError("Companion not found")
    if companion.account_id:
        mirror = _mirror_for(db, booking, companion.account_id)
        if mirror:
            mirror.is_active = False
    db.delete(companion)
    db.commit()
    logger.info("companion %s removed from booking %s", companion_id, booking.booking_id)


def update_booking(db: Session, booking_ref: str, patch: dict) -> Booking:
    """Patch a primary booking and its mirrors. Nothing is written unless every companion validates."""
    booking, owner = _active_primary(
        db, booking_ref, "Companion bookings follow their primary booking; update the primary instead",
    )
    patch = {k: v for k, v in patch.items() if v is not None}
    prepared = _prepare_companions(db, owner, patch.pop("companions", None) or [])

    if "destinationId" in patch:
        d = db.get(Destination, patch["destinationId"])
        if not d or not d.is_active:
            raise NotFoundError("Destination not found")
    if "status" in patch:
        patch["status"] = _status_value(patch["status"])

    _check_trip(
        patch.get("travelDate", booking.travel_date),
        patch.get("returnDate", booking.return_date),
        patch.get("totalAmount", booking.total_amount),
        patch.get("bookingAmount", booking.booking_amount),
    )

    for key, attr in _TRIP_FIELDS.items():
        if key in patch:
            setattr(booking, attr, getattr(patch[key], "value", patch[key]))
    for mirror in package_mirrors(db, booking):
        _copy_trip(booking, mirror)
    if "status" in patch:
        for c in db.query(Companion).filter(Companion.booking_id == booking.id).all():
            c.booking_status = booking.status
    db.commit()

    if prepared:
        _attach(db, booking, owner, db.get(Destination, booking.destination_id), prepared)
    db.refresh(booking)
    return booking


def update_booking_status(db: Session, booking_ref: str, status) -> Booking:
    status = _status_value(status)
    booking = primary_of(db, get_booking_record(db, booking_ref))
    previous = booking.status
    booking.status = status
    for mirror in package_mirrors(db, booking):
        mirror.status = status
    for c in db.query(Companion).filter(Companion.booking_id == booking.id).all():
        c.booking_status = status
    db.commit()
    db.refresh(booking)
    logger.info("booking %s status %s -> %s", booking.booking_id, previous, status)

    if previous != status:
        owner = db.get(Account, booking.user_id)
        if owner:
            notify(db, owner.email, "bookingStatusChanged", {
                "name": owner.first_name, "bookingId": booking.booking_id,
                "packageName": booking.package_name, "status": status,
            }, related_booking_ref=booking.booking_id)
    return booking


def delete_booking(db: Session, booking_ref: str) -> None:
    booking = get_booking_record(db, booking_ref)
    booking.is_active = False
    if booking.is_primary:
        for mirror in package_mirrors(db, booking):
            mirror.is_active = False
    db.commit()
    logger.info("booking %s soft-deleted", booking.booking_id)


def _companions_by_booking(db: Session, booking_ids: list[str]) -> dict[str, list[Companion]]:
    grouped = defaultdict(list)
    if booking_ids:
        rows = (
            db.query(Companion)
            .filter(Companion.booking_id.in_(booking_ids))
            .order_by(Companion.created_at.asc())
            .all()
        )
        for c in rows:
            grouped[c.booking_id].append(c)
    return grouped


def _serialize_rows(db: Session, rows) -> list[dict]:
    """rows: (Booking, Account|None, Destination|None) tuples."""
    companions = _companions_by_booking(db, [b.id for b, _, _ in rows if b.is_primary])
    return [
        booking_out(b, user=u, destination=d, companions=companions.get(b.id, []) if b.is_primary else None)
        for b, u, d in rows
    ]


def _populated_query(db: Session):
    return (
        db.query(Booking, Account, Destination)
        .outerjoin(Account, Account.id == Booking.user_id)
        .outerjoin(Destination, Destination.id == Booking.destination_id)
    )


def _apply_type_filter(q, booking_type: str | None, is_primary: bool | None):
    if booking_type == "primary":
        q = q.filter(Booking.is_primary == True)
    elif booking_type == "companion":
        q = q.filter(Booking.is_primary == False)
    elif booking_type:
        raise ValidationError("bookingType must be 'primary' or 'companion'")
    if is_primary is not None:
        q = q.filter(Booking.is_primary == is_primary)
    return q


def get_all_bookings(db: Session, page: int = 1, limit: int = 10, status: str | None = None,
                     package_name: str | None = None, destination_id: str | None = None,
                     search: str | None = None, booking_type: str | None = None,
                     is_primary: bool | None = None, is_active: bool | None = True) -> tuple[list[dict], dict]:
    q = _populated_query(db)
    if is_active is not None:
        q = q.filter(Booking.is_active == is_active)
    if status:
        q = q.filter(Booking.status == _status_value(status))
    if package_name:
        q = q.filter(Booking.package_name.ilike(f"%{package_name.strip()}%"))
    if destination_id:
        q = q.filter(Booking.destination_id == destination_id)
    q = _apply_type_filter(q, booking_type, is_primary)
    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(
            Booking.booking_id.ilike(like),
            Booking.package_name.ilike(like),
            Booking.description.ilike(like),
            Account.first_name.ilike(like),
            Account.last_name.ilike(like),
            Account.email.ilike(like),
        ))
    rows, pagination = paginate(q.order_by(Booking.created_at.desc(), Booking.id), page, limit)
    return _serialize_rows(db, rows), pagination


def get_booking(db: Session, booking_ref: str) -> dict:
    b = get_booking_record(db, booking_ref)
    primary = primary_of(db, b)
    user = db.get(Account, b.user_id)
    destination = db.get(Destination, b.destination_id)
    companions = _companions_by_booking(db, [primary.id]).get(primary.id, [])
    return booking_out(b, user=user, destination=destination, companions=companions)


def get_user_info_and_bookings(db: Session, user_id: str) -> dict | None:
    user = db.get(Account, user_id)
    if not user or user.role != Role.USER.value:
        return None
    rows = (
        _populated_query(db)
        .filter(Booking.user_id == user.id, Booking.is_active == True)
        .order_by(Booking.created_at.desc())
        .all()
    )
    return {"user": account_out(user), "bookings": _serialize_rows(db, rows)}


def get_user_bookings(db: Session, user_id: str, page: int = 1, limit: int = 10, status: str | None = None,
                      booking_type: str | None = None, is_primary: bool | None = None) -> tuple[list[dict], dict]:
    q = _populated_query(db).filter(Booking.user_id == user_id, Booking.is_active == True)
    if status:
        q = q.filter(Booking.status == _status_value(status))
    q = _apply_type_filter(q, booking_type, is_primary)
    rows, pagination = paginate(q.order_by(Booking.created_at.desc(), Booking.id), page, limit)
    pagination["totalBookings"] = pagination["totalItems"]
    return _serialize_rows(db, rows), pagination


def get_user_booking(db: Session, user_id: str, booking_ref: str) -> dict:
    b = db.query(Booking).filter(
        or_(Booking.id == booking_ref, Booking.booking_id == (booking_ref or "").upper()),
        Booking.user_id == user_id,
        Booking.is_active == True,
    ).first()
    if not b:
        raise NotFoundError("Booking not found")
    return get_booking(db, b.id)


def get_user_booking_stats(db: Session, user_id: str) -> dict:
    base = db.query(Booking).filter(Booking.user_id == user_id, Booking.is_active == True)
    status_rows = (
        db.query(Booking.status, func.count(Booking.id))
        .filter(Booking.user_id == user_id, Booking.is_active == True)
        .group_by(Booking.status)
        .all()
    )
    return {
        "totalBookings": base.count(),
        "primaryBookings": base.filter(Booking.is_primary == True).count(),
        "companionBookings": base.filter(Booking.is_primary == False).count(),
        "statusStats": [{"status": s, "count": int(n)} for s, n in status_rows],
    }
