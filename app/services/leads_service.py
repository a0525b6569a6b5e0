"""Waitlist, newsletter and contact-form capture.

Every public submission sends a confirmation to the submitter and a notice to
ADMIN_NOTIFY_EMAIL. Both are best-effort.
"""
import uuid
import logging
from datetime import datetime, timezone

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.models.leads import ContactSubmission, NewsletterSubscription, WaitlistEntry
from app.services.email_service import notify
from app.services.pagination import paginate
from app.services.serializers import contact_out, newsletter_out, waitlist_out

logger = logging.getLogger(__name__)

_WAITLIST_FIELDS = {
    "name": "name",
    "email": "email",
    "phoneNumber": "phone_number",
    "tripType": "trip_type",
    "additionalInformation": "additional_information",
}
_CONTACT_FIELDS = {
    "fullName": "full_name",
    "email": "email",
    "dreamDestination": "dream_destination",
    "travelDate": "travel_date",
    "story": "story",
}


def _email(v: str) -> str:
    return (v or "").strip().lower()


def _apply(obj, patch: dict, fields: dict) -> None:
    for key, attr in fields.items():
        if patch.get(key) is not None:
            value = _email(patch[key]) if key == "email" else patch[key]
            setattr(obj, attr, value)


def _tally(rows) -> list[dict]:
    return [{"name": name, "count": int(n)} for name, n in rows]


# --- waitlist ---

def join_waitlist(db: Session, data: dict) -> WaitlistEntry:
    email = _email(data["email"])
    if db.query(WaitlistEntry.id).filter(WaitlistEntry.email == email, WaitlistEntry.is_active == True).first():
        raise ValidationError("Email already on the waitlist")
    w = WaitlistEntry(
        id=str(uuid.uuid4()),
        name=data["name"].strip(),
        email=email,
        phone_number=data["phoneNumber"],
        trip_type=data["tripType"],
        additional_information=data.get("additionalInformation") or "",
        is_active=True,
    )
    db.add(w)
    db.commit()
    db.refresh(w)
    logger.info("waitlist entry %s created", w.id)

    bag = waitlist_out(w)
    notify(db, w.email, "waitlistConfirmation", bag)
    notify(db, settings.ADMIN_NOTIFY_EMAIL, "waitlistNotification", bag)
    return w


def list_waitlist(db: Session, page: int = 1, limit: int = 10, trip_type: str | None = None,
                  search: str | None = None, is_active: bool | None = True):
    q = db.query(WaitlistEntry)
    if is_active is not None:
        q = q.filter(WaitlistEntry.is_active == is_active)
    if trip_type:
        q = q.filter(WaitlistEntry.trip_type.ilike(f"%{trip_type.strip()}%"))
    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(WaitlistEntry.name.ilike(like), WaitlistEntry.email.ilike(like)))
    rows, pagination = paginate(q.order_by(WaitlistEntry.created_at.desc()), page, limit)
    return [waitlist_out(w) for w in rows], pagination


def get_waitlist_entry(db: Session, entry_id: str) -> WaitlistEntry:
    w = db.get(WaitlistEntry, entry_id)
    if not w:
        raise NotFoundError("Waitlist entry not found")
    return w


def update_waitlist_entry(db: Session, entry_id: str, patch: dict) -> WaitlistEntry:
    w = get_waitlist_entry(db, entry_id)
    _apply(w, patch, _WAITLIST_FIELDS)
    db.commit()
    db.refresh(w)
    return w


def delete_waitlist_entry(db: Session, entry_id: str) -> None:
    get_waitlist_entry(db, entry_id).is_active = False
    db.commit()


def waitlist_stats(db: Session) -> dict:
    active = WaitlistEntry.is_active == True
    rows = (
        db.query(WaitlistEntry.trip_type, func.count(WaitlistEntry.id))
        .filter(active)
        .group_by(WaitlistEntry.trip_type)
        .order_by(func.count(WaitlistEntry.id).desc())
        .all()
    )
    return {
        "totalEntries": db.query(func.count(WaitlistEntry.id)).filter(active).scalar() or 0,
        "byTripType": _tally(rows),
    }


# --- newsletter ---

def subscribe(db: Session, email: str) -> NewsletterSubscription:
    email = _email(email)
    sub = db.query(NewsletterSubscription).filter(NewsletterSubscription.email == email).first()
    if sub and sub.is_active:
        raise ValidationError("Email already subscribed")
    if sub:
        sub.is_active = True
        sub.subscribed_at = datetime.now(timezone.utc)
        sub.unsubscribed_at = None
    else:
        sub = NewsletterSubscription(id=str(uuid.uuid4()), email=email, is_active=True)
        db.add(sub)
    db.commit()
    db.refresh(sub)

    notify(db, email, "newsletterConfirmation", {"email": email})
    notify(db, settings.ADMIN_NOTIFY_EMAIL, "newsletterNotification", {"email": email})
    return sub


def unsubscribe(db: Session, email: str) -> NewsletterSubscription:
    sub = db.query(NewsletterSubscription).filter(NewsletterSubscription.email == _email(email)).first()
    if not sub or not sub.is_active:
        raise NotFoundError("Subscription not found")
    sub.is_active = False
    sub.unsubscribed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(sub)
    return sub


def list_subscriptions(db: Session, page: int = 1, limit: int = 10, is_active: bool | None = None,
                       search: str | None = None):
    q = db.query(NewsletterSubscription)
    if is_active is not None:
        q = q.filter(NewsletterSubscription.is_active == is_active)
    if search and search.strip():
        q = q.filter(NewsletterSubscription.email.ilike(f"%{search.strip()}%"))
    rows, pagination = paginate(q.order_by(NewsletterSubscription.subscribed_at.desc()), page, limit)
    return [newsletter_out(n) for n in rows], pagination


def get_subscription(db: Session, subscription_id: str) -> NewsletterSubscription:
    sub = db.get(NewsletterSubscription, subscription_id)
    if not sub:
        raise NotFoundError("Subscription not found")
    return sub


def newsletter_stats(db: Session) -> dict:
    total = db.query(func.count(NewsletterSubscription.id)).scalar() or 0
    active = (
        db.query(func.count(NewsletterSubscription.id))
        .filter(NewsletterSubscription.is_active == True)
        .scalar()
        or 0
    )
    return {"totalSubscriptions": total, "activeSubscriptions": active, "unsubscribed": total - active}


# --- contact ---

def submit_contact(db: Session, data: dict) -> ContactSubmission:
    c = ContactSubmission(
        id=str(uuid.uuid4()),
        full_name=data["fullName"].strip(),
        email=_email(data["email"]),
        dream_destination=data["dreamDestination"].strip(),
        travel_date=data["travelDate"],
        story=data["story"],
        is_active=True,
    )
    db.add(c)
    db.commit()
    db.refresh(c)
    logger.info("contact submission %s received", c.id)

    bag = contact_out(c)
    notify(db, c.email, "contactConfirmation", bag)
    notify(db, settings.ADMIN_NOTIFY_EMAIL, "contactNotification", bag)
    return c


def list_contacts(db: Session, page: int = 1, limit: int = 10, dream_destination: str | None = None,
                  search: str | None = None, is_active: bool | None = True):
    q = db.query(ContactSubmission)
    if is_active is not None:
        q = q.filter(ContactSubmission.is_active == is_active)
    if dream_destination:
        q = q.filter(ContactSubmission.dream_destination.ilike(f"%{dream_destination.strip()}%"))
    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(
            ContactSubmission.full_name.ilike(like),
            ContactSubmission.email.ilike(like),
            ContactSubmission.story.ilike(like),
        ))
    rows, pagination = paginate(q.order_by(ContactSubmission.created_at.desc()), page, limit)
    return [contact_out(c) for c in rows], pagination


def get_contact(db: Session, contact_id: str) -> ContactSubmission:
    c = db.get(ContactSubmission, contact_id)
    if not c:
        raise NotFoundError("Contact submission not found")
    return c


def update_contact(db: Session, contact_id: str, patch: dict) -> ContactSubmission:
    c = get_contact(db, contact_id)
    _apply(c, patch, _CONTACT_FIELDS)
    db.commit()
    db.refresh(c)
    return c


def delete_contact(db: Session, contact_id: str) -> None:
    get_contact(db, contact_id).is_active = False
    db.commit()


def contact_stats(db: Session) -> dict:
    active = ContactSubmission.is_active == True
    rows = (
        db.query(ContactSubmission.dream_destination, func.count(ContactSubmission.id))
        .filter(active)
        .group_by(ContactSubmission.dream_destination)
        .order_by(func.count(ContactSubmission.id).desc())
        .all()
    )
    return {
        "totalSubmissions": db.query(func.count(ContactSubmission.id)).filter(active).scalar() or 0,
        "byDreamDestination": _tally(rows),
    }
