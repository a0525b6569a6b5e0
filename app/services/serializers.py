"""camelCase response shapes. Secrets (hashes, OTPs) never leave through here."""
from datetime import date, datetime

from app.models.account import Account
from app.models.booking import Booking
from app.models.companion import Companion
from app.models.destination import Destination
from app.models.leads import ContactSubmission, NewsletterSubscription, WaitlistEntry
from app.models.review import Review
from app.models.enums import Role


def _iso(v: date | datetime | None) -> str | None:
    return v.isoformat() if v else None


def _money(v) -> float:
    return float(v or 0)


def account_out(a: Account) -> dict:
    out = {
        "id": a.id,
        "firstName": a.first_name,
        "lastName": a.last_name,
        "email": a.email,
        "role": a.role,
        "profilePicture": a.profile_picture or [],
        "isActive": a.is_active,
        "createdAt": _iso(a.created_at),
    }
    if a.role == Role.USER.value and a.user_profile is not None:
        p = a.user_profile
        out.update({
            "gender": p.gender or "",
            "phoneNumber": p.phone_number or "",
            "dateOfBirth": _iso(p.date_of_birth),
            "maritalStatus": p.marital_status,
            "anniversaryDate": _iso(p.anniversary_date),
            "address": p.address or "",
            "instagramUsername": p.instagram_username or "",
            "isVerified": bool(p.is_verified),
            "isRegistered": bool(p.is_registered),
            "twoFactorEnabled": bool(p.two_factor_enabled),
        })
    elif a.role == Role.ADMIN.value and a.admin_profile is not None:
        p = a.admin_profile
        out.update({
            "gender": p.gender or "",
            "phoneNumber": p.phone_number or "",
            "address": p.address or "",
        })
    return out


def account_brief(a: Account | None) -> dict | None:
    if a is None:
        return None
    return {"id": a.id, "firstName": a.first_name, "lastName": a.last_name, "email": a.email}


def destination_out(d: Destination | None) -> dict | None:
    if d is None:
        return None
    return {
        "id": d.id,
        "city": d.city,
        "country": d.country,
        "isActive": d.is_active,
        "createdAt": _iso(d.created_at),
    }


def companion_out(c: Companion) -> dict:
    return {
        "id": c.id,
        "firstName": c.first_name,
        "lastName": c.last_name,
        "email": c.email,
        "phoneNumber": c.phone_number,
        "relationship": c.relationship,
        "isRegistered": c.is_registered,
        "userId": c.user_id,
        "bookingId": c.booking_id,
        "accountId": c.account_id,
        "bookingStatus": c.booking_status,
        "createdAt": _iso(c.created_at),
    }


def booking_out(b: Booking, user: Account | None = None, destination: Destination | None = None,
                companions: list[Companion] | None = None) -> dict:
    out = {
        "id": b.id,
        "bookingId": b.booking_id,
        "packageName": b.package_name,
        "userId": b.user_id,
        "destinationId": b.destination_id,
        "travelDate": _iso(b.travel_date),
        "returnDate": _iso(b.return_date),
        "bookingDate": _iso(b.booking_date),
        "totalAmount": _money(b.total_amount),
        "bookingAmount": _money(b.booking_amount),
        "currency": b.currency,
        "description": b.description or "",
        "status": b.status,
        "documents": b.documents or [],
        "itineraries": b.itineraries or [],
        "isPrimary": b.is_primary,
        "isActive": b.is_active,
        "createdAt": _iso(b.created_at),
    }
    if user is not None:
        out["user"] = account_brief(user)
    if destination is not None:
        out["destination"] = destination_out(destination)
    if companions is not None:
        out["companions"] = [companion_out(c) for c in companions]
    return out


def review_out(r: Review, user: Account | None = None) -> dict:
    out = {
        "id": r.id,
        "userId": r.user_id,
        "fullName": r.full_name,
        "review": r.review,
        "rating": r.rating,
        "images": r.images or [],
        "isActive": r.is_active,
        "isApproved": r.is_approved,
        "createdAt": _iso(r.created_at),
    }
    if user is not None:
        out["user"] = account_brief(user)
    return out


def waitlist_out(w: WaitlistEntry) -> dict:
    return {
        "id": w.id,
        "name": w.name,
        "email": w.email,
        "phoneNumber": w.phone_number,
        "tripType": w.trip_type,
        "additionalInformation": w.additional_information or "",
        "isActive": w.is_active,
        "createdAt": _iso(w.created_at),
    }


def newsletter_out(n: NewsletterSubscription) -> dict:
    return {
        "id": n.id,
        "email": n.email,
        "isActive": n.is_active,
        "subscribedAt": _iso(n.subscribed_at),
        "unsubscribedAt": _iso(n.unsubscribed_at),
    }


def contact_out(c: ContactSubmission) -> dict:
    return {
        "id": c.id,
        "fullName": c.full_name,
        "email": c.email,
        "dreamDestination": c.dream_destination,
        "travelDate": _iso(c.travel_date),
        "story": c.story,
        "isActive": c.is_active,
        "createdAt": _iso(c.created_at),
    }
