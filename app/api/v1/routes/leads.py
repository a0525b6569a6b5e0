from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.db.session import get_db
from app.models.account import Account
from app.schemas.leads import ContactIn, ContactPatch, NewsletterIn, WaitlistIn, WaitlistPatch
from app.services import leads_service
from app.services.serializers import contact_out, newsletter_out, waitlist_out

router = APIRouter(tags=["leads"])


# -------------------------
# WAITLIST
# -------------------------
@router.post("/waitlist", status_code=201)
def join_waitlist(body: WaitlistIn, db: Session = Depends(get_db)):
    w = leads_service.join_waitlist(db, body.model_dump())
    return {"message": "Successfully joined the waitlist", "entry": waitlist_out(w)}


@router.get("/admin/waitlist")
def list_waitlist(page: int = 1, limit: int = 10, tripType: str | None = None, search: str | None = None,
                  isActive: bool | None = True, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    items, pagination = leads_service.list_waitlist(db, page, limit, tripType, search, isActive)
    return {"items": items, "pagination": pagination}


@router.get("/admin/waitlist/stats")
def waitlist_stats(db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return leads_service.waitlist_stats(db)


@router.get("/admin/waitlist/{entry_id}")
def get_waitlist_entry(entry_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return waitlist_out(leads_service.get_waitlist_entry(db, entry_id))


@router.put("/admin/waitlist/{entry_id}")
def update_waitlist_entry(entry_id: str, body: WaitlistPatch, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    w = leads_service.update_waitlist_entry(db, entry_id, body.model_dump(exclude_unset=True))
    return {"message": "Waitlist entry updated", "entry": waitlist_out(w)}


@router.delete("/admin/waitlist/{entry_id}")
def delete_waitlist_entry(entry_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    leads_service.delete_waitlist_entry(db, entry_id)
    return {"message": "Waitlist entry removed"}


# -------------------------
# NEWSLETTER
# -------------------------
@router.post("/newsletter/subscribe", status_code=201)
def subscribe(body: NewsletterIn, db: Session = Depends(get_db)):
    return {"message": "Successfully subscribed to the newsletter", "subscription": newsletter_out(leads_service.subscribe(db, body.email))}


@router.post("/newsletter/unsubscribe")
def unsubscribe(body: NewsletterIn, db: Session = Depends(get_db)):
    return {"message": "Successfully unsubscribed", "subscription": newsletter_out(leads_service.unsubscribe(db, body.email))}


@router.get("/admin/newsletter")
def list_subscriptions(page: int = 1, limit: int = 10, isActive: bool | None = None, search: str | None = None,
                       db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    items, pagination = leads_service.list_subscriptions(db, page, limit, isActive, search)
    return {"items": items, "pagination": pagination}


@router.get("/admin/newsletter/stats")
def newsletter_stats(db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return leads_service.newsletter_stats(db)


@router.get("/admin/newsletter/{subscription_id}")
def get_subscription(subscription_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return newsletter_out(leads_service.get_subscription(db, subscription_id))


# -------------------------
# CONTACT
# -------------------------
@router.post("/contact", status_code=201)
def submit_contact(body: ContactIn, db: Session = Depends(get_db)):
    c = leads_service.submit_contact(db, body.model_dump())
    return {"message": "Thank you for reaching out", "submission": contact_out(c)}


@router.get("/admin/contact")
def list_contacts(page: int = 1, limit: int = 10, dreamDestination: str | None = None, search: str | None = None,
                  isActive: bool | None = True, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    items, pagination = leads_service.list_contacts(db, page, limit, dreamDestination, search, isActive)
    return {"items": items, "pagination": pagination}


@router.get("/admin/contact/stats")
def contact_stats(db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return leads_service.contact_stats(db)


@router.get("/admin/contact/{contact_id}")
def get_contact(contact_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return contact_out(leads_service.get_contact(db, contact_id))


@router.put("/admin/contact/{contact_id}")
def update_contact(contact_id: str, body: ContactPatch, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    c = leads_service.update_contact(db, contact_id, body.model_dump(exclude_unset=True))
    return {"message": "Contact submission updated", "submission": contact_out(c)}


@router.delete("/admin/contact/{contact_id}")
def delete_contact(contact_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    leads_service.delete_contact(db, contact_id)
    return {"message": "Contact submission removed"}
