from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.api.files import read_uploads
from app.db.session import get_db
from app.models.account import Account
from app.schemas.booking import AddCompanionsIn, BookingCreate, BookingStatusIn, BookingUpdate
from app.services import booking_service, document_service

router = APIRouter(tags=["bookings"])


def _companions(items) -> list[dict]:
    return [c.model_dump(mode="json") for c in items or []]


@router.post("/admin/bookings", status_code=201)
def create_booking(body: BookingCreate, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    b = booking_service.create_booking(
        db,
        user_id=body.userId,
        destination_id=body.destinationId,
        travel_date=body.travelDate,
        return_date=body.returnDate,
        total_amount=body.totalAmount,
        booking_amount=body.bookingAmount,
        currency=body.currency.value,
        description=body.description,
        companions=_companions(body.companions),
    )
    return {"message": "Booking created successfully", "booking": booking_service.get_booking(db, b.id)}


@router.get("/admin/bookings")
def list_bookings(
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    packageName: str | None = None,
    destinationId: str | None = None,
    search: str | None = None,
    bookingType: str | None = None,
    isPrimary: bool | None = None,
    isActive: bool | None = True,
    db: Session = Depends(get_db),
    me: Account = Depends(require_admin),
):
    items, pagination = booking_service.get_all_bookings(
        db, page, limit,
        status=status,
        package_name=packageName,
        destination_id=destinationId,
        search=search,
        booking_type=bookingType,
        is_primary=isPrimary,
        is_active=isActive,
    )
    return {"items": items, "pagination": pagination}


@router.get("/admin/bookings/{booking_ref}")
def get_booking(booking_ref: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return booking_service.get_booking(db, booking_ref)


@router.patch("/admin/bookings/{booking_ref}")
def update_booking(booking_ref: str, body: BookingUpdate, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    patch = body.model_dump(exclude_unset=True, exclude={"companions"})
    if body.companions:
        patch["companions"] = _companions(body.companions)
    b = booking_service.update_booking(db, booking_ref, patch)
    return {"message": "Booking updated successfully", "booking": booking_service.get_booking(db, b.id)}


@router.put("/admin/bookings/{booking_ref}/status")
def update_booking_status(booking_ref: str, body: BookingStatusIn, db: Session = Depends(get_db),
                          me: Account = Depends(require_admin)):
    b = booking_service.update_booking_status(db, booking_ref, body.status.value)
    return {"message": "Booking status updated successfully", "booking": booking_service.get_booking(db, b.id)}


@router.delete("/admin/bookings/{booking_ref}")
def delete_booking(booking_ref: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    booking_service.delete_booking(db, booking_ref)
    return {"message": "Booking deleted successfully"}


# -------------------------
# COMPANIONS
# -------------------------
@router.post("/admin/bookings/{booking_ref}/companions")
def add_companions(booking_ref: str, body: AddCompanionsIn, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    b = booking_service.add_companions_to_booking(db, booking_ref, _companions(body.companions))
    return {"message": "Companions added successfully", "booking": booking_service.get_booking(db, b.id)}


@router.delete("/admin/bookings/{booking_ref}/companions/{companion_id}")
def remove_companion(booking_ref: str, companion_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    booking_service.remove_companion_from_booking(db, booking_ref, companion_id)
    return {"message": "Companion removed successfully"}


# -------------------------
# DOCUMENTS / ITINERARIES
# -------------------------
@router.post("/admin/documents/{booking_ref}/documents")
def upload_documents(booking_ref: str, documents: list[UploadFile] = File(...), db: Session = Depends(get_db),
                     me: Account = Depends(require_admin)):
    b = document_service.upload_documents(db, booking_ref, read_uploads(documents))
    return {"message": "Documents uploaded successfully", "documents": b.documents}


@router.post("/admin/documents/{booking_ref}/itineraries")
def upload_itineraries(booking_ref: str, itineraries: list[UploadFile] = File(...), db: Session = Depends(get_db),
                       me: Account = Depends(require_admin)):
    b = document_service.upload_itineraries(db, booking_ref, read_uploads(itineraries))
    return {"message": "Itineraries uploaded successfully", "itineraries": b.itineraries}


@router.delete("/admin/documents/{booking_ref}/documents/{index}")
def remove_document(booking_ref: str, index: int, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    b = document_service.remove_document(db, booking_ref, index)
    return {"message": "Document removed successfully", "documents": b.documents}


@router.delete("/admin/documents/{booking_ref}/itineraries/{index}")
def remove_itinerary(booking_ref: str, index: int, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    b = document_service.remove_itinerary(db, booking_ref, index)
    return {"message": "Itinerary removed successfully", "itineraries": b.itineraries}
