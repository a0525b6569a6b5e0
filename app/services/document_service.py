import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.booking import Booking
from app.services import blob_store
from app.services.booking_service import get_booking_record, package_mirrors, primary_of

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
    "image/gif",
    "text/plain",
}

_LABEL = {"documents": "document", "itineraries": "itinerary"}


def _package(db: Session, booking_ref: str) -> list[Booking]:
    primary = primary_of(db, get_booking_record(db, booking_ref))
    return [primary, *package_mirrors(db, primary)]


def _append(db: Session, booking_ref: str, files: list[blob_store.UploadFile], field: str) -> Booking:
    if not files:
        raise ValidationError("No files uploaded")
    package = _package(db, booking_ref)
    # upload before touching any row; a failed upload aborts the request
    attachments = blob_store.upload_many(files, folder=field)
    for b in package:
        setattr(b, field, [*(getattr(b, field) or []), *attachments])
    db.commit()
    db.refresh(package[0])
    logger.info("%d %s added to package %s", len(attachments), field, package[0].package_name)
    return package[0]


def _remove(db: Session, booking_ref: str, index: int, field: str) -> Booking:
    package = _package(db, booking_ref)
    items = list(getattr(package[0], field) or [])
    if index < 0 or index >= len(items):
        raise ValidationError(f"Invalid {_LABEL[field]} index")
    removed = items.pop(index)
    for b in package:
        setattr(b, field, [i for i in (getattr(b, field) or []) if i != removed])
    db.commit()
    blob_store.delete_quietly(removed.get("key"))
    db.refresh(package[0])
    return package[0]


def upload_documents(db: Session, booking_ref: str, files: list[blob_store.UploadFile]) -> Booking:
    return _append(db, booking_ref, files, "documents")


def upload_itineraries(db: Session, booking_ref: str, files: list[blob_store.UploadFile]) -> Booking:
    return _append(db, booking_ref, files, "itineraries")


def remove_document(db: Session, booking_ref: str, index: int) -> Booking:
    return _remove(db, booking_ref, index, "documents")


def remove_itinerary(db: Session, booking_ref: str, index: int) -> Booking:
    return _remove(db, booking_ref, index, "itineraries")
