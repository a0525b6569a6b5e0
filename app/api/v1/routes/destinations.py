from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.db.session import get_db
from app.models.account import Account
from app.schemas.destination import DestinationBulkIn, DestinationIdsIn, DestinationIn, DestinationPatch
from app.services import destination_service
from app.services.serializers import destination_out

router = APIRouter(tags=["destinations"])


# -------------------------
# PUBLIC
# -------------------------
@router.get("/destinations")
def list_destinations(page: int = 1, limit: int = 10, search: str | None = None, db: Session = Depends(get_db)):
    rows, pagination = destination_service.list_paginated(db, page, limit, search)
    return {"items": [destination_out(d) for d in rows], "pagination": pagination}


@router.get("/destinations/all")
def list_all_destinations(db: Session = Depends(get_db)):
    """Every active destination, unpaginated, for pickers."""
    return {"items": [destination_out(d) for d in destination_service.list_active(db)]}


# -------------------------
# ADMIN
# -------------------------
@router.post("/admin/destinations", status_code=201)
def create_destination(body: DestinationIn, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    d = destination_service.create_destination(db, body.city, body.country)
    return {"message": "Destination created successfully", "destination": destination_out(d)}


@router.post("/admin/destinations/bulk", status_code=201)
def create_destinations(body: DestinationBulkIn, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    created, errors = destination_service.create_many(db, [(d.city, d.country) for d in body.destinations])
    return {
        "message": f"{len(created)} destinations created",
        "destinations": [destination_out(d) for d in created],
        "errors": errors,
    }


@router.post("/admin/destinations/bulk-delete")
def delete_destinations(body: DestinationIdsIn, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    deleted, errors = destination_service.delete_many(db, body.ids)
    return {"message": f"{deleted} destinations deleted", "deletedCount": deleted, "errors": errors}


@router.get("/admin/destinations/{destination_id}")
def get_destination(destination_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return destination_out(destination_service.get_destination(db, destination_id))


@router.put("/admin/destinations/{destination_id}")
def update_destination(destination_id: str, body: DestinationPatch, db: Session = Depends(get_db),
                       me: Account = Depends(require_admin)):
    d = destination_service.update_destination(db, destination_id, body.city, body.country)
    return {"message": "Destination updated successfully", "destination": destination_out(d)}


@router.delete("/admin/destinations/{destination_id}")
def delete_destination(destination_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    destination_service.delete_destination(db, destination_id)
    return {"message": "Destination deleted successfully"}
