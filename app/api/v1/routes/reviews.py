from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.db.session import get_db
from app.models.account import Account
from app.services import review_service
from app.services.serializers import review_out

router = APIRouter(tags=["reviews"])


# -------------------------
# PUBLIC
# -------------------------
@router.get("/reviews")
def list_reviews(page: int = 1, limit: int = 10, rating: int | None = None, db: Session = Depends(get_db)):
    """Approved, active reviews only."""
    items, pagination = review_service.list_public(db, page, limit, rating)
    return {"items": items, "pagination": pagination}


@router.get("/reviews/stats")
def public_review_stats(db: Session = Depends(get_db)):
    return review_service.review_stats(db)


@router.get("/reviews/{review_id}")
def get_review(review_id: str, db: Session = Depends(get_db)):
    return review_out(review_service.get_public(db, review_id))


# -------------------------
# ADMIN MODERATION
# -------------------------
@router.get("/admin/reviews")
def admin_list_reviews(page: int = 1, limit: int = 10, isApproved: bool | None = None, isActive: bool | None = None,
                       rating: int | None = None, search: str | None = None,
                       db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    items, pagination = review_service.list_all(
        db, page, limit, is_approved=isApproved, is_active=isActive, rating=rating, search=search,
    )
    return {"items": items, "pagination": pagination}


@router.get("/admin/reviews/stats")
def admin_review_stats(db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return review_service.review_stats(db)


@router.get("/admin/reviews/{review_id}")
def admin_get_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return review_service.get_review(db, review_id)


@router.patch("/admin/reviews/{review_id}/approve")
def approve_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return {"message": "Review approved", "review": review_out(review_service.set_approval(db, review_id, True))}


@router.patch("/admin/reviews/{review_id}/reject")
def reject_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return {"message": "Review rejected", "review": review_out(review_service.set_approval(db, review_id, False))}


@router.patch("/admin/reviews/{review_id}/toggle-active")
def toggle_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    r = review_service.toggle_active(db, review_id)
    return {"message": "Review activated" if r.is_active else "Review deactivated", "review": review_out(r)}


@router.delete("/admin/reviews/{review_id}")
def delete_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    review_service.delete_review(db, review_id)
    return {"message": "Review deleted successfully"}
