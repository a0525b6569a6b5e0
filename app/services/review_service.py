import uuid
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.account import Account
from app.models.review import Review
from app.services.pagination import paginate
from app.services.serializers import review_out

logger = logging.getLogger(__name__)

_FIELDS = {"fullName": "full_name", "review": "review", "rating": "rating", "images": "images"}


def _get(db: Session, review_id: str) -> Review:
    r = db.get(Review, review_id)
    if not r:
        raise NotFoundError("Review not found")
    return r


def _own(db: Session, user_id: str, review_id: str) -> Review:
    r = db.get(Review, review_id)
    if not r or r.user_id != user_id:
        raise NotFoundError("Review not found")
    return r


def create_review(db: Session, user: Account, data: dict) -> Review:
    r = Review(
        id=str(uuid.uuid4()),
        user_id=user.id,
        full_name=data["fullName"].strip(),
        review=data["review"].strip(),
        rating=data["rating"],
        images=data.get("images") or [],
        is_active=True,
        is_approved=False,
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("review %s submitted by %s", r.id, user.id)
    return r


def list_user_reviews(db: Session, user_id: str, page: int = 1, limit: int = 10):
    q = db.query(Review).filter(Review.user_id == user_id).order_by(Review.created_at.desc())
    rows, pagination = paginate(q, page, limit)
    return [review_out(r) for r in rows], pagination


def update_user_review(db: Session, user_id: str, review_id: str, patch: dict) -> Review:
    """Edits go back into moderation."""
    r = _own(db, user_id, review_id)
    for key, attr in _FIELDS.items():
        if patch.get(key) is not None:
            setattr(r, attr, patch[key])
    r.is_approved = False
    db.commit()
    db.refresh(r)
    return r


def delete_user_review(db: Session, user_id: str, review_id: str) -> None:
    db.delete(_own(db, user_id, review_id))
    db.commit()


def list_public(db: Session, page: int = 1, limit: int = 10, rating: int | None = None):
    q = db.query(Review).filter(Review.is_approved == True, Review.is_active == True)
    if rating:
        q = q.filter(Review.rating == rating)
    rows, pagination = paginate(q.order_by(Review.created_at.desc()), page, limit)
    return [review_out(r) for r in rows], pagination


def get_public(db: Session, review_id: str) -> Review:
    r = db.get(Review, review_id)
    if not r or not r.is_approved or not r.is_active:
        raise NotFoundError("Review not found")
    return r


def list_all(db: Session, page: int = 1, limit: int = 10, is_approved: bool | None = None,
             is_active: bool | None = None, rating: int | None = None, search: str | None = None):
    q = db.query(Review, Account).outerjoin(Account, Account.id == Review.user_id)
    if is_approved is not None:
        q = q.filter(Review.is_approved == is_approved)
    if is_active is not None:
        q = q.filter(Review.is_active == is_active)
    if rating:
        q = q.filter(Review.rating == rating)
    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(Review.full_name.ilike(like), Review.review.ilike(like), Account.email.ilike(like)))
    rows, pagination = paginate(q.order_by(Review.created_at.desc()), page, limit)
    return [review_out(r, user=u) for r, u in rows], pagination


def get_review(db: Session, review_id: str) -> dict:
    r = _get(db, review_id)
    return review_out(r, user=db.get(Account, r.user_id))


def set_approval(db: Session, review_id: str, approved: bool) -> Review:
    r = _get(db, review_id)
    r.is_approved = approved
    db.commit()
    db.refresh(r)
    logger.info("review %s %s", r.id, "approved" if approved else "rejected")
    return r


def toggle_active(db: Session, review_id: str) -> Review:
    r = _get(db, review_id)
    r.is_active = not r.is_active
    db.commit()
    db.refresh(r)
    return r


def delete_review(db: Session, review_id: str) -> None:
    db.delete(_get(db, review_id))
    db.commit()


def review_stats(db: Session) -> dict:
    total = db.query(func.count(Review.id)).scalar() or 0
    approved = db.query(func.count(Review.id)).filter(Review.is_approved == True).scalar() or 0
    active = db.query(func.count(Review.id)).filter(Review.is_active == True).scalar() or 0
    avg = db.query(func.avg(Review.rating)).filter(Review.is_approved == True).scalar()
    counts = dict(db.query(Review.rating, func.count(Review.id)).group_by(Review.rating).all())
    return {
        "totalReviews": total,
        "approvedReviews": approved,
        "pendingReviews": total - approved,
        "activeReviews": active,
        "averageRating": round(float(avg), 2) if avg is not None else 0,
        "ratingDistribution": {str(n): int(counts.get(n, 0)) for n in range(1, 6)},
    }
