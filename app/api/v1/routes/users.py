from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import require_user
from app.api.files import IMAGE_TYPES, read_uploads
from app.db.session import get_db
from app.models.account import Account
from app.schemas.account import UserProfileUpdate
from app.schemas.review import ReviewIn, ReviewPatch
from app.services import account_service, blob_store, booking_service, review_service
from app.services.serializers import account_out, review_out

router = APIRouter(tags=["user"])


# -------------------------
# PROFILE
# -------------------------
@router.get("/user/profile")
def get_profile(me: Account = Depends(require_user)):
    return account_out(me)


@router.patch("/user/profile")
def update_profile(body: UserProfileUpdate, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    account = account_service.update_profile(db, me, body.model_dump(exclude_unset=True))
    return {"message": "Profile updated successfully", "user": account_out(account)}


@router.put("/user/profile/picture")
def update_profile_picture(file: UploadFile = File(...), db: Session = Depends(get_db), me: Account = Depends(require_user)):
    previous = (me.profile_picture or [None])[0]
    attachment = blob_store.upload_many(read_uploads([file], allowed=IMAGE_TYPES), folder="profile-pictures")[0]
    account = account_service.set_profile_picture(db, me, attachment)
    if previous:
        blob_store.delete_quietly(previous.get("key"))
    return {"message": "Profile picture updated successfully", "user": account_out(account)}


# -------------------------
# BOOKINGS
# -------------------------
@router.get("/user/bookings")
def list_my_bookings(page: int = 1, limit: int = 10, status: str | None = None, bookingType: str | None = None,
                     isPrimary: bool | None = None,
                     db: Session = Depends(get_db), me: Account = Depends(require_user)):
    items, pagination = booking_service.get_user_bookings(
        db, me.id, page, limit, status=status, booking_type=bookingType, is_primary=isPrimary,
    )
    return {"items": items, "pagination": pagination}


@router.get("/user/bookings/stats")
def my_booking_stats(db: Session = Depends(get_db), me: Account = Depends(require_user)):
    return booking_service.get_user_booking_stats(db, me.id)


@router.get("/user/bookings/{booking_ref}")
def get_my_booking(booking_ref: str, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    return booking_service.get_user_booking(db, me.id, booking_ref)


# -------------------------
# REVIEWS
# -------------------------
@router.post("/user/reviews", status_code=201)
def create_review(body: ReviewIn, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    r = review_service.create_review(db, me, body.model_dump())
    return {"message": "Review submitted for approval", "review": review_out(r)}


@router.get("/user/reviews/my-reviews")
def my_reviews(page: int = 1, limit: int = 10, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    items, pagination = review_service.list_user_reviews(db, me.id, page, limit)
    return {"items": items, "pagination": pagination}


@router.patch("/user/reviews/{review_id}")
def update_review(review_id: str, body: ReviewPatch, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    r = review_service.update_user_review(db, me.id, review_id, body.model_dump(exclude_unset=True))
    return {"message": "Review updated successfully", "review": review_out(r)}


@router.delete("/user/reviews/{review_id}")
def delete_review(review_id: str, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    review_service.delete_user_review(db, me.id, review_id)
    return {"message": "Review deleted successfully"}
