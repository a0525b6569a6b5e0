from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.api.files import IMAGE_TYPES, read_uploads
from app.db.session import get_db
from app.models.account import Account
from app.models.enums import Role
from app.schemas.account import AdminProfileUpdate, AdminUserUpdate
from app.services import account_service, blob_store, booking_service, dashboard_service
from app.services.serializers import account_out

router = APIRouter(tags=["admin"])


# -------------------------
# DASHBOARD
# -------------------------
@router.get("/admin/dashboard/stats")
def dashboard_stats(currency: str | None = None, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return dashboard_service.get_dashboard_stats(db, currency=currency)


@router.get("/admin/dashboard/bookings-per-day")
def bookings_per_day(days: int = 30, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return {"items": dashboard_service.bookings_per_day(db, days)}


@router.get("/admin/dashboard/users")
def list_users(page: int = 1, limit: int = 10, search: str | None = None,
               db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    rows, pagination = account_service.list_users(db, page, limit, search)
    return {"items": [account_out(a) for a in rows], "pagination": pagination}


# -------------------------
# PROFILES
# -------------------------
@router.get("/admin/profiles/user/{user_id}")
def get_user_profile(user_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return account_out(account_service.get_account(db, user_id, Role.USER))


@router.put("/admin/profiles/user/{user_id}")
def update_user_profile(user_id: str, body: AdminUserUpdate, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    account = account_service.get_account(db, user_id, Role.USER)
    account = account_service.update_profile(db, account, body.model_dump(exclude_unset=True))
    return {"message": "User profile updated successfully", "user": account_out(account)}


@router.get("/admin/profiles/user/{user_id}/bookings")
def get_user_with_bookings(user_id: str, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    out = booking_service.get_user_info_and_bookings(db, user_id)
    if out is None:
        raise HTTPException(status_code=404, detail="User not found")
    return out


@router.get("/admin/profiles/admin")
def get_own_profile(me: Account = Depends(require_admin)):
    return account_out(me)


@router.put("/admin/profiles/admin")
def update_own_profile(body: AdminProfileUpdate, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    account = account_service.update_profile(db, me, body.model_dump(exclude_unset=True))
    return {"message": "Profile updated successfully", "admin": account_out(account)}


@router.put("/admin/profiles/admin/picture")
def update_own_picture(file: UploadFile = File(...), db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    previous = (me.profile_picture or [None])[0]
    attachment = blob_store.upload_many(read_uploads([file], allowed=IMAGE_TYPES), folder="profile-pictures")[0]
    account = account_service.set_profile_picture(db, me, attachment)
    if previous:
        blob_store.delete_quietly(previous.get("key"))
    return {"message": "Profile picture updated successfully", "admin": account_out(account)}


# -------------------------
# MEDIA
# -------------------------
@router.post("/admin/upload-media")
def upload_media(files: list[UploadFile] = File(...), me: Account = Depends(require_admin)):
    """Store arbitrary media and hand back attachment descriptors for later use (e.g. review images)."""
    attachments = blob_store.upload_many(read_uploads(files, allowed=None), folder="media")
    return {"message": "Files uploaded successfully", "files": attachments}
