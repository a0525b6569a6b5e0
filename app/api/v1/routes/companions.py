from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_companion
from app.api.v1.routes.auth import clear_auth_cookie, set_auth_cookie
from app.core.config import settings
from app.db.session import get_db
from app.models.companion import Companion
from app.schemas.auth import ChangePasswordRequest, CompanionLoginRequest, CompleteRegistrationRequest
from app.schemas.companion import CompanionProfileUpdate
from app.services import companion_service
from app.services.serializers import account_out

router = APIRouter(tags=["companions"])


@router.post("/companion/login")
def companion_login(body: CompanionLoginRequest, response: Response, db: Session = Depends(get_db)):
    out = companion_service.companion_login(db, body.email, body.password)
    ttl = settings.TEMP_TOKEN_EXPIRE_MINUTES if out["requiresPasswordChange"] else settings.COMPANION_TOKEN_EXPIRE_MINUTES
    set_auth_cookie(response, out["token"], max_age_minutes=ttl)
    return {"message": "Login successful", **out}


@router.post("/companion/complete-registration")
def complete_registration(body: CompleteRegistrationRequest, response: Response, db: Session = Depends(get_db)):
    out = companion_service.complete_registration(db, body.email, body.tempPassword, body.newPassword)
    set_auth_cookie(response, out["token"])
    return {"message": "Registration completed successfully", "token": out["token"], "user": account_out(out["account"])}


@router.post("/companion/logout")
def companion_logout(response: Response):
    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/companion/profile")
def get_profile(db: Session = Depends(get_db), me: Companion = Depends(get_current_companion)):
    return companion_service.get_companion_profile(db, me.id)


@router.patch("/companion/profile")
def update_profile(body: CompanionProfileUpdate, db: Session = Depends(get_db), me: Companion = Depends(get_current_companion)):
    return companion_service.update_companion_profile(db, me.id, body.model_dump(exclude_unset=True))


@router.put("/companion/change-password")
def change_password(body: ChangePasswordRequest, db: Session = Depends(get_db), me: Companion = Depends(get_current_companion)):
    return companion_service.change_companion_password(db, me.id, body.oldPassword, body.newPassword)
