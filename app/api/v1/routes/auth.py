from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import require_admin, require_user
from app.core.config import settings
from app.db.session import get_db
from app.models.account import Account
from app.models.enums import Role
from app.schemas.auth import (
    AdminSignupRequest,
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    OtpRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from app.services import account_service
from app.services.serializers import account_out

router = APIRouter(tags=["auth"])


def set_auth_cookie(response: Response, token: str, max_age_minutes: int | None = None) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=60 * (max_age_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


def _login(role: Role, body: LoginRequest, response: Response, db: Session) -> dict:
    account, token = account_service.login(db, role, body.email, body.password)
    set_auth_cookie(response, token)
    return {"message": "Login successful", "token": token, "user": account_out(account)}


# -------------------------
# USERS
# -------------------------
@router.post("/auth/signup", status_code=201)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    account = account_service.signup(
        db, Role.USER, body.firstName, body.lastName, body.email, body.password,
        gender=body.gender.value if body.gender else "",
        phone_number=body.phoneNumber,
        date_of_birth=body.dateOfBirth,
    )
    return {"message": "User created successfully. Check your email for the verification code.", "user": account_out(account)}


@router.post("/auth/login")
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    return _login(Role.USER, body, response, db)


@router.post("/auth/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}


@router.post("/auth/forgot-password")
def forgot_password(body: EmailRequest, db: Session = Depends(get_db)):
    return account_service.forgot_password(db, Role.USER, body.email)


@router.post("/auth/verify-forgot-password")
def verify_forgot_password(body: OtpRequest, db: Session = Depends(get_db)):
    return account_service.verify_reset_otp(db, Role.USER, body.email, body.otp)


@router.put("/auth/reset-password")
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    return account_service.reset_password(db, Role.USER, body.email, body.newPassword)


@router.post("/auth/verify")
def verify_account(body: OtpRequest, db: Session = Depends(get_db)):
    return account_service.verify_account(db, body.email, body.otp)


@router.post("/auth/resend-verification")
def resend_verification(body: EmailRequest, db: Session = Depends(get_db)):
    return account_service.resend_verification_otp(db, body.email)


@router.get("/auth/user-profile")
def me(me: Account = Depends(require_user)):
    return account_out(me)


@router.put("/auth/change-password")
def change_password(body: ChangePasswordRequest, db: Session = Depends(get_db), me: Account = Depends(require_user)):
    return account_service.change_password(db, me, body.oldPassword, body.newPassword)


# -------------------------
# ADMINS
# -------------------------
@router.post("/admin/auth/signup", status_code=201)
def admin_signup(body: AdminSignupRequest, db: Session = Depends(get_db)):
    account = account_service.signup(
        db, Role.ADMIN, body.firstName, body.lastName, body.email, body.password,
        phone_number=body.phoneNumber,
    )
    return {"message": "Admin created successfully", "admin": account_out(account)}


@router.post("/admin/auth/login")
def admin_login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    return _login(Role.ADMIN, body, response, db)


@router.post("/admin/auth/logout")
def admin_logout(response: Response):
    clear_auth_cookie(response)
    return {"message": "Logged out successfully"}


@router.post("/admin/auth/forgot-password")
def admin_forgot_password(body: EmailRequest, db: Session = Depends(get_db)):
    return account_service.forgot_password(db, Role.ADMIN, body.email)


@router.post("/admin/auth/verify-forgot-password")
def admin_verify_forgot_password(body: OtpRequest, db: Session = Depends(get_db)):
    return account_service.verify_reset_otp(db, Role.ADMIN, body.email, body.otp)


@router.put("/admin/auth/reset-password")
def admin_reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    return account_service.reset_password(db, Role.ADMIN, body.email, body.newPassword)


@router.get("/admin/auth/me")
def admin_me(me: Account = Depends(require_admin)):
    return account_out(me)


@router.put("/admin/auth/change-password")
def admin_change_password(body: ChangePasswordRequest, db: Session = Depends(get_db), me: Account = Depends(require_admin)):
    return account_service.change_password(db, me, body.oldPassword, body.newPassword)
