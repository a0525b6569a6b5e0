from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import decode_token
from app.db.session import get_db
from app.models.account import Account
from app.models.companion import Companion
from app.models.enums import Role

bearer = HTTPBearer(auto_error=False)


def get_token_payload(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict:
    """An explicit bearer header wins over the auth cookie."""
    token = creds.credentials if creds else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid token")
    if payload.get("type") != "access" or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


def get_current_account(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> Account:
    if payload.get("role") not in (Role.USER.value, Role.ADMIN.value):
        raise HTTPException(status_code=403, detail="Forbidden")
    account = db.get(Account, payload["sub"])
    if not account or not account.is_active or account.role != payload["role"]:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return account


def require_roles(*roles: str):
    def _guard(account: Account = Depends(get_current_account)) -> Account:
        if account.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return account
    return _guard


require_user = require_roles(Role.USER.value)
require_admin = require_roles(Role.ADMIN.value)


def get_current_companion(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> Companion:
    if payload.get("role") != Role.COMPANION.value:
        raise HTTPException(status_code=403, detail="Forbidden")
    companion = db.get(Companion, payload["sub"])
    if not companion:
        raise HTTPException(status_code=401, detail="Companion not found")
    return companion
