import secrets
import string
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings

# PBKDF2 avoids bcrypt backend/version issues and the 72-byte bcrypt input limit.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
ALGO = "HS256"

_TEMP_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def generate_temp_password(length: int = 8) -> str:
    return "".join(secrets.choice(_TEMP_ALPHABET) for _ in range(length))


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def create_access_token(subject: str, role: str, expires_minutes: int | None = None, extra: dict | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    exp = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": subject, "role": role, "type": "access", "exp": exp}
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)


def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
