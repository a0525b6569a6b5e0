import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BLOB_LOCAL_DIR"] = tempfile.mkdtemp(prefix="tourbirth-media-")
os.environ["GCS_BUCKET_NAME"] = ""
os.environ["ADMIN_NOTIFY_EMAIL"] = "ops@tourbirth.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.security import create_access_token
from app.db.session import Base, get_db
from app.main import app as fastapi_app
from app.models import account, booking, companion, destination as destination_model, email_log, leads, review  # noqa: F401
from app.models.enums import Role
from app.services import account_service, destination_service, email_service


@pytest.fixture()
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    fastapi_app.dependency_overrides[get_db] = _get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Captures outgoing mail instead of talking to SMTP/SendGrid."""
    sent = []

    def _send(to_email, subject, body):
        sent.append({"to": to_email, "subject": subject, "body": body})

    monkeypatch.setattr(email_service, "send_email", _send)
    return sent


@pytest.fixture(autouse=True)
def media_dir(tmp_path, monkeypatch):
    path = tmp_path / "media"
    monkeypatch.setattr(settings, "BLOB_LOCAL_DIR", str(path))
    monkeypatch.setattr(settings, "GCS_BUCKET_NAME", "")
    return path


def bearer(acc) -> dict:
    return {"Authorization": f"Bearer {create_access_token(acc.id, acc.role)}"}


@pytest.fixture()
def admin(db):
    a = account_service.create_account(db, Role.ADMIN, "Ada", "Admin", "admin@tourbirth.test", "adminpass123")
    db.commit()
    return a


@pytest.fixture()
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture()
def traveler(db):
    u = account_service.create_account(db, Role.USER, "Tunde", "Bello", "tunde@example.com", "travelpass1")
    db.commit()
    return u


@pytest.fixture()
def user_headers(traveler):
    return bearer(traveler)


@pytest.fixture()
def destination(db):
    return destination_service.create_destination(db, "Zanzibar", "Tanzania")


@pytest.fixture()
def booking_payload(traveler, destination):
    def _make(**overrides):
        body = {
            "userId": traveler.id,
            "destinationId": destination.id,
            "travelDate": "2030-06-01",
            "returnDate": "2030-06-08",
            "totalAmount": 500000,
            "bookingAmount": 200000,
            "currency": "naira",
            "description": "Beach week",
            "companions": [],
        }
        body.update(overrides)
        return body
    return _make


def companion_body(email: str, first: str = "Kemi", last: str = "Ade", relationship: str = "friend") -> dict:
    return {"firstName": first, "lastName": last, "email": email, "relationship": relationship, "phoneNumber": "08030000000"}
