import re
import time

import pytest
from conftest import companion_body

from app.core.config import settings
from app.core.security import decode_token
from app.models.account import Account
from app.models.companion import Companion

TEMP_PW = re.compile(r"Temporary password: (\S+)")


@pytest.fixture()
def temp_password(client, admin_headers, booking_payload, outbox):
    r = client.post(
        "/api/v1/admin/bookings",
        json=booking_payload(companions=[companion_body("kemi@example.com")]),
        headers=admin_headers,
    )
    assert r.status_code == 201
    mail = next(m for m in outbox if m["to"] == "kemi@example.com")
    return TEMP_PW.search(mail["body"]).group(1)


def test_temp_password_is_stored_hashed(db, temp_password):
    c = db.query(Companion).one()
    assert c.temp_password_hash and temp_password not in c.temp_password_hash
    assert c.is_registered is False


def test_temp_login_issues_short_lived_temp_token(client, temp_password):
    r = client.post("/api/v1/companion/login", json={"email": "KEMI@example.com", "password": temp_password})
    assert r.status_code == 200
    body = r.json()
    assert body["requiresPasswordChange"] is True
    claims = decode_token(body["token"])
    assert claims["role"] == "companion"
    assert claims["temp"] is True
    assert 0 < claims["exp"] - time.time() <= settings.TEMP_TOKEN_EXPIRE_MINUTES * 60 + 5
    assert settings.TEMP_TOKEN_EXPIRE_MINUTES < settings.COMPANION_TOKEN_EXPIRE_MINUTES
    assert r.cookies.get(settings.AUTH_COOKIE_NAME)


def test_wrong_password_is_400(client, temp_password):
    r = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": "nope"})
    assert r.status_code == 400


def test_complete_registration_clears_temp_credential(client, db, temp_password):
    r = client.post(
        "/api/v1/companion/complete-registration",
        json={"email": "kemi@example.com", "tempPassword": temp_password, "newPassword": "kemisecret1"},
    )
    assert r.status_code == 200, r.text
    assert decode_token(r.json()["token"])["role"] == "user"
    assert r.json()["user"]["isRegistered"] is True

    db.expire_all()
    c = db.query(Companion).one()
    assert c.temp_password_hash is None
    assert c.is_registered is True

    old = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password})
    assert old.status_code == 400

    new = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": "kemisecret1"})
    assert new.status_code == 200
    assert new.json()["requiresPasswordChange"] is False

    user_login = client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": "kemisecret1"})
    assert user_login.status_code == 200


def test_profile_password_update_registers_companion(client, db, temp_password):
    token = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password}).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    profile = client.get("/api/v1/companion/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["booking"]["isPrimary"] is True

    r = client.patch("/api/v1/companion/profile", json={"password": "brandnew123", "phoneNumber": "0809"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["isRegistered"] is True
    assert r.json()["phoneNumber"] == "0809"

    assert client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password}).status_code == 400


def test_profile_password_update_retires_temp_password_on_user_login(client, db, temp_password):
    token = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password}).json()["token"]
    r = client.patch("/api/v1/companion/profile", json={"password": "brandnew123"}, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200

    assert client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": temp_password}).status_code == 400
    assert client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": "brandnew123"}).status_code == 200

    db.expire_all()
    account = db.query(Account).filter(Account.email == "kemi@example.com").one()
    assert account.user_profile.is_registered is True


def test_unregistered_companion_account_cannot_use_user_login(client, temp_password):
    r = client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": temp_password})
    assert r.status_code == 400


def test_change_password_applies_to_every_record(client, db, admin_headers, booking_payload, temp_password):
    client.post(
        "/api/v1/admin/bookings",
        json=booking_payload(companions=[companion_body("kemi@example.com")]),
        headers=admin_headers,
    )
    token = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password}).json()["token"]
    r = client.put(
        "/api/v1/companion/change-password",
        json={"oldPassword": temp_password, "newPassword": "anotherpass1"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 200
    db.expire_all()
    records = db.query(Companion).all()
    assert len(records) == 2
    assert all(c.is_registered and c.temp_password_hash is None for c in records)
    assert client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": temp_password}).status_code == 400
    assert client.post("/api/v1/auth/login", json={"email": "kemi@example.com", "password": "anotherpass1"}).status_code == 200


def test_companion_token_cannot_reach_user_routes(client, temp_password):
    token = client.post("/api/v1/companion/login", json={"email": "kemi@example.com", "password": temp_password}).json()["token"]
    r = client.get("/api/v1/user/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_companion_account_starts_unregistered(db, temp_password):
    account = db.query(Account).filter(Account.email == "kemi@example.com").one()
    assert account.user_profile.is_registered is False
