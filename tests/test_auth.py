from datetime import datetime, timedelta, timezone

from app.core.config import settings
from app.models.account import Account

SIGNUP = {
    "firstName": "Ngozi",
    "lastName": "Eze",
    "email": "Ngozi@Example.com",
    "password": "supersecret1",
    "gender": "female",
    "phoneNumber": "08011111111",
}


def _account(db, email):
    db.expire_all()
    return db.query(Account).filter(Account.email == email).one()


def test_signup_then_duplicate_conflicts(client, outbox):
    r = client.post("/api/v1/auth/signup", json=SIGNUP)
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["email"] == "ngozi@example.com"
    assert user["role"] == "user"
    assert user["isVerified"] is False
    assert "password" not in str(user).lower()
    assert any(m["to"] == "ngozi@example.com" for m in outbox)

    assert client.post("/api/v1/auth/signup", json=SIGNUP).status_code == 409


def test_login_sets_cookie_and_me_reads_it(client):
    client.post("/api/v1/auth/signup", json=SIGNUP)
    r = client.post("/api/v1/auth/login", json={"email": "ngozi@example.com", "password": "supersecret1"})
    assert r.status_code == 200
    assert r.json()["token"]
    assert r.cookies.get(settings.AUTH_COOKIE_NAME)

    me = client.get("/api/v1/auth/user-profile")
    assert me.status_code == 200
    assert me.json()["email"] == "ngozi@example.com"

    client.post("/api/v1/auth/logout")
    client.cookies.clear()
    assert client.get("/api/v1/auth/user-profile").status_code == 401


def test_bad_credentials(client):
    client.post("/api/v1/auth/signup", json=SIGNUP)
    r = client.post("/api/v1/auth/login", json={"email": "ngozi@example.com", "password": "wrongpass1"})
    assert r.status_code == 400
    # users cannot use the admin login
    r = client.post("/api/v1/admin/auth/login", json={"email": "ngozi@example.com", "password": "supersecret1"})
    assert r.status_code == 400


def test_verify_account_with_otp(client, db):
    client.post("/api/v1/auth/signup", json=SIGNUP)
    otp = _account(db, "ngozi@example.com").verification_otp

    assert client.post("/api/v1/auth/verify", json={"email": "ngozi@example.com", "otp": "000000" if otp != "000000" else "111111"}).status_code == 400
    r = client.post("/api/v1/auth/verify", json={"email": "ngozi@example.com", "otp": otp})
    assert r.status_code == 200
    assert _account(db, "ngozi@example.com").user_profile.is_verified is True


def test_expired_otp_is_rejected(client, db):
    client.post("/api/v1/auth/signup", json=SIGNUP)
    account = _account(db, "ngozi@example.com")
    account.otp_expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    r = client.post("/api/v1/auth/verify", json={"email": "ngozi@example.com", "otp": account.verification_otp})
    assert r.status_code == 400
    assert r.json()["detail"] == "OTP has expired"


def test_password_reset_flow(client, db, outbox):
    client.post("/api/v1/auth/signup", json=SIGNUP)

    early = client.put("/api/v1/auth/reset-password", json={"email": "ngozi@example.com", "newPassword": "brandnewpass"})
    assert early.status_code == 400

    assert client.post("/api/v1/auth/forgot-password", json={"email": "ngozi@example.com"}).status_code == 200
    otp = _account(db, "ngozi@example.com").reset_password_otp
    assert otp and any(otp in m["body"] for m in outbox)

    assert client.post("/api/v1/auth/verify-forgot-password", json={"email": "ngozi@example.com", "otp": otp}).status_code == 200

    same = client.put("/api/v1/auth/reset-password", json={"email": "ngozi@example.com", "newPassword": "supersecret1"})
    assert same.status_code == 400

    r = client.put("/api/v1/auth/reset-password", json={"email": "ngozi@example.com", "newPassword": "brandnewpass"})
    assert r.status_code == 200
    assert client.post("/api/v1/auth/login", json={"email": "ngozi@example.com", "password": "brandnewpass"}).status_code == 200


def test_forgot_password_unknown_email(client):
    assert client.post("/api/v1/auth/forgot-password", json={"email": "ghost@example.com"}).status_code == 404


def test_change_password(client, user_headers):
    r = client.put(
        "/api/v1/auth/change-password",
        json={"oldPassword": "wrongwrong", "newPassword": "anotherpass1"},
        headers=user_headers,
    )
    assert r.status_code == 400
    r = client.put(
        "/api/v1/auth/change-password",
        json={"oldPassword": "travelpass1", "newPassword": "anotherpass1"},
        headers=user_headers,
    )
    assert r.status_code == 200


def test_admin_signup_and_login(client):
    body = {"firstName": "Bola", "lastName": "Ops", "email": "bola@tourbirth.test", "password": "adminpass99"}
    assert client.post("/api/v1/admin/auth/signup", json=body).status_code == 201
    r = client.post("/api/v1/admin/auth/login", json={"email": "bola@tourbirth.test", "password": "adminpass99"})
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "admin"

    me = client.get("/api/v1/admin/auth/me", headers={"Authorization": f"Bearer {r.json()['token']}"})
    assert me.status_code == 200


def test_invalid_token_is_401(client):
    r = client.get("/api/v1/user/profile", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_profile_update(client, user_headers):
    r = client.patch(
        "/api/v1/user/profile",
        json={"firstName": "Tee", "maritalStatus": "married", "instagramUsername": "tee.travels"},
        headers=user_headers,
    )
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["firstName"] == "Tee"
    assert user["maritalStatus"] == "married"
    assert user["instagramUsername"] == "tee.travels"


def test_admin_updates_user_flags(client, admin_headers, traveler):
    r = client.put(
        f"/api/v1/admin/profiles/user/{traveler.id}",
        json={"isVerified": True, "twoFactorEnabled": True},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["user"]["isVerified"] is True
    assert r.json()["user"]["twoFactorEnabled"] is True

    assert client.get("/api/v1/admin/profiles/user/missing", headers=admin_headers).status_code == 404
