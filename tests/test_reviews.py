from conftest import bearer

from app.models.enums import Role
from app.services import account_service


def _submit(client, headers, rating=5, text="Loved every minute of it"):
    r = client.post(
        "/api/v1/user/reviews",
        json={"fullName": "Tunde Bello", "review": text, "rating": rating},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["review"]


def test_new_review_waits_for_approval(client, user_headers, admin_headers):
    rv = _submit(client, user_headers)
    assert rv["isApproved"] is False
    assert client.get("/api/v1/reviews").json()["items"] == []
    assert client.get(f"/api/v1/reviews/{rv['id']}").status_code == 404

    r = client.patch(f"/api/v1/admin/reviews/{rv['id']}/approve", headers=admin_headers)
    assert r.status_code == 200
    public = client.get("/api/v1/reviews").json()
    assert [x["id"] for x in public["items"]] == [rv["id"]]
    assert client.get(f"/api/v1/reviews/{rv['id']}").status_code == 200


def test_edit_sends_review_back_to_moderation(client, user_headers, admin_headers):
    rv = _submit(client, user_headers)
    client.patch(f"/api/v1/admin/reviews/{rv['id']}/approve", headers=admin_headers)

    r = client.patch(f"/api/v1/user/reviews/{rv['id']}", json={"rating": 4}, headers=user_headers)
    assert r.status_code == 200
    assert r.json()["review"]["rating"] == 4
    assert r.json()["review"]["isApproved"] is False
    assert client.get("/api/v1/reviews").json()["items"] == []


def test_rating_bounds(client, user_headers):
    r = client.post(
        "/api/v1/user/reviews",
        json={"fullName": "Tunde Bello", "review": "meh", "rating": 6},
        headers=user_headers,
    )
    assert r.status_code == 422


def test_other_users_review_is_not_found(client, db, user_headers):
    rv = _submit(client, user_headers)
    other = account_service.create_account(db, Role.USER, "Ife", "Ola", "ife@example.com", "ifepass123")
    db.commit()

    r = client.patch(f"/api/v1/user/reviews/{rv['id']}", json={"rating": 1}, headers=bearer(other))
    assert r.status_code == 404
    assert client.delete(f"/api/v1/user/reviews/{rv['id']}", headers=bearer(other)).status_code == 404
    assert client.delete(f"/api/v1/user/reviews/{rv['id']}", headers=user_headers).status_code == 200


def test_my_reviews_lists_pending_too(client, user_headers):
    _submit(client, user_headers)
    body = client.get("/api/v1/user/reviews/my-reviews", headers=user_headers).json()
    assert body["pagination"]["totalItems"] == 1


def test_toggle_and_reject(client, user_headers, admin_headers):
    rv = _submit(client, user_headers)
    client.patch(f"/api/v1/admin/reviews/{rv['id']}/approve", headers=admin_headers)

    r = client.patch(f"/api/v1/admin/reviews/{rv['id']}/toggle-active", headers=admin_headers)
    assert r.json()["review"]["isActive"] is False
    assert client.get("/api/v1/reviews").json()["items"] == []

    client.patch(f"/api/v1/admin/reviews/{rv['id']}/toggle-active", headers=admin_headers)
    assert len(client.get("/api/v1/reviews").json()["items"]) == 1

    r = client.patch(f"/api/v1/admin/reviews/{rv['id']}/reject", headers=admin_headers)
    assert r.json()["review"]["isApproved"] is False
    assert client.get("/api/v1/reviews").json()["items"] == []


def test_stats_and_admin_filters(client, user_headers, admin_headers):
    a = _submit(client, user_headers, rating=5)
    _submit(client, user_headers, rating=3, text="Flight was late")
    client.patch(f"/api/v1/admin/reviews/{a['id']}/approve", headers=admin_headers)

    stats = client.get("/api/v1/reviews/stats").json()
    assert stats["totalReviews"] == 2
    assert stats["approvedReviews"] == 1
    assert stats["pendingReviews"] == 1
    assert stats["averageRating"] == 5
    assert stats["ratingDistribution"] == {"1": 0, "2": 0, "3": 1, "4": 0, "5": 1}

    pending = client.get("/api/v1/admin/reviews", params={"isApproved": False}, headers=admin_headers).json()
    assert pending["pagination"]["totalItems"] == 1
    found = client.get("/api/v1/admin/reviews", params={"search": "LATE"}, headers=admin_headers).json()
    assert found["items"][0]["user"]["email"] == "tunde@example.com"


def test_admin_delete_is_permanent(client, user_headers, admin_headers):
    rv = _submit(client, user_headers)
    assert client.delete(f"/api/v1/admin/reviews/{rv['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/admin/reviews/{rv['id']}", headers=admin_headers).status_code == 404
