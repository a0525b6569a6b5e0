WAITLIST = {
    "name": "Amaka Obi",
    "email": "Amaka@Example.com",
    "phoneNumber": "08022222222",
    "tripType": "Honeymoon",
    "additionalInformation": "Somewhere with a beach",
}

CONTACT = {
    "fullName": "Femi Ade",
    "email": "femi@example.com",
    "dreamDestination": "Santorini",
    "travelDate": "2031-04-10",
    "story": "Ten years of saving for this trip.",
}


def test_waitlist_join_notifies_both_sides(client, outbox):
    r = client.post("/api/v1/waitlist", json=WAITLIST)
    assert r.status_code == 201
    assert r.json()["entry"]["email"] == "amaka@example.com"

    recipients = {m["to"] for m in outbox}
    assert recipients == {"amaka@example.com", "ops@tourbirth.test"}

    again = client.post("/api/v1/waitlist", json={**WAITLIST, "email": "amaka@example.com"})
    assert again.status_code == 400


def test_waitlist_admin_crud_and_stats(client, admin_headers):
    entry = client.post("/api/v1/waitlist", json=WAITLIST).json()["entry"]
    client.post("/api/v1/waitlist", json={**WAITLIST, "email": "b@example.com", "tripType": "Solo"})
    client.post("/api/v1/waitlist", json={**WAITLIST, "email": "c@example.com"})

    stats = client.get("/api/v1/admin/waitlist/stats", headers=admin_headers).json()
    assert stats["totalEntries"] == 3
    assert stats["byTripType"][0] == {"name": "Honeymoon", "count": 2}

    r = client.put(f"/api/v1/admin/waitlist/{entry['id']}", json={"tripType": "Family"}, headers=admin_headers)
    assert r.json()["entry"]["tripType"] == "Family"

    client.delete(f"/api/v1/admin/waitlist/{entry['id']}", headers=admin_headers)
    listed = client.get("/api/v1/admin/waitlist", headers=admin_headers).json()
    assert listed["pagination"]["totalItems"] == 2

    # a removed entry frees the email
    assert client.post("/api/v1/waitlist", json=WAITLIST).status_code == 201

    assert client.get("/api/v1/admin/waitlist/missing", headers=admin_headers).status_code == 404


def test_newsletter_subscribe_unsubscribe_resubscribe(client, admin_headers):
    r = client.post("/api/v1/newsletter/subscribe", json={"email": "Reader@Example.com"})
    assert r.status_code == 201
    sub_id = r.json()["subscription"]["id"]

    assert client.post("/api/v1/newsletter/subscribe", json={"email": "reader@example.com"}).status_code == 400

    r = client.post("/api/v1/newsletter/unsubscribe", json={"email": "reader@example.com"})
    assert r.status_code == 200
    assert r.json()["subscription"]["isActive"] is False
    assert r.json()["subscription"]["unsubscribedAt"]

    assert client.post("/api/v1/newsletter/unsubscribe", json={"email": "reader@example.com"}).status_code == 404

    r = client.post("/api/v1/newsletter/subscribe", json={"email": "reader@example.com"})
    assert r.status_code == 201
    assert r.json()["subscription"]["id"] == sub_id
    assert r.json()["subscription"]["unsubscribedAt"] is None

    stats = client.get("/api/v1/admin/newsletter/stats", headers=admin_headers).json()
    assert stats == {"totalSubscriptions": 1, "activeSubscriptions": 1, "unsubscribed": 0}


def test_unsubscribe_unknown_email(client):
    assert client.post("/api/v1/newsletter/unsubscribe", json={"email": "nobody@example.com"}).status_code == 404


def test_contact_submission_and_admin_views(client, admin_headers, outbox):
    r = client.post("/api/v1/contact", json=CONTACT)
    assert r.status_code == 201
    cid = r.json()["submission"]["id"]
    assert r.json()["submission"]["travelDate"] == "2031-04-10"

    admin_mail = next(m for m in outbox if m["to"] == "ops@tourbirth.test")
    assert "Santorini" in admin_mail["body"]

    found = client.get("/api/v1/admin/contact", params={"search": "saving"}, headers=admin_headers).json()
    assert [c["id"] for c in found["items"]] == [cid]

    stats = client.get("/api/v1/admin/contact/stats", headers=admin_headers).json()
    assert stats["totalSubmissions"] == 1
    assert stats["byDreamDestination"] == [{"name": "Santorini", "count": 1}]

    client.delete(f"/api/v1/admin/contact/{cid}", headers=admin_headers)
    got = client.get(f"/api/v1/admin/contact/{cid}", headers=admin_headers)
    assert got.status_code == 200
    assert got.json()["isActive"] is False


def test_contact_requires_travel_date(client):
    body = {k: v for k, v in CONTACT.items() if k != "travelDate"}
    assert client.post("/api/v1/contact", json=body).status_code == 422


def test_lead_admin_routes_are_guarded(client, user_headers):
    assert client.get("/api/v1/admin/waitlist").status_code == 401
    assert client.get("/api/v1/admin/newsletter", headers=user_headers).status_code == 403
    assert client.get("/api/v1/admin/contact/stats", headers=user_headers).status_code == 403
