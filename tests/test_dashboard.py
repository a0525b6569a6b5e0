from datetime import date, timedelta

from conftest import companion_body

from app.services import dashboard_service


def _create(client, headers, body):
    r = client.post("/api/v1/admin/bookings", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["booking"]


def _stats(client, headers, **params):
    r = client.get("/api/v1/admin/dashboard/stats", params=params, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_paid_status_raises_revenue_by_total_amount(client, admin_headers, booking_payload):
    b = _create(client, admin_headers, booking_payload(companions=[companion_body("kemi@example.com")]))
    before = _stats(client, admin_headers, currency="naira")
    assert before["revenue"] == 0
    assert before["totalProfit"] == 0
    assert before["totalBookings"] == 1

    client.put(f"/api/v1/admin/bookings/{b['id']}/status", json={"status": "paid"}, headers=admin_headers)

    after = _stats(client, admin_headers, currency="naira")
    assert after["revenue"] == before["revenue"] + 500000
    assert after["totalBookingsAmount"] == 200000
    assert after["totalProfit"] == 300000


def test_money_split_by_currency_without_filter(client, admin_headers, booking_payload):
    naira = _create(client, admin_headers, booking_payload())
    usd = _create(client, admin_headers, booking_payload(currency="usd", totalAmount=1000, bookingAmount=400))
    _create(client, admin_headers, booking_payload(currency="usd", totalAmount=9000, bookingAmount=100))

    for b in (naira, usd):
        client.put(f"/api/v1/admin/bookings/{b['id']}/status", json={"status": "paid"}, headers=admin_headers)

    stats = _stats(client, admin_headers)
    assert stats["totalBookings"] == 3
    assert stats["revenue"] == {"naira": 500000, "usd": 1000}
    assert stats["totalBookingsAmount"] == {"naira": 200000, "usd": 400}
    assert stats["totalProfit"] == {"naira": 300000, "usd": 600}
    assert stats["totalUsers"] == 1


def test_upcoming_window(db, client, admin_headers, booking_payload):
    today = date.today()
    soon = today + timedelta(days=5)
    later = today + timedelta(days=45)
    _create(client, admin_headers, booking_payload(travelDate=soon.isoformat(), returnDate=(soon + timedelta(days=3)).isoformat()))
    _create(client, admin_headers, booking_payload(travelDate=later.isoformat(), returnDate=(later + timedelta(days=3)).isoformat()))

    stats = dashboard_service.get_dashboard_stats(db, today=today)
    assert stats["upcomingTours"] == 1
    assert stats["upcomingToursDetails"][0]["travelDate"] == soon.isoformat()


def test_invalid_currency(client, admin_headers):
    r = client.get("/api/v1/admin/dashboard/stats", params={"currency": "eur"}, headers=admin_headers)
    assert r.status_code == 400


def test_admin_lists_users(client, admin_headers, traveler):
    r = client.get("/api/v1/admin/dashboard/users", params={"search": "TUNDE"}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert [u["email"] for u in body["items"]] == ["tunde@example.com"]
    assert body["pagination"]["totalItems"] == 1
