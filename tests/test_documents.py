import os

from conftest import companion_body

from app.models.booking import Booking


def _booking(client, admin_headers, booking_payload):
    r = client.post(
        "/api/v1/admin/bookings",
        json=booking_payload(companions=[companion_body("kemi@example.com")]),
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["booking"]


def _upload(client, headers, ref, field="documents", files=None):
    files = files or [
        (field, ("visa.pdf", b"%PDF-1.4 visa", "application/pdf")),
        (field, ("notes.txt", b"pack sunscreen", "text/plain")),
    ]
    return client.post(f"/api/v1/admin/documents/{ref}/{field}", files=files, headers=headers)


def test_documents_land_on_every_package_record(client, db, admin_headers, booking_payload, media_dir):
    b = _booking(client, admin_headers, booking_payload)

    r = _upload(client, admin_headers, b["bookingId"])
    assert r.status_code == 200, r.text
    docs = r.json()["documents"]
    assert [d["name"] for d in docs] == ["visa.pdf", "notes.txt"]
    assert all(d["key"].startswith("documents/") for d in docs)

    db.expire_all()
    rows = db.query(Booking).all()
    assert len(rows) == 2
    assert all(len(row.documents) == 2 for row in rows)
    assert (media_dir / docs[0]["key"]).read_bytes() == b"%PDF-1.4 visa"


def test_upload_through_mirror_reference_targets_the_package(client, db, admin_headers, booking_payload):
    _booking(client, admin_headers, booking_payload)
    mirror = db.query(Booking).filter(Booking.is_primary == False).one()

    r = _upload(client, admin_headers, mirror.booking_id, field="itineraries", files=[
        ("itineraries", ("day1.png", b"\x89PNG", "image/png")),
    ])
    assert r.status_code == 200
    db.expire_all()
    assert all(len(row.itineraries) == 1 for row in db.query(Booking).all())


def test_disallowed_type_is_rejected(client, admin_headers, booking_payload):
    b = _booking(client, admin_headers, booking_payload)
    r = _upload(client, admin_headers, b["id"], files=[("documents", ("run.sh", b"echo hi", "application/x-sh"))])
    assert r.status_code == 400


def test_oversized_file_is_413(client, admin_headers, booking_payload, monkeypatch):
    from app.core.config import settings

    b = _booking(client, admin_headers, booking_payload)
    monkeypatch.setattr(settings, "UPLOAD_MAX_BYTES", 4)
    r = _upload(client, admin_headers, b["id"], files=[("documents", ("big.txt", b"0123456789", "text/plain"))])
    assert r.status_code == 413


def test_remove_document_by_index(client, db, admin_headers, booking_payload, media_dir):
    b = _booking(client, admin_headers, booking_payload)
    docs = _upload(client, admin_headers, b["id"]).json()["documents"]
    path = media_dir / docs[0]["key"]
    assert os.path.exists(path)

    r = client.delete(f"/api/v1/admin/documents/{b['id']}/documents/5", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid document index"

    r = client.delete(f"/api/v1/admin/documents/{b['id']}/documents/0", headers=admin_headers)
    assert r.status_code == 200
    assert [d["name"] for d in r.json()["documents"]] == ["notes.txt"]
    assert not os.path.exists(path)

    db.expire_all()
    assert all([d["name"] for d in row.documents] == ["notes.txt"] for row in db.query(Booking).all())


def test_unknown_booking_is_404(client, admin_headers):
    r = _upload(client, admin_headers, "ID-NOPE-00000")
    assert r.status_code == 404


def test_upload_media_returns_descriptors(client, admin_headers):
    r = client.post(
        "/api/v1/admin/upload-media",
        files=[("files", ("beach.jpg", b"jpegbytes", "image/jpeg"))],
        headers=admin_headers,
    )
    assert r.status_code == 200
    f = r.json()["files"][0]
    assert f["name"] == "beach.jpg"
    assert f["size"] == 9
    assert f["link"].endswith(f["key"])
