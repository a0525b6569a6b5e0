from app.models.email_log import EmailLog
from app.services import email_service
from app.services.email_templates import render
from app.tasks import worker_jobs


def test_render_fills_missing_keys_with_blanks():
    subject, body = render("bookingStatusChanged", {"bookingId": "ID-1", "status": "paid"})
    assert subject == "Your TourBirth booking ID-1 is now paid"
    assert body.startswith("Hi ,")


def test_notify_unknown_template_is_swallowed(db):
    assert email_service.notify(db, "a@example.com", "noSuchTemplate", {}) is None
    assert db.query(EmailLog).count() == 0


def test_notify_without_recipient_is_noop(db, outbox):
    assert email_service.notify(db, "", "welcomeEmail", {"firstName": "X"}) is None
    assert outbox == []


def test_notify_records_sent_log(db, outbox):
    eid = email_service.notify(db, "a@example.com", "newsletterConfirmation", {"email": "a@example.com"})
    log = db.get(EmailLog, eid)
    assert log.status == "sent"
    assert log.template == "newsletterConfirmation"
    assert outbox[0]["subject"] == "Welcome to the TourBirth Newsletter!"


def test_failed_mail_is_retried_by_the_queue(db, monkeypatch, outbox):
    def _down(*args, **kwargs):
        raise RuntimeError("smtp down")

    monkeypatch.setattr(email_service, "send_email", _down)
    eid = email_service.notify(db, "a@example.com", "newsletterConfirmation", {"email": "a@example.com"})
    assert db.get(EmailLog, eid).status == "failed"

    still_down = email_service.process_pending_emails(db)
    assert still_down == {"processed": 1, "sent": 0, "failed": 1}

    monkeypatch.setattr(email_service, "send_email", lambda *a, **k: outbox.append(a))
    assert email_service.process_pending_emails(db) == {"processed": 1, "sent": 1, "failed": 0}
    db.expire_all()
    log = db.get(EmailLog, eid)
    assert log.status == "sent"
    assert log.sent_at is not None


def test_worker_job_uses_its_own_session(session_factory, monkeypatch):
    monkeypatch.setattr(worker_jobs, "SessionLocal", session_factory)
    assert worker_jobs.process_email_queue() == {"processed": 0, "sent": 0, "failed": 0}


def test_queue_gives_up_after_max_attempts(db, monkeypatch):
    def _down(*args, **kwargs):
        raise RuntimeError("smtp down")

    monkeypatch.setattr(email_service, "send_email", _down)
    eid = email_service.notify(db, "a@example.com", "newsletterConfirmation", {"email": "a@example.com"})
    for _ in range(email_service.MAX_ATTEMPTS + 2):
        email_service.process_pending_emails(db)

    db.expire_all()
    log = db.get(EmailLog, eid)
    assert log.attempts == email_service.MAX_ATTEMPTS
    assert log.status == "failed"
    assert email_service.process_pending_emails(db)["processed"] == 0


def test_tls_broker_url_gets_cert_reqs():
    from app.tasks.celery_app import broker_url

    assert broker_url("redis://localhost:6379/0") == "redis://localhost:6379/0"
    assert broker_url("rediss://:pw@host:6380/0").endswith("?ssl_cert_reqs=CERT_NONE")
    assert broker_url("rediss://host/0?ssl_cert_reqs=CERT_REQUIRED").endswith("ssl_cert_reqs=CERT_REQUIRED")
