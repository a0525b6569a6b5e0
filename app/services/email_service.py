"""Outbound mail.

Every message is written to ``email_logs`` before the first delivery attempt,
so nothing is lost when the transport is down: failed rows are picked up again
by the ``process_email_queue`` beat task until MAX_ATTEMPTS is reached.
"""
from datetime import datetime, timezone
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from sqlalchemy.orm import Session
import uuid
import requests

from app.core.config import settings
from app.models.email_log import EmailLog
from app.services.email_templates import render

logger = logging.getLogger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"
MAX_ATTEMPTS = 5


def notify(db: Session, to_email: str, template: str, data: dict, related_booking_ref: str = "") -> str | None:
    """Best-effort templated notification. Never raises; returns the EmailLog id when one was written."""
    if not to_email:
        return None
    try:
        data = {"frontendUrl": settings.FRONTEND_URL, **data}
        subject, body = render(template, data)
        return queue_email(db, to_email, subject, body, related_booking_ref=related_booking_ref, template=template)
    except Exception:
        db.rollback()
        logger.exception("notification %s to %s could not be queued", template, to_email)
        return None


def _deliver(log: EmailLog) -> bool:
    log.attempts = (log.attempts or 0) + 1
    try:
        send_email(log.to_email, log.subject, log.body or "")
    except Exception as e:
        logger.warning("email %s to %s failed (attempt %d): %s", log.id, log.to_email, log.attempts, e)
        log.status = "failed"
        log.error = str(e)[:500]
        return False
    log.status = "sent"
    log.sent_at = datetime.now(timezone.utc)
    log.error = ""
    return True


def queue_email(db: Session, to_email: str, subject: str, body: str, related_booking_ref: str = "",
                template: str = "") -> str:
    """Record the message, then try to send it right away."""
    log = EmailLog(
        id=str(uuid.uuid4()),
        to_email=to_email,
        subject=subject[:200],
        body=body,
        template=template,
        status="queued",
        attempts=0,
        related_booking_ref=related_booking_ref,
    )
    db.add(log)
    db.commit()

    _deliver(log)
    db.commit()
    return log.id


def send_email(to_email: str, subject: str, body: str):
    """SendGrid when an API key is configured, otherwise SMTP (MailHog works for local)."""
    if settings.SENDGRID_API_KEY:
        _send_via_sendgrid(to_email, subject, body)
    else:
        _send_via_smtp(to_email, subject, body)


def _send_via_smtp(to_email: str, subject: str, body: str):
    msg = EmailMessage()
    msg["From"] = formataddr((settings.APP_NAME, settings.SMTP_FROM))
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body)

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as smtp:
        if settings.SMTP_USERNAME:
            smtp.starttls()
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


def _send_via_sendgrid(to_email: str, subject: str, body: str):
    r = requests.post(
        SENDGRID_URL,
        json={
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": settings.SENDGRID_FROM_EMAIL or settings.SMTP_FROM, "name": settings.APP_NAME},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        },
        headers={"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"},
        timeout=20,
    )
    if r.status_code >= 400:
        raise RuntimeError(f"SendGrid error {r.status_code}: {r.text[:200]}")


def process_pending_emails(db: Session, limit: int = 50) -> dict:
    """Retry up to `limit` queued/failed messages that still have attempts left."""
    pending = (
        db.query(EmailLog)
        .filter(
            EmailLog.status.in_(["queued", "failed"]),
            EmailLog.attempts < MAX_ATTEMPTS,
            EmailLog.body.isnot(None),
        )
        .order_by(EmailLog.created_at.asc())
        .limit(limit)
        .all()
    )
    sent = sum(1 for log in pending if _deliver(log))
    if pending:
        db.commit()
    failed = len(pending) - sent
    logger.info("email queue processed=%d sent=%d failed=%d", len(pending), sent, failed)
    return {"processed": len(pending), "sent": sent, "failed": failed}
