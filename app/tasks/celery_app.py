from urllib.parse import urlparse, urlunparse, parse_qs, urlencode

from celery import Celery
from app.core.config import settings


def broker_url(url: str) -> str:
    """rediss:// brokers (Upstash, Render Redis) need ssl_cert_reqs spelled out for Celery."""
    if not url or not url.strip().lower().startswith("rediss://"):
        return url
    parsed = urlparse(url)
    qs = parse_qs(parsed.query)
    qs.setdefault("ssl_cert_reqs", ["CERT_NONE"])
    return urlunparse(parsed._replace(query=urlencode(qs, doseq=True)))


celery = Celery("tourbirth", include=["app.tasks.jobs"])
celery.conf.update(
    broker_url=broker_url(settings.REDIS_URL),
    result_backend=broker_url(settings.REDIS_URL),
    timezone="Africa/Lagos",
    task_acks_late=True,
)

celery.conf.beat_schedule = {
    "process-email-queue": {
        "task": "app.tasks.jobs.process_email_queue",
        "schedule": float(settings.EMAIL_QUEUE_INTERVAL_SECONDS),
        "kwargs": {"limit": 50},
    },
}
