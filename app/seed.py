import logging

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from app.db.session import SessionLocal
from app.core.config import settings
from app.models.destination import Destination
from app.models.enums import Role
from app.services import account_service, destination_service

logger = logging.getLogger(__name__)

DESTINATIONS = [
    ("Lagos", "Nigeria"),
    ("Abuja", "Nigeria"),
    ("Accra", "Ghana"),
    ("Zanzibar", "Tanzania"),
    ("Cape Town", "South Africa"),
    ("Dubai", "United Arab Emirates"),
    ("London", "United Kingdom"),
    ("Paris", "France"),
]


def ensure_admin(db: Session, email: str, password: str):
    if account_service.find_by_email(db, email):
        return
    account_service.create_account(db, Role.ADMIN, "Admin", "TourBirth", email, password)
    db.commit()
    logger.info("[seed] admin %s created", email)


def ensure_destinations(db: Session):
    for city, country in DESTINATIONS:
        exists = db.query(Destination).filter(
            Destination.city == city.lower(),
            Destination.country == country.lower(),
        ).first()
        if not exists:
            destination_service.create_destination(db, city, country)


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM accounts LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            logger.warning("[seed] accounts table not found yet. Skipping seeding (run alembic upgrade head).")
            return

        if settings.SEED_ADMIN_EMAIL and settings.SEED_ADMIN_PASSWORD:
            ensure_admin(db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD)
        ensure_destinations(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
