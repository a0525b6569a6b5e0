import uuid
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.destination import Destination
from app.services.pagination import paginate


def _find(db: Session, city: str, country: str, exclude_id: str | None = None) -> Destination | None:
    q = db.query(Destination).filter(Destination.city == city, Destination.country == country)
    if exclude_id:
        q = q.filter(Destination.id != exclude_id)
    return q.first()


def create_destination(db: Session, city: str, country: str) -> Destination:
    city, country = city.strip().lower(), country.strip().lower()
    if _find(db, city, country):
        raise ValidationError("Destination already exists")
    d = Destination(id=str(uuid.uuid4()), city=city, country=country, is_active=True)
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


def create_many(db: Session, items: list[tuple[str, str]]) -> tuple[list[Destination], list[str]]:
    created, errors = [], []
    for city, country in items:
        try:
            created.append(create_destination(db, city, country))
        except ValidationError:
            errors.append(f"Destination {city}, {country} already exists")
    return created, errors


def list_active(db: Session) -> list[Destination]:
    return (
        db.query(Destination)
        .filter(Destination.is_active == True)
        .order_by(Destination.city.asc(), Destination.country.asc())
        .all()
    )


def list_paginated(db: Session, page: int = 1, limit: int = 10, search: str | None = None):
    q = db.query(Destination).filter(Destination.is_active == True)
    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(Destination.city.ilike(like), Destination.country.ilike(like)))
    return paginate(q.order_by(Destination.city.asc(), Destination.country.asc()), page, limit)


def get_destination(db: Session, destination_id: str) -> Destination:
    """By raw id; soft-deleted rows are returned too."""
    d = db.get(Destination, destination_id)
    if not d:
        raise NotFoundError("Destination not found")
    return d


def update_destination(db: Session, destination_id: str, city: str | None = None, country: str | None = None) -> Destination:
    d = get_destination(db, destination_id)
    new_city = city.strip().lower() if city else d.city
    new_country = country.strip().lower() if country else d.country
    if (city or country) and _find(db, new_city, new_country, exclude_id=d.id):
        raise ValidationError("Destination with this city and country combination already exists")
    d.city, d.country = new_city, new_country
    db.commit()
    db.refresh(d)
    return d


def delete_destination(db: Session, destination_id: str) -> None:
    d = get_destination(db, destination_id)
    d.is_active = False
    db.commit()


def delete_many(db: Session, ids: list[str]) -> tuple[int, list[str]]:
    deleted, errors = 0, []
    for did in ids:
        d = db.get(Destination, did)
        if not d:
            errors.append(f"Destination with ID {did} not found")
            continue
        d.is_active = False
        deleted += 1
    db.commit()
    return deleted, errors
