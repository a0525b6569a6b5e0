from datetime import date, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.account import Account
from app.models.booking import Booking
from app.models.destination import Destination
from app.models.enums import BookingStatus, Currency
from app.services import account_service
from app.services.serializers import booking_out

UPCOMING_WINDOW_DAYS = 30
UPCOMING_DETAILS_LIMIT = 10


def _money_totals(db: Session, currency: str) -> dict:
    # paid primary records only; companion mirrors repeat the package amounts
    total, deposits = db.query(
        func.coalesce(func.sum(Booking.total_amount), 0),
        func.coalesce(func.sum(Booking.booking_amount), 0),
    ).filter(
        Booking.is_primary == True,
        Booking.is_active == True,
        Booking.status == BookingStatus.PAID.value,
        Booking.currency == currency,
    ).one()
    return {
        "revenue": float(total or 0),
        "totalBookingsAmount": float(deposits or 0),
        "totalProfit": float(total or 0) - float(deposits or 0),
    }


def get_dashboard_stats(db: Session, currency: str | None = None, today: date | None = None) -> dict:
    """Recomputed on every call. Without a currency, money figures are split per currency."""
    today = today or date.today()
    horizon = today + timedelta(days=UPCOMING_WINDOW_DAYS)

    active_primary = db.query(Booking).filter(Booking.is_primary == True, Booking.is_active == True)
    if currency:
        try:
            currency = Currency(getattr(currency, "value", currency)).value
        except ValueError:
            raise ValidationError(f"Invalid currency: {currency}")
        active_primary = active_primary.filter(Booking.currency == currency)

    upcoming = active_primary.filter(Booking.travel_date >= today, Booking.travel_date <= horizon)
    details = (
        upcoming.with_entities(Booking, Account, Destination)
        .outerjoin(Account, Account.id == Booking.user_id)
        .outerjoin(Destination, Destination.id == Booking.destination_id)
        .order_by(Booking.travel_date.asc())
        .limit(UPCOMING_DETAILS_LIMIT)
        .all()
    )

    stats = {
        "totalBookings": active_primary.count(),
        "upcomingTours": upcoming.count(),
        "upcomingToursDetails": [booking_out(b, user=u, destination=d) for b, u, d in details],
        "totalUsers": account_service.count_users(db),
    }
    if currency:
        stats.update(_money_totals(db, currency))
        stats["currency"] = currency
    else:
        per_currency = {c.value: _money_totals(db, c.value) for c in Currency}
        for key in ("revenue", "totalBookingsAmount", "totalProfit"):
            stats[key] = {c: figures[key] for c, figures in per_currency.items()}
    return stats


def bookings_per_day(db: Session, days: int = 30) -> list[dict]:
    rows = (
        db.query(func.date(Booking.created_at).label("d"), func.count(Booking.id))
        .filter(Booking.is_primary == True, Booking.is_active == True)
        .group_by(func.date(Booking.created_at))
        .order_by(func.date(Booking.created_at).desc())
        .limit(min(max(days, 1), 180))
        .all()
    )
    return [{"date": str(r[0]), "count": int(r[1])} for r in reversed(rows)]
