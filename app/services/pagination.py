import math

from sqlalchemy.orm import Query

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def normalize(page: int | None, limit: int | None) -> tuple[int, int]:
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or DEFAULT_LIMIT), 1), MAX_LIMIT)
    return page, limit


def pagination_meta(page: int, limit: int, total: int) -> dict:
    total_pages = math.ceil(total / limit) if total else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalItems": total,
        "itemsPerPage": limit,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }


def paginate(query: Query, page: int | None, limit: int | None) -> tuple[list, dict]:
    """Apply skip/limit to an ordered query and return (rows, pagination)."""
    page, limit = normalize(page, limit)
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, pagination_meta(page, limit, total)
