# app/services/pagination.py
import math


def paginate(query, page: int, limit: int):
    """Applies offset/limit to an ORM query. Returns (items, pagination dict)."""
    page = max(page, 1)
    limit = max(limit, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
    }
