"""Read helpers for orders: owner-scoped lookups and paginated listings."""

import math
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.limit))


def normalize_paging(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp ``page`` to ≥ 1 and ``limit`` to 1..MAX_PAGE_SIZE."""
    page = max(1, page or 1)
    limit = min(max(1, limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
    return page, limit


def owned_order(owner_id, order_id) -> Order:
    """Return the order if it belongs to ``owner_id``; otherwise it is not found."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        order = None
    if order is None or not order.is_owned_by(owner_id):
        raise ObjectNotFoundError({"order": ["Order not found"]})
    return order


def list_orders(page=None, limit=None, **criteria) -> Page:
    """List orders newest first, filtered by exact-match ``criteria``."""
    page, limit = normalize_paging(page, limit)
    filters = {key: value for key, value in criteria.items() if value is not None}

    query = current_domain.repository_for(Order)._dao.query
    if filters:
        query = query.filter(**filters)
    result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    return Page(items=list(result.items), page=page, limit=limit, total=result.total)


def orders_for_owner(owner_id, page=None, limit=None) -> Page:
    return list_orders(page=page, limit=limit, owner_id=str(owner_id))
