"""Ordering bounded context — carts, orders and payments of the food-ordering core.

Holds the Cart → Order → Payment state machine: the live cart priced from the
menu catalog, the frozen order snapshot taken at checkout with its delivery
status machine, and the payment attempts that settle an order.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
