"""Order status machine.

    placed → preparing → out_for_delivery → delivered
    any non-terminal status → cancelled

``delivered`` and ``cancelled`` are terminal. The forward chain is the
declared order of ``OrderStatus`` without ``CANCELLED``; administrative updates
may repeat the current status or advance exactly one step along it.
"""

from enum import Enum

from ordering.errors import InvalidStateError


class OrderStatus(Enum):
    PLACED = "placed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


FORWARD_CHAIN = tuple(status for status in OrderStatus if status is not OrderStatus.CANCELLED)
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def assert_not_terminal(current: OrderStatus) -> None:
    if is_terminal(current):
        raise InvalidStateError({"status": [f"Cannot change a {current.value} order"]})


def check_admin_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Validate an administrative move from ``current`` to ``target``.

    Returns True when the order must change, False for a same-status update
    (a successful no-op). Raises InvalidStateError for every illegal move.
    """
    assert_not_terminal(current)

    if target is OrderStatus.CANCELLED:
        return True

    current_index = FORWARD_CHAIN.index(current)
    target_index = FORWARD_CHAIN.index(target)

    if target_index < current_index:
        raise InvalidStateError({"status": ["Cannot move status backwards"]})
    if target_index == current_index:
        return False
    if target_index - current_index > 1:
        raise InvalidStateError({"status": ["Can only advance one step at a time"]})
    return True
