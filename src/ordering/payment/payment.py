"""Payment aggregate (CQRS) — one settlement attempt against one order.

State Machine:
    PENDING → SUCCESS | FAILED   (both terminal)

Cash on delivery settles at creation; card and UPI payments start pending and
settle when verified. An order may accumulate several payments (retries after
a failure); each is an independent aggregate referencing the order by id.
"""

import secrets
import string
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering
from ordering.errors import InvalidStateError
from ordering.payment.events import PaymentCreated, PaymentVerified

_BASE36 = string.digits + string.ascii_uppercase


class PaymentMethod(Enum):
    CARD = "card"
    UPI = "upi"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


_TERMINAL_STATUSES = {PaymentStatus.SUCCESS, PaymentStatus.FAILED}


def generate_transaction_id(now=None):
    """Return a reference like ``TXN-1718000000000-4K2Z9Q``."""
    millis = int((now or datetime.now(UTC)).timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"TXN-{millis}-{suffix}"


def parse_method(method):
    try:
        return PaymentMethod(method)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError({"method": [f"Payment method must be one of {allowed}"]}) from None


def parse_outcome(outcome):
    if outcome not in (PaymentStatus.SUCCESS.value, PaymentStatus.FAILED.value):
        raise ValidationError({"outcome": ["Outcome must be success or failed"]})
    return PaymentStatus(outcome)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Payment:
    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    method = String(choices=PaymentMethod, required=True)
    transaction_id = String(required=True, max_length=64)
    status = String(
        choices=PaymentStatus,
        default=PaymentStatus.PENDING.value,
    )
    amount = Float(default=0.0)
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id, owner_id, method, amount):
        """Record a new attempt. Cash on delivery is settled immediately."""
        payment_method = parse_method(method)
        now = datetime.now(UTC)
        settled = payment_method is PaymentMethod.COD

        payment = cls(
            order_id=str(order_id),
            owner_id=str(owner_id),
            method=payment_method.value,
            transaction_id=generate_transaction_id(now),
            status=(PaymentStatus.SUCCESS if settled else PaymentStatus.PENDING).value,
            amount=amount,
            paid_at=now if settled else None,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentCreated(
                payment_id=str(payment.id),
                order_id=str(order_id),
                owner_id=str(owner_id),
                method=payment.method,
                transaction_id=payment.transaction_id,
                status=payment.status,
                amount=amount,
                created_at=now,
            )
        )
        return payment

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_successful(self):
        return self.status == PaymentStatus.SUCCESS.value

    @property
    def is_terminal(self):
        return PaymentStatus(self.status) in _TERMINAL_STATUSES

    # -------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------
    def verify(self, outcome, transaction_id=None):
        """Settle a pending payment with ``outcome``.

        Returns False (and changes nothing) when the payment already carries
        that outcome. A terminal payment never moves to the other outcome.
        """
        target = parse_outcome(outcome)
        current = PaymentStatus(self.status)

        if current in _TERMINAL_STATUSES:
            if current is target:
                return False
            raise InvalidStateError({"status": [f"Payment is already {current.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.paid_at = now
        if transaction_id:
            self.transaction_id = transaction_id
        self.updated_at = now

        self.raise_(
            PaymentVerified(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                owner_id=str(self.owner_id),
                outcome=target.value,
                transaction_id=self.transaction_id,
                verified_at=now,
            )
        )
        return True
