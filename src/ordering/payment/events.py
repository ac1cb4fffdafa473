"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Payment")
class PaymentCreated:
    """A payment attempt was recorded against an order."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    method = String(required=True, max_length=10)
    transaction_id = String(required=True, max_length=64)
    status = String(required=True, max_length=20)
    amount = Float(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Payment")
class PaymentVerified:
    """A pending payment settled with a success or failure outcome."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    outcome = String(required=True, max_length=20)
    transaction_id = String(required=True, max_length=64)
    verified_at = DateTime(required=True)
