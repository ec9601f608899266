"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Order")
class OrderPlaced:
    """A validated order was persisted and is awaiting payment."""

    __version__ = 1

    order_number = String(required=True)
    customer_type = String(required=True)
    customer_email = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    deposit_total = Float(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@checkout.event(part_of="Order")
class OrderPaymentStatusChanged:
    """A payment notification moved the order to a more final payment state."""

    __version__ = 1

    order_number = String(required=True)
    status = String(required=True)
    previous_payment_status = String(required=True)
    payment_status = String(required=True)
    payment_reference = String()
    paid_at = DateTime()
    changed_at = DateTime(required=True)
