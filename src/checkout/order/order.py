"""Order aggregate: a checkout persisted with server-side prices.

An order is created once at checkout, priced entirely from the catalogue, and
afterwards only its payment state changes, driven by provider notifications.

Payment state is monotonic. Notifications arrive at least once and possibly
out of order, so a status is applied only when it is strictly more final than
the current one:

    pending  <  failed = cancelled  <  paid

A duplicate or stale notification is therefore a no-op, and an order that has
been paid keeps its original ``paid_at`` and payment reference.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text, ValueObject

from checkout.cart.items import CartItemType
from checkout.domain import checkout
from checkout.order.events import OrderPaymentStatusChanged, OrderPlaced
from checkout.shared.money import format_price, round_amount


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"


class CustomerType(Enum):
    PERSON = "person"
    COMPANY = "company"


_PAYMENT_STATUS_RANK = {
    PaymentStatus.PENDING: 0,
    PaymentStatus.FAILED: 1,
    PaymentStatus.CANCELLED: 1,
    PaymentStatus.PAID: 2,
}

_PAYMENT_STATUS_LABELS = {
    PaymentStatus.PENDING: "⏳ În așteptare",
    PaymentStatus.PAID: "✓ Plătită",
    PaymentStatus.FAILED: "✗ Eșuată",
    PaymentStatus.CANCELLED: "⊘ Anulată",
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@checkout.value_object(part_of="Order")
class PostalAddress:
    """A delivery or billing address captured at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    county = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(max_length=100, default="Romania")


@checkout.value_object(part_of="Order")
class CustomerDetails:
    """Who placed the order. Person and company fields are mutually exclusive."""

    display_name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=20)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    company_name = String(max_length=255)
    cui = String(max_length=20)
    contact_person = String(max_length=255)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@checkout.entity(part_of="Order")
class OrderItem:
    """A priced order line. ``catalog_id`` is the product id or bundle slug."""

    catalog_id = String(required=True, max_length=255)
    item_type = String(required=True, choices=CartItemType)
    name = String(max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@checkout.aggregate
class Order:
    order_number = String(identifier=True, required=True, max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    customer_type = String(required=True, choices=CustomerType)
    customer = ValueObject(CustomerDetails)
    delivery_address = ValueObject(PostalAddress)
    billing_address = ValueObject(PostalAddress)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0, min_value=0.0)
    deposit_total = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0)
    notes = Text()
    payment_reference = String(max_length=255)
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_be_positive(self):
        if self.total is None or self.total <= 0:
            raise ValidationError({"total": ["Order total must be positive"]})

    @invariant.post
    def total_must_equal_subtotal_plus_deposit(self):
        if round_amount((self.subtotal or 0.0) + (self.deposit_total or 0.0)) != round_amount(self.total or 0.0):
            raise ValidationError({"total": ["Order total must equal subtotal plus deposit"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_number,
        customer_type,
        customer,
        delivery_address,
        billing_address,
        items_data,
        pricing,
        notes=None,
    ):
        """Create a pending order from validated checkout data.

        Args:
            order_number: Identifier assigned by the order store.
            customer_type: "person" or "company".
            customer: Dict with display_name, email, phone and the
                      person/company specific fields.
            delivery_address: Dict with street, city, county, postal_code, country.
            billing_address: Dict with street, city, county, postal_code, country.
            items_data: List of dicts with catalog_id, item_type, name, price, quantity.
            pricing: Dict with subtotal, deposit_total, total.
        """
        now = datetime.now(UTC)

        order = cls(
            order_number=order_number,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            customer_type=customer_type,
            customer=CustomerDetails(**customer),
            delivery_address=PostalAddress(**delivery_address),
            billing_address=PostalAddress(**billing_address),
            items=[OrderItem(**item) for item in items_data],
            subtotal=round_amount(pricing["subtotal"]),
            deposit_total=round_amount(pricing["deposit_total"]),
            total=round_amount(pricing["total"]),
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_number=order_number,
                customer_type=customer_type,
                customer_email=order.customer.email,
                item_count=len(items_data),
                subtotal=order.subtotal,
                deposit_total=order.deposit_total,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Payment state
    # -------------------------------------------------------------------
    def can_record_payment_status(self, payment_status) -> bool:
        """True when ``payment_status`` is strictly more final than the current one."""
        current = PaymentStatus(self.payment_status)
        target = PaymentStatus(payment_status)
        return _PAYMENT_STATUS_RANK[target] > _PAYMENT_STATUS_RANK[current]

    def record_payment_status(self, status, payment_status, payment_reference=None, paid_at=None):
        """Apply a payment notification outcome.

        ``paid_at`` is only recorded for paid orders; it defaults to now.
        """
        target = PaymentStatus(payment_status)
        if not self.can_record_payment_status(target):
            raise ValidationError(
                {
                    "payment_status": [
                        f"Cannot move payment status from {self.payment_status} to {target.value}",
                    ]
                }
            )

        now = datetime.now(UTC)
        previous = self.payment_status

        self.status = OrderStatus(status).value
        self.payment_status = target.value
        if payment_reference:
            self.payment_reference = payment_reference
        if target == PaymentStatus.PAID:
            self.paid_at = paid_at or now
        self.updated_at = now

        self.raise_(
            OrderPaymentStatusChanged(
                order_number=self.order_number,
                status=self.status,
                previous_payment_status=previous,
                payment_status=self.payment_status,
                payment_reference=self.payment_reference,
                paid_at=self.paid_at,
                changed_at=now,
            )
        )

    @property
    def is_paid(self) -> bool:
        return PaymentStatus(self.payment_status) == PaymentStatus.PAID

    def summary(self) -> str:
        """One-line description for back-office listings."""
        label = _PAYMENT_STATUS_LABELS[PaymentStatus(self.payment_status)]
        email = self.customer.email if self.customer else "No email"
        return f"#{self.order_number} - {label} - {format_price(self.total)} - {email}"
