"""Order store port (abstract interface).

The store owns order numbering and durability. Intake creates orders through
it; the payment reconciler updates them through ``update_payment_status``,
which must behave as a single conditional write: the store decides whether
the new status is more final than the stored one and applies it atomically,
so concurrent notifications for the same order cannot regress its state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from checkout.cart.items import ValidatedLineItem
from checkout.customer.customer import CustomerRecord


class OrderStoreError(Exception):
    """The store could not complete an operation."""


class OrderNotFound(OrderStoreError):
    """No order exists with the given order number."""

    def __init__(self, order_number: str) -> None:
        self.order_number = order_number
        super().__init__(f"Order {order_number} not found")


@dataclass(frozen=True)
class NewOrder:
    """Everything needed to persist a checkout."""

    customer: CustomerRecord
    items: tuple[ValidatedLineItem, ...]
    subtotal: float
    deposit_total: float
    total: float
    notes: str | None = None


@dataclass(frozen=True)
class PaymentStatusUpdate:
    """Status change derived from a payment notification."""

    status: str
    payment_status: str
    payment_reference: str | None = None
    paid_at: datetime | None = None


class OrderStore(ABC):
    """Abstract durable order store."""

    @abstractmethod
    def create_order(self, new_order: NewOrder) -> str:
        """Persist a new pending order and return its generated order number."""
        ...

    @abstractmethod
    def update_payment_status(self, order_number: str, update: PaymentStatusUpdate) -> bool:
        """Apply ``update`` if it is more final than the stored status.

        Returns True when the order changed, False for duplicate or stale
        updates. Raises OrderNotFound for unknown order numbers.
        """
        ...

    @abstractmethod
    def get_order(self, order_number: str):
        """Return the Order aggregate for ``order_number``."""
        ...
