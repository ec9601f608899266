"""Order store backed by the Protean repository for the Order aggregate.

Works with whatever database provider the checkout domain is configured
with (in-memory by default, PostgreSQL in production). Order numbers look
like ``NX-LZ3K9Q1A-7F2C``: a base-36 millisecond timestamp plus four random
characters.
"""

import secrets
import string
import time

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from checkout.domain import logger
from checkout.order.order import Order
from checkout.order.store import (
    NewOrder,
    OrderNotFound,
    OrderStore,
    OrderStoreError,
    PaymentStatusUpdate,
)

ORDER_NUMBER_PREFIX = "NX"
MAX_WRITE_ATTEMPTS = 10
_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_order_number() -> str:
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{ORDER_NUMBER_PREFIX}-{timestamp}-{suffix}"


def _address_data(address) -> dict:
    return {
        "street": address.street,
        "city": address.city,
        "county": address.county,
        "postal_code": address.postal_code,
        "country": address.country,
    }


class RepositoryOrderStore(OrderStore):
    """Order store on top of ``current_domain.repository_for(Order)``."""

    def __init__(self, number_factory=generate_order_number) -> None:
        self._number_factory = number_factory

    def create_order(self, new_order: NewOrder) -> str:
        order_number = self._number_factory()
        customer = new_order.customer

        try:
            order = Order.create(
                order_number=order_number,
                customer_type=customer.customer_type,
                customer={
                    "display_name": customer.display_name,
                    "email": customer.email,
                    "phone": customer.phone,
                    "first_name": customer.first_name,
                    "last_name": customer.last_name,
                    "company_name": customer.company_name,
                    "cui": customer.cui,
                    "contact_person": customer.contact_person,
                },
                delivery_address=_address_data(customer.delivery_address),
                billing_address=_address_data(customer.billing_address),
                items_data=[
                    {
                        "catalog_id": item.id,
                        "item_type": item.type.value,
                        "name": item.name,
                        "price": item.server_price,
                        "quantity": item.quantity,
                    }
                    for item in new_order.items
                ],
                pricing={
                    "subtotal": new_order.subtotal,
                    "deposit_total": new_order.deposit_total,
                    "total": new_order.total,
                },
                notes=new_order.notes,
            )
            current_domain.repository_for(Order).add(order)
        except Exception as exc:
            raise OrderStoreError(f"Could not persist order {order_number}: {exc}") from exc

        logger.info(
            "Order created",
            order_number=order_number,
            total=new_order.total,
            items=len(new_order.items),
            customer=customer.email,
        )
        return order_number

    def update_payment_status(self, order_number: str, update: PaymentStatusUpdate) -> bool:
        """Apply ``update`` only when it is more final than the stored status.

        The save is checked against the version that was read, so a write
        from another worker in between raises ``ExpectedVersionError``. The
        order is then read and compared again.
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            try:
                return self._apply_payment_status(order_number, update)
            except ExpectedVersionError:
                logger.info(
                    "Concurrent order update, retrying",
                    order_number=order_number,
                    payment_status=update.payment_status,
                    attempt=attempt,
                )
            except OrderStoreError:
                raise
            except Exception as exc:
                raise OrderStoreError(f"Could not update order {order_number}: {exc}") from exc

        raise OrderStoreError(
            f"Could not update order {order_number}: still conflicting after {MAX_WRITE_ATTEMPTS} attempts"
        )

    def _load_order(self, repo, order_number: str) -> Order:
        try:
            return repo.get(order_number)
        except ObjectNotFoundError as exc:
            raise OrderNotFound(order_number) from exc

    def _apply_payment_status(self, order_number: str, update: PaymentStatusUpdate) -> bool:
        repo = current_domain.repository_for(Order)
        order = self._load_order(repo, order_number)

        if not order.can_record_payment_status(update.payment_status):
            return False

        order.record_payment_status(
            status=update.status,
            payment_status=update.payment_status,
            payment_reference=update.payment_reference,
            paid_at=update.paid_at,
        )
        repo.add(order)
        return True

    def get_order(self, order_number: str) -> Order:
        return self._load_order(current_domain.repository_for(Order), order_number)
