"""Order intake: turns a checkout request into a persisted order.

Steps, in order; each failure stops the request:
    1. structural validation of ``{customer, cartItems}``   -> InvalidRequest
    2. email and Romanian phone format                     -> InvalidCustomer
    3. cart re-pricing against the catalogue                -> ValidationFailed
    4. customer normalization (billing address, display name)
    5. order persistence                                    -> OrderPersistenceFailed
    6. payment redirect for the stored order number

No payment URL is issued unless the order was stored: the payment
notification has nothing to reconcile against otherwise.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from checkout.cart.items import CartItem
from checkout.cart.validation import CartValidator
from checkout.catalog.port import CatalogPriceOracle
from checkout.config import CheckoutSettings
from checkout.customer.customer import Customer, normalize_customer, validate_contact
from checkout.domain import logger
from checkout.errors import InvalidRequest, OrderPersistenceFailed
from checkout.order.store import NewOrder, OrderStore, OrderStoreError
from checkout.payment.gateway.port import PaymentGateway


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer: Customer
    cart_items: list[CartItem] = Field(min_length=1)
    order_notes: str | None = Field(default=None, max_length=2000)


@dataclass(frozen=True)
class CheckoutResult:
    order_number: str
    payment_url: str
    total: float
    message: str | None = None


class OrderIntakeHandler:
    """Checkout use case, wired with explicit collaborators."""

    def __init__(
        self,
        catalog: CatalogPriceOracle,
        store: OrderStore,
        gateway: PaymentGateway,
        settings: CheckoutSettings,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.validator = CartValidator(catalog, deposit_unit=settings.deposit_unit)

    def handle_checkout(self, payload: Mapping) -> CheckoutResult:
        request = self._parse(payload)
        validate_contact(request.customer)

        cart = self.validator.validate(request.cart_items)
        customer = normalize_customer(request.customer)

        try:
            order_number = self.store.create_order(
                NewOrder(
                    customer=customer,
                    items=cart.items,
                    subtotal=cart.subtotal,
                    deposit_total=cart.deposit_total,
                    total=cart.total,
                    notes=request.order_notes,
                )
            )
        except OrderStoreError as exc:
            logger.error("Failed to save order", error=str(exc), customer=customer.email)
            raise OrderPersistenceFailed() from exc

        redirect = self.gateway.create_payment_redirect(order_number, cart.total, customer.email)
        if redirect.is_mock:
            logger.warning("Issued mock payment URL", order_number=order_number)

        return CheckoutResult(
            order_number=order_number,
            payment_url=redirect.url,
            total=cart.total,
            message=redirect.message,
        )

    @staticmethod
    def _parse(payload: Mapping) -> CheckoutRequest:
        if not isinstance(payload, Mapping):
            raise InvalidRequest()
        try:
            return CheckoutRequest.model_validate(payload)
        except PydanticValidationError as exc:
            logger.info("Rejected malformed checkout request", errors=exc.error_count())
            raise InvalidRequest() from exc
