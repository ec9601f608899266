"""Checkout error taxonomy.

Raised by the intake and reconciliation services when a request cannot be
honoured. The API layer translates them into client-facing responses; each
error carries the HTTP status and the (Romanian) message shown to shoppers.
"""


class CheckoutError(Exception):
    """Base class for errors surfaced by the checkout services."""

    status_code = 500
    default_message = "A apărut o eroare la procesarea comenzii"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(CheckoutError):
    """The request body is missing required fields or is malformed."""

    status_code = 400
    default_message = "Date lipsă sau invalide"


class InvalidCustomer(CheckoutError):
    """Customer contact details (email or phone) failed format checks."""

    status_code = 400
    default_message = "Datele clientului sunt invalide"


class ValidationFailed(CheckoutError):
    """One or more cart lines could not be priced, or the cart total is not positive."""

    status_code = 400
    default_message = "Nu există produse valide în coș"

    def __init__(self, messages: list[str] | None = None) -> None:
        self.messages = list(messages or [])
        super().__init__(", ".join(self.messages) if self.messages else None)


class OrderPersistenceFailed(CheckoutError):
    """The order store rejected or could not complete the order creation."""

    status_code = 500


class MissingOrderReference(CheckoutError):
    """A payment notification arrived without an order identifier."""

    status_code = 200
    default_message = "Missing orderId"


class ReconciliationPersistenceFailed(CheckoutError):
    """The order store failed while applying a payment notification."""

    status_code = 200

    def __init__(self, order_number: str, reason: str | None = None) -> None:
        self.order_number = order_number
        self.reason = reason
        super().__init__(f"Failed to update order {order_number}: {reason or 'unknown error'}")


class NotificationParseError(CheckoutError):
    """The payment notification body could not be decoded."""

    status_code = 500
    default_message = "Internal server error"
