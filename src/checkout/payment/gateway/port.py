"""Payment gateway port (abstract interface).

Builds the URL the shopper is redirected to after an order is persisted.
Swapping between the mock flow (no credentials) and Netopia does not touch
intake or reconciliation code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentRedirect:
    """Where to send the shopper to pay for an order."""

    url: str
    is_mock: bool = False
    message: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_redirect(self, order_number: str, amount: float, email: str) -> PaymentRedirect:
        """Return the payment redirect for a persisted order."""
        ...
