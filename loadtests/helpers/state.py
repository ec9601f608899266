"""Per-user state tracking for the checkout load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across users.
"""

from dataclasses import dataclass


@dataclass
class CheckoutState:
    """Tracks a single simulated checkout through payment."""

    order_number: str | None = None
    payment_url: str | None = None
    expected_payment_status: str = "pending"
