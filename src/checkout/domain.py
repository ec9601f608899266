"""Checkout bounded context: order intake and payment reconciliation.

Re-prices untrusted carts against the catalogue, persists orders, and keeps
order payment state in sync with asynchronous notifications from the payment
provider (Netopia IPN).
"""

import structlog
from protean.domain import Domain

checkout = Domain(name="checkout")

logger = structlog.get_logger(__name__)
