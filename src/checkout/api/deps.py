"""FastAPI dependency providers for the checkout routes.

Services are assembled per request from the active collaborators, so tests
can swap catalogue, store or gateway with set_*() or dependency_overrides.
"""

from checkout.catalog import get_catalog
from checkout.config import get_settings
from checkout.order.intake import OrderIntakeHandler
from checkout.order.repository_store import RepositoryOrderStore
from checkout.order.store import OrderStore
from checkout.payment.gateway import get_gateway
from checkout.payment.reconciliation import PaymentStatusReconciler

_current_store: OrderStore | None = None


def get_order_store() -> OrderStore:
    """Return the current order store. Defaults to the repository-backed store."""
    global _current_store
    if _current_store is None:
        _current_store = RepositoryOrderStore()
    return _current_store


def set_order_store(store: OrderStore) -> None:
    """Override the active order store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_order_store() -> None:
    """Reset to default order store."""
    global _current_store
    _current_store = None


def get_intake_handler() -> OrderIntakeHandler:
    return OrderIntakeHandler(
        catalog=get_catalog(),
        store=get_order_store(),
        gateway=get_gateway(),
        settings=get_settings(),
    )


def get_reconciler() -> PaymentStatusReconciler:
    return PaymentStatusReconciler(store=get_order_store())
