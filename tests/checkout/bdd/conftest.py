"""Shared BDD fixtures and step definitions for payment reconciliation."""

from datetime import UTC, datetime, timedelta

import pytest
from pytest_bdd import given, parsers, then, when

from checkout.payment.reconciliation import PaymentStatusReconciler


@pytest.fixture()
def clock():
    """Advances one minute on every reading."""
    state = {"now": datetime(2026, 3, 1, 12, 0, tzinfo=UTC)}

    def _now():
        state["now"] += timedelta(minutes=1)
        return state["now"]

    return _now


@pytest.fixture()
def bdd_reconciler(store, clock):
    return PaymentStatusReconciler(store=store, clock=clock)


def _notify(reconciler, order_number, code, transaction):
    return reconciler.reconcile(
        {
            "payment": {"status": code, "ntpID": transaction},
            "order": {"orderID": order_number},
        }
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a pending order for {quantity:d} bottles at {price:f} lei"),
    target_fixture="order_number",
)
def _pending_order(intake, catalog, checkout_payload, quantity, price):
    catalog.add_product("p1", "Apă minerală 0.5L", price)
    checkout_payload["cartItems"] = [{"id": "p1", "type": "product", "quantity": quantity}]
    return intake.handle_checkout(checkout_payload).order_number


@given(
    parsers.cfparse('Netopia reported status {code:d} for transaction "{transaction}"'),
    target_fixture="earlier_paid_at",
)
def _earlier_notification(bdd_reconciler, store, order_number, code, transaction):
    _notify(bdd_reconciler, order_number, code, transaction)
    return store.get_order(order_number).paid_at


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('Netopia reports status {code:d} for transaction "{transaction}" again'),
    target_fixture="ack",
)
def _repeated_notification(bdd_reconciler, order_number, code, transaction):
    return _notify(bdd_reconciler, order_number, code, transaction)


@when(
    parsers.re(r'Netopia reports status (?P<code>\d+) for transaction "(?P<transaction>[^"]+)"$'),
    target_fixture="ack",
)
def _notification(bdd_reconciler, order_number, code, transaction):
    return _notify(bdd_reconciler, order_number, int(code), transaction)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the notification is acknowledged")
def _acknowledged(ack):
    assert ack.http_status == 200
    assert ack.to_dict()["errorType"] == 0


@then("the notification was ignored")
def _ignored(ack):
    assert ack.outcome == "skipped"


@then(parsers.cfparse('the order status is "{status}"'))
def _order_status(store, order_number, status):
    assert store.get_order(order_number).status == status


@then(parsers.cfparse('the payment status is "{payment_status}"'))
def _payment_status(store, order_number, payment_status):
    assert store.get_order(order_number).payment_status == payment_status


@then(parsers.cfparse('the payment reference is "{reference}"'))
def _payment_reference(store, order_number, reference):
    assert store.get_order(order_number).payment_reference == reference


@then("the order has a payment date")
def _has_paid_at(store, order_number):
    assert store.get_order(order_number).paid_at is not None


@then("the order has no payment date")
def _no_paid_at(store, order_number):
    assert store.get_order(order_number).paid_at is None


@then("the payment date is unchanged")
def _paid_at_unchanged(store, order_number, earlier_paid_at):
    assert earlier_paid_at is not None
    assert store.get_order(order_number).paid_at == earlier_paid_at
