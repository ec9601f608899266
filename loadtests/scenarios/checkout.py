"""Checkout load test scenarios.

CheckoutPaymentJourney walks a shopper through checkout, a paid IPN and the
order lookup on the return page. RejectedCheckoutUser sends carts that must
fail re-pricing, which exercises the catalogue lookup without writing orders.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    NETOPIA_DECLINED,
    NETOPIA_PAID,
    checkout_data,
    ipn_data,
    unknown_item_checkout_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class CheckoutPaymentJourney(SequentialTaskSet):
    """Initiate -> IPN (paid or declined) -> Order lookup."""

    def on_start(self):
        self.state = CheckoutState()

    @task
    def initiate(self):
        with self.client.post(
            "/api/payment/initiate",
            json=checkout_data(),
            catch_response=True,
            name="POST /api/payment/initiate",
        ) as resp:
            if resp.status_code == 200:
                data = resp.json()
                self.state.order_number = data["orderNumber"]
                self.state.payment_url = data["paymentUrl"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def notify(self):
        paid = random.random() < 0.85
        status = NETOPIA_PAID if paid else NETOPIA_DECLINED
        with self.client.post(
            "/api/payment/ipn",
            json=ipn_data(self.state.order_number, status),
            catch_response=True,
            name="POST /api/payment/ipn",
        ) as resp:
            if resp.status_code == 200 and resp.json().get("errorType") == 0:
                self.state.expected_payment_status = "paid" if paid else "failed"
            else:
                resp.failure(f"IPN rejected: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def lookup(self):
        with self.client.get(
            f"/api/orders/{self.state.order_number}",
            catch_response=True,
            name="GET /api/orders/[order_number]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Lookup failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["paymentStatus"] != self.state.expected_payment_status:
                resp.failure(
                    f"Expected {self.state.expected_payment_status}, got {resp.json()['paymentStatus']}"
                )

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """Shopper completing checkouts end to end."""

    wait_time = between(1, 3)
    tasks = [CheckoutPaymentJourney]


class RejectedCheckoutUser(HttpUser):
    """Shopper whose cart references items the catalogue does not know."""

    wait_time = between(2, 5)

    @task
    def initiate_with_unknown_item(self):
        with self.client.post(
            "/api/payment/initiate",
            json=unknown_item_checkout_data(),
            catch_response=True,
            name="POST /api/payment/initiate (unknown item)",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400, got {resp.status_code}: {extract_error_detail(resp)}")
