"""IPN stress scenarios.

IpnReplayUser places one order, then replays paid and stale pending
notifications for it at a high rate: every answer must be an acknowledgment
and the order must stay paid. IpnNoiseUser posts notifications without an
order reference, which Netopia must also see acknowledged.
"""

import random

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import NETOPIA_PAID, NETOPIA_PENDING, checkout_data, ipn_data
from loadtests.helpers.response import extract_error_detail


class IpnReplayUser(HttpUser):
    """Duplicate and out-of-order notifications for a single order."""

    wait_time = constant_pacing(0.1)

    def on_start(self):
        self.order_number = None
        resp = self.client.post(
            "/api/payment/initiate",
            json=checkout_data(),
            name="[SETUP] POST /api/payment/initiate",
        )
        if resp.status_code == 200:
            self.order_number = resp.json()["orderNumber"]
            self.client.post(
                "/api/payment/ipn",
                json=ipn_data(self.order_number, NETOPIA_PAID),
                name="[SETUP] POST /api/payment/ipn",
            )

    @task(5)
    def replay(self):
        if not self.order_number:
            return
        status = random.choice([NETOPIA_PAID, NETOPIA_PENDING])
        with self.client.post(
            "/api/payment/ipn",
            json=ipn_data(self.order_number, status),
            catch_response=True,
            name="[STRESS] POST /api/payment/ipn (replay)",
        ) as resp:
            if resp.status_code != 200 or resp.json().get("errorType") != 0:
                resp.failure(f"Replay not acknowledged: {resp.status_code}: {extract_error_detail(resp)}")

    @task(1)
    def still_paid(self):
        if not self.order_number:
            return
        with self.client.get(
            f"/api/orders/{self.order_number}",
            catch_response=True,
            name="[STRESS] GET /api/orders/[order_number]",
        ) as resp:
            if resp.status_code != 200 or resp.json()["paymentStatus"] != "paid":
                resp.failure(f"Order regressed: {resp.status_code}: {resp.text[:200]}")


class IpnNoiseUser(HttpUser):
    """Notifications that carry no order reference."""

    wait_time = constant_pacing(0.5)

    @task
    def orphan_notification(self):
        with self.client.post(
            "/api/payment/ipn",
            json=ipn_data(None, NETOPIA_PAID),
            catch_response=True,
            name="[STRESS] POST /api/payment/ipn (no orderId)",
        ) as resp:
            if resp.status_code == 200 and resp.json().get("errorMessage") == "Missing orderId":
                resp.success()
            else:
                resp.failure(f"Unexpected answer: {resp.status_code}: {extract_error_detail(resp)}")
