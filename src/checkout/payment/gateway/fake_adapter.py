"""Mock payment gateway for development and testing.

Used when Netopia credentials are not configured: the shopper goes straight
to the success page with ``mock=true`` and no provider is contacted. Payment
state can then be driven by posting notifications to the IPN endpoint.
"""

from urllib.parse import urlencode

from checkout.payment.gateway.port import PaymentGateway, PaymentRedirect

MOCK_NOTICE = "Netopia nu este configurat. Folosind flux de plată simulat."


class FakeGateway(PaymentGateway):
    """Mock gateway that records every redirect it builds."""

    def __init__(self, return_path: str = "/payment/success") -> None:
        self.return_path = return_path
        self.calls: list[dict] = []

    def create_payment_redirect(self, order_number: str, amount: float, email: str) -> PaymentRedirect:
        self.calls.append(
            {
                "method": "create_payment_redirect",
                "order_number": order_number,
                "amount": amount,
                "email": email,
            }
        )
        query = urlencode({"orderId": order_number, "mock": "true"})
        return PaymentRedirect(
            url=f"{self.return_path}?{query}",
            is_mock=True,
            message=MOCK_NOTICE,
        )
