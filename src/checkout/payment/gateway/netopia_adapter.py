"""Netopia payment gateway adapter.

Holds the merchant credentials and builds the redirect keyed by the order
number. Registering the payment on Netopia's hosted page is not integrated
yet; the shopper is sent to the shop's payment return page, and the final
payment state always arrives through the IPN endpoint.
"""

from urllib.parse import urlencode

from checkout.payment.gateway.port import PaymentGateway, PaymentRedirect


class NetopiaGateway(PaymentGateway):
    """Production gateway for Netopia card payments."""

    def __init__(self, api_key: str, pos_signature: str, return_path: str = "/payment/success") -> None:
        self.api_key = api_key
        self.pos_signature = pos_signature
        self.return_path = return_path

    def create_payment_redirect(self, order_number: str, amount: float, email: str) -> PaymentRedirect:
        query = urlencode({"orderId": order_number})
        return PaymentRedirect(url=f"{self.return_path}?{query}")
